"""Retool user attribute operations.

Available from API version 2.1.0+ and on-prem version 3.20.1+.
"""
from __future__ import annotations
from typing import Any, Dict, List

from .client import RetoolClient
from .envelope import do_paginated_request, do_single_request
from .exceptions import ValidationError
from .models import OrganizationAttribute, UserAttribute


def _metadata(user: Any) -> Dict[str, Any]:
    metadata = user.get("metadata") if isinstance(user, dict) else None
    return dict(metadata) if isinstance(metadata, dict) else {}


class UserAttributeService:
    """Service for reading and writing user attributes (user metadata)."""

    def __init__(self, client: RetoolClient):
        """Initialize user attribute service.

        Args:
            client: Retool client
        """
        self.client = client

    def update_user_attributes(self, user_id: str, attributes: List[UserAttribute]) -> Dict[str, Any]:
        """Add or update user attributes and return the updated user metadata.

        The API token must have the "Users > Write" scope.

        Args:
            user_id: User ID
            attributes: Attributes to set (at least one)

        Returns:
            Metadata mapping of the user after the update

        Raises:
            ValidationError: If no attribute is given
        """
        if not attributes:
            raise ValidationError("no attributes provided")

        user = do_single_request(
            self.client, "POST", f"{self.client.base_url}/users/{user_id}/user_attributes", attributes
        )
        return _metadata(user)

    def delete_user_attribute(self, user_id: str, attribute_name: str) -> Dict[str, Any]:
        """Delete a user attribute and return the remaining user metadata.

        Returns:
            Metadata mapping, empty when the server returns no user
        """
        user = do_single_request(
            self.client,
            "DELETE",
            f"{self.client.base_url}/users/{user_id}/user_attributes/{attribute_name}",
        )
        return _metadata(user)

    def get_organization_attributes(self) -> List[OrganizationAttribute]:
        """List the user attributes configured for the organization. Needs "Users > Read"."""
        return do_paginated_request(
            self.client, f"{self.client.base_url}/user_attributes", parser=OrganizationAttribute.from_dict
        )
