"""Retool user management operations."""
from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from .client import RetoolClient
from .envelope import do_paginated_request, do_single_request
from .exceptions import RetoolAPIError, ValidationError
from .models import UpdateOperation, User, UserType, validate_operations

logger = logging.getLogger(__name__)

# Only this server message means "absent"; every other failure is raised.
USER_NOT_FOUND_MESSAGE = "User not found"


class UserService:
    """Service for managing Retool users."""

    def __init__(self, client: RetoolClient):
        """Initialize user service.

        Args:
            client: Retool client
        """
        self.client = client

    def get_user(self, user_id: str) -> Optional[User]:
        """Return a user by ID, or None if the user does not exist.

        The API token must have the "Users > Read" scope.

        Raises:
            RetoolAPIError: For any failure other than "User not found"
                (e.g. "User sid is misformatted: userId")
        """
        try:
            return do_single_request(self.client, "GET", f"{self.client.base_url}/users/{user_id}",
                                     parser=User.from_dict)
        except RetoolAPIError as e:
            if e.message == USER_NOT_FOUND_MESSAGE:
                logger.debug(f"User {user_id} not found")
                return None
            raise

    def list_users(
        self,
        email: Optional[str] = None,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None,
    ) -> List[User]:
        """List users, optionally filtered by email, first or last name.

        Returns an empty list when no user matches.
        """
        query = {
            key: value
            for key, value in (("email", email), ("first_name", first_name), ("last_name", last_name))
            if value
        }
        return do_paginated_request(self.client, f"{self.client.base_url}/users", query, User.from_dict)

    def create_user(
        self,
        email: str,
        first_name: str,
        last_name: str,
        active: bool = True,
        metadata: Optional[Dict[str, Any]] = None,
        user_type: UserType | str = UserType.DEFAULT,
    ) -> Optional[User]:
        """Create a user and return it. The API token must have the "Users > Write" scope.

        Raises:
            ValidationError: If email is missing or user_type is unknown
        """
        if not email:
            raise ValidationError("email is required")

        payload = {
            "email": email,
            "first_name": first_name,
            "last_name": last_name,
            "active": active,
            "metadata": metadata or {},
            "user_type": UserType.parse(user_type),
        }
        return do_single_request(self.client, "POST", f"{self.client.base_url}/users", payload, User.from_dict)

    def update_user(self, user_id: str, operations: List[UpdateOperation]) -> Optional[User]:
        """Update a user with JSON Patch operations and return it."""
        validate_operations(operations)
        return do_single_request(
            self.client,
            "PATCH",
            f"{self.client.base_url}/users/{user_id}",
            {"operations": operations},
            User.from_dict,
        )

    def delete_user(self, user_id: str) -> None:
        """Delete a user. A 204 No Content answer is success."""
        do_single_request(self.client, "DELETE", f"{self.client.base_url}/users/{user_id}")
