"""Retool permission group operations."""
from __future__ import annotations
from typing import List, Optional, Union

from .client import RetoolClient
from .envelope import do_paginated_request, do_single_request
from .models import Group, Member, UpdateOperation, validate_operations


class GroupService:
    """Service for managing Retool permission groups.

    Read operations need the "Groups > Read" scope, write operations
    "Groups > Write".
    """

    def __init__(self, client: RetoolClient):
        """Initialize group service.

        Args:
            client: Retool client
        """
        self.client = client

    def _url(self, *parts: Union[str, int]) -> str:
        return "/".join([f"{self.client.base_url}/groups", *(str(p) for p in parts)])

    def get_group(self, group_id: Union[str, int]) -> Optional[Group]:
        """Get a group by ID."""
        return do_single_request(self.client, "GET", self._url(group_id), parser=Group.from_dict)

    def list_groups(self) -> List[Group]:
        """List all permission groups of the organization or space."""
        return do_paginated_request(self.client, self._url(), parser=Group.from_dict)

    def create_group(self, group: Group) -> Optional[Group]:
        """Create a group and return it.

        Raises:
            ValidationError: If a universal access level is invalid
        """
        group.validate()
        return do_single_request(self.client, "POST", self._url(), group, Group.from_dict)

    def update_group(self, group_id: Union[str, int], operations: List[UpdateOperation]) -> Optional[Group]:
        """Update a group with JSON Patch operations (RFC 6902) and return it.

        Raises:
            ValidationError: If no operation is given or one is invalid
        """
        validate_operations(operations)
        return do_single_request(
            self.client, "PATCH", self._url(group_id), {"operations": operations}, Group.from_dict
        )

    def delete_group(self, group_id: Union[str, int]) -> None:
        """Delete a group."""
        do_single_request(self.client, "DELETE", self._url(group_id))

    def add_users_to_group(self, group_id: Union[str, int], members: List[Member]) -> Optional[Group]:
        """Add users to a group and return the group.

        ``is_group_admin`` on each member sets or unsets group admin rights.
        """
        return do_single_request(
            self.client, "POST", self._url(group_id, "members"), {"members": members}, Group.from_dict
        )

    def remove_user_from_group(self, group_id: Union[str, int], user_id: str) -> Optional[Group]:
        """Remove a user from a group and return the group."""
        return do_single_request(
            self.client, "DELETE", self._url(group_id, "members", user_id), parser=Group.from_dict
        )
