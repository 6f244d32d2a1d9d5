"""Retool space operations.

Available for organizations with Spaces enabled.
"""
from __future__ import annotations
from typing import List, Optional

from .client import RetoolClient
from .envelope import do_paginated_request, do_single_request
from .models import CreateSpaceOptions, Space


class SpaceService:
    """Service for managing child spaces of the current space."""

    def __init__(self, client: RetoolClient):
        self.client = client

    def get_space(self, space_id: str) -> Optional[Space]:
        return do_single_request(
            self.client, "GET", f"{self.client.base_url}/spaces/{space_id}", parser=Space.from_dict
        )

    def list_spaces(self) -> List[Space]:
        """List all child spaces of the current space."""
        return do_paginated_request(self.client, f"{self.client.base_url}/spaces", parser=Space.from_dict)

    def create_space(
        self,
        name: str,
        domain: str,
        options: Optional[CreateSpaceOptions] = None,
    ) -> Optional[Space]:
        """Create a child space and return it. Needs the "Spaces > Write" scope."""
        payload = {"name": name, "domain": domain}
        if options is not None:
            payload["options"] = options
        return do_single_request(self.client, "POST", f"{self.client.base_url}/spaces", payload, Space.from_dict)

    def update_space(self, space_id: str, name: str, domain: str) -> Optional[Space]:
        """Replace name and domain of a space."""
        return do_single_request(
            self.client,
            "PUT",
            f"{self.client.base_url}/spaces/{space_id}",
            {"name": name, "domain": domain},
            Space.from_dict,
        )

    def delete_space(self, space_id: str) -> None:
        do_single_request(self.client, "DELETE", f"{self.client.base_url}/spaces/{space_id}")
