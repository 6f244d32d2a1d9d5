"""Retool folder operations."""
from __future__ import annotations
from typing import List, Optional

from .client import RetoolClient
from .envelope import do_paginated_request, do_single_request
from .exceptions import ValidationError
from .models import Folder, FolderType, UpdateOperation, validate_operations


class FolderService:
    """Service for managing Retool folders."""

    def __init__(self, client: RetoolClient):
        self.client = client

    def get_folder(self, folder_id: str) -> Optional[Folder]:
        """Return the folder with the given ID. Needs the "Folders > Read" scope."""
        return do_single_request(
            self.client, "GET", f"{self.client.base_url}/folders/{folder_id}", parser=Folder.from_dict
        )

    def list_folders(self) -> List[Folder]:
        """Return all folders. Needs the "Folders > Read" scope."""
        return do_paginated_request(self.client, f"{self.client.base_url}/folders", parser=Folder.from_dict)

    def create_folder(
        self,
        name: str,
        parent_folder_id: Optional[str] = None,
        folder_type: Optional[FolderType | str] = None,
    ) -> Optional[Folder]:
        """Create and return a folder. Needs the "Folders > Write" scope.

        Args:
            name: Folder name (required)
            parent_folder_id: Parent folder, root when omitted
            folder_type: app, workflow or resource

        Raises:
            ValidationError: If name is empty or folder_type is unknown
        """
        if not name:
            raise ValidationError("name is required")

        payload = {"name": name}
        if folder_type:
            try:
                payload["folder_type"] = FolderType.parse(folder_type)
            except ValidationError as e:
                raise ValidationError(f"validating folder type: {e}") from e
        if parent_folder_id:
            payload["parent_folder_id"] = parent_folder_id

        return do_single_request(
            self.client, "POST", f"{self.client.base_url}/folders", payload, Folder.from_dict
        )

    def update_folder(self, folder_id: str, operations: List[UpdateOperation]) -> Optional[Folder]:
        """Update a folder with JSON Patch operations. Needs the "Folders > Write" scope."""
        validate_operations(operations)
        return do_single_request(
            self.client,
            "PATCH",
            f"{self.client.base_url}/folders/{folder_id}",
            {"operations": operations},
            Folder.from_dict,
        )

    def delete_folder(self, folder_id: str) -> None:
        """Delete a folder. Needs the "Folders > Write" scope."""
        do_single_request(self.client, "DELETE", f"{self.client.base_url}/folders/{folder_id}")
