"""Retool permission operations for folders, apps and resources."""
from __future__ import annotations
from typing import Any, Dict, List, Optional, Union

from .client import RetoolClient
from .envelope import do_paginated_request, do_single_request
from .exceptions import ValidationError
from .models import AccessLevel, GroupedData, ObjectType, Subject, SubjectType


def _subject(subject_type: SubjectType | str, subject_id: Union[str, int]) -> Dict[str, Any]:
    """Build the subject reference, checking the id type for the subject kind.

    Group ids are integers, user ids are strings.
    """
    kind = SubjectType.parse(subject_type)
    if kind is SubjectType.GROUP and (not isinstance(subject_id, int) or isinstance(subject_id, bool)):
        raise ValidationError("invalid id type for group: expected int")
    if kind is SubjectType.USER and not isinstance(subject_id, str):
        raise ValidationError("invalid id type for user: expected string")
    return {"id": subject_id, "type": kind.value}


def _object_type(object_type: ObjectType | str) -> ObjectType:
    try:
        return ObjectType.parse(object_type)
    except ValidationError as e:
        raise ValidationError(f"validating object type: {e}") from e


class PermissionService:
    """Service for inspecting and changing object permissions.

    Read operations need the "Permissions > Read" scope, grant and revoke
    "Permissions > Write".
    """

    def __init__(self, client: RetoolClient):
        """Initialize permission service.

        Args:
            client: Retool client
        """
        self.client = client

    def get_access_list(self, object_type: ObjectType | str, object_id: str) -> Optional[GroupedData]:
        """Return the users, groups and invites with access to a folder or app.

        Supported from on-prem edge 3.96.0+ and 3.114-stable+.
        """
        kind = _object_type(object_type)
        return do_single_request(
            self.client,
            "GET",
            f"{self.client.base_url}/permissions/accessList/{kind.value}/{object_id}",
            parser=GroupedData.from_dict,
        )

    def list_object_permissions(
        self,
        subject_type: SubjectType | str,
        subject_id: Union[str, int],
        object_type: ObjectType | str,
    ) -> List[Subject]:
        """List objects of a type that a group or user can access, with access levels."""
        payload = {
            "subject": _subject(subject_type, subject_id),
            "object_type": _object_type(object_type),
        }
        return do_paginated_request(
            self.client,
            f"{self.client.base_url}/permissions/listObjects",
            parser=Subject.from_dict,
            method="POST",
            body=payload,
        )

    def grant_permission(
        self,
        subject_type: SubjectType | str,
        subject_id: Union[str, int],
        object_type: ObjectType | str,
        object_id: str,
        access_level: AccessLevel | str,
    ) -> List[Subject]:
        """Grant a group or user an access level on an object.

        Raises:
            ValidationError: On unknown subject, object type or access level
        """
        payload = {
            "subject": _subject(subject_type, subject_id),
            "object": {"id": object_id, "type": _object_type(object_type)},
            "access_level": AccessLevel.parse(access_level),
        }
        return do_paginated_request(
            self.client,
            f"{self.client.base_url}/permissions/grant",
            parser=Subject.from_dict,
            method="POST",
            body=payload,
        )

    def revoke_permission(
        self,
        subject_type: SubjectType | str,
        subject_id: Union[str, int],
        object_type: ObjectType | str,
        object_id: str,
    ) -> List[Subject]:
        """Revoke whatever access a group or user holds on an object."""
        payload = {
            "subject": _subject(subject_type, subject_id),
            "object": {"id": object_id, "type": _object_type(object_type)},
        }
        return do_paginated_request(
            self.client,
            f"{self.client.base_url}/permissions/revoke",
            parser=Subject.from_dict,
            method="POST",
            body=payload,
        )
