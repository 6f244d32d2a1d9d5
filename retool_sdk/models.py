"""Payload types for the Retool API.

These dataclasses mirror the JSON objects carried in the ``data`` field of
response envelopes. Enumerated string fields are closed ``Enum`` types with a
``parse`` helper that raises ``ValidationError`` on unknown values.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from .exceptions import ValidationError


# =============================================================================
# Enumerations
# =============================================================================


class _ClosedEnum(str, Enum):
    """String enum whose ``parse`` rejects values outside the closed set."""

    @classmethod
    def parse(cls, value: Union[str, "_ClosedEnum"]):
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(f"invalid {_LABELS[cls]}: {value}") from None

    def __str__(self) -> str:
        return self.value


class AccessLevel(_ClosedEnum):
    NONE = "none"
    USE = "use"
    EDIT = "edit"
    OWN = "own"


# The query library has no owners.
QUERY_LIBRARY_ACCESS_LEVELS = frozenset({AccessLevel.NONE, AccessLevel.USE, AccessLevel.EDIT})


class ObjectType(_ClosedEnum):
    APP = "app"
    FOLDER = "folder"
    RESOURCE = "resource"
    RESOURCE_CONFIGURATION = "resourceConfiguration"


class Operation(_ClosedEnum):
    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"


class UserType(_ClosedEnum):
    DEFAULT = "default"
    MOBILE = "mobile"
    EMBED = "embed"


class FolderType(_ClosedEnum):
    APP = "app"
    WORKFLOW = "workflow"
    RESOURCE = "resource"


class SubjectType(_ClosedEnum):
    GROUP = "group"
    USER = "user"


_LABELS = {
    AccessLevel: "access level",
    ObjectType: "object type",
    Operation: "operation type",
    UserType: "user type",
    FolderType: "folder type",
    SubjectType: "subject",
}


def _drop_none(values: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in values.items() if value is not None}


# =============================================================================
# Update operations (JSON Patch, RFC 6902)
# =============================================================================


@dataclass
class UpdateOperation:
    """One JSON Patch operation used by PATCH endpoints."""

    op: str
    path: str
    value: Any = None

    def validate(self) -> None:
        """Ensure op is known, path is set and value is present unless removing.

        Raises:
            ValidationError: On invalid operation
        """
        op = Operation.parse(self.op)
        if not self.path:
            raise ValidationError("path cannot be empty")
        if op is not Operation.REMOVE and self.value in (None, ""):
            raise ValidationError(f"value cannot be empty for {op.value} operation")

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"op": str(Operation.parse(self.op)), "path": self.path}
        if self.value is not None:
            result["value"] = self.value
        return result


def validate_operations(operations: List[UpdateOperation]) -> None:
    """Validate a non-empty list of update operations."""
    if not operations:
        raise ValidationError("no operations provided")
    for operation in operations:
        try:
            operation.validate()
        except ValidationError as e:
            raise ValidationError(f"validation failed for operation: {e}") from e


# =============================================================================
# Users
# =============================================================================


@dataclass
class User:
    """A Retool user."""

    id: str
    email: str = ""
    legacy_id: Optional[int] = None
    active: bool = True
    first_name: str = ""
    last_name: str = ""
    metadata: Optional[Dict[str, Any]] = None
    is_admin: bool = False
    user_type: str = UserType.DEFAULT.value
    created_at: Optional[str] = None
    last_active: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        """Create from API response dict."""
        return cls(
            id=data["id"],
            email=data.get("email") or "",
            legacy_id=data.get("legacy_id"),
            active=data.get("active", True),
            first_name=data.get("first_name") or "",
            last_name=data.get("last_name") or "",
            metadata=data.get("metadata"),
            is_admin=data.get("is_admin", False),
            user_type=data.get("user_type") or UserType.DEFAULT.value,
            created_at=data.get("created_at"),
            last_active=data.get("last_active"),
        )


@dataclass
class UserAttribute:
    """Name/value pair stored in a user's metadata."""

    name: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}


@dataclass
class OrganizationAttribute:
    """A user attribute configured for the organization."""

    id: str
    name: str
    label: str = ""
    data_type: str = ""
    default_value: str = ""
    intercom_attribute_name: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OrganizationAttribute":
        """Create from API response dict."""
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            label=data.get("label") or "",
            data_type=data.get("data_type") or "",
            default_value=data.get("default_value") or "",
            intercom_attribute_name=data.get("intercom_attribute_name") or "",
        )


# =============================================================================
# Groups
# =============================================================================


@dataclass
class Member:
    """A group member, optionally a group admin."""

    id: str
    email: str = ""
    is_group_admin: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Member":
        return cls(
            id=data["id"],
            email=data.get("email") or "",
            is_group_admin=data.get("is_group_admin", False),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "email": self.email, "is_group_admin": self.is_group_admin}


@dataclass
class UserInvite:
    """A pending invitation into a group."""

    id: int
    invited_email: str = ""
    legacy_id: Optional[int] = None
    invited_by: Optional[str] = None
    expires_at: Optional[str] = None
    claimed_by: Optional[str] = None
    claimed_at: Optional[str] = None
    user_type: str = UserType.DEFAULT.value
    metadata: Optional[Dict[str, Any]] = None
    created_at: Optional[str] = None
    invite_link: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserInvite":
        return cls(
            id=data["id"],
            invited_email=data.get("invited_email") or "",
            legacy_id=data.get("legacy_id"),
            invited_by=data.get("invited_by"),
            expires_at=data.get("expires_at"),
            claimed_by=data.get("claimed_by"),
            claimed_at=data.get("claimed_at"),
            user_type=data.get("user_type") or UserType.DEFAULT.value,
            metadata=data.get("metadata"),
            created_at=data.get("created_at"),
            invite_link=data.get("invite_link"),
        )


@dataclass
class Group:
    """A permission group and its universal access levels."""

    name: str
    id: Optional[int] = None
    legacy_id: Optional[int] = None
    members: List[Member] = field(default_factory=list)
    user_invites: List[UserInvite] = field(default_factory=list)
    universal_app_access: Optional[str] = None
    universal_resource_access: Optional[str] = None
    universal_workflow_access: Optional[str] = None
    universal_query_library_access: Optional[str] = None
    user_list_access: bool = False
    audit_log_access: bool = False
    unpublished_release_access: bool = False
    usage_analytics_access: bool = False
    theme_access: bool = False
    account_details_access: bool = False
    landing_page_app_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def validate(self) -> None:
        """Ensure universal access levels hold allowed values.

        Raises:
            ValidationError: On an unknown access level
        """
        for attr in ("universal_app_access", "universal_resource_access", "universal_workflow_access"):
            value = getattr(self, attr)
            if value and value not in {level.value for level in AccessLevel}:
                raise ValidationError(f"invalid value for {attr}: {value}")

        query_access = self.universal_query_library_access
        if query_access and query_access not in {level.value for level in QUERY_LIBRARY_ACCESS_LEVELS}:
            raise ValidationError(f"invalid value for universal_query_library_access: {query_access}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Group":
        """Create from API response dict."""
        return cls(
            name=data.get("name") or "",
            id=data.get("id"),
            legacy_id=data.get("legacy_id"),
            members=[Member.from_dict(m) for m in data.get("members") or []],
            user_invites=[UserInvite.from_dict(i) for i in data.get("user_invites") or []],
            universal_app_access=data.get("universal_app_access"),
            universal_resource_access=data.get("universal_resource_access"),
            universal_workflow_access=data.get("universal_workflow_access"),
            universal_query_library_access=data.get("universal_query_library_access"),
            user_list_access=data.get("user_list_access", False),
            audit_log_access=data.get("audit_log_access", False),
            unpublished_release_access=data.get("unpublished_release_access", False),
            usage_analytics_access=data.get("usage_analytics_access", False),
            theme_access=data.get("theme_access", False),
            account_details_access=data.get("account_details_access", False),
            landing_page_app_id=data.get("landing_page_app_id"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for API request (server-owned fields omitted)."""
        return _drop_none({
            "name": self.name,
            "members": [m.to_dict() for m in self.members] or None,
            "universal_app_access": self.universal_app_access,
            "universal_resource_access": self.universal_resource_access,
            "universal_workflow_access": self.universal_workflow_access,
            "universal_query_library_access": self.universal_query_library_access,
            "user_list_access": self.user_list_access,
            "audit_log_access": self.audit_log_access,
            "unpublished_release_access": self.unpublished_release_access,
            "usage_analytics_access": self.usage_analytics_access,
            "theme_access": self.theme_access,
            "account_details_access": self.account_details_access,
            "landing_page_app_id": self.landing_page_app_id,
        })


# =============================================================================
# Folders & Spaces
# =============================================================================


@dataclass
class Folder:
    """A folder holding apps, workflows or resources."""

    id: str
    name: str = ""
    legacy_id: Optional[str] = None
    parent_folder_id: Optional[str] = None
    is_system_folder: bool = False
    folder_type: str = FolderType.APP.value
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Folder":
        """Create from API response dict."""
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            legacy_id=data.get("legacy_id"),
            parent_folder_id=data.get("parent_folder_id"),
            is_system_folder=data.get("is_system_folder", False),
            folder_type=data.get("folder_type") or FolderType.APP.value,
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


@dataclass
class Space:
    """A child space of the current organization."""

    id: str
    name: str = ""
    domain: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Space":
        """Create from API response dict."""
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            domain=data.get("domain") or "",
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )


@dataclass
class CreateSpaceOptions:
    """Optional settings copied into a newly created space."""

    copy_sso_settings: bool = False
    copy_branding_and_theme_settings: bool = False
    users_to_copy_as_admins: List[str] = field(default_factory=list)
    create_admin_user: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "copy_sso_settings": self.copy_sso_settings,
            "copy_branding_and_theme_settings": self.copy_branding_and_theme_settings,
            "users_to_copy_as_admins": list(self.users_to_copy_as_admins),
            "create_admin_user": self.create_admin_user,
        }


# =============================================================================
# Configuration variables
# =============================================================================


@dataclass
class ConfigurationValue:
    """Value of a configuration variable in one environment."""

    environment_id: str
    value: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConfigurationValue":
        return cls(environment_id=data.get("environment_id") or "", value=data.get("value") or "")

    def to_dict(self) -> Dict[str, Any]:
        return {"environment_id": self.environment_id, "value": self.value}


@dataclass
class ConfigurationVariable:
    """A configuration variable and its per-environment values."""

    id: str
    name: str = ""
    description: str = ""
    secret: bool = False
    values: List[ConfigurationValue] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConfigurationVariable":
        """Create from API response dict."""
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            description=data.get("description") or "",
            secret=data.get("secret", False),
            values=[ConfigurationValue.from_dict(v) for v in data.get("values") or []],
        )


# =============================================================================
# Permissions
# =============================================================================


@dataclass
class Subject:
    """A group, user or user invite, optionally with its access level."""

    id: Union[str, int]
    type: str
    access_level: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Subject":
        return cls(
            id=data["id"],
            type=data.get("type") or "",
            access_level=data.get("access_level"),
        )


@dataclass
class Sources:
    """Where an access grant comes from."""

    direct: bool = False
    universal: bool = False
    groups: List[Subject] = field(default_factory=list)
    inherited: Optional[Subject] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Sources":
        inherited = data.get("inherited")
        return cls(
            direct=data.get("direct", False),
            universal=data.get("universal", False),
            groups=[Subject.from_dict(g) for g in data.get("groups") or []],
            inherited=Subject.from_dict(inherited) if inherited and inherited.get("id") is not None else None,
        )


@dataclass
class AccessData:
    """Access a single subject holds on an object."""

    subject: Subject
    sources: Sources
    access_level: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AccessData":
        return cls(
            subject=Subject.from_dict(data["subject"]),
            sources=Sources.from_dict(data.get("sources") or {}),
            access_level=data.get("accessLevel") or data.get("access_level") or "",
        )


@dataclass
class GroupedData:
    """Access list of an object grouped by subject kind."""

    group: List[AccessData] = field(default_factory=list)
    user: List[AccessData] = field(default_factory=list)
    user_invite: List[AccessData] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GroupedData":
        """Create from API response dict."""
        return cls(
            group=[AccessData.from_dict(a) for a in data.get("group") or []],
            user=[AccessData.from_dict(a) for a in data.get("user") or []],
            user_invite=[AccessData.from_dict(a) for a in data.get("userInvite") or []],
        )
