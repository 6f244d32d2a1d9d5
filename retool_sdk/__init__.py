"""Retool Admin API client library.

This package provides a typed, testable interface to the Retool REST API.

Architecture:
- client.py: HTTP client with bearer-token authentication and options
- envelope.py: Response envelope decoding, single and paginated requests
- models.py: Payload dataclasses and closed enumerations
- users.py, groups.py, folders.py, spaces.py: Resource services
- configuration_variables.py, user_attributes.py, permissions.py: Resource services
- exceptions.py: Typed exceptions for error handling
- config/: Settings loaded from environment and /run/secrets

Usage:
    from retool_sdk import RetoolClient, FolderService, with_timeout

    client = RetoolClient("retool_xxx", "acme.retool.com", with_timeout(30))
    folders = FolderService(client).list_folders()
"""
from .client import (
    API_PATH,
    DEFAULT_TIMEOUT,
    BearerTokenAuth,
    RetoolClient,
    with_adapter,
    with_max_pages,
    with_pagination_deadline,
    with_timeout,
)
from .envelope import (
    Envelope,
    decode_response,
    decode_single,
    do_paginated_request,
    do_single_request,
)
from .exceptions import (
    ConfigurationError,
    DecodeError,
    PaginationLimitExceeded,
    RequestConstructionError,
    RetoolAPIError,
    RetoolError,
    SerializationError,
    TransportError,
    ValidationError,
)
from .models import (
    AccessData,
    AccessLevel,
    ConfigurationValue,
    ConfigurationVariable,
    CreateSpaceOptions,
    Folder,
    FolderType,
    Group,
    GroupedData,
    Member,
    ObjectType,
    Operation,
    OrganizationAttribute,
    QUERY_LIBRARY_ACCESS_LEVELS,
    Sources,
    Space,
    Subject,
    SubjectType,
    UpdateOperation,
    User,
    UserAttribute,
    UserInvite,
    UserType,
    validate_operations,
)
from .configuration_variables import ConfigurationVariableService
from .folders import FolderService
from .groups import GroupService
from .permissions import PermissionService
from .spaces import SpaceService
from .user_attributes import UserAttributeService
from .users import UserService

__version__ = "0.1.0"

__all__ = [
    # Client
    "RetoolClient",
    "BearerTokenAuth",
    "with_timeout",
    "with_max_pages",
    "with_pagination_deadline",
    "with_adapter",
    "API_PATH",
    "DEFAULT_TIMEOUT",

    # Envelope
    "Envelope",
    "decode_response",
    "decode_single",
    "do_single_request",
    "do_paginated_request",

    # Exceptions
    "RetoolError",
    "ConfigurationError",
    "SerializationError",
    "RequestConstructionError",
    "TransportError",
    "DecodeError",
    "RetoolAPIError",
    "PaginationLimitExceeded",
    "ValidationError",

    # Models
    "AccessData",
    "AccessLevel",
    "ConfigurationValue",
    "ConfigurationVariable",
    "CreateSpaceOptions",
    "Folder",
    "FolderType",
    "Group",
    "GroupedData",
    "Member",
    "ObjectType",
    "Operation",
    "OrganizationAttribute",
    "QUERY_LIBRARY_ACCESS_LEVELS",
    "Sources",
    "Space",
    "Subject",
    "SubjectType",
    "UpdateOperation",
    "User",
    "UserAttribute",
    "UserInvite",
    "UserType",
    "validate_operations",

    # Services
    "UserService",
    "GroupService",
    "FolderService",
    "SpaceService",
    "ConfigurationVariableService",
    "UserAttributeService",
    "PermissionService",
]
