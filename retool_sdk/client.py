"""Low-level HTTP client for the Retool API.

Handles authentication, client configuration and raw HTTP dispatch.
Response decoding lives in ``envelope.py``.
"""
from __future__ import annotations
import json
import logging
from enum import Enum
from typing import Any, Callable, Optional

import requests
from requests.adapters import BaseAdapter, HTTPAdapter
from requests.auth import AuthBase

from .exceptions import (
    ConfigurationError,
    RequestConstructionError,
    SerializationError,
    TransportError,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
API_PATH = "/api/v2"


class BearerTokenAuth(AuthBase):
    """Attach the API key as a bearer token to every outgoing request.

    Also defaults the content type to JSON when the request does not carry
    one. The body is never touched.
    """

    def __init__(self, api_key: str):
        self.api_key = api_key

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        request.headers["Authorization"] = f"Bearer {self.api_key}"
        if not request.headers.get("Content-Type"):
            request.headers["Content-Type"] = "application/json"
        return request


ClientOption = Callable[["RetoolClient"], None]


def with_timeout(timeout: float) -> ClientOption:
    """Override the request timeout (seconds, must be positive).

    The value is handed to requests, which applies it to connecting and to
    each socket read separately. A slow response that keeps sending bytes can
    take longer than ``timeout`` in total.
    """
    def apply(client: "RetoolClient") -> None:
        if timeout is None or timeout <= 0:
            raise ValueError("timeout must be greater than 0")
        client.timeout = float(timeout)
    return apply


def with_max_pages(max_pages: int) -> ClientOption:
    """Bound the number of pages a single collection fetch may request."""
    def apply(client: "RetoolClient") -> None:
        if max_pages is None or max_pages <= 0:
            raise ValueError("max pages must be greater than 0")
        client.max_pages = int(max_pages)
    return apply


def with_pagination_deadline(seconds: float) -> ClientOption:
    """Bound the wall-clock time a single collection fetch may take."""
    def apply(client: "RetoolClient") -> None:
        if seconds is None or seconds <= 0:
            raise ValueError("pagination deadline must be greater than 0")
        client.pagination_deadline = float(seconds)
    return apply


def with_adapter(adapter: BaseAdapter) -> ClientOption:
    """Replace the underlying transport adapter (useful for testing)."""
    def apply(client: "RetoolClient") -> None:
        if adapter is None:
            raise ValueError("adapter is required")
        client._mount(adapter)
    return apply


def _encode(value: Any) -> Any:
    """JSON fallback encoder for SDK payload types."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class RetoolClient:
    """HTTP client for the Retool API with bearer-token authentication.

    Configuration is fixed at construction time. The underlying
    ``requests.Session`` is not documented as thread-safe, so use one client
    per thread when issuing calls concurrently.

    Usage:
        client = RetoolClient("retool_xxx", "acme.retool.com", with_timeout(30))
        response = client.do("GET", f"{client.base_url}/folders")
    """

    def __init__(self, api_key: str, endpoint: str, *options: ClientOption):
        """Initialize Retool client.

        Args:
            api_key: API key of the Retool instance (required)
            endpoint: Host or URL of the Retool instance (required, https by default)
            *options: Client options applied in order

        Raises:
            ConfigurationError: If a required input is missing or an option fails
        """
        if not api_key or not endpoint:
            raise ConfigurationError("API key and endpoint are required")

        if not endpoint.startswith(("http://", "https://")):
            endpoint = f"https://{endpoint}"
        endpoint = endpoint.rstrip("/")

        self.api_key = api_key
        self.endpoint = endpoint
        self.base_url = f"{endpoint}{API_PATH}"
        self.timeout = DEFAULT_TIMEOUT
        self.max_pages: Optional[int] = None
        self.pagination_deadline: Optional[float] = None

        self.session = requests.Session()
        self.session.auth = BearerTokenAuth(api_key)
        self._mount(HTTPAdapter())

        for option in options:
            try:
                option(self)
            except (TypeError, ValueError) as e:
                self.session.close()
                raise ConfigurationError(f"applying client option: {e}") from e

    def _mount(self, adapter: BaseAdapter) -> None:
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

    def do(self, method: str, url: str, body: Any = None) -> requests.Response:
        """Send an authenticated request and return the raw response.

        Status codes and body content are not interpreted here.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE)
            url: Absolute URL
            body: Optional value serialized to JSON

        Returns:
            Response object

        Raises:
            SerializationError: If body cannot be marshalled to JSON
            RequestConstructionError: If the request cannot be built
            TransportError: On network failure or timeout
        """
        payload = None
        if body is not None:
            try:
                payload = json.dumps(body, default=_encode).encode("utf-8")
            except (TypeError, ValueError) as e:
                raise SerializationError(f"marshalling request: {e}") from e

        try:
            resp = self.session.request(method, url, data=payload, timeout=self.timeout)
        except (requests.exceptions.MissingSchema,
                requests.exceptions.InvalidSchema,
                requests.exceptions.InvalidURL) as e:
            raise RequestConstructionError(f"creating request: {e}") from e
        except requests.RequestException as e:
            raise TransportError(f"making request: {e}") from e

        logger.debug(f"{method} {url} -> {resp.status_code}")
        return resp

    def close(self) -> None:
        """Release pooled connections."""
        self.session.close()

    def __enter__(self) -> "RetoolClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"RetoolClient(base_url={self.base_url!r}, timeout={self.timeout})"
