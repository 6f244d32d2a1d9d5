"""Response envelope decoding and request orchestration.

Every Retool endpoint answers with the same JSON wrapper::

    {"success": bool, "message": str, "data": ..., "total_count": int,
     "next_token": str, "has_more": bool}

Collection endpoints return up to 100 items per page. When more items exist,
``has_more`` is true and ``next_token`` must be passed back as the ``next``
query parameter.
"""
from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, TypeVar
from urllib.parse import urlencode

import requests

from .client import RetoolClient
from .exceptions import DecodeError, PaginationLimitExceeded, RetoolAPIError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Parser = Callable[[Dict[str, Any]], T]


@dataclass
class Envelope:
    """Standard Retool API response wrapper."""

    success: bool
    message: str = ""
    data: Any = None
    total_count: Optional[int] = None
    next_token: str = ""
    has_more: bool = False

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Envelope":
        """Create from a parsed response body."""
        return cls(
            success=bool(payload.get("success", False)),
            message=payload.get("message") or "",
            data=payload.get("data"),
            total_count=payload.get("total_count"),
            next_token=payload.get("next_token") or "",
            has_more=bool(payload.get("has_more", False)),
        )


def _identity(item: Dict[str, Any]) -> Any:
    return item


def decode_response(resp: requests.Response) -> Optional[Envelope]:
    """Decode a raw response into a successful envelope.

    Args:
        resp: Response returned by RetoolClient.do

    Returns:
        Envelope, or None for a 204 No Content response

    Raises:
        DecodeError: If the body is not a JSON envelope
        RetoolAPIError: If the envelope reports a failure
    """
    if resp.status_code == 204:
        return None

    try:
        payload = resp.json()
    except ValueError as e:
        raise DecodeError(f"decoding response: {e}", resp.status_code) from e

    if not isinstance(payload, dict):
        raise DecodeError(
            f"decoding response: expected a JSON object, got {type(payload).__name__}",
            resp.status_code,
        )

    envelope = Envelope.from_dict(payload)
    if not envelope.success:
        raise RetoolAPIError(envelope.message, resp.status_code, resp.url or "")
    return envelope


def _parse(parser: Parser, item: Any, status_code: int) -> Any:
    try:
        return parser(item)
    except (KeyError, TypeError, ValueError) as e:
        raise DecodeError(f"decoding response: {e!r}", status_code) from e


def decode_single(resp: requests.Response, parser: Optional[Parser] = None) -> Optional[T]:
    """Decode a response carrying at most one entity.

    Without a parser the data payload is returned unchanged, whatever its
    JSON type. With a parser it must be a JSON object.

    Returns:
        Parsed entity, or None for 204 / absent data
    """
    envelope = decode_response(resp)
    if envelope is None or envelope.data is None:
        return None
    if parser is None:
        return envelope.data

    if not isinstance(envelope.data, dict):
        raise DecodeError(
            f"decoding response: expected a single object, got {type(envelope.data).__name__}",
            resp.status_code,
        )
    return _parse(parser, envelope.data, resp.status_code)


def do_single_request(
    client: RetoolClient,
    method: str,
    url: str,
    body: Any = None,
    parser: Optional[Parser] = None,
) -> Optional[T]:
    """Issue one request for an endpoint returning one entity or none.

    Errors from the client or the decoder are propagated unchanged.
    """
    resp = client.do(method, url, body)
    return decode_single(resp, parser)


def _with_query(url: str, query: Dict[str, Any]) -> str:
    if not query:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{urlencode(query, doseq=True)}"


def _check_budget(client: RetoolClient, url: str, pages: int, started: float) -> None:
    if client.max_pages is not None and pages >= client.max_pages:
        logger.warning(f"Pagination of {url} stopped after {pages} page(s)")
        raise PaginationLimitExceeded(f"pagination exceeded {client.max_pages} pages", pages)

    if client.pagination_deadline is not None:
        elapsed = time.monotonic() - started
        if elapsed >= client.pagination_deadline:
            logger.warning(f"Pagination of {url} stopped after {elapsed:.1f}s ({pages} page(s))")
            raise PaginationLimitExceeded(
                f"pagination exceeded {client.pagination_deadline}s deadline", pages
            )


def do_paginated_request(
    client: RetoolClient,
    url: str,
    query: Optional[Dict[str, Any]] = None,
    parser: Optional[Parser] = None,
    method: str = "GET",
    body: Any = None,
) -> List[T]:
    """Fetch every page of a collection endpoint.

    The ``next`` query parameter is set from the previous page's
    ``next_token`` until the API reports ``has_more: false``. Items keep page
    order, then in-page order. Any failure discards what was accumulated.

    Args:
        client: Retool client
        url: Collection URL without pagination parameters
        query: Initial query parameters (not modified)
        parser: Function turning one item dict into a typed value
        method: HTTP method, GET unless the endpoint takes a POST body
        body: Request body resent on every page

    Returns:
        List of all items

    Raises:
        PaginationLimitExceeded: If the client's page or time budget runs out
    """
    params = dict(query or {})
    parser = parser or _identity
    items: List[T] = []
    next_token = ""
    has_more = True
    pages = 0
    started = time.monotonic()

    while has_more:
        if pages:
            _check_budget(client, url, pages, started)

        if next_token:
            params["next"] = next_token

        resp = client.do(method, _with_query(url, params), body)
        envelope = decode_response(resp)
        pages += 1
        if envelope is None:
            break

        data = envelope.data if envelope.data is not None else []
        if not isinstance(data, list):
            raise DecodeError(
                f"decoding response: expected a list, got {type(data).__name__}",
                resp.status_code,
            )

        items.extend(_parse(parser, item, resp.status_code) for item in data)
        next_token = envelope.next_token
        has_more = envelope.has_more
        logger.debug(f"Fetched page {pages} of {url}: {len(data)} item(s), has_more={has_more}")

    return items
