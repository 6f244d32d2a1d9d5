"""Pytest shared fixtures: an in-memory transport adapter and a client wired to it."""
import json
import pathlib
import sys
from typing import Callable, List, Optional, Tuple

# Add project root to Python path
ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest
import requests
from requests.adapters import BaseAdapter

from retool_sdk import RetoolClient, with_adapter


# ─────────────────────────────────────────────────────────────────────────────
# Fake transport
# ─────────────────────────────────────────────────────────────────────────────
def make_response(request: requests.PreparedRequest, status_code: int = 200,
                  payload=None, text: Optional[str] = None) -> requests.Response:
    """Build a requests.Response the way HTTPAdapter.build_response would."""
    resp = requests.Response()
    resp.status_code = status_code
    if payload is not None:
        resp._content = json.dumps(payload).encode("utf-8")
    elif text is not None:
        resp._content = text.encode("utf-8")
    else:
        resp._content = b""
    resp.encoding = "utf-8"
    resp.headers["Content-Type"] = "application/json"
    resp.url = request.url
    resp.request = request
    return resp


class FakeAdapter(BaseAdapter):
    """Transport adapter answering from a queue (or a handler) without network I/O.

    Every prepared request, with auth already applied, is recorded in
    ``self.requests``.
    """

    def __init__(self):
        super().__init__()
        self.requests: List[requests.PreparedRequest] = []
        self.send_kwargs: List[dict] = []
        self.responses: List[Tuple[int, object, Optional[str]]] = []
        self.handler: Optional[Callable[[requests.PreparedRequest], Tuple[int, object]]] = None
        self.error: Optional[Exception] = None

    def queue(self, payload=None, status: int = 200, text: Optional[str] = None) -> "FakeAdapter":
        self.responses.append((status, payload, text))
        return self

    def send(self, request, **kwargs):
        self.requests.append(request)
        self.send_kwargs.append(kwargs)
        if self.error is not None:
            raise self.error
        if self.handler is not None:
            status, payload = self.handler(request)
            return make_response(request, status, payload)
        if not self.responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        status, payload, text = self.responses.pop(0)
        return make_response(request, status, payload, text)

    def close(self):
        pass

    @property
    def last_request(self) -> requests.PreparedRequest:
        return self.requests[-1]

    def last_json(self):
        body = self.last_request.body
        return json.loads(body) if body else None


@pytest.fixture
def adapter():
    return FakeAdapter()


@pytest.fixture
def client(adapter):
    """Client for https://example.com whose requests never leave the process."""
    c = RetoolClient("test-api-key", "example.com", with_adapter(adapter))
    yield c
    c.close()


@pytest.fixture
def base_url(client):
    return client.base_url
