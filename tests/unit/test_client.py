"""Unit tests for retool_sdk/client.py (construction, options, auth, dispatch)."""
import pytest
import requests

from retool_sdk import (
    BearerTokenAuth,
    ConfigurationError,
    RequestConstructionError,
    RetoolClient,
    SerializationError,
    TransportError,
    UpdateOperation,
    with_adapter,
    with_max_pages,
    with_pagination_deadline,
    with_timeout,
)


class TestConstruction:
    def test_defaults(self):
        client = RetoolClient("test-api-key", "example.com")
        assert client.api_key == "test-api-key"
        assert client.timeout == 10.0
        assert client.max_pages is None
        assert client.pagination_deadline is None

    def test_missing_endpoint_scheme_defaults_to_https(self):
        client = RetoolClient("test-api-key", "example.com")
        assert client.endpoint == "https://example.com"
        assert client.base_url == "https://example.com/api/v2"

    def test_explicit_http_scheme_is_preserved(self):
        client = RetoolClient("test-api-key", "http://example.com")
        assert client.base_url == "http://example.com/api/v2"

    def test_trailing_slash_is_stripped(self):
        client = RetoolClient("test-api-key", "https://example.com/")
        assert client.base_url == "https://example.com/api/v2"

    @pytest.mark.parametrize("api_key, endpoint", [("", "example.com"), ("test-api-key", ""), ("", "")])
    def test_missing_required_input(self, api_key, endpoint):
        with pytest.raises(ConfigurationError, match="API key and endpoint are required"):
            RetoolClient(api_key, endpoint)

    def test_custom_timeout(self):
        client = RetoolClient("test-api-key", "example.com", with_timeout(30))
        assert client.timeout == 30.0

    @pytest.mark.parametrize("timeout", [0, -1, -0.5])
    def test_non_positive_timeout_fails(self, timeout):
        with pytest.raises(ConfigurationError) as exc:
            RetoolClient("test-api-key", "example.com", with_timeout(timeout))
        assert str(exc.value) == "applying client option: timeout must be greater than 0"

    def test_options_apply_in_order_and_stop_on_first_failure(self):
        applied = []

        def record(name):
            def apply(client):
                applied.append(name)
            return apply

        with pytest.raises(ConfigurationError, match="max pages must be greater than 0"):
            RetoolClient("k", "example.com", record("first"), with_max_pages(0), record("never"))
        assert applied == ["first"]

    def test_pagination_budget_options(self):
        client = RetoolClient("k", "example.com", with_max_pages(5), with_pagination_deadline(2.5))
        assert client.max_pages == 5
        assert client.pagination_deadline == 2.5

    def test_invalid_pagination_deadline(self):
        with pytest.raises(ConfigurationError, match="pagination deadline must be greater than 0"):
            RetoolClient("k", "example.com", with_pagination_deadline(0))

    def test_repr_hides_api_key(self):
        assert "test-api-key" not in repr(RetoolClient("test-api-key", "example.com"))


class TestBearerTokenAuth:
    def test_sets_authorization_and_default_content_type(self):
        request = requests.Request("GET", "https://example.com/x").prepare()
        BearerTokenAuth("secret")(request)
        assert request.headers["Authorization"] == "Bearer secret"
        assert request.headers["Content-Type"] == "application/json"

    def test_keeps_existing_content_type(self):
        request = requests.Request(
            "POST", "https://example.com/x", data=b"a=1",
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        ).prepare()
        BearerTokenAuth("secret")(request)
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert request.body == b"a=1"


class TestDo:
    @pytest.mark.parametrize("method", ["GET", "POST", "PUT", "PATCH", "DELETE"])
    def test_every_method_is_authenticated(self, client, adapter, method):
        adapter.queue({"success": True})
        client.do(method, f"{client.base_url}/folders", {"a": 1} if method != "GET" else None)
        sent = adapter.last_request
        assert sent.method == method
        assert sent.headers["Authorization"] == "Bearer test-api-key"
        assert sent.headers["Content-Type"] == "application/json"

    def test_returns_raw_response_without_interpreting_it(self, client, adapter):
        adapter.queue(status=500, text="boom")
        resp = client.do("GET", f"{client.base_url}/folders")
        assert resp.status_code == 500
        assert resp.text == "boom"

    def test_body_is_json_serialized(self, client, adapter):
        adapter.queue({"success": True})
        client.do("PATCH", f"{client.base_url}/folders/f1",
                  {"operations": [UpdateOperation("replace", "/name", "New")]})
        assert adapter.last_json() == {"operations": [{"op": "replace", "path": "/name", "value": "New"}]}

    def test_no_body_sends_no_payload(self, client, adapter):
        adapter.queue({"success": True})
        client.do("GET", f"{client.base_url}/folders")
        assert adapter.last_request.body is None

    def test_timeout_is_passed_to_transport(self, adapter):
        client = RetoolClient("k", "example.com", with_timeout(3), with_adapter(adapter))
        adapter.queue({"success": True})
        client.do("GET", f"{client.base_url}/folders")
        assert adapter.send_kwargs[-1]["timeout"] == 3.0

    def test_unserializable_body_is_never_sent(self, client, adapter):
        with pytest.raises(SerializationError, match="^marshalling request: "):
            client.do("POST", f"{client.base_url}/folders", {"when": object()})
        assert adapter.requests == []

    def test_transport_failure_is_wrapped(self, client, adapter):
        adapter.error = requests.exceptions.ConnectionError("connection refused")
        with pytest.raises(TransportError, match="^making request: connection refused") as exc:
            client.do("GET", f"{client.base_url}/folders")
        assert isinstance(exc.value.__cause__, requests.exceptions.ConnectionError)

    def test_timeout_is_a_transport_error(self, client, adapter):
        adapter.error = requests.exceptions.ReadTimeout("read timed out")
        with pytest.raises(TransportError):
            client.do("GET", f"{client.base_url}/folders")

    def test_malformed_url_fails_construction(self, client):
        with pytest.raises(RequestConstructionError, match="^creating request: "):
            client.do("GET", "not a url")

    def test_context_manager_closes_session(self, adapter):
        with RetoolClient("k", "example.com", with_adapter(adapter)) as client:
            assert isinstance(client, RetoolClient)
