"""Unit tests for ConfigurationVariableService."""
import pytest

from retool_sdk import ConfigurationValue, ConfigurationVariableService


VARIABLE = {
    "id": "cv_1",
    "name": "API_BASE",
    "description": "Upstream base URL",
    "secret": False,
    "values": [
        {"environment_id": "env_prod", "value": "https://api.example.com"},
        {"environment_id": "env_staging", "value": "https://staging.example.com"},
    ],
}


@pytest.fixture
def service(client):
    return ConfigurationVariableService(client)


def test_get_configuration_variable(service, adapter):
    adapter.queue({"success": True, "data": VARIABLE})
    variable = service.get_configuration_variable("cv_1")

    assert variable.name == "API_BASE"
    assert variable.values[1] == ConfigurationValue("env_staging", "https://staging.example.com")
    assert adapter.last_request.url == "https://example.com/api/v2/configuration_variables/cv_1"


def test_list_configuration_variables(service, adapter):
    adapter.queue({"success": True, "data": [VARIABLE], "next_token": "t", "has_more": True})
    adapter.queue({"success": True, "data": [dict(VARIABLE, id="cv_2", secret=True)], "has_more": False})

    variables = service.list_configuration_variables()

    assert [v.secret for v in variables] == [False, True]


def test_create_configuration_variable(service, adapter):
    adapter.queue({"success": True, "data": VARIABLE})
    service.create_configuration_variable(
        "API_BASE", "Upstream base URL", False,
        [ConfigurationValue("env_prod", "https://api.example.com")],
    )

    assert adapter.last_request.method == "POST"
    assert adapter.last_json() == {
        "name": "API_BASE",
        "description": "Upstream base URL",
        "secret": False,
        "values": [{"environment_id": "env_prod", "value": "https://api.example.com"}],
    }


def test_update_configuration_variable_uses_put(service, adapter):
    adapter.queue({"success": True, "data": dict(VARIABLE, secret=True)})
    variable = service.update_configuration_variable("cv_1", "API_BASE", "", True, [])

    assert variable.secret is True
    assert adapter.last_request.method == "PUT"
    assert adapter.last_request.url.endswith("/configuration_variables/cv_1")


def test_delete_configuration_variable(service, adapter):
    adapter.queue(status=204)
    service.delete_configuration_variable("cv_1")
    assert adapter.last_request.method == "DELETE"
