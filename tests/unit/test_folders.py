"""Unit tests for FolderService."""
import pytest

from retool_sdk import Folder, FolderService, FolderType, UpdateOperation, ValidationError


@pytest.fixture
def service(client):
    return FolderService(client)


def test_get_folder(service, adapter):
    adapter.queue({"success": True, "data": {"id": "folder_123", "name": "Test Folder"}})

    folder = service.get_folder("folder_123")

    assert isinstance(folder, Folder)
    assert folder.id == "folder_123"
    assert folder.name == "Test Folder"
    assert adapter.last_request.method == "GET"
    assert adapter.last_request.url == "https://example.com/api/v2/folders/folder_123"
    assert adapter.last_request.headers["Authorization"] == "Bearer test-api-key"


def test_list_folders(service, adapter):
    adapter.queue({"success": True, "data": [
        {"id": "f1", "name": "Apps", "folder_type": "app", "is_system_folder": True},
        {"id": "f2", "name": "Flows", "folder_type": "workflow"},
    ]})
    folders = service.list_folders()
    assert [(f.id, f.folder_type) for f in folders] == [("f1", "app"), ("f2", "workflow")]
    assert folders[0].is_system_folder is True


class TestCreateFolder:
    def test_minimal_payload(self, service, adapter):
        adapter.queue({"success": True, "data": {"id": "f3", "name": "Reports"}})
        folder = service.create_folder("Reports")

        assert folder.id == "f3"
        assert adapter.last_json() == {"name": "Reports"}

    def test_full_payload(self, service, adapter):
        adapter.queue({"success": True, "data": {"id": "f4", "name": "Child", "parent_folder_id": "f3",
                                                 "folder_type": "workflow"}})
        folder = service.create_folder("Child", parent_folder_id="f3", folder_type=FolderType.WORKFLOW)

        assert folder.parent_folder_id == "f3"
        assert adapter.last_json() == {"name": "Child", "folder_type": "workflow", "parent_folder_id": "f3"}

    def test_name_is_required(self, service, adapter):
        with pytest.raises(ValidationError, match="name is required"):
            service.create_folder("")
        assert adapter.requests == []

    def test_unknown_folder_type(self, service, adapter):
        with pytest.raises(ValidationError) as exc:
            service.create_folder("Reports", folder_type="dashboard")
        assert str(exc.value) == "validating folder type: invalid folder type: dashboard"
        assert adapter.requests == []


def test_update_folder(service, adapter):
    adapter.queue({"success": True, "data": {"id": "folder_123", "name": "Renamed"}})
    folder = service.update_folder("folder_123", [UpdateOperation("replace", "/name", "Renamed")])

    assert folder.name == "Renamed"
    assert adapter.last_request.method == "PATCH"


def test_delete_folder(service, adapter):
    adapter.queue(status=204)
    assert service.delete_folder("folder_123") is None
    assert adapter.last_request.method == "DELETE"


def test_delete_folder_with_message_payload(service, adapter):
    adapter.queue({"success": True, "data": "Folder deleted"})
    assert service.delete_folder("f1") is None
