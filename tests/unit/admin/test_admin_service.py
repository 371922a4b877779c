"""
Unit tests for AdminServiceApiV1.
"""

import pytest

from scc_sdk.admin import (
    AdminServiceApiV1,
    EventNotifications,
    GetSettingsOptions,
    JSONPatchOperation,
    ObjectStorage,
    PatchOp,
    PostTestEventOptions,
    Settings,
    UpdateSettingsOptions,
    new_settings_patch,
)
from scc_sdk.auth import NoAuthAuthenticator
from scc_sdk.exceptions import HttpStatusError, ValidationError

ADMIN_URL = "https://scc.example.com/instances/abc/v3"


class TestServiceIdentity:
    """Tests for the service constants."""

    def test_defaults(self):
        """The handle defaults to the us-south admin endpoint."""
        service = AdminServiceApiV1(NoAuthAuthenticator(), metrics_enabled=False)
        assert service.get_service_url() == (
            "https://us-south.compliance.cloud.ibm.com/instances/instance_id/v3"
        )
        assert AdminServiceApiV1.DEFAULT_SERVICE_NAME == "admin_service_api"

    def test_construct_service_url(self):
        """Environment and instance id are template variables."""
        url = AdminServiceApiV1.construct_service_url(
            {"environment": "eu-de.compliance", "instance_id": "abc"}
        )
        assert url == "https://eu-de.compliance.cloud.ibm.com/instances/abc/v3"

    def test_new_instance(self, monkeypatch):
        """new_instance reads the admin_service_api properties."""
        monkeypatch.setenv("ADMIN_SERVICE_API_AUTH_TYPE", "noauth")
        monkeypatch.setenv("ADMIN_SERVICE_API_URL", ADMIN_URL)
        service = AdminServiceApiV1.new_instance(metrics_enabled=False)
        assert service.get_service_url() == ADMIN_URL


class TestGetSettings:
    """Tests for get_settings."""

    async def test_request_and_result(self, admin_service, mock_server):
        """GET /settings returns the decoded settings."""
        mock_server.add(
            200, json_body={"object_storage": {"bucket": "b", "bucket_location": "us-south"}}
        )

        response = await admin_service.get_settings(
            GetSettingsOptions(x_correlation_id="corr-1", headers={"X-Extra": "1"})
        )

        sent = mock_server.last_request
        assert sent.method == "GET"
        assert str(sent.url) == f"{ADMIN_URL}/settings"
        assert sent.headers["Accept"] == "application/json"
        assert sent.headers["X-Correlation-Id"] == "corr-1"
        assert sent.headers["X-Extra"] == "1"
        assert "operation_id=GetSettings" in sent.headers["X-IBMCloud-SDK-Analytics"]
        assert "service_name=admin_service_api;service_version=V1" in (
            sent.headers["X-IBMCloud-SDK-Analytics"]
        )
        assert response.get_status_code() == 200
        assert response.get_result() == Settings(
            object_storage=ObjectStorage(bucket="b", bucket_location="us-south")
        )

    async def test_none_options(self, admin_service, mock_server):
        """None options are rejected before any request."""
        with pytest.raises(ValidationError, match="options cannot be None"):
            await admin_service.get_settings(None)
        assert mock_server.requests == []

    async def test_forbidden(self, admin_service, mock_server):
        """Error statuses raise HttpStatusError."""
        mock_server.add(403, json_body={"errors": [{"code": "forbidden", "message": "no access"}]})
        with pytest.raises(HttpStatusError) as exc_info:
            await admin_service.get_settings(GetSettingsOptions())
        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "no access"


class TestUpdateSettings:
    """Tests for update_settings."""

    async def test_sends_json_patch(self, admin_service, mock_server):
        """The patch is sent as application/json-patch+json."""
        mock_server.add(200, json_body={"event_notifications": {"instance_crn": "crn"}})
        patch = [
            JSONPatchOperation(
                op=PatchOp.ADD, path="/event_notifications", value={"instance_crn": "crn"}
            )
        ]

        response = await admin_service.update_settings(UpdateSettingsOptions(body=patch))

        sent = mock_server.last_request
        assert sent.method == "PATCH"
        assert str(sent.url) == f"{ADMIN_URL}/settings"
        assert sent.headers["Content-Type"] == "application/json-patch+json"
        assert mock_server.last_json() == [
            {"op": "add", "path": "/event_notifications", "value": {"instance_crn": "crn"}}
        ]
        assert response.get_result().event_notifications.instance_crn == "crn"

    async def test_empty_patch_allowed(self, admin_service, mock_server):
        """An empty patch is a valid body."""
        mock_server.add(200, json_body={})
        await admin_service.update_settings(UpdateSettingsOptions(body=[]))
        assert mock_server.last_request.content == b"[]"

    async def test_body_required(self, admin_service, mock_server):
        """A missing body is rejected."""
        with pytest.raises(ValidationError, match="UpdateSettingsOptions.body is required"):
            await admin_service.update_settings(UpdateSettingsOptions(body=None))
        assert mock_server.requests == []


class TestPostTestEvent:
    """Tests for post_test_event."""

    async def test_post(self, admin_service, mock_server):
        """POST /test_event returns the TestEvent result."""
        mock_server.add(202, json_body={"success": True})

        response = await admin_service.post_test_event(PostTestEventOptions())

        sent = mock_server.last_request
        assert sent.method == "POST"
        assert str(sent.url) == f"{ADMIN_URL}/test_event"
        assert sent.content == b""
        assert response.get_status_code() == 202
        assert response.get_result().success is True


class TestNewSettingsPatch:
    """Tests for new_settings_patch()."""

    def test_both_sections(self):
        """Each set section becomes one add operation."""
        settings = Settings(
            event_notifications=EventNotifications(instance_crn="en-crn"),
            object_storage=ObjectStorage(instance_crn="cos-crn", bucket="b"),
        )
        patch = AdminServiceApiV1.new_settings_patch(settings)
        assert [op.to_dict() for op in patch] == [
            {"op": "add", "path": "/event_notifications", "value": {"instance_crn": "en-crn"}},
            {
                "op": "add",
                "path": "/object_storage",
                "value": {"instance_crn": "cos-crn", "bucket": "b"},
            },
        ]

    def test_single_section(self):
        """Unset sections are skipped."""
        patch = new_settings_patch(Settings(object_storage=ObjectStorage(bucket="b")))
        assert len(patch) == 1
        assert patch[0].path == "/object_storage"

    def test_empty_settings(self):
        """Empty settings produce an empty patch."""
        assert new_settings_patch(Settings()) == []

    def test_none(self):
        """None settings are rejected."""
        with pytest.raises(ValidationError, match="settings cannot be None"):
            new_settings_patch(None)
