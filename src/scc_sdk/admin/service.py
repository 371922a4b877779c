# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Admin Service API V1.

Reads and updates the settings of an SCC instance (Event Notifications and
Object Storage connections) and sends test events.

Usage:
    >>> service = AdminServiceApiV1(IamAuthenticator(apikey="..."))
    >>> response = await service.get_settings(GetSettingsOptions())
    >>> settings = response.get_result()
"""

from __future__ import annotations

from typing import ClassVar

from ..core.context import RequestContext
from ..core.response import DetailedResponse
from ..core.service import BaseService
from ..core.validation import validate_options
from ..exceptions import ValidationError
from .models import (
    GetSettingsOptions,
    JSONPatchOperation,
    PatchOp,
    PostTestEventOptions,
    Settings,
    TestEvent,
    UpdateSettingsOptions,
)

JSON_PATCH_MIME = "application/json-patch+json"


def new_settings_patch(settings: Settings) -> list[JSONPatchOperation]:
    """
    Build the JSON patch that applies ``settings`` to an instance.

    Each section that is set becomes one ``add`` operation replacing the
    whole section.

    Raises:
        ValidationError: If settings is None
    """
    if settings is None:
        raise ValidationError("settings cannot be None")
    patch: list[JSONPatchOperation] = []
    if settings.event_notifications is not None:
        patch.append(
            JSONPatchOperation(
                op=PatchOp.ADD,
                path="/event_notifications",
                value=settings.event_notifications.to_dict(),
            )
        )
    if settings.object_storage is not None:
        patch.append(
            JSONPatchOperation(
                op=PatchOp.ADD,
                path="/object_storage",
                value=settings.object_storage.to_dict(),
            )
        )
    return patch


class AdminServiceApiV1(BaseService):
    """Client for the SCC Admin Service."""

    DEFAULT_SERVICE_URL: ClassVar[str] = (
        "https://us-south.compliance.cloud.ibm.com/instances/instance_id/v3"
    )
    DEFAULT_SERVICE_NAME: ClassVar[str] = "admin_service_api"
    SERVICE_VERSION: ClassVar[str] = "V1"
    PARAMETERIZED_SERVICE_URL: ClassVar[str] = (
        "https://{environment}.cloud.ibm.com/instances/{instance_id}/v3"
    )
    DEFAULT_URL_VARIABLES: ClassVar[dict[str, str]] = {
        "environment": "us-south.compliance",
        "instance_id": "instance_id",
    }

    async def get_settings(
        self,
        options: GetSettingsOptions | None,
        *,
        context: RequestContext | None = None,
    ) -> DetailedResponse[Settings]:
        """Retrieve the settings of the instance."""
        options = validate_options(options)
        return await self._invoke(
            "GetSettings",
            "GET",
            "/settings",
            headers=options.headers,
            correlation_id=options.x_correlation_id,
            decoder=Settings.from_dict,
            context=context,
        )

    async def update_settings(
        self,
        options: UpdateSettingsOptions | None,
        *,
        context: RequestContext | None = None,
    ) -> DetailedResponse[Settings]:
        """
        Apply a JSON patch to the settings of the instance.

        The body is sent as ``application/json-patch+json``; see
        new_settings_patch() for building it from a Settings value.

        Returns:
            The updated settings
        """
        options = validate_options(options)
        return await self._invoke(
            "UpdateSettings",
            "PATCH",
            "/settings",
            headers=options.headers,
            correlation_id=options.x_correlation_id,
            body=list(options.body),
            content_type=JSON_PATCH_MIME,
            decoder=Settings.from_dict,
            context=context,
        )

    async def post_test_event(
        self,
        options: PostTestEventOptions | None,
        *,
        context: RequestContext | None = None,
    ) -> DetailedResponse[TestEvent]:
        """Send a test event through the connected Event Notifications instance."""
        options = validate_options(options)
        return await self._invoke(
            "PostTestEvent",
            "POST",
            "/test_event",
            headers=options.headers,
            correlation_id=options.x_correlation_id,
            decoder=TestEvent.from_dict,
            context=context,
        )

    @staticmethod
    def new_settings_patch(settings: Settings) -> list[JSONPatchOperation]:
        """Build the JSON patch that applies ``settings``; see new_settings_patch()."""
        return new_settings_patch(settings)


__all__ = ["JSON_PATCH_MIME", "AdminServiceApiV1", "new_settings_patch"]
