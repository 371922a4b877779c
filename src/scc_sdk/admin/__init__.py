# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Admin Service API V1: instance settings and test events."""

from .models import (
    EventNotifications,
    GetSettingsOptions,
    JSONPatchOperation,
    ObjectStorage,
    PatchOp,
    PostTestEventOptions,
    Settings,
    TestEvent,
    UpdateSettingsOptions,
)
from .service import JSON_PATCH_MIME, AdminServiceApiV1, new_settings_patch

__all__ = [
    "JSON_PATCH_MIME",
    "AdminServiceApiV1",
    "EventNotifications",
    "GetSettingsOptions",
    "JSONPatchOperation",
    "ObjectStorage",
    "PatchOp",
    "PostTestEventOptions",
    "Settings",
    "TestEvent",
    "UpdateSettingsOptions",
    "new_settings_patch",
]
