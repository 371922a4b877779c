# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Models and operation options of the Admin Service.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, cast

from typing_extensions import Self

from ..core.codec import (
    JsonObject,
    compact,
    get_any,
    get_bool,
    get_enum,
    get_model,
    get_str,
    require_object,
)
from ..core.validation import required

# =============================================================================
# Models
# =============================================================================


@dataclass
class EventNotifications:
    """The Event Notifications settings of an SCC instance."""

    instance_crn: str | None = None
    """CRN of the connected Event Notifications instance."""

    modified: str | None = None
    """Date when the connection was last modified."""

    source_id: str | None = None
    """Connected source id of the instance."""

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            instance_crn=get_str(data, "instance_crn"),
            modified=get_str(data, "modified"),
            source_id=get_str(data, "source_id"),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "instance_crn": self.instance_crn,
                "modified": self.modified,
                "source_id": self.source_id,
            }
        )


@dataclass
class ObjectStorage:
    """The Cloud Object Storage settings of an SCC instance."""

    instance_crn: str | None = None
    bucket: str | None = None
    bucket_location: str | None = None
    bucket_endpoint: str | None = None
    modified: str | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            instance_crn=get_str(data, "instance_crn"),
            bucket=get_str(data, "bucket"),
            bucket_location=get_str(data, "bucket_location"),
            bucket_endpoint=get_str(data, "bucket_endpoint"),
            modified=get_str(data, "modified"),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "instance_crn": self.instance_crn,
                "bucket": self.bucket,
                "bucket_location": self.bucket_location,
                "bucket_endpoint": self.bucket_endpoint,
                "modified": self.modified,
            }
        )


@dataclass
class Settings:
    """Instance settings: Event Notifications and Object Storage connections."""

    event_notifications: EventNotifications | None = None
    object_storage: ObjectStorage | None = None

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            event_notifications=get_model(
                data, "event_notifications", EventNotifications.from_dict
            ),
            object_storage=get_model(data, "object_storage", ObjectStorage.from_dict),
        )

    def to_dict(self) -> dict[str, Any]:
        return compact(
            {
                "event_notifications": self.event_notifications,
                "object_storage": self.object_storage,
            }
        )


class PatchOp(str, Enum):
    """RFC 6902 operation names."""

    ADD = "add"
    COPY = "copy"
    MOVE = "move"
    REMOVE = "remove"
    REPLACE = "replace"
    TEST = "test"


@dataclass
class JSONPatchOperation:
    """
    One RFC 6902 JSON patch operation.

    ``from_`` is sent as ``from`` on the wire. ``value`` is omitted when None.
    """

    op: PatchOp | str
    path: str
    from_: str | None = None
    value: Any = None

    Op = PatchOp

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(
            op=cast("PatchOp | str", get_enum(data, "op", PatchOp, required=True)),
            path=cast(str, get_str(data, "path", required=True)),
            from_=get_str(data, "from"),
            value=get_any(data, "value"),
        )

    def to_dict(self) -> dict[str, Any]:
        result = {"op": self.op, "path": self.path}
        return compact({**result, "from": self.from_, "value": self.value})


@dataclass
class TestEvent:
    """Result of sending a test event."""

    success: bool

    @classmethod
    def from_dict(cls, data: JsonObject) -> Self:
        data = require_object(data, cls.__name__)
        return cls(success=cast(bool, get_bool(data, "success", required=True)))

    def to_dict(self) -> dict[str, Any]:
        return {"success": self.success}


# =============================================================================
# Operation options
# =============================================================================


@dataclass
class GetSettingsOptions:
    """Options of get_settings."""

    x_correlation_id: str | None = None
    headers: dict[str, str] | None = None


@dataclass
class UpdateSettingsOptions:
    """Options of update_settings; ``body`` is the JSON patch to apply."""

    body: list[JSONPatchOperation] = required()
    x_correlation_id: str | None = None
    headers: dict[str, str] | None = None


@dataclass
class PostTestEventOptions:
    """Options of post_test_event."""

    x_correlation_id: str | None = None
    headers: dict[str, str] | None = None


__all__ = [
    "EventNotifications",
    "GetSettingsOptions",
    "JSONPatchOperation",
    "ObjectStorage",
    "PatchOp",
    "PostTestEventOptions",
    "Settings",
    "TestEvent",
    "UpdateSettingsOptions",
]
