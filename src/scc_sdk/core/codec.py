# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
JSON codec helpers shared by the service models.

Models decode themselves with explicit ``from_dict`` classmethods built from
the field readers in this module. Readers ignore unknown keys, treat a JSON
``null`` like an absent key, and raise DecodeError when a required field is
missing or a value has the wrong JSON type. Encoding goes through
``to_wire``, which understands models (anything with ``to_dict``), enums,
datetimes, lists and mappings.
"""

from __future__ import annotations

import json
import re
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from enum import Enum
from typing import Any, TypeVar

from ..exceptions import DecodeError

T = TypeVar("T")
E = TypeVar("E", bound=Enum)

JsonObject = Mapping[str, Any]
Decoder = Callable[[JsonObject], T]

_FRACTION = re.compile(r"\.(\d+)")


# =============================================================================
# Date-time handling
# =============================================================================


def parse_datetime(value: str) -> datetime:
    """
    Parse an RFC 3339 date-time string.

    Accepts a trailing ``Z`` and fractional seconds of any precision; naive
    values are assumed to be UTC.

    Raises:
        ValueError: If the string is not a valid date-time
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    # fromisoformat on 3.10 only accepts 3 or 6 fractional digits
    text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_datetime(value: datetime) -> str:
    """Format a datetime as RFC 3339, using ``Z`` for UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.isoformat()
    if text.endswith("+00:00"):
        text = text[:-6] + "Z"
    return text


# =============================================================================
# Encoding
# =============================================================================


def to_wire(value: Any) -> Any:
    """Convert a model tree into plain JSON-compatible values."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return format_datetime(value)
    if isinstance(value, Mapping):
        return {str(k): to_wire(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_wire(v) for v in value]
    return value


def encode_json(value: Any) -> bytes:
    """Serialize a value (model, list of models, or plain JSON) to UTF-8 bytes."""
    return json.dumps(to_wire(value), separators=(",", ":")).encode("utf-8")


def compact(values: Mapping[str, Any]) -> dict[str, Any]:
    """Drop None entries and convert the remaining values with to_wire."""
    return {k: to_wire(v) for k, v in values.items() if v is not None}


# =============================================================================
# Field readers
# =============================================================================


def require_object(data: Any, model: str) -> JsonObject:
    """Return ``data`` if it is a JSON object, else raise DecodeError."""
    if not isinstance(data, Mapping):
        raise DecodeError(
            f"error unmarshalling {model}: expected a JSON object, "
            f"got {type(data).__name__}"
        )
    return data


def _read(
    data: JsonObject,
    key: str,
    types: type | tuple[type, ...],
    type_name: str,
    required: bool,
) -> Any:
    value = data.get(key)
    if value is None:
        if required:
            raise DecodeError(f"required property '{key}' is missing")
        return None
    # bool is an int subclass; never accept it where a number is expected
    if isinstance(value, bool) and bool not in (
        types if isinstance(types, tuple) else (types,)
    ):
        raise DecodeError(f"property '{key}': expected {type_name}, got bool")
    if not isinstance(value, types):
        raise DecodeError(
            f"property '{key}': expected {type_name}, got {type(value).__name__}"
        )
    return value


def get_str(data: JsonObject, key: str, *, required: bool = False) -> str | None:
    return _read(data, key, str, "string", required)


def get_int(data: JsonObject, key: str, *, required: bool = False) -> int | None:
    value = _read(data, key, (int, float), "integer", required)
    if isinstance(value, float):
        if not value.is_integer():
            raise DecodeError(f"property '{key}': expected integer, got {value}")
        return int(value)
    return value


def get_float(data: JsonObject, key: str, *, required: bool = False) -> float | None:
    value = _read(data, key, (int, float), "number", required)
    return None if value is None else float(value)


def get_bool(data: JsonObject, key: str, *, required: bool = False) -> bool | None:
    return _read(data, key, bool, "boolean", required)


def get_any(data: JsonObject, key: str, *, required: bool = False) -> Any:
    """Return the raw JSON value for ``key`` without type checks."""
    if key not in data:
        if required:
            raise DecodeError(f"required property '{key}' is missing")
        return None
    return data[key]


def get_datetime(
    data: JsonObject, key: str, *, required: bool = False
) -> datetime | None:
    value = get_str(data, key, required=required)
    if value is None:
        return None
    try:
        return parse_datetime(value)
    except ValueError as e:
        raise DecodeError(f"property '{key}': invalid date-time '{value}'") from e


def get_str_list(data: JsonObject, key: str, *, required: bool = False) -> list[str] | None:
    values = _read(data, key, list, "array", required)
    if values is None:
        return None
    for item in values:
        if not isinstance(item, str):
            raise DecodeError(f"property '{key}': expected array of strings")
    return list(values)


def get_model(
    data: JsonObject,
    key: str,
    decoder: Decoder[T],
    *,
    required: bool = False,
) -> T | None:
    value = _read(data, key, Mapping, "object", required)
    if value is None:
        return None
    try:
        return decoder(value)
    except DecodeError as e:
        raise DecodeError(f"property '{key}': {e}") from e


def get_model_list(
    data: JsonObject,
    key: str,
    decoder: Decoder[T],
    *,
    required: bool = False,
) -> list[T] | None:
    values = _read(data, key, list, "array", required)
    if values is None:
        return None
    result = []
    for index, item in enumerate(values):
        try:
            result.append(decoder(require_object(item, key)))
        except DecodeError as e:
            raise DecodeError(f"property '{key}[{index}]': {e}") from e
    return result


def get_enum(
    data: JsonObject,
    key: str,
    enum_cls: type[E],
    *,
    required: bool = False,
) -> E | str | None:
    """
    Read a string-valued enum field.

    Unknown values are kept as the raw string for optional fields, since the
    server may add new values. For required fields they raise DecodeError.
    """
    value = get_str(data, key, required=required)
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        if required:
            allowed = ", ".join(str(m.value) for m in enum_cls)
            raise DecodeError(
                f"property '{key}': '{value}' is not one of [{allowed}]"
            ) from None
        return value


__all__ = [
    "Decoder",
    "JsonObject",
    "compact",
    "encode_json",
    "format_datetime",
    "get_any",
    "get_bool",
    "get_datetime",
    "get_enum",
    "get_float",
    "get_int",
    "get_model",
    "get_model_list",
    "get_str",
    "get_str_list",
    "parse_datetime",
    "require_object",
    "to_wire",
]
