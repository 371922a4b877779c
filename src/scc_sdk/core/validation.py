# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Validation of operation options.

Options are dataclasses. Required fields are declared with ``required()``
(must not be None) or ``path_param()`` (must not be None or empty), and
``validate_options`` rejects the whole object on the first failing field.
"""

from __future__ import annotations

import dataclasses
from typing import Any, TypeVar

from ..exceptions import ValidationError

T = TypeVar("T")

_REQUIRED = "required"
_NON_EMPTY = "non_empty"


def required() -> Any:
    """Declare a required dataclass field that must not be None."""
    return dataclasses.field(metadata={_REQUIRED: True})


def path_param() -> Any:
    """Declare a required dataclass field that must be a non-empty value."""
    return dataclasses.field(metadata={_REQUIRED: True, _NON_EMPTY: True})


def validate_options(options: T | None, name: str = "options") -> T:
    """
    Check every required field of an options dataclass.

    Args:
        options: The options object passed to an operation
        name: Name used in error messages

    Returns:
        The validated options

    Raises:
        ValidationError: If options is None or a required field is missing or empty
    """
    if options is None:
        raise ValidationError(f"{name} cannot be None")
    if not dataclasses.is_dataclass(options):
        raise ValidationError(f"{name} must be an options object")

    for f in dataclasses.fields(options):
        if not f.metadata.get(_REQUIRED):
            continue
        value = getattr(options, f.name)
        if value is None:
            raise ValidationError(f"{type(options).__name__}.{f.name} is required")
        if f.metadata.get(_NON_EMPTY) and value == "":
            raise ValidationError(
                f"{type(options).__name__}.{f.name} must not be empty"
            )
    return options


__all__ = ["path_param", "required", "validate_options"]
