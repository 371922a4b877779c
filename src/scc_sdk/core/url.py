# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Service URL resolution from parameterized templates.

Services publish a template such as
``https://{environment}.cloud.ibm.com/instances/{instance_id}/v3`` together
with the default value of every variable. Callers may override a subset of
the variables; names outside the published set are rejected.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from ..exceptions import ValidationError

_PLACEHOLDER = re.compile(r"\{([^{}]+)\}")


def construct_service_url(
    template: str,
    default_vars: Mapping[str, str],
    provided_vars: Mapping[str, str] | None = None,
) -> str:
    """
    Build a service URL by substituting variables into a template.

    Args:
        template: URL containing ``{name}`` placeholders
        default_vars: Default value for every variable the template accepts
        provided_vars: Caller overrides; every key must appear in default_vars

    Returns:
        The URL with every placeholder replaced

    Raises:
        ValidationError: If an override names an unknown variable or a
            placeholder has no value
    """
    provided_vars = provided_vars or {}

    for name in provided_vars:
        if name not in default_vars:
            valid = ", ".join(sorted(default_vars))
            raise ValidationError(
                f"'{name}' is an invalid variable name.\nValid variable names: [{valid}]."
            )

    values = {**default_vars, **provided_vars}

    def _substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in values:
            raise ValidationError(f"no value for URL variable '{name}'")
        return values[name]

    return _PLACEHOLDER.sub(_substitute, template)


__all__ = ["construct_service_url"]
