# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
External configuration for service handles and authenticators.

Properties are looked up under a service-specific prefix, e.g.
``RESULTS_REPORTS_API_URL`` or ``ADMIN_SERVICE_API_APIKEY``. Two sources are
consulted in order and the first one that defines any property for the
service wins:

1. a credentials file in dotenv format: the path in ``IBM_CREDENTIALS_FILE``,
   else ``./ibm-credentials.env``, else ``~/ibm-credentials.env``
2. the process environment
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from dotenv import dotenv_values
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError

logger = logging.getLogger(__name__)

CREDENTIALS_FILE_ENV = "IBM_CREDENTIALS_FILE"
DEFAULT_CREDENTIALS_FILE_NAME = "ibm-credentials.env"

PROPERTY_NAMES = (
    "URL",
    "AUTH_TYPE",
    "APIKEY",
    "AUTH_URL",
    "USERNAME",
    "PASSWORD",
    "DISABLE_SSL",
    "BEARER_TOKEN",
    "AUTH_DISABLE_SSL",
    "CLIENT_ID",
    "CLIENT_SECRET",
    "SCOPE",
    "CR_TOKEN_FILENAME",
    "IAM_PROFILE_NAME",
    "IAM_PROFILE_ID",
    "IAM_PROFILE_CRN",
    "IAM_ACCOUNT_ID",
    "ENABLE_GZIP",
    "ENABLE_RETRIES",
    "MAX_RETRIES",
    "RETRY_INTERVAL",
)


class ServiceProperties(BaseModel):
    """Configuration properties of one service, as read from external sources."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    url: str | None = Field(default=None, description="Service base URL")
    auth_type: str | None = Field(default=None, description="Authenticator variant")
    apikey: str | None = None
    auth_url: str | None = Field(default=None, description="Token service URL")
    username: str | None = None
    password: str | None = None
    bearer_token: str | None = None
    disable_ssl: bool = Field(default=False, description="Skip TLS verification for the service")
    auth_disable_ssl: bool = Field(default=False, description="Skip TLS verification for the token service")
    client_id: str | None = None
    client_secret: str | None = None
    scope: str | None = None
    cr_token_filename: str | None = None
    iam_profile_name: str | None = None
    iam_profile_id: str | None = None
    iam_profile_crn: str | None = None
    iam_account_id: str | None = None
    enable_gzip: bool | None = None
    enable_retries: bool | None = None
    max_retries: int | None = Field(default=None, ge=0)
    retry_interval: float | None = Field(default=None, ge=0)

    @field_validator(
        "disable_ssl", "auth_disable_ssl", "enable_gzip", "enable_retries", mode="before"
    )
    @classmethod
    def _parse_bool(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower() == "true"
        return value


def service_prefix(service_name: str) -> str:
    """Return the property prefix for a service, e.g. ``RESULTS_REPORTS_API``."""
    return service_name.upper().replace("-", "_")


def _extract(service_name: str, source: Mapping[str, str | None]) -> dict[str, str]:
    prefix = service_prefix(service_name) + "_"
    props: dict[str, str] = {}
    for name in PROPERTY_NAMES:
        value = source.get(prefix + name)
        if value is not None and value != "":
            props[name.lower()] = value.strip()
    return props


def _credentials_file_candidates() -> list[Path]:
    explicit = os.environ.get(CREDENTIALS_FILE_ENV)
    if explicit:
        return [Path(explicit)]
    return [
        Path.cwd() / DEFAULT_CREDENTIALS_FILE_NAME,
        Path.home() / DEFAULT_CREDENTIALS_FILE_NAME,
    ]


def read_credentials_file(service_name: str) -> dict[str, str]:
    """Read the service's properties from the first credentials file found."""
    for path in _credentials_file_candidates():
        if path.is_file():
            logger.debug(f"Reading credentials for {service_name} from {path}")
            return _extract(service_name, dotenv_values(path))
    return {}


def read_environment(service_name: str) -> dict[str, str]:
    """Read the service's properties from the process environment."""
    return _extract(service_name, os.environ)


def read_external_sources(service_name: str) -> ServiceProperties | None:
    """
    Look up the configuration of a service.

    Args:
        service_name: Service name, e.g. ``"admin_service_api"``

    Returns:
        The properties from the first source defining any, or None if no
        source mentions the service

    Raises:
        ValidationError: If a property has a malformed value
    """
    if not service_name:
        raise ValidationError("service_name must be specified")

    for reader in (read_credentials_file, read_environment):
        props = reader(service_name)
        if props:
            try:
                return ServiceProperties.model_validate(props)
            except PydanticValidationError as e:
                raise ValidationError(
                    f"invalid configuration for service '{service_name}': {e}"
                ) from e

    logger.debug(f"No external configuration found for service {service_name}")
    return None


__all__ = [
    "CREDENTIALS_FILE_ENV",
    "PROPERTY_NAMES",
    "ServiceProperties",
    "read_credentials_file",
    "read_environment",
    "read_external_sources",
    "service_prefix",
]
