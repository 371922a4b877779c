# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Authenticator selection from external configuration.

``<PREFIX>_AUTH_TYPE`` (case-insensitive) picks the variant. When it is
unset, ``iam`` is assumed if an API key is configured and ``container``
otherwise.
"""

from __future__ import annotations

import logging

from ..config import ServiceProperties, read_external_sources
from ..exceptions import ValidationError
from .base import (
    AUTHTYPE_BASIC,
    AUTHTYPE_BEARERTOKEN,
    AUTHTYPE_CONTAINER,
    AUTHTYPE_CP4D,
    AUTHTYPE_IAM,
    AUTHTYPE_IAM_ASSUME,
    AUTHTYPE_NOAUTH,
    Authenticator,
    BasicAuthenticator,
    BearerTokenAuthenticator,
    NoAuthAuthenticator,
)
from .container import ContainerAuthenticator
from .cp4d import CloudPakForDataAuthenticator
from .iam import IamAssumeAuthenticator, IamAuthenticator

logger = logging.getLogger(__name__)

SUPPORTED_AUTH_TYPES = (
    AUTHTYPE_NOAUTH,
    AUTHTYPE_IAM,
    AUTHTYPE_BASIC,
    AUTHTYPE_BEARERTOKEN,
    AUTHTYPE_CONTAINER,
    AUTHTYPE_CP4D,
    AUTHTYPE_IAM_ASSUME,
)


def resolve_auth_type(props: ServiceProperties) -> str:
    """Return the normalized auth type for a set of properties."""
    if props.auth_type:
        return props.auth_type.strip().lower()
    return AUTHTYPE_IAM if props.apikey else AUTHTYPE_CONTAINER


def authenticator_from_properties(props: ServiceProperties) -> Authenticator:
    """
    Build the authenticator described by ``props``.

    Raises:
        ValidationError: If the auth type is unknown or a required property is missing
    """
    auth_type = resolve_auth_type(props)
    verify_off = props.auth_disable_ssl

    if auth_type == AUTHTYPE_NOAUTH:
        return NoAuthAuthenticator()
    if auth_type == AUTHTYPE_BASIC:
        return BasicAuthenticator(props.username or "", props.password or "")
    if auth_type == AUTHTYPE_BEARERTOKEN:
        return BearerTokenAuthenticator(props.bearer_token or "")
    if auth_type == AUTHTYPE_IAM:
        return IamAuthenticator(
            props.apikey or "",
            url=props.auth_url,
            client_id=props.client_id,
            client_secret=props.client_secret,
            scope=props.scope,
            disable_ssl_verification=verify_off,
        )
    if auth_type == AUTHTYPE_CONTAINER:
        return ContainerAuthenticator(
            iam_profile_name=props.iam_profile_name,
            iam_profile_id=props.iam_profile_id,
            cr_token_filename=props.cr_token_filename,
            url=props.auth_url,
            client_id=props.client_id,
            client_secret=props.client_secret,
            scope=props.scope,
            disable_ssl_verification=verify_off,
        )
    if auth_type == AUTHTYPE_CP4D:
        return CloudPakForDataAuthenticator(
            props.username or "",
            url=props.auth_url or "",
            password=props.password,
            apikey=props.apikey,
            disable_ssl_verification=verify_off,
        )
    if auth_type == AUTHTYPE_IAM_ASSUME:
        return IamAssumeAuthenticator(
            props.apikey or "",
            iam_profile_crn=props.iam_profile_crn,
            iam_profile_id=props.iam_profile_id,
            iam_profile_name=props.iam_profile_name,
            iam_account_id=props.iam_account_id,
            url=props.auth_url,
            client_id=props.client_id,
            client_secret=props.client_secret,
            scope=props.scope,
            disable_ssl_verification=verify_off,
        )

    raise ValidationError(
        f"unrecognized authentication type: {props.auth_type!r}; "
        f"expected one of {', '.join(SUPPORTED_AUTH_TYPES)}"
    )


def get_authenticator_from_environment(service_name: str) -> Authenticator:
    """
    Build an authenticator from the credentials file or environment.

    Args:
        service_name: Service name used as the property prefix

    Raises:
        ValidationError: If no configuration is found or it is invalid
    """
    props = read_external_sources(service_name)
    if props is None:
        raise ValidationError(
            f"unable to create an authenticator: no configuration properties "
            f"found for service '{service_name}'"
        )
    authenticator = authenticator_from_properties(props)
    logger.debug(
        f"Created {authenticator.authentication_type()} authenticator for {service_name}"
    )
    return authenticator


__all__ = [
    "SUPPORTED_AUTH_TYPES",
    "authenticator_from_properties",
    "get_authenticator_from_environment",
    "resolve_auth_type",
]
