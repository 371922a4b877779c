# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Authenticators for SCC service handles.

Static credentials (none, basic, bearer token) and token-service variants
(IAM API key, container, Cloud Pak for Data, IAM trusted-profile assume),
plus selection from external configuration.
"""

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
from .factory import (
    SUPPORTED_AUTH_TYPES,
    authenticator_from_properties,
    get_authenticator_from_environment,
)
from .iam import IamAssumeAuthenticator, IamAuthenticator
from .token import Token, TokenAuthenticator

__all__ = [
    "AUTHTYPE_BASIC",
    "AUTHTYPE_BEARERTOKEN",
    "AUTHTYPE_CONTAINER",
    "AUTHTYPE_CP4D",
    "AUTHTYPE_IAM",
    "AUTHTYPE_IAM_ASSUME",
    "AUTHTYPE_NOAUTH",
    "SUPPORTED_AUTH_TYPES",
    "Authenticator",
    "BasicAuthenticator",
    "BearerTokenAuthenticator",
    "CloudPakForDataAuthenticator",
    "ContainerAuthenticator",
    "IamAssumeAuthenticator",
    "IamAuthenticator",
    "NoAuthAuthenticator",
    "Token",
    "TokenAuthenticator",
    "authenticator_from_properties",
    "get_authenticator_from_environment",
]
