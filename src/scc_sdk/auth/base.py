# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Authenticator interface and the static-credential variants.

An authenticator is handed each outgoing ``httpx.Request`` before it is sent
and adds whatever credentials the service expects, usually an
``Authorization`` header. Token-based variants may suspend to fetch or
refresh a token.
"""

from __future__ import annotations

import base64
from abc import ABC, abstractmethod

import httpx

from ..exceptions import ValidationError

AUTHTYPE_NOAUTH = "noauth"
AUTHTYPE_BASIC = "basic"
AUTHTYPE_BEARERTOKEN = "bearertoken"
AUTHTYPE_IAM = "iam"
AUTHTYPE_CONTAINER = "container"
AUTHTYPE_CP4D = "cp4d"
AUTHTYPE_IAM_ASSUME = "iamassume"

AUTHORIZATION = "Authorization"


def has_bad_first_or_last_char(value: str) -> bool:
    """Detect values pasted with surrounding braces or quotes."""
    return value.startswith(("{", '"')) or value.endswith(("}", '"'))


def require_credential(value: str | None, name: str) -> str:
    """
    Check a credential property.

    Raises:
        ValidationError: If the value is missing, empty, or wrapped in braces/quotes
    """
    if not value:
        raise ValidationError(f"the {name} property is required but was not specified")
    if has_bad_first_or_last_char(value):
        raise ValidationError(
            f"the {name} property is invalid; remove any surrounding "
            f"{{, }}, or \" characters"
        )
    return value


class Authenticator(ABC):
    """
    Base class for request authenticators.

    Subclasses validate their configuration in ``__init__`` (through
    ``validate()``) so that a misconfigured authenticator is rejected before
    any request is sent.
    """

    @abstractmethod
    def authentication_type(self) -> str:
        """Return the auth type name, e.g. ``"iam"``."""

    def validate(self) -> None:
        """Raise ValidationError if the configuration is unusable."""
        return None

    @abstractmethod
    async def authenticate(self, request: httpx.Request) -> None:
        """Add credentials to ``request`` in place."""

    async def aclose(self) -> None:
        """Release resources held by the authenticator."""
        return None


class NoAuthAuthenticator(Authenticator):
    """Sends requests without credentials."""

    def authentication_type(self) -> str:
        return AUTHTYPE_NOAUTH

    async def authenticate(self, request: httpx.Request) -> None:
        return None


class BasicAuthenticator(Authenticator):
    """Adds an HTTP Basic ``Authorization`` header."""

    def __init__(self, username: str, password: str) -> None:
        self.username = username
        self.password = password
        self.validate()

    def authentication_type(self) -> str:
        return AUTHTYPE_BASIC

    def validate(self) -> None:
        require_credential(self.username, "username")
        require_credential(self.password, "password")

    async def authenticate(self, request: httpx.Request) -> None:
        raw = f"{self.username}:{self.password}".encode()
        request.headers[AUTHORIZATION] = "Basic " + base64.b64encode(raw).decode("ascii")


class BearerTokenAuthenticator(Authenticator):
    """Adds a caller-managed bearer token."""

    def __init__(self, bearer_token: str) -> None:
        self.bearer_token = bearer_token
        self.validate()

    def authentication_type(self) -> str:
        return AUTHTYPE_BEARERTOKEN

    def validate(self) -> None:
        if not self.bearer_token:
            raise ValidationError(
                "the bearer_token property is required but was not specified"
            )

    def set_bearer_token(self, bearer_token: str) -> None:
        self.bearer_token = bearer_token
        self.validate()

    async def authenticate(self, request: httpx.Request) -> None:
        request.headers[AUTHORIZATION] = f"Bearer {self.bearer_token}"


__all__ = [
    "AUTHORIZATION",
    "AUTHTYPE_BASIC",
    "AUTHTYPE_BEARERTOKEN",
    "AUTHTYPE_CONTAINER",
    "AUTHTYPE_CP4D",
    "AUTHTYPE_IAM",
    "AUTHTYPE_IAM_ASSUME",
    "AUTHTYPE_NOAUTH",
    "Authenticator",
    "BasicAuthenticator",
    "BearerTokenAuthenticator",
    "NoAuthAuthenticator",
    "has_bad_first_or_last_char",
    "require_credential",
]
