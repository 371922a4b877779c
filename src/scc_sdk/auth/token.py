# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Token-based authenticators.

TokenAuthenticator fetches a bearer token from a token service, caches it
and fetches a new one once 80% of its lifetime has passed. Refreshes are
serialized with an asyncio.Lock so that concurrent requests trigger a
single token fetch.
"""

from __future__ import annotations

import asyncio
import logging
import time
from abc import abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx
import jwt

from ..exceptions import DecodeError, HttpStatusError, TransportError
from .base import AUTHORIZATION, Authenticator

logger = logging.getLogger(__name__)

REFRESH_WINDOW_FRACTION = 0.2
"""Fraction of the token lifetime, before expiry, at which a new token is fetched."""

DEFAULT_TOKEN_TIMEOUT = 30.0


@dataclass(frozen=True)
class Token:
    """A cached access token and its timing, in epoch seconds."""

    access_token: str
    expires_at: float
    refresh_at: float

    @classmethod
    def from_lifetime(cls, access_token: str, expiration: float, expires_in: float) -> Token:
        return cls(
            access_token=access_token,
            expires_at=expiration,
            refresh_at=expiration - expires_in * REFRESH_WINDOW_FRACTION,
        )

    @classmethod
    def from_jwt(cls, access_token: str) -> Token:
        """
        Derive the token timing from the JWT ``iat`` and ``exp`` claims.

        The signature is not verified; the token is only inspected for timing.

        Raises:
            DecodeError: If the token is not a JWT with an ``exp`` claim
        """
        try:
            claims = jwt.decode(access_token, options={"verify_signature": False})
        except jwt.PyJWTError as e:
            raise DecodeError(f"unable to parse access token: {e}") from e
        if "exp" not in claims:
            raise DecodeError("access token has no 'exp' claim")
        expiration = float(claims["exp"])
        issued_at = float(claims.get("iat", time.time()))
        return cls.from_lifetime(access_token, expiration, expiration - issued_at)

    def needs_refresh(self, now: float | None = None) -> bool:
        now = time.time() if now is None else now
        return now >= self.refresh_at

    def is_expired(self, now: float | None = None) -> bool:
        now = time.time() if now is None else now
        return now >= self.expires_at


class TokenAuthenticator(Authenticator):
    """
    Base class for authenticators that exchange credentials for a token.

    Args:
        url: Token service base URL
        disable_ssl_verification: Skip TLS verification for token requests
        headers: Extra headers sent with token requests
        client: Optional httpx.AsyncClient for token requests; one is created
            (and owned) on first use when omitted
    """

    def __init__(
        self,
        url: str,
        *,
        disable_ssl_verification: bool = False,
        headers: Mapping[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url.rstrip("/")
        self.disable_ssl_verification = disable_ssl_verification
        self.headers = dict(headers or {})
        self._client = client
        self._owns_client = client is None
        self._token: Token | None = None
        self._lock = asyncio.Lock()

    @abstractmethod
    async def request_token(self) -> Token:
        """Fetch a new token from the token service."""

    async def get_token(self) -> str:
        """Return a valid access token, fetching a new one if needed."""
        token = self._token
        if token is None or token.needs_refresh():
            async with self._lock:
                token = self._token
                if token is None or token.needs_refresh():
                    logger.debug(f"Fetching new {self.authentication_type()} token")
                    token = await self.request_token()
                    self._token = token
        return token.access_token

    def invalidate(self) -> None:
        """Drop the cached token so the next request fetches a new one."""
        self._token = None

    async def authenticate(self, request: httpx.Request) -> None:
        request.headers[AUTHORIZATION] = f"Bearer {await self.get_token()}"

    # === Token service I/O ===

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                verify=not self.disable_ssl_verification,
                timeout=DEFAULT_TOKEN_TIMEOUT,
            )
            self._owns_client = True
        return self._client

    async def _post(
        self,
        url: str,
        *,
        data: Mapping[str, str] | None = None,
        json: Any = None,
        headers: Mapping[str, str] | None = None,
        auth: tuple[str, str] | None = None,
    ) -> dict[str, Any]:
        """
        POST to the token service and return the decoded JSON object.

        Raises:
            TransportError: If the token service cannot be reached
            HttpStatusError: If the token service rejects the request
            DecodeError: If the response is not a JSON object
        """
        request_headers = {"Accept": "application/json", **self.headers, **(headers or {})}
        try:
            response = await self._get_client().post(
                url, data=data, json=json, headers=request_headers, auth=auth
            )
        except httpx.HTTPError as e:
            raise TransportError(f"token request to {url} failed: {e}") from e

        if response.status_code >= 400:
            try:
                body: Any = response.json()
            except ValueError:
                body = response.text
            raise HttpStatusError(
                response.status_code,
                f"token request failed with status {response.status_code}",
                body=body,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise DecodeError(f"token response is not valid JSON: {e}") from e
        if not isinstance(payload, dict):
            raise DecodeError("token response is not a JSON object")
        return payload

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None


def token_from_iam_response(payload: Mapping[str, Any]) -> Token:
    """
    Build a Token from an IAM token-service response.

    Raises:
        DecodeError: If ``access_token`` is missing
    """
    access_token = payload.get("access_token")
    if not isinstance(access_token, str) or not access_token:
        raise DecodeError("token response has no access_token")
    expiration = payload.get("expiration")
    expires_in = payload.get("expires_in")
    if isinstance(expiration, (int, float)) and isinstance(expires_in, (int, float)):
        return Token.from_lifetime(access_token, float(expiration), float(expires_in))
    return Token.from_jwt(access_token)


__all__ = [
    "REFRESH_WINDOW_FRACTION",
    "Token",
    "TokenAuthenticator",
    "token_from_iam_response",
]
