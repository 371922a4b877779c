# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Cloud Pak for Data authenticator."""

from __future__ import annotations

from collections.abc import Mapping

import httpx

from ..exceptions import DecodeError, ValidationError
from .base import AUTHTYPE_CP4D, require_credential
from .token import Token, TokenAuthenticator

AUTHORIZE_PATH = "/v1/authorize"


class CloudPakForDataAuthenticator(TokenAuthenticator):
    """
    Obtains a bearer token from a Cloud Pak for Data cluster.

    Exactly one of ``password`` or ``apikey`` must accompany ``username``.
    Token expiry is taken from the JWT ``exp`` claim.
    """

    def __init__(
        self,
        username: str,
        *,
        url: str,
        password: str | None = None,
        apikey: str | None = None,
        disable_ssl_verification: bool = False,
        headers: Mapping[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if not url:
            raise ValidationError("the url property is required but was not specified")
        super().__init__(
            url,
            disable_ssl_verification=disable_ssl_verification,
            headers=headers,
            client=client,
        )
        self.username = username
        self.password = password
        self.apikey = apikey
        self.validate()

    def authentication_type(self) -> str:
        return AUTHTYPE_CP4D

    def validate(self) -> None:
        require_credential(self.username, "username")
        if bool(self.password) == bool(self.apikey):
            raise ValidationError("exactly one of password or apikey must be specified")
        if self.password:
            require_credential(self.password, "password")
        if self.apikey:
            require_credential(self.apikey, "apikey")

    def _authorize_url(self) -> str:
        if self.url.endswith(AUTHORIZE_PATH):
            return self.url
        return self.url + AUTHORIZE_PATH

    async def request_token(self) -> Token:
        body = {"username": self.username}
        if self.password:
            body["password"] = self.password
        else:
            body["api_key"] = self.apikey or ""
        payload = await self._post(self._authorize_url(), json=body)
        token = payload.get("token")
        if not isinstance(token, str) or not token:
            raise DecodeError("authorize response has no token")
        return Token.from_jwt(token)


__all__ = ["CloudPakForDataAuthenticator"]
