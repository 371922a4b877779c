# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""IAM authenticators: API key exchange and trusted-profile assumption."""

from __future__ import annotations

from collections.abc import Mapping

import httpx

from ..exceptions import ValidationError
from .base import AUTHTYPE_IAM, AUTHTYPE_IAM_ASSUME, require_credential
from .token import Token, TokenAuthenticator, token_from_iam_response

DEFAULT_IAM_URL = "https://iam.cloud.ibm.com"
IAM_TOKEN_PATH = "/identity/token"

GRANT_TYPE_APIKEY = "urn:ibm:params:oauth:grant-type:apikey"
GRANT_TYPE_ASSUME = "urn:ibm:params:oauth:grant-type:assume"

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def iam_token_url(url: str | None) -> str:
    """Return the token endpoint for an IAM base URL (a full endpoint is kept as is)."""
    base = (url or DEFAULT_IAM_URL).rstrip("/")
    if base.endswith(IAM_TOKEN_PATH):
        return base
    return base + IAM_TOKEN_PATH


class IamAuthenticator(TokenAuthenticator):
    """
    Exchanges an IBM Cloud API key for an IAM access token.

    Args:
        apikey: The API key
        url: IAM base URL, defaults to https://iam.cloud.ibm.com
        client_id: Optional client id, sent with client_secret as Basic auth
        client_secret: Optional client secret
        scope: Optional space-separated scopes
    """

    def __init__(
        self,
        apikey: str,
        *,
        url: str | None = None,
        client_id: str | None = None,
        client_secret: str | None = None,
        scope: str | None = None,
        disable_ssl_verification: bool = False,
        headers: Mapping[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(
            url or DEFAULT_IAM_URL,
            disable_ssl_verification=disable_ssl_verification,
            headers=headers,
            client=client,
        )
        self.apikey = apikey
        self.client_id = client_id
        self.client_secret = client_secret
        self.scope = scope
        self.validate()

    def authentication_type(self) -> str:
        return AUTHTYPE_IAM

    def validate(self) -> None:
        require_credential(self.apikey, "apikey")
        if bool(self.client_id) != bool(self.client_secret):
            raise ValidationError(
                "the client_id and client_secret properties must both be set or both be unset"
            )

    def _client_auth(self) -> tuple[str, str] | None:
        if self.client_id and self.client_secret:
            return (self.client_id, self.client_secret)
        return None

    async def request_token(self) -> Token:
        form = {
            "grant_type": GRANT_TYPE_APIKEY,
            "apikey": self.apikey,
            "response_type": "cloud_iam",
        }
        if self.scope:
            form["scope"] = self.scope
        payload = await self._post(
            iam_token_url(self.url),
            data=form,
            headers={"Content-Type": FORM_CONTENT_TYPE},
            auth=self._client_auth(),
        )
        return token_from_iam_response(payload)


class IamAssumeAuthenticator(TokenAuthenticator):
    """
    Obtains a token for a trusted profile.

    An IAM token is first obtained for ``apikey``, then exchanged for a
    token of the trusted profile identified by exactly one of
    ``iam_profile_crn``, ``iam_profile_id``, or ``iam_profile_name`` (the
    latter together with ``iam_account_id``).
    """

    def __init__(
        self,
        apikey: str,
        *,
        iam_profile_crn: str | None = None,
        iam_profile_id: str | None = None,
        iam_profile_name: str | None = None,
        iam_account_id: str | None = None,
        url: str | None = None,
        client_id: str | None = None,
        client_secret: str | None = None,
        scope: str | None = None,
        disable_ssl_verification: bool = False,
        headers: Mapping[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(
            url or DEFAULT_IAM_URL,
            disable_ssl_verification=disable_ssl_verification,
            headers=headers,
            client=client,
        )
        self.iam_profile_crn = iam_profile_crn
        self.iam_profile_id = iam_profile_id
        self.iam_profile_name = iam_profile_name
        self.iam_account_id = iam_account_id
        self.validate()
        self._user_authenticator = IamAuthenticator(
            apikey,
            url=url,
            client_id=client_id,
            client_secret=client_secret,
            scope=scope,
            disable_ssl_verification=disable_ssl_verification,
            headers=headers,
            client=client,
        )

    def authentication_type(self) -> str:
        return AUTHTYPE_IAM_ASSUME

    def validate(self) -> None:
        given = [
            v for v in (self.iam_profile_crn, self.iam_profile_id, self.iam_profile_name) if v
        ]
        if len(given) != 1:
            raise ValidationError(
                "exactly one of iam_profile_crn, iam_profile_id, or iam_profile_name "
                "must be specified"
            )
        if self.iam_profile_name and not self.iam_account_id:
            raise ValidationError(
                "iam_account_id must be specified when iam_profile_name is used"
            )

    async def request_token(self) -> Token:
        user_token = await self._user_authenticator.get_token()
        form = {"grant_type": GRANT_TYPE_ASSUME, "access_token": user_token}
        if self.iam_profile_crn:
            form["profile_crn"] = self.iam_profile_crn
        elif self.iam_profile_id:
            form["profile_id"] = self.iam_profile_id
        else:
            form["profile_name"] = self.iam_profile_name or ""
            form["account"] = self.iam_account_id or ""
        payload = await self._post(
            iam_token_url(self.url),
            data=form,
            headers={"Content-Type": FORM_CONTENT_TYPE},
        )
        return token_from_iam_response(payload)

    async def aclose(self) -> None:
        await self._user_authenticator.aclose()
        await super().aclose()


__all__ = [
    "DEFAULT_IAM_URL",
    "GRANT_TYPE_APIKEY",
    "GRANT_TYPE_ASSUME",
    "IamAssumeAuthenticator",
    "IamAuthenticator",
    "iam_token_url",
]
