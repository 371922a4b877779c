# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Container authenticator: exchanges a compute resource token for an IAM token."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

import httpx

from ..exceptions import ValidationError
from .base import AUTHTYPE_CONTAINER
from .iam import DEFAULT_IAM_URL, FORM_CONTENT_TYPE, iam_token_url
from .token import Token, TokenAuthenticator, token_from_iam_response

logger = logging.getLogger(__name__)

GRANT_TYPE_CR_TOKEN = "urn:ibm:params:oauth:grant-type:cr-token"

DEFAULT_CR_TOKEN_FILENAMES = (
    "/var/run/secrets/tokens/vault-token",
    "/var/run/secrets/tokens/sa-token",
    "/var/run/secrets/codeengine.cloud.ibm.com/compute-resource-token/token",
)


class ContainerAuthenticator(TokenAuthenticator):
    """
    Authenticates workloads running in IBM Cloud compute resources.

    The compute resource (CR) token is read from ``cr_token_filename`` or,
    when unset, from the first default location that exists. It is
    re-read on every token fetch since the platform rotates it.

    Args:
        iam_profile_name: Trusted profile name (this or iam_profile_id is required)
        iam_profile_id: Trusted profile id
        cr_token_filename: Path of the CR token file
    """

    def __init__(
        self,
        *,
        iam_profile_name: str | None = None,
        iam_profile_id: str | None = None,
        cr_token_filename: str | None = None,
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
        self.iam_profile_name = iam_profile_name
        self.iam_profile_id = iam_profile_id
        self.cr_token_filename = cr_token_filename
        self.client_id = client_id
        self.client_secret = client_secret
        self.scope = scope
        self.validate()

    def authentication_type(self) -> str:
        return AUTHTYPE_CONTAINER

    def validate(self) -> None:
        if not self.iam_profile_name and not self.iam_profile_id:
            raise ValidationError(
                "at least one of iam_profile_name or iam_profile_id must be specified"
            )
        if bool(self.client_id) != bool(self.client_secret):
            raise ValidationError(
                "the client_id and client_secret properties must both be set or both be unset"
            )

    def read_cr_token(self) -> str:
        """
        Read the compute resource token.

        Raises:
            ValidationError: If no readable, non-empty token file is found
        """
        candidates = (
            (self.cr_token_filename,) if self.cr_token_filename else DEFAULT_CR_TOKEN_FILENAMES
        )
        for filename in candidates:
            path = Path(filename)
            try:
                token = path.read_text(encoding="utf-8").strip()
            except OSError as e:
                logger.debug(f"Unable to read CR token file {path}: {e}")
                continue
            if token:
                return token
        raise ValidationError(
            f"unable to retrieve the compute resource token from {', '.join(candidates)}"
        )

    async def request_token(self) -> Token:
        form = {"grant_type": GRANT_TYPE_CR_TOKEN, "cr_token": self.read_cr_token()}
        if self.iam_profile_id:
            form["profile_id"] = self.iam_profile_id
        if self.iam_profile_name:
            form["profile_name"] = self.iam_profile_name
        if self.scope:
            form["scope"] = self.scope
        auth = (
            (self.client_id, self.client_secret)
            if self.client_id and self.client_secret
            else None
        )
        payload = await self._post(
            iam_token_url(self.url),
            data=form,
            headers={"Content-Type": FORM_CONTENT_TYPE},
            auth=auth,
        )
        return token_from_iam_response(payload)


__all__ = [
    "DEFAULT_CR_TOKEN_FILENAMES",
    "GRANT_TYPE_CR_TOKEN",
    "ContainerAuthenticator",
]
