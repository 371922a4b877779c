"""
Unit tests for the static-credential authenticators.
"""

from __future__ import annotations

import httpx
import pytest

from scc_sdk.auth import (
    AUTHTYPE_BASIC,
    AUTHTYPE_BEARERTOKEN,
    AUTHTYPE_NOAUTH,
    BasicAuthenticator,
    BearerTokenAuthenticator,
    NoAuthAuthenticator,
)
from scc_sdk.auth.base import require_credential
from scc_sdk.exceptions import ValidationError


def _request():
    return httpx.Request("GET", "https://scc.example.com/settings")


class TestRequireCredential:
    """Tests for require_credential()."""

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing(self, value):
        """Missing values are rejected by name."""
        with pytest.raises(
            ValidationError, match="the apikey property is required but was not specified"
        ):
            require_credential(value, "apikey")

    @pytest.mark.parametrize("value", ["{key}", '"key"', "{key", 'key"'])
    def test_wrapped_values(self, value):
        """Values wrapped in braces or quotes are rejected."""
        with pytest.raises(ValidationError, match="the apikey property is invalid"):
            require_credential(value, "apikey")

    def test_valid(self):
        """A plain value is returned."""
        assert require_credential("abc", "apikey") == "abc"


class TestNoAuthAuthenticator:
    """Tests for NoAuthAuthenticator."""

    async def test_adds_nothing(self):
        """No Authorization header is added."""
        request = _request()
        authenticator = NoAuthAuthenticator()
        await authenticator.authenticate(request)
        assert "Authorization" not in request.headers
        assert authenticator.authentication_type() == AUTHTYPE_NOAUTH


class TestBasicAuthenticator:
    """Tests for BasicAuthenticator."""

    async def test_header(self):
        """Username and password are sent as HTTP Basic credentials."""
        request = _request()
        authenticator = BasicAuthenticator("user", "pass")
        await authenticator.authenticate(request)
        assert request.headers["Authorization"] == "Basic dXNlcjpwYXNz"
        assert authenticator.authentication_type() == AUTHTYPE_BASIC

    @pytest.mark.parametrize("username,password", [("", "pass"), ("user", ""), ("{user}", "p")])
    def test_invalid(self, username, password):
        """Missing or wrapped credentials fail at construction."""
        with pytest.raises(ValidationError):
            BasicAuthenticator(username, password)


class TestBearerTokenAuthenticator:
    """Tests for BearerTokenAuthenticator."""

    async def test_header(self):
        """The token is sent as a bearer token."""
        request = _request()
        authenticator = BearerTokenAuthenticator("tok")
        await authenticator.authenticate(request)
        assert request.headers["Authorization"] == "Bearer tok"
        assert authenticator.authentication_type() == AUTHTYPE_BEARERTOKEN

    async def test_set_bearer_token(self):
        """A replaced token is used for later requests."""
        authenticator = BearerTokenAuthenticator("old")
        authenticator.set_bearer_token("new")
        request = _request()
        await authenticator.authenticate(request)
        assert request.headers["Authorization"] == "Bearer new"

    def test_empty_token(self):
        """An empty token is rejected."""
        with pytest.raises(ValidationError):
            BearerTokenAuthenticator("")
