"""
Test suite for identity providers and the route guard.

Validates sign-in state handling and how credentials reach the API client.
"""

from typing import Optional

import pytest

from storedash.auth.guard import RouteGuard
from storedash.auth.identity import (
    IdentityProvider,
    StaticIdentityProvider,
    TokenFileIdentityProvider,
    provider_from_config,
)
from storedash.core.config import AuthConfig, TokenStrategy
from storedash.core.exceptions import AuthenticationError, ConfigurationError, NotSignedInError
from storedash.core.models import GuardState


class FakeProvider:
    """Identity provider whose session state tests flip by hand."""

    def __init__(self, token: Optional[str] = "tok-1", loaded: bool = True):
        self.token = token
        self.loaded = loaded
        self.token_calls = 0
        self.signed_out = False

    @property
    def is_loaded(self) -> bool:
        return self.loaded

    @property
    def is_signed_in(self) -> bool:
        return self.token is not None

    async def get_token(self) -> Optional[str]:
        self.token_calls += 1
        return self.token

    async def sign_out(self) -> None:
        self.signed_out = True
        self.token = None


class TestIdentityProviders:
    """Test the bundled identity providers."""

    @pytest.mark.asyncio
    async def test_static_provider(self):
        provider = StaticIdentityProvider("abc")

        assert isinstance(provider, IdentityProvider)
        assert provider.is_loaded and provider.is_signed_in
        assert await provider.get_token() == "abc"

        await provider.sign_out()
        assert not provider.is_signed_in
        assert await provider.get_token() is None

    def test_static_provider_without_token_is_signed_out(self):
        assert not StaticIdentityProvider("").is_signed_in

    @pytest.mark.asyncio
    async def test_token_file_provider_rereads_file(self, tmp_path):
        """Test that a rotated token file is picked up on the next call."""
        token_file = tmp_path / "token"
        token_file.write_text("first\n", encoding="utf-8")
        provider = TokenFileIdentityProvider(token_file)

        assert provider.is_signed_in
        assert await provider.get_token() == "first"

        token_file.write_text("second", encoding="utf-8")
        assert await provider.get_token() == "second"

    def test_token_file_provider_missing_or_empty_file(self, tmp_path):
        token_file = tmp_path / "token"
        provider = TokenFileIdentityProvider(token_file)
        assert not provider.is_signed_in

        token_file.write_text("  \n", encoding="utf-8")
        assert not provider.is_signed_in

    @pytest.mark.asyncio
    async def test_token_file_sign_out_keeps_file(self, tmp_path):
        token_file = tmp_path / "token"
        token_file.write_text("abc", encoding="utf-8")
        provider = TokenFileIdentityProvider(str(token_file))

        await provider.sign_out()

        assert not provider.is_signed_in
        assert await provider.get_token() is None
        assert token_file.read_text(encoding="utf-8") == "abc"

    @pytest.mark.asyncio
    async def test_token_file_removed_before_read(self, tmp_path):
        """Test that a token file deleted after the sign-in check fails as an auth error."""
        token_file = tmp_path / "token"
        token_file.write_text("abc", encoding="utf-8")
        provider = TokenFileIdentityProvider(token_file)
        assert provider.is_signed_in

        token_file.unlink()

        with pytest.raises(AuthenticationError) as exc_info:
            await provider.get_token()
        assert exc_info.value.details["path"] == str(token_file)
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_provider_from_config_prefers_token_file(self, tmp_path):
        config = AuthConfig(token="abc", token_file=str(tmp_path / "token"))
        assert isinstance(provider_from_config(config), TokenFileIdentityProvider)

    def test_provider_from_config_static(self):
        assert isinstance(provider_from_config(AuthConfig(token="abc")), StaticIdentityProvider)

    def test_provider_from_config_without_credentials(self):
        with pytest.raises(ConfigurationError) as exc_info:
            provider_from_config(AuthConfig())

        assert exc_info.value.details["missing"] == ["API_TOKEN", "API_TOKEN_FILE"]


class TestRouteGuard:
    """Test guard states and credential hand-off."""

    @pytest.mark.asyncio
    async def test_loading_provider(self, api_client):
        guard = RouteGuard(FakeProvider(loaded=False), api_client)
        assert await guard.check() == GuardState.LOADING

    @pytest.mark.asyncio
    async def test_signed_out_provider_is_not_available(self, api_client):
        guard = RouteGuard(FakeProvider(token=None), api_client)

        assert await guard.check() == GuardState.NOT_AVAILABLE
        with pytest.raises(NotSignedInError):
            await guard.require()

    @pytest.mark.asyncio
    async def test_getter_strategy_resolves_token_per_request(self, api_client, backend):
        """Test that the default strategy asks the provider before every request."""
        backend.envelope("GET", "/orders", [])
        provider = FakeProvider("tok-1")
        guard = RouteGuard(provider, api_client)

        assert await guard.check() == GuardState.ALLOWED
        await api_client.get("/orders")
        provider.token = "tok-2"
        await api_client.get("/orders")

        assert [r.headers["Authorization"] for r in backend.requests] == [
            "Bearer tok-1",
            "Bearer tok-2",
        ]
        assert "Authorization" not in api_client._client.headers

    @pytest.mark.asyncio
    async def test_static_strategy_sets_default_header_once(self, api_client, backend):
        backend.envelope("GET", "/orders", [])
        provider = FakeProvider("tok-1")
        guard = RouteGuard(provider, api_client, TokenStrategy.STATIC)

        await guard.require()
        await guard.check()
        await api_client.get("/orders")

        assert provider.token_calls == 1
        assert api_client._client.headers["Authorization"] == "Bearer tok-1"
        assert backend.last.headers["Authorization"] == "Bearer tok-1"

    @pytest.mark.asyncio
    async def test_static_strategy_with_unreadable_token_file(
        self, api_client, backend, tmp_path, monkeypatch
    ):
        monkeypatch.setattr(TokenFileIdentityProvider, "is_signed_in", property(lambda self: True))
        provider = TokenFileIdentityProvider(tmp_path / "gone")
        guard = RouteGuard(provider, api_client, TokenStrategy.STATIC)

        with pytest.raises(AuthenticationError, match="Cannot read token file"):
            await guard.require()

        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_sign_out_transition_clears_credentials(self, api_client, backend):
        """Test that the guard clears token and getter when the session ends."""
        backend.envelope("GET", "/orders", [])
        provider = FakeProvider("tok-1")
        guard = RouteGuard(provider, api_client, "static")
        await guard.check()
        api_client.inject_token_getter(lambda: "stray")

        provider.token = None
        assert await guard.check() == GuardState.NOT_AVAILABLE
        await api_client.get("/orders")

        assert "Authorization" not in backend.last.headers

    @pytest.mark.asyncio
    async def test_guard_sign_out(self, api_client, backend):
        backend.envelope("GET", "/orders", [])
        provider = FakeProvider("tok-1")
        guard = RouteGuard(provider, api_client)
        await guard.require()

        await guard.sign_out()
        await api_client.get("/orders")

        assert provider.signed_out
        assert "Authorization" not in backend.last.headers
        assert await guard.check() == GuardState.NOT_AVAILABLE

    @pytest.mark.asyncio
    async def test_sign_in_after_sign_out(self, api_client, backend):
        backend.envelope("GET", "/orders", [])
        provider = FakeProvider(token=None)
        guard = RouteGuard(provider, api_client)
        assert await guard.check() == GuardState.NOT_AVAILABLE

        provider.token = "tok-late"
        assert await guard.check() == GuardState.ALLOWED
        await api_client.get("/orders")

        assert backend.last.headers["Authorization"] == "Bearer tok-late"
