"""
Route guard: gate access on the identity provider's sign-in state.

The guard is the only writer of the token bridge. It watches for sign-in and
sign-out transitions and pushes (or clears) the credentials the API client
attaches to requests.
"""

from typing import Optional

import structlog

from storedash.api.client import ApiClient
from storedash.auth.identity import IdentityProvider
from storedash.core.config import TokenStrategy
from storedash.core.exceptions import NotSignedInError
from storedash.core.models import GuardState

logger = structlog.get_logger(__name__)


class RouteGuard:
    """
    Bridge an identity provider into an ``ApiClient``.

    With ``TokenStrategy.GETTER`` the provider's ``get_token`` is injected and
    awaited before every request. With ``TokenStrategy.STATIC`` one token is
    fetched at sign-in and installed as the default header.
    """

    def __init__(
        self,
        provider: IdentityProvider,
        client: ApiClient,
        strategy: TokenStrategy = TokenStrategy.GETTER,
    ):
        self.provider = provider
        self.client = client
        self.strategy = TokenStrategy(strategy)
        self._signed_in: Optional[bool] = None

    async def check(self) -> GuardState:
        """Observe the provider and return what the caller may do."""
        if not self.provider.is_loaded:
            return GuardState.LOADING

        signed_in = self.provider.is_signed_in
        if signed_in != self._signed_in:
            if signed_in:
                await self._on_sign_in()
            elif self._signed_in:
                self._on_sign_out()
            self._signed_in = signed_in

        return GuardState.ALLOWED if signed_in else GuardState.NOT_AVAILABLE

    async def require(self) -> None:
        """Like ``check`` but raise unless access is allowed."""
        state = await self.check()
        if state != GuardState.ALLOWED:
            raise NotSignedInError(
                "Not available: sign in to continue", details={"state": state.value}
            )

    async def sign_out(self) -> None:
        """Sign out of the provider and drop all credentials from the client."""
        await self.provider.sign_out()
        self._on_sign_out()
        self._signed_in = False

    async def _on_sign_in(self) -> None:
        if self.strategy == TokenStrategy.GETTER:
            self.client.inject_token_getter(self.provider.get_token)
        else:
            self.client.set_token(await self.provider.get_token())
        logger.info("Signed in", strategy=self.strategy.value)

    def _on_sign_out(self) -> None:
        self.client.set_token(None)
        self.client.inject_token_getter(None)
        logger.info("Signed out")
