"""
Identity providers.

The identity provider owns the user's session. storedash only consumes three
capabilities from it: whether the session is loaded and signed in, an async
token getter, and a sign-out action.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

import structlog

from storedash.core.config import AuthConfig
from storedash.core.exceptions import AuthenticationError, ConfigurationError

logger = structlog.get_logger(__name__)


@runtime_checkable
class IdentityProvider(Protocol):
    """Minimal contract the route guard needs from an identity provider."""

    @property
    def is_loaded(self) -> bool: ...

    @property
    def is_signed_in(self) -> bool: ...

    async def get_token(self) -> Optional[str]: ...

    async def sign_out(self) -> None: ...


class StaticIdentityProvider:
    """A fixed bearer token, typically from ``API_TOKEN``."""

    def __init__(self, token: Optional[str]):
        self._token = token or None

    @property
    def is_loaded(self) -> bool:
        return True

    @property
    def is_signed_in(self) -> bool:
        return self._token is not None

    async def get_token(self) -> Optional[str]:
        return self._token

    async def sign_out(self) -> None:
        self._token = None


class TokenFileIdentityProvider:
    """
    A token read from a file on every call.

    Lets an external process refresh the credential while a long-running
    command keeps using the same provider. The session counts as signed in
    while the file exists and is non-empty.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()
        self._signed_out = False

    @property
    def is_loaded(self) -> bool:
        return True

    @property
    def is_signed_in(self) -> bool:
        if self._signed_out:
            return False
        try:
            return bool(self.path.read_text(encoding="utf-8").strip())
        except OSError:
            return False

    async def get_token(self) -> Optional[str]:
        if self._signed_out:
            return None
        try:
            text = await asyncio.to_thread(self.path.read_text, encoding="utf-8")
        except OSError as e:
            raise AuthenticationError(
                f"Cannot read token file {self.path}: {e.strerror or e}",
                details={"path": str(self.path)},
            ) from e
        return text.strip() or None

    async def sign_out(self) -> None:
        # The file belongs to whoever refreshes it; only this session ends.
        self._signed_out = True
        logger.info("Signed out of token file session", path=str(self.path))


def provider_from_config(config: AuthConfig) -> IdentityProvider:
    """Build the identity provider selected by configuration."""
    if config.token_file:
        return TokenFileIdentityProvider(config.token_file)
    if config.token:
        return StaticIdentityProvider(config.token)
    raise ConfigurationError(
        "No credentials configured",
        details={"missing": ["API_TOKEN", "API_TOKEN_FILE"]},
    )
