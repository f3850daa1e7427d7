"""
Bearer token handling for outgoing requests.

``TokenBridge`` is the process-wide slot the route guard writes to: a static
token kept as the client's default ``Authorization`` header, and an optional
token getter resolved before every request. ``AuthContext`` carries the same
information explicitly for a single call.

Both are ``httpx.Auth`` implementations, so the per-request interceptor is
httpx's own auth flow: the header it sets lives on that request only.
"""

import inspect
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Union

import httpx
import structlog

from storedash.core.config import TokenFailurePolicy
from storedash.core.exceptions import TokenResolutionError

logger = structlog.get_logger(__name__)

AUTHORIZATION = "Authorization"

TokenGetter = Callable[[], Union[Awaitable[Optional[str]], Optional[str]]]


@dataclass(frozen=True)
class Authenticated:
    """A token was obtained."""

    token: str


@dataclass(frozen=True)
class Unauthenticated:
    """No token is available; the request goes out without one."""


@dataclass(frozen=True)
class ResolutionFailed:
    """The token getter raised."""

    error: BaseException


TokenResolution = Union[Authenticated, Unauthenticated, ResolutionFailed]


def bearer(token: str) -> str:
    return f"Bearer {token}"


async def resolve_getter(getter: Optional[TokenGetter]) -> TokenResolution:
    """Run a token getter and classify the outcome. Never raises."""
    if getter is None:
        return Unauthenticated()
    try:
        token = getter()
        if inspect.isawaitable(token):
            token = await token
    except Exception as e:
        return ResolutionFailed(e)
    if token:
        return Authenticated(token)
    return Unauthenticated()


class _TokenAuth(httpx.Auth):
    """Shared request interceptor for the bridge and explicit contexts."""

    # When True the request carries only what this auth resolves, never the
    # client's default header.
    replaces_default_header = False

    def __init__(self, failure_policy: TokenFailurePolicy = TokenFailurePolicy.DEGRADE):
        self.failure_policy = TokenFailurePolicy(failure_policy)

    async def resolve(self) -> TokenResolution:
        raise NotImplementedError

    def fallback(self) -> TokenResolution:
        """What to send after a getter failure under the degrade policy."""
        return Unauthenticated()

    def sync_auth_flow(self, request: httpx.Request):
        raise RuntimeError("Token resolution is asynchronous; use httpx.AsyncClient")
        yield request  # pragma: no cover

    async def async_auth_flow(self, request: httpx.Request):
        resolution = await self.resolve()

        if isinstance(resolution, ResolutionFailed):
            logger.error(
                "Failed to get auth token",
                error=str(resolution.error),
                error_type=type(resolution.error).__name__,
                url=str(request.url),
                policy=self.failure_policy.value,
            )
            if self.failure_policy == TokenFailurePolicy.RAISE:
                raise TokenResolutionError(
                    f"Failed to get auth token: {resolution.error}",
                    cause=resolution.error,
                    details={"url": str(request.url)},
                ) from resolution.error
            resolution = self.fallback()

        if self.replaces_default_header:
            request.headers.pop(AUTHORIZATION, None)

        if isinstance(resolution, Authenticated):
            request.headers[AUTHORIZATION] = bearer(resolution.token)

        yield request


class TokenBridge(_TokenAuth):
    """
    Process-wide token slot attached to an ``httpx.AsyncClient``.

    The static token is stored on the client's default headers, so it applies
    to every request until changed. A token getter, when injected, is awaited
    before each request and its token overrides the default header for that
    request only. A getter that resolves to nothing leaves the default header
    in place.

    There is no locking: the last ``set_token``/``inject_token_getter`` call
    wins, and a request already in flight may observe either value.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        failure_policy: TokenFailurePolicy = TokenFailurePolicy.DEGRADE,
    ):
        super().__init__(failure_policy)
        self._client = client
        self._getter: Optional[TokenGetter] = None

    def set_token(self, token: Optional[str]) -> None:
        """Set (or, with ``None``/empty, remove) the default Authorization header."""
        if token:
            self._client.headers[AUTHORIZATION] = bearer(token)
        else:
            self._client.headers.pop(AUTHORIZATION, None)
        logger.debug("Default auth token updated", has_token=bool(token))

    def inject_token_getter(self, getter: Optional[TokenGetter]) -> None:
        """Replace the token getter used before every request; ``None`` clears it."""
        self._getter = getter
        logger.debug("Token getter injected", has_getter=getter is not None)

    async def resolve(self) -> TokenResolution:
        return await resolve_getter(self._getter)


class AuthContext(_TokenAuth):
    """
    Credentials for a single call, replacing the shared bridge for that request.

    The getter takes precedence; the static token is used when there is no
    getter or it yields nothing. A context with neither sends no
    Authorization header even if the client has a default one.
    """

    replaces_default_header = True

    def __init__(
        self,
        token: Optional[str] = None,
        getter: Optional[TokenGetter] = None,
        failure_policy: TokenFailurePolicy = TokenFailurePolicy.DEGRADE,
    ):
        super().__init__(failure_policy)
        self.token = token
        self.getter = getter

    async def resolve(self) -> TokenResolution:
        resolution = await resolve_getter(self.getter)
        if isinstance(resolution, Unauthenticated) and self.token:
            return Authenticated(self.token)
        return resolution

    def fallback(self) -> TokenResolution:
        if self.token:
            return Authenticated(self.token)
        return Unauthenticated()
