"""
Shared HTTP client for the storedash backend.

One ``httpx.AsyncClient`` per process carries the base URL, the default JSON
headers, the cookie jar and the token bridge, so every resource client goes
through the same request and response handling.
"""

import secrets
from typing import Any, Dict, Mapping, Optional

import httpx
import structlog

from storedash.api.envelope import ApiResponse
from storedash.api.tokens import AuthContext, TokenBridge, TokenGetter
from storedash.core.config import ApiConfig, TokenFailurePolicy, get_settings

logger = structlog.get_logger(__name__)

DEFAULT_HEADERS = {
    "Accept": "application/json, text/plain, */*",
    "Content-Type": "application/json",
}


def multipart_content_type() -> str:
    """Content-Type for a multipart body, with the boundary httpx will encode with."""
    return f"multipart/form-data; boundary={secrets.token_hex(16)}"


class ApiClient:
    """
    Backend API client with token injection and envelope unwrapping.

    Non-2xx responses raise ``httpx.HTTPStatusError`` and transport failures
    raise ``httpx.TransportError``; neither is wrapped or retried. Successful
    responses are returned as ``ApiResponse`` with the envelope removed.
    """

    def __init__(
        self,
        config: Optional[ApiConfig] = None,
        failure_policy: Optional[TokenFailurePolicy] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = None
        if config is None or failure_policy is None:
            settings = get_settings()
        self.config = config or settings.api
        policy = failure_policy or settings.auth.failure_policy

        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            headers=DEFAULT_HEADERS,
            timeout=httpx.Timeout(self.config.request_timeout),
            follow_redirects=True,
            transport=transport,
            event_hooks={"request": [self._on_request], "response": [self._on_response]},
        )
        self.bridge = TokenBridge(self._client, failure_policy=policy)
        self._client.auth = self.bridge

        logger.debug(
            "API client initialized",
            base_url=self.config.base_url,
            with_credentials=self.config.with_credentials,
            timeout=self.config.request_timeout,
            failure_policy=self.bridge.failure_policy.value,
        )

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def set_token(self, token: Optional[str]) -> None:
        self.bridge.set_token(token)

    def inject_token_getter(self, getter: Optional[TokenGetter]) -> None:
        self.bridge.inject_token_getter(getter)

    async def _on_request(self, request: httpx.Request) -> None:
        if not self.config.with_credentials:
            request.headers.pop("Cookie", None)
        logger.debug(
            "Sending API request",
            method=request.method,
            url=str(request.url),
            authenticated="Authorization" in request.headers,
        )

    async def _on_response(self, response: httpx.Response) -> None:
        logger.debug(
            "Received API response",
            method=response.request.method,
            url=str(response.request.url),
            status_code=response.status_code,
        )

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        data: Optional[Mapping[str, Any]] = None,
        files: Any = None,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        auth: Optional[AuthContext] = None,
    ) -> ApiResponse:
        """
        Make a request against the backend.

        Args:
            method: HTTP method
            path: API path relative to the base URL
            json: JSON payload
            data: Form fields (multipart when ``files`` is given)
            files: Multipart file fields, in any form httpx accepts
            params: Query parameters
            headers: Extra headers for this request only
            auth: Explicit credentials replacing the shared token bridge

        Returns:
            ApiResponse with the envelope unwrapped

        Raises:
            httpx.HTTPStatusError: On non-2xx responses
            httpx.TransportError: On network failures
            TokenResolutionError: When the token getter fails under the raise policy
        """
        if files is not None:
            headers = {**(headers or {}), "Content-Type": multipart_content_type()}

        kwargs: Dict[str, Any] = {}
        if auth is not None:
            kwargs["auth"] = auth

        response = await self._client.request(
            method,
            path,
            json=json,
            data=data,
            files=files,
            params=params,
            headers=headers,
            **kwargs,
        )
        response.raise_for_status()
        return ApiResponse.from_httpx(response)

    async def get(self, path: str, **kwargs) -> ApiResponse:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs) -> ApiResponse:
        return await self.request("POST", path, **kwargs)

    async def patch(self, path: str, **kwargs) -> ApiResponse:
        return await self.request("PATCH", path, **kwargs)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


# Global client instance
_api_client: Optional[ApiClient] = None


def get_api_client() -> ApiClient:
    """Get the process-wide API client, creating it from settings on first use."""
    global _api_client
    if _api_client is None or _api_client.is_closed:
        _api_client = ApiClient()
    return _api_client


async def reset_api_client() -> None:
    """Close and forget the process-wide API client."""
    global _api_client
    if _api_client is not None:
        await _api_client.aclose()
    _api_client = None


def set_auth_token(token: Optional[str]) -> None:
    """Set or clear the default bearer token on the process-wide client."""
    get_api_client().set_token(token)


def inject_auth(getter: Optional[TokenGetter]) -> None:
    """Install the token getter used by the process-wide client."""
    get_api_client().inject_token_getter(getter)
