"""
Response normalization.

The backend wraps payloads as ``{"success": bool, "data": ...}``. Only ``data``
reaches application code; bodies without a ``data`` key pass through as-is.
"""

from dataclasses import dataclass, field
from typing import Any, List

import httpx


def decode_body(response: httpx.Response) -> Any:
    """Decode a response body: JSON when possible, text otherwise, ``None`` when empty."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def unwrap_envelope(body: Any) -> Any:
    """Return ``body["data"]`` for envelope-shaped objects, ``body`` unchanged otherwise."""
    if isinstance(body, dict) and "data" in body:
        return body["data"]
    return body


def ensure_array(data: Any) -> List[Any]:
    """Coerce a list payload: lists are returned as-is, anything else becomes ``[]``."""
    if isinstance(data, list):
        return data
    return []


@dataclass
class ApiResponse:
    """A successful backend response with its body already normalized."""

    status_code: int
    headers: httpx.Headers
    data: Any
    response: httpx.Response = field(repr=False)

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "ApiResponse":
        return cls(
            status_code=response.status_code,
            headers=response.headers,
            data=unwrap_envelope(decode_body(response)),
            response=response,
        )
