"""
Test suite for response normalization.

Covers envelope unwrapping, body decoding and list coercion.
"""

import httpx

from storedash.api.envelope import ApiResponse, decode_body, ensure_array, unwrap_envelope


class TestUnwrapEnvelope:
    """Test envelope removal."""

    def test_returns_data_of_envelope(self):
        """Test that an envelope object is replaced by its data."""
        body = {"success": True, "data": [{"id": 1}]}
        assert unwrap_envelope(body) == [{"id": 1}]

    def test_null_data_is_returned_as_none(self):
        """Test that an explicit null data field unwraps to None."""
        assert unwrap_envelope({"success": True, "data": None}) is None

    def test_body_without_data_key_passes_through(self):
        """Test that objects lacking a data key are returned unchanged."""
        body = {"success": False, "message": "Not found"}
        assert unwrap_envelope(body) is body

    def test_non_object_bodies_pass_through(self):
        """Test that arrays, strings and None are not unwrapped."""
        rows = [{"data": 1}]
        assert unwrap_envelope(rows) is rows
        assert unwrap_envelope("plain text") == "plain text"
        assert unwrap_envelope(None) is None


class TestEnsureArray:
    """Test list coercion for collection payloads."""

    def test_list_is_returned_unchanged(self):
        """Test that a list payload is the same object, in the same order."""
        rows = [{"id": "b"}, {"id": "a"}]
        assert ensure_array(rows) is rows

    def test_empty_list(self):
        assert ensure_array([]) == []

    def test_non_list_becomes_empty(self):
        """Test that null, objects, strings and numbers all coerce to an empty list."""
        for value in (None, {"id": 1}, "rows", 42, {"data": []}):
            assert ensure_array(value) == []


class TestDecodeBody:
    """Test response body decoding."""

    def test_json_body(self):
        response = httpx.Response(200, json={"data": {"id": 7}})
        assert decode_body(response) == {"data": {"id": 7}}

    def test_text_body(self):
        """Test that non-JSON bodies are returned as text."""
        response = httpx.Response(200, text="OK")
        assert decode_body(response) == "OK"

    def test_empty_body(self):
        """Test that an empty body decodes to None."""
        assert decode_body(httpx.Response(204)) is None


class TestApiResponse:
    """Test ApiResponse construction."""

    def test_from_httpx_unwraps_envelope(self):
        """Test that ApiResponse keeps status and headers and unwraps data."""
        raw = httpx.Response(
            201,
            json={"success": True, "data": {"id": "p-1"}},
            headers={"X-Request-Id": "abc"},
        )
        response = ApiResponse.from_httpx(raw)

        assert response.status_code == 201
        assert response.headers["X-Request-Id"] == "abc"
        assert response.data == {"id": "p-1"}
        assert response.response is raw
