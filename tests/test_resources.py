"""
Test suite for resource clients.

Each operation must hit its fixed verb and path, and list operations must
coerce malformed payloads to empty lists.
"""

import httpx
import pytest

from storedash.api import client as client_module
from storedash.api.resources import ResourceClients
from storedash.api.tokens import AuthContext

from tests.fakes import make_client


@pytest.fixture
def api(api_client):
    return ResourceClients(api_client)


class TestListOperations:
    """Test collection endpoints."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "resource, path",
        [
            ("customers", "/customers/customer"),
            ("inventory", "/inventory"),
            ("orders", "/orders"),
            ("payments", "/payments"),
        ],
    )
    async def test_get_all_returns_payload_in_order(self, api, backend, resource, path):
        rows = [{"id": "3"}, {"id": "1"}, {"id": "2"}]
        backend.envelope("GET", path, rows)

        result = await getattr(api, resource).get_all()

        assert result == rows
        assert backend.last.method == "GET"
        assert backend.last.url.path == path

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [None, {"id": "1"}, "oops", 0])
    async def test_get_all_coerces_non_list_to_empty(self, api, backend, payload):
        """Test that null and non-array payloads yield an empty list."""
        backend.envelope("GET", "/orders", payload)

        assert await api.orders.get_all() == []

    @pytest.mark.asyncio
    async def test_get_all_without_envelope(self, api, backend):
        """Test that a bare array body is used as-is."""
        backend.add("GET", "/payments", json=[{"id": "PAY-1"}])

        assert await api.payments.get_all() == [{"id": "PAY-1"}]

    @pytest.mark.asyncio
    async def test_get_all_with_empty_body(self, api, backend):
        backend.add("GET", "/inventory", 200)

        assert await api.inventory.get_all() == []

    @pytest.mark.asyncio
    async def test_get_all_propagates_backend_errors(self, api, backend):
        backend.add("GET", "/customers/customer", 503, text="unavailable")

        with pytest.raises(httpx.HTTPStatusError):
            await api.customers.get_all()


class TestMutations:
    """Test mutating endpoints."""

    @pytest.mark.asyncio
    async def test_delete_customer_is_bodyless_post(self, api, backend):
        """Test that deleting customer 42 posts to the delete path with no body."""
        backend.envelope("POST", "/customers/customer/delete/42", {"deleted": True})

        response = await api.customers.delete("42")

        request = backend.last
        assert request.method == "POST"
        assert request.url.path == "/customers/customer/delete/42"
        assert request.content == b""
        assert response.data == {"deleted": True}

    @pytest.mark.asyncio
    async def test_ids_are_path_escaped(self, api, backend):
        backend.envelope("PATCH", "/inventory/a/b", {})

        await api.inventory.update("a/b", {"stock": 1})

        assert backend.last.url.raw_path == b"/inventory/a%2Fb"

    @pytest.mark.asyncio
    async def test_inventory_update_is_json_patch(self, api, backend):
        backend.envelope("PATCH", "/inventory/p-9", {"id": "p-9", "price": 12.5})

        response = await api.inventory.update("p-9", {"price": 12.5})

        assert backend.last.method == "PATCH"
        assert backend.last.headers["Content-Type"] == "application/json"
        assert backend.json_body(backend.last) == {"price": 12.5}
        assert response.data == {"id": "p-9", "price": 12.5}

    @pytest.mark.asyncio
    async def test_inventory_upload_is_multipart(self, api, backend):
        """Test that product uploads send fields and files as multipart parts."""
        backend.envelope("POST", "/inventory/upload", {"id": "p-10"})

        await api.inventory.upload(
            {"name": "Desk Lamp", "price": 39.9, "stock": 4, "category": None},
            {"image": ("lamp.png", b"\x89PNG-bytes", "image/png")},
        )

        request = backend.last
        body = request.content
        assert request.headers["Content-Type"].startswith("multipart/form-data; boundary=")
        assert b'name="name"' in body and b"Desk Lamp" in body
        assert b'name="price"' in body and b"39.9" in body
        assert b'name="category"' not in body
        assert b'filename="lamp.png"' in body
        assert b"\x89PNG-bytes" in body

    @pytest.mark.asyncio
    async def test_inventory_upload_without_files_is_still_multipart(self, api, backend):
        backend.envelope("POST", "/inventory/upload", {"id": "p-11"})

        await api.inventory.upload({"name": "Mug", "price": 8, "stock": 20})

        assert backend.last.headers["Content-Type"].startswith("multipart/form-data")

    @pytest.mark.asyncio
    async def test_order_status_update(self, api, backend):
        backend.envelope("POST", "/orders/order/status/ORD-003", {"status": "shipped"})

        await api.orders.update_status("ORD-003", "shipped")

        assert backend.json_body(backend.last) == {"status": "shipped"}

    @pytest.mark.asyncio
    async def test_user_get_returns_response(self, api, backend):
        backend.envelope("GET", "/user", {"id": 1, "email": "ops@example.com"})

        response = await api.user.get()

        assert response.status_code == 200
        assert response.data["email"] == "ops@example.com"


class TestResourceClients:
    """Test client wiring."""

    @pytest.mark.asyncio
    async def test_explicit_auth_context_is_forwarded(self, api, backend):
        backend.envelope("GET", "/orders", [])

        await api.orders.get_all(auth=AuthContext(token="scoped"))

        assert backend.last.headers["Authorization"] == "Bearer scoped"

    @pytest.mark.asyncio
    async def test_defaults_to_shared_client(self, backend, monkeypatch):
        shared = make_client(backend)
        monkeypatch.setattr(client_module, "_api_client", shared)

        api = ResourceClients()

        assert api.client is shared
        assert api.orders.client is shared and api.user.client is shared
        await shared.aclose()
