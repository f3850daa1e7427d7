"""
Resource clients: one fixed verb/path grouping per backend entity.

These carry no business logic. List operations return the unwrapped payload
coerced to a list; every other operation returns the ``ApiResponse``.
"""

from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote

from storedash.api.client import ApiClient, get_api_client
from storedash.api.envelope import ApiResponse, ensure_array
from storedash.api.tokens import AuthContext


def _segment(value: Any) -> str:
    return quote(str(value), safe="")


class _Resource:
    def __init__(self, client: ApiClient):
        self.client = client


class CustomersApi(_Resource):
    async def get_all(self, auth: Optional[AuthContext] = None) -> List[Any]:
        response = await self.client.get("/customers/customer", auth=auth)
        return ensure_array(response.data)

    async def delete(self, customer_id: str, auth: Optional[AuthContext] = None) -> ApiResponse:
        """Soft-delete a customer. The backend exposes this as a bodyless POST."""
        return await self.client.post(f"/customers/customer/delete/{_segment(customer_id)}", auth=auth)


class InventoryApi(_Resource):
    async def get_all(self, auth: Optional[AuthContext] = None) -> List[Any]:
        response = await self.client.get("/inventory", auth=auth)
        return ensure_array(response.data)

    async def upload(
        self,
        fields: Mapping[str, Any],
        files: Optional[Mapping[str, Any]] = None,
        auth: Optional[AuthContext] = None,
    ) -> ApiResponse:
        """
        Create a product from a multipart form.

        Args:
            fields: Plain form fields; ``None`` values are left out
            files: File fields as ``{name: (filename, content, content_type)}``
            auth: Explicit credentials for this call
        """
        # Plain fields go in as filename-less parts so the body is multipart
        # even when no file is attached.
        parts: List[tuple] = [
            (name, (None, str(value))) for name, value in fields.items() if value is not None
        ]
        parts.extend((files or {}).items())
        return await self.client.post("/inventory/upload", files=parts, auth=auth)

    async def update(
        self, product_id: str, data: Dict[str, Any], auth: Optional[AuthContext] = None
    ) -> ApiResponse:
        return await self.client.patch(f"/inventory/{_segment(product_id)}", json=data, auth=auth)


class OrdersApi(_Resource):
    async def get_all(self, auth: Optional[AuthContext] = None) -> List[Any]:
        response = await self.client.get("/orders", auth=auth)
        return ensure_array(response.data)

    async def update_status(
        self, order_id: str, status: str, auth: Optional[AuthContext] = None
    ) -> ApiResponse:
        return await self.client.post(
            f"/orders/order/status/{_segment(order_id)}", json={"status": status}, auth=auth
        )


class PaymentsApi(_Resource):
    async def get_all(self, auth: Optional[AuthContext] = None) -> List[Any]:
        response = await self.client.get("/payments", auth=auth)
        return ensure_array(response.data)


class UserApi(_Resource):
    async def get(self, auth: Optional[AuthContext] = None) -> ApiResponse:
        return await self.client.get("/user", auth=auth)


class ResourceClients:
    """All resource clients bound to one ``ApiClient``."""

    def __init__(self, client: Optional[ApiClient] = None):
        self.client = client or get_api_client()
        self.customers = CustomersApi(self.client)
        self.inventory = InventoryApi(self.client)
        self.orders = OrdersApi(self.client)
        self.payments = PaymentsApi(self.client)
        self.user = UserApi(self.client)
