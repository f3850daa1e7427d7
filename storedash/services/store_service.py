"""Screen loaders and mutations for the store administration workflows."""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Mapping, Optional, TypeVar

import httpx
import structlog
from pydantic import ValidationError

from storedash.api.envelope import ApiResponse
from storedash.api.resources import ResourceClients
from storedash.core.config import Settings
from storedash.core.exceptions import OrderStateError, StoreDashError
from storedash.core.models import (
    Customer,
    Order,
    OrderStatus,
    Payment,
    Product,
    User,
    parse_records,
)
from storedash.services import views
from storedash.services.query_cache import QueryCache
from storedash.services.sample_data import SAMPLE_CUSTOMERS, SAMPLE_ORDERS, SAMPLE_PAYMENTS

logger = structlog.get_logger(__name__)

T = TypeVar("T")

CUSTOMERS = "customers"
INVENTORY = "inventory"
ORDERS = "orders"
PAYMENTS = "payments"


@dataclass
class ScreenResult(Generic[T]):
    """Records for one screen, or the error that prevented loading them."""

    items: List[T] = field(default_factory=list)
    error: Optional[BaseException] = None
    placeholder: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class DashboardResult:
    summary: views.DashboardSummary
    errors: Dict[str, BaseException] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


class StoreService:
    """
    Screen-level access to the backend.

    Loads go through the query cache and never raise for backend failures:
    each screen reports its own error and the others are unaffected.
    Mutations raise on failure and invalidate the affected screen on success.
    """

    def __init__(
        self,
        api: ResourceClients,
        cache: Optional[QueryCache] = None,
        placeholder_on_error: bool = False,
    ):
        self.api = api
        self.cache = cache or QueryCache()
        self.placeholder_on_error = placeholder_on_error

    @classmethod
    def from_settings(cls, api: ResourceClients, settings: Settings) -> "StoreService":
        return cls(
            api,
            cache=QueryCache(retries=settings.query_retries),
            placeholder_on_error=settings.placeholder_on_error,
        )

    async def _load(
        self,
        key: str,
        loader,
        model: type,
        placeholder: Optional[List[Dict[str, Any]]] = None,
    ) -> ScreenResult:
        try:
            rows = await self.cache.fetch(key, loader)
            items = parse_records(model, rows)
        except (httpx.HTTPError, StoreDashError, ValidationError) as e:
            logger.warning(
                "Screen load failed",
                screen=key,
                error=str(e),
                error_type=type(e).__name__,
            )
            if placeholder is not None and self.placeholder_on_error:
                return ScreenResult(parse_records(model, placeholder), error=e, placeholder=True)
            return ScreenResult(error=e)
        return ScreenResult(items)

    # Screens

    async def customers(self, search: str = "", active_only: bool = True) -> ScreenResult[Customer]:
        result = await self._load(
            CUSTOMERS, self.api.customers.get_all, Customer, SAMPLE_CUSTOMERS
        )
        if active_only:
            result.items = views.active_customers(result.items, search)
        else:
            result.items = views.search_customers(result.items, search)
        return result

    async def products(self, search: str = "") -> ScreenResult[Product]:
        result = await self._load(INVENTORY, self.api.inventory.get_all, Product)
        result.items = views.search_products(result.items, search)
        return result

    async def orders(self, search: str = "", include_cancelled: bool = False) -> ScreenResult[Order]:
        result = await self._load(ORDERS, self.api.orders.get_all, Order, SAMPLE_ORDERS)
        result.items = views.visible_orders(result.items, search, include_cancelled)
        return result

    async def payments(self, search: str = "") -> ScreenResult[Payment]:
        result = await self._load(PAYMENTS, self.api.payments.get_all, Payment, SAMPLE_PAYMENTS)
        result.items = views.search_payments(result.items, search)
        return result

    async def dashboard(self) -> DashboardResult:
        """Load orders and payments concurrently and summarize them."""
        orders, payments = await asyncio.gather(
            self._load(ORDERS, self.api.orders.get_all, Order),
            self._load(PAYMENTS, self.api.payments.get_all, Payment),
        )
        errors = {
            name: result.error
            for name, result in ((ORDERS, orders), (PAYMENTS, payments))
            if result.error is not None
        }
        return DashboardResult(views.dashboard_summary(orders.items, payments.items), errors)

    async def current_user(self) -> User:
        response = await self.api.user.get()
        data = response.data if isinstance(response.data, dict) else {}
        return User.model_validate(data)

    # Mutations

    async def delete_customer(self, customer_id: str) -> ApiResponse:
        response = await self.api.customers.delete(customer_id)
        self.cache.invalidate(CUSTOMERS)
        logger.info("Customer deleted", customer_id=customer_id)
        return response

    async def add_product(
        self, fields: Mapping[str, Any], files: Optional[Mapping[str, Any]] = None
    ) -> ApiResponse:
        response = await self.api.inventory.upload(fields, files)
        self.cache.invalidate(INVENTORY)
        logger.info("Product added", name=fields.get("name"))
        return response

    async def update_product(self, product_id: str, data: Dict[str, Any]) -> ApiResponse:
        response = await self.api.inventory.update(product_id, data)
        self.cache.invalidate(INVENTORY)
        logger.info("Product updated", product_id=product_id, fields=sorted(data))
        return response

    async def set_order_status(self, order_id: str, status: str) -> ApiResponse:
        response = await self.api.orders.update_status(order_id, status)
        self.cache.invalidate(ORDERS)
        logger.info("Order status changed", order_id=order_id, status=status)
        return response

    async def cancel_order(self, order_id: str) -> ApiResponse:
        """Cancel an order unless it is already completed, shipped or cancelled."""
        result = await self.orders(include_cancelled=True)
        if result.error is not None:
            raise result.error
        order = next((o for o in result.items if o.id == str(order_id)), None)
        if order is None:
            raise OrderStateError(f"Order {order_id} not found", details={"order_id": order_id})
        if not views.can_cancel(order):
            raise OrderStateError(
                f"Order {order_id} is {order.status} and cannot be cancelled",
                details={"order_id": order_id, "status": order.status},
            )
        return await self.set_order_status(order.id, OrderStatus.CANCELLED.value)
