"""
Data models and type definitions for storedash.

Backend records are loosely typed: every field except ``id`` is optional and
unknown fields are kept. Validation is the backend's responsibility, so these
models only coerce what the screens need to display and aggregate.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class OrderStatus(str, Enum):
    """Order lifecycle states used by the dashboard."""

    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    """Payment states used by the dashboard."""

    PENDING = "pending"
    COMPLETED = "completed"
    REFUNDED = "refunded"
    FAILED = "failed"


class GuardState(str, Enum):
    """What the route guard allows the caller to do."""

    LOADING = "loading"
    NOT_AVAILABLE = "not_available"
    ALLOWED = "allowed"


# Base Models


class BackendRecord(BaseModel):
    """Base class for records returned by the backend."""

    id: str = ""

    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data):
        """Treat explicit nulls as missing so field defaults apply."""
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v):
        """Backends mix numeric and string ids; screens treat them as strings."""
        return str(v)


class Customer(BackendRecord):
    """Customer account."""

    name: str = ""
    email: str = ""
    phone: Optional[str] = None
    status: str = ""
    created_at: Optional[str] = Field(None, alias="createdAt")
    total_orders: Optional[int] = Field(None, alias="totalOrders")
    total_spent: Optional[float] = Field(None, alias="totalSpent")


class Product(BackendRecord):
    """Inventory item."""

    name: str = ""
    description: Optional[str] = None
    price: float = 0.0
    stock: int = 0
    category: Optional[str] = None
    image: Optional[str] = None


class OrderItem(BackendRecord):
    """Line item of an order."""

    name: str = ""
    quantity: int = 0
    price: float = 0.0


class Order(BackendRecord):
    """Customer order."""

    customer_name: str = Field("", alias="customerName")
    customer_email: str = Field("", alias="customerEmail")
    status: str = ""
    total: float = 0.0
    items: List[OrderItem] = Field(default_factory=list)
    created_at: Optional[str] = Field(None, alias="createdAt")

    @field_validator("items", mode="before")
    @classmethod
    def parse_items(cls, v):
        if not isinstance(v, list):
            return []
        return v


class Payment(BackendRecord):
    """Payment attached to an order."""

    order_id: str = Field("", alias="orderId")
    customer_name: str = Field("", alias="customerName")
    amount: float = 0.0
    method: Optional[str] = None
    status: str = ""
    created_at: Optional[str] = Field(None, alias="createdAt")

    @field_validator("order_id", mode="before")
    @classmethod
    def stringify_order_id(cls, v):
        return str(v)


class User(BaseModel):
    """The signed-in operator as reported by ``GET /user``."""

    id: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v):
        return None if v is None else str(v)


def parse_records(model: type, rows: List[Any]) -> list:
    """Parse raw backend rows into ``model`` instances, skipping rows that are not objects."""
    return [model.model_validate(row) for row in rows if isinstance(row, dict)]
