"""
Client-side view filters and aggregates.

The backend offers no filtering, so every screen fetches the full collection
and narrows it here. These are display filters only: they do not scale with
collection size and nothing on the backend enforces them.
"""

from dataclasses import dataclass
from typing import Iterable, List

from storedash.core.models import Customer, Order, OrderStatus, Payment, PaymentStatus, Product

# Orders in these states can no longer be cancelled
FINAL_ORDER_STATUSES = {OrderStatus.COMPLETED.value, OrderStatus.SHIPPED.value}


def _matches(term: str, *values: str) -> bool:
    term = term.lower()
    return any(term in (value or "").lower() for value in values)


def active_customers(customers: Iterable[Customer], search: str = "") -> List[Customer]:
    """Active customers whose name or email contains ``search``."""
    return [
        c
        for c in customers
        if c.status == "active" and _matches(search, c.name, c.email)
    ]


def search_customers(customers: Iterable[Customer], search: str = "") -> List[Customer]:
    return [c for c in customers if _matches(search, c.name, c.email)]


def search_products(products: Iterable[Product], search: str = "") -> List[Product]:
    return [p for p in products if _matches(search, p.name)]


def visible_orders(
    orders: Iterable[Order], search: str = "", include_cancelled: bool = False
) -> List[Order]:
    """Orders matching ``search`` on id or customer name, without cancelled ones by default."""
    return [
        o
        for o in orders
        if (include_cancelled or o.status != OrderStatus.CANCELLED.value)
        and _matches(search, o.id, o.customer_name)
    ]


def search_payments(payments: Iterable[Payment], search: str = "") -> List[Payment]:
    """Payments matching ``search`` on id, customer name or order id.

    Payments of cancelled orders stay visible for accounting.
    """
    return [p for p in payments if _matches(search, p.id, p.customer_name, p.order_id)]


def can_cancel(order: Order) -> bool:
    return order.status not in FINAL_ORDER_STATUSES and order.status != OrderStatus.CANCELLED.value


@dataclass
class PaymentTotals:
    revenue: float = 0.0
    pending: float = 0.0
    refunded: float = 0.0


def payment_totals(payments: Iterable[Payment]) -> PaymentTotals:
    """Sum payment amounts by status: completed, pending and refunded."""
    totals = PaymentTotals()
    for p in payments:
        if p.status == PaymentStatus.COMPLETED.value:
            totals.revenue += p.amount
        elif p.status == PaymentStatus.PENDING.value:
            totals.pending += p.amount
        elif p.status == PaymentStatus.REFUNDED.value:
            totals.refunded += p.amount
    return totals


@dataclass
class DashboardSummary:
    total_orders: int = 0
    cancelled_orders: int = 0
    total_payments: float = 0.0


def dashboard_summary(orders: List[Order], payments: List[Payment]) -> DashboardSummary:
    """Headline numbers: every order, cancelled orders and the sum of all payments."""
    return DashboardSummary(
        total_orders=len(orders),
        cancelled_orders=sum(1 for o in orders if o.status == OrderStatus.CANCELLED.value),
        total_payments=sum(p.amount for p in payments),
    )
