"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the inbound adapters (message endpoint, CLI) and
the application layer without exposing domain internals.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the client asked for (product id + quantity)."""

    product_id: int
    quantity: int


@dataclass(frozen=True)
class OrderListQuery:
    """Input: status filter and page window for listing orders."""

    status: str | None = None
    page: int = 1
    limit: int = 10


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a line item enriched with the product's current name."""

    product_id: int
    name: str
    price: Decimal
    quantity: int


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order with its enriched items."""

    id: str
    total_amount: Decimal
    total_items: int
    status: str
    created_at: datetime
    items: list[OrderItemDTO]


@dataclass(frozen=True)
class OrderSummaryDTO:
    """Output: order header without items (list rows, status changes)."""

    id: str
    total_amount: Decimal
    total_items: int
    status: str
    created_at: datetime


@dataclass(frozen=True)
class PaginationMeta:

    total_items: int
    current_page: int
    per_page: int
    total_pages: int
    next_page: int | None
    previous_page: int | None


@dataclass(frozen=True)
class OrderPageDTO:

    data: list[OrderSummaryDTO]
    meta: PaginationMeta
