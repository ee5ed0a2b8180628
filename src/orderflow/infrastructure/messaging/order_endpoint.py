"""Transport-agnostic inbound endpoint for the order operations.

Takes a message pattern plus a decoded JSON payload, runs the matching
use case and answers with either ``{"data": ...}`` or
``{"error": {"kind", "status", "message"}}``.  Wire field names are
camelCase.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import structlog

from orderflow.application.change_order_status import ChangeOrderStatusHandler
from orderflow.application.create_order import CreateOrderHandler
from orderflow.application.dto import (
    OrderDTO,
    OrderItemSpec,
    OrderListQuery,
    OrderPageDTO,
    OrderSummaryDTO,
)
from orderflow.application.list_orders import ListOrdersHandler
from orderflow.application.show_order import ShowOrderHandler
from orderflow.domain.exceptions import DomainException, ValidationError

logger = structlog.get_logger(__name__)

CREATE_ORDER = "create_order"
FIND_ALL_ORDERS = "find_all_orders"
FIND_ONE_ORDER = "find_one_order"
CHANGE_ORDER_STATUS = "change_order_status"

# Integer fields map onto 32-bit INTEGER columns.
_MAX_INT = 2**31 - 1


class OrderEndpoint:

    def __init__(
        self,
        create_order: CreateOrderHandler,
        list_orders: ListOrdersHandler,
        show_order: ShowOrderHandler,
        change_status: ChangeOrderStatusHandler,
    ) -> None:
        self._create_order = create_order
        self._list_orders = list_orders
        self._show_order = show_order
        self._change_status = change_status
        self._routes: dict[str, Callable[[Any], dict]] = {
            CREATE_ORDER: self._on_create,
            FIND_ALL_ORDERS: self._on_find_all,
            FIND_ONE_ORDER: self._on_find_one,
            CHANGE_ORDER_STATUS: self._on_change_status,
        }

    def dispatch(self, pattern: str, payload: Any) -> dict:
        try:
            route = self._routes.get(pattern)
            if route is None:
                raise ValidationError(f"Unknown message pattern {pattern!r}")
            return {"data": route(payload)}
        except DomainException as exc:
            logger.info("Order request failed", pattern=pattern, kind=exc.kind, error=str(exc))
            return {"error": exc.to_dict()}

    # --- Routes ---------------------------------------------------------------

    def _on_create(self, payload: Any) -> dict:
        items = _require(payload, "items")
        if not isinstance(items, list):
            raise ValidationError("'items' must be a list")
        specs = [
            OrderItemSpec(
                product_id=_int_field(item, "productId"),
                quantity=_int_field(item, "quantity"),
            )
            for item in items
        ]
        return _order_payload(self._create_order.handle(specs))

    def _on_find_all(self, payload: Any) -> dict:
        payload = payload or {}
        if not isinstance(payload, dict):
            raise ValidationError("Payload must be an object")
        status = payload.get("status")
        if status is not None and not isinstance(status, str):
            raise ValidationError("'status' must be a string")
        query = OrderListQuery(
            status=status,
            page=_int_field(payload, "page", default=1),
            limit=_int_field(payload, "limit", default=10),
        )
        return _page_payload(self._list_orders.handle(query))

    def _on_find_one(self, payload: Any) -> dict:
        return _order_payload(self._show_order.handle(_str_field(payload, "id")))

    def _on_change_status(self, payload: Any) -> dict:
        dto = self._change_status.handle(
            _str_field(payload, "id"), _str_field(payload, "status")
        )
        return _summary_payload(dto)


# --- Payload parsing ----------------------------------------------------------


def _require(payload: Any, key: str) -> Any:
    if not isinstance(payload, dict):
        raise ValidationError("Payload must be an object")
    if key not in payload:
        raise ValidationError(f"Missing field '{key}'")
    return payload[key]


def _int_field(payload: Any, key: str, default: int | None = None) -> int:
    if default is not None and isinstance(payload, dict) and payload.get(key) is None:
        return default
    value = _require(payload, key)
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(f"'{key}' must be an integer")
    if abs(value) > _MAX_INT:
        raise ValidationError(f"'{key}' is out of range")
    return value


def _str_field(payload: Any, key: str) -> str:
    value = _require(payload, key)
    if not isinstance(value, str) or not value:
        raise ValidationError(f"'{key}' must be a non-empty string")
    return value


# --- Serialization ------------------------------------------------------------


def _summary_payload(dto: OrderSummaryDTO) -> dict:
    return {
        "id": dto.id,
        "totalAmount": str(dto.total_amount),
        "totalItems": dto.total_items,
        "status": dto.status,
        "createdAt": dto.created_at.isoformat(),
    }


def _order_payload(dto: OrderDTO) -> dict:
    return {
        "id": dto.id,
        "totalAmount": str(dto.total_amount),
        "totalItems": dto.total_items,
        "status": dto.status,
        "createdAt": dto.created_at.isoformat(),
        "items": [
            {
                "productId": item.product_id,
                "name": item.name,
                "price": str(item.price),
                "quantity": item.quantity,
            }
            for item in dto.items
        ],
    }


def _page_payload(page: OrderPageDTO) -> dict:
    meta = page.meta
    return {
        "data": [_summary_payload(dto) for dto in page.data],
        "meta": {
            "totalItems": meta.total_items,
            "currentPage": meta.current_page,
            "perPage": meta.per_page,
            "totalPages": meta.total_pages,
            "nextPage": meta.next_page,
            "previousPage": meta.previous_page,
        },
    }
