"""Domain -> DTO mapping shared by the order use cases."""

from __future__ import annotations

from collections.abc import Mapping

from orderflow.application.dto import OrderDTO, OrderItemDTO, OrderSummaryDTO
from orderflow.domain.model.order import Order


def to_order_dto(order: Order, names: Mapping[int, str]) -> OrderDTO:
    """Merge a persisted order with product names keyed by product id."""
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        total_amount=order.total_amount.amount,
        total_items=order.total_items,
        status=order.status.value,
        created_at=order.created_at,  # type: ignore[arg-type]
        items=[
            OrderItemDTO(
                product_id=item.product_id,
                name=names[item.product_id],
                price=item.price.amount,
                quantity=item.quantity.value,
            )
            for item in order.items
        ],
    )


def to_summary_dto(order: Order) -> OrderSummaryDTO:
    return OrderSummaryDTO(
        id=order.id,  # type: ignore[arg-type]
        total_amount=order.total_amount.amount,
        total_items=order.total_items,
        status=order.status.value,
        created_at=order.created_at,  # type: ignore[arg-type]
    )
