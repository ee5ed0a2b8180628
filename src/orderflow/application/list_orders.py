"""Application service: List Orders use case (paginated query)."""

from __future__ import annotations

import math

from orderflow.application.dto import OrderListQuery, OrderPageDTO, PaginationMeta
from orderflow.application.mappers import to_summary_dto
from orderflow.domain.exceptions import ValidationError
from orderflow.domain.model.order import OrderStatus
from orderflow.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, query: OrderListQuery) -> OrderPageDTO:
        """Return one page of orders plus pagination metadata.

        A page past the end is not an error: ``data`` is empty and the
        metadata still describes the full result set.
        """
        if query.page < 1:
            raise ValidationError("Page must be greater than or equal to 1")
        if query.limit < 1:
            raise ValidationError("Limit must be greater than or equal to 1")
        status = OrderStatus.parse(query.status) if query.status is not None else None

        total_items = self._order_repo.count(status)
        total_pages = math.ceil(total_items / query.limit)

        orders = self._order_repo.list_page(
            status,
            offset=(query.page - 1) * query.limit,
            limit=query.limit,
        )

        return OrderPageDTO(
            data=[to_summary_dto(order) for order in orders],
            meta=PaginationMeta(
                total_items=total_items,
                current_page=query.page,
                per_page=query.limit,
                total_pages=total_pages,
                next_page=query.page + 1 if query.page < total_pages else None,
                previous_page=query.page - 1 if query.page > 1 else None,
            ),
        )
