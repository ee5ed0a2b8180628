"""Application service: Change Order Status use case.

Setting the status an order already has is a no-op: nothing is written
and the current record is returned.  Which moves are legal is decided by
the optional transition table; without one, any status may follow any
other.
"""

from __future__ import annotations

import structlog

from orderflow.application.dto import OrderSummaryDTO
from orderflow.application.mappers import to_summary_dto
from orderflow.domain.exceptions import OrderNotFound
from orderflow.domain.model.order import OrderStatus, TransitionTable
from orderflow.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class ChangeOrderStatusHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        transitions: TransitionTable | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._transitions = transitions

    def handle(self, order_id: str, status: str) -> OrderSummaryDTO:
        new_status = OrderStatus.parse(status)

        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(order_id)

        previous = order.status
        if not order.change_status(new_status, self._transitions):
            return to_summary_dto(order)

        updated = self._order_repo.update_status(order_id, new_status)
        logger.info(
            "Order status changed",
            order_id=order_id,
            previous=previous.value,
            status=new_status.value,
        )
        return to_summary_dto(updated)
