"""SQLAlchemy-backed implementation of OrderRepository."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload, sessionmaker

from orderflow.domain.exceptions import OrderNotFound, StoreReadFailed, StoreWriteFailed
from orderflow.domain.model.order import Order, OrderItem, OrderStatus
from orderflow.domain.model.value_objects import Money, Quantity
from orderflow.domain.repository.order_repository import OrderRepository
from orderflow.infrastructure.persistence.models import OrderItemRow, OrderRow


class SqlAlchemyOrderRepository(OrderRepository):

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    # --- OrderRepository interface --------------------------------------------

    def add(self, order: Order) -> Order:
        row = self._to_row(order)
        row.id = str(uuid.uuid4())
        row.created_at = datetime.now(timezone.utc)
        try:
            # One transaction for the order and every item; commits on exit.
            with self._session_factory.begin() as session:
                session.add(row)
        # The DB-API driver raises OverflowError itself for out-of-range integers.
        except (SQLAlchemyError, OverflowError) as exc:
            raise StoreWriteFailed("add") from exc

        # Answer with what the database holds, not with the in-memory values.
        stored = self.get_by_id(row.id)
        if stored is None:
            raise StoreReadFailed("add", row.id)
        return stored

    def get_by_id(self, order_id: str) -> Order | None:
        try:
            with self._session_factory() as session:
                row = session.get(
                    OrderRow, order_id, options=[selectinload(OrderRow.items)]
                )
                return self._to_domain(row) if row is not None else None
        except SQLAlchemyError as exc:
            raise StoreReadFailed("get_by_id", order_id) from exc

    def count(self, status: OrderStatus | None = None) -> int:
        stmt = select(func.count()).select_from(OrderRow)
        if status is not None:
            stmt = stmt.where(OrderRow.status == status.value)
        try:
            with self._session_factory() as session:
                return session.scalar(stmt) or 0
        except SQLAlchemyError as exc:
            raise StoreReadFailed("count") from exc

    def list_page(
        self,
        status: OrderStatus | None,
        offset: int,
        limit: int,
    ) -> list[Order]:
        stmt = (
            select(OrderRow)
            .options(selectinload(OrderRow.items))
            .order_by(OrderRow.created_at, OrderRow.id)
            .offset(offset)
            .limit(limit)
        )
        if status is not None:
            stmt = stmt.where(OrderRow.status == status.value)
        try:
            with self._session_factory() as session:
                return [self._to_domain(row) for row in session.scalars(stmt)]
        except SQLAlchemyError as exc:
            raise StoreReadFailed("list_page") from exc

    def update_status(self, order_id: str, status: OrderStatus) -> Order:
        try:
            with self._session_factory.begin() as session:
                row = session.get(
                    OrderRow, order_id, options=[selectinload(OrderRow.items)]
                )
                if row is None:
                    raise OrderNotFound(order_id)
                row.status = status.value
                session.flush()
                return self._to_domain(row)
        except SQLAlchemyError as exc:
            raise StoreWriteFailed("update_status", order_id) from exc

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_row(order: Order) -> OrderRow:
        return OrderRow(
            total_amount=order.total_amount.amount,
            total_items=order.total_items,
            currency=order.total_amount.currency,
            status=order.status.value,
            items=[
                OrderItemRow(
                    product_id=item.product_id,
                    price=item.price.amount,
                    quantity=item.quantity.value,
                )
                for item in order.items
            ],
        )

    @staticmethod
    def _to_domain(row: OrderRow) -> Order:
        items = [
            OrderItem(
                product_id=i.product_id,
                price=Money(i.price, row.currency),
                quantity=Quantity(i.quantity),
            )
            for i in row.items
        ]
        return Order(
            id=row.id,
            items=items,
            total_amount=Money(row.total_amount, row.currency),
            total_items=row.total_items,
            status=OrderStatus(row.status),
            created_at=row.created_at,
        )
