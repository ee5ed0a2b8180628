"""Abstract repository for Order aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  Implementations translate storage errors into
StoreWriteFailed / StoreReadFailed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderflow.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def add(self, order: Order) -> Order:
        """Persist a new order and all its items in one transaction.

        Returns the stored order with ``id`` and ``created_at`` assigned.
        """

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order with its items, or None if not found."""

    @abstractmethod
    def count(self, status: OrderStatus | None = None) -> int:
        """Count orders, optionally only those in *status*."""

    @abstractmethod
    def list_page(
        self,
        status: OrderStatus | None,
        offset: int,
        limit: int,
    ) -> list[Order]:
        """Return one page of orders ordered by creation time, then id."""

    @abstractmethod
    def update_status(self, order_id: str, status: OrderStatus) -> Order:
        """Set the status column of an existing order and return it."""
