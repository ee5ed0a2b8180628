"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its line items.  Totals are
derived exactly once, in ``Order.create``, from catalog prices; afterwards
they are stored values and are never recomputed.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from orderflow.domain.exceptions import ValidationError
from orderflow.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @classmethod
    def parse(cls, raw: str) -> OrderStatus:
        try:
            return cls(raw)
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise ValidationError(
                f"Invalid order status {raw!r}; expected one of {allowed}"
            ) from None


# Maps a current status to the statuses it may move to.
TransitionTable = Mapping[OrderStatus, Collection[OrderStatus]]


@dataclass(frozen=True)
class OrderItem:
    """One line of an order.

    ``price`` is the unit price captured from the catalog when the order
    was created; later catalog price changes never touch it.
    """

    product_id: int
    price: Money
    quantity: Quantity

    @property
    def line_total(self) -> Money:
        return self.price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for purchase orders.

    Use the ``Order.create()`` factory for new orders — it computes the
    totals.  The ``__init__`` stays plain so the repository can
    reconstitute persisted orders with their stored totals.
    """

    id: str | None
    items: list[OrderItem]
    total_amount: Money
    total_items: int
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime | None = field(default=None)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(items: list[OrderItem]) -> Order:
        if not items:
            raise ValidationError("Order must contain at least one item")

        total_amount = Money.zero(items[0].price.currency)
        total_items = 0
        for item in items:
            total_amount = total_amount + item.line_total
            total_items += item.quantity.value

        return Order(
            id=None,
            items=list(items),
            total_amount=total_amount,
            total_items=total_items,
        )

    # --- State transitions ----------------------------------------------------

    def change_status(
        self,
        new_status: OrderStatus,
        transitions: TransitionTable | None = None,
    ) -> bool:
        """Move to *new_status*; return False when already there.

        With no *transitions* table every status may move to every other
        one.  Supplying a table restricts moves to the listed targets.
        """
        if new_status == self.status:
            return False
        if transitions is not None and new_status not in transitions.get(self.status, ()):
            raise ValidationError(
                f"Cannot change order status from {self.status.value} "
                f"to {new_status.value}"
            )
        self.status = new_status
        return True

    @property
    def product_ids(self) -> set[int]:
        return {item.product_id for item in self.items}
