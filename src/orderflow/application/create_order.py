"""Application service: Create Order use case.

Orchestrates the flow between the product catalog, the Order aggregate
and the order repository.  Prices always come from the catalog; the
client only says *which* products and *how many*.
"""

from __future__ import annotations

import structlog

from orderflow.application.dto import OrderDTO, OrderItemSpec
from orderflow.application.mappers import to_order_dto
from orderflow.domain.exceptions import ProductNotFound, ValidationError
from orderflow.domain.model.order import Order, OrderItem
from orderflow.domain.model.value_objects import Quantity
from orderflow.domain.repository.order_repository import OrderRepository
from orderflow.domain.repository.product_catalog import ProductCatalog

logger = structlog.get_logger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        catalog: ProductCatalog,
    ) -> None:
        self._order_repo = order_repo
        self._catalog = catalog

    def handle(self, item_specs: list[OrderItemSpec]) -> OrderDTO:
        """Create a new purchase order.

        Steps:
        1. Validate the intent and collect the distinct product ids.
        2. Resolve them with one catalog call.
        3. Fail with ProductNotFound if any id is missing (nothing saved).
        4. Build OrderItems with *current* catalog prices (snapshot).
        5. Persist atomically and answer with names from step 2.
        """
        if not item_specs:
            raise ValidationError("Order must contain at least one item")
        quantities = [Quantity(spec.quantity) for spec in item_specs]

        product_ids = {spec.product_id for spec in item_specs}
        products = self._catalog.resolve(product_ids)

        items: list[OrderItem] = []
        for spec, quantity in zip(item_specs, quantities):
            product = products.get(spec.product_id)
            if product is None:
                logger.info("Order rejected, unknown product", product_id=spec.product_id)
                raise ProductNotFound(spec.product_id)
            items.append(
                OrderItem(
                    product_id=spec.product_id,
                    price=product.price.rounded(),  # <-- price snapshot, in cents
                    quantity=quantity,
                )
            )

        order = self._order_repo.add(Order.create(items))
        logger.info(
            "Order created",
            order_id=order.id,
            total_amount=str(order.total_amount.amount),
            total_items=order.total_items,
        )

        return to_order_dto(order, {pid: p.name for pid, p in products.items()})
