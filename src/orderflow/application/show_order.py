"""Application service: Show Order use case (query).

Product names are not stored with the order; they are joined in from the
catalog on every read.  Prices and quantities come from the stored
snapshot.
"""

from __future__ import annotations

from enum import Enum

import structlog

from orderflow.application.dto import OrderDTO
from orderflow.application.mappers import to_order_dto
from orderflow.domain.exceptions import OrderNotFound, ProductNotFound
from orderflow.domain.repository.order_repository import OrderRepository
from orderflow.domain.repository.product_catalog import ProductCatalog

logger = structlog.get_logger(__name__)

DEFAULT_PLACEHOLDER_NAME = "Unavailable product"


class MissingProductPolicy(Enum):
    """What to do when an ordered product has left the catalog."""

    PLACEHOLDER = "placeholder"
    FAIL = "fail"


class ShowOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        catalog: ProductCatalog,
        missing_product_policy: MissingProductPolicy = MissingProductPolicy.PLACEHOLDER,
        placeholder_name: str = DEFAULT_PLACEHOLDER_NAME,
    ) -> None:
        self._order_repo = order_repo
        self._catalog = catalog
        self._policy = missing_product_policy
        self._placeholder_name = placeholder_name

    def handle(self, order_id: str) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise OrderNotFound(order_id)

        products = self._catalog.resolve(order.product_ids)

        names: dict[int, str] = {}
        for product_id in order.product_ids:
            product = products.get(product_id)
            if product is not None:
                names[product_id] = product.name
                continue
            if self._policy is MissingProductPolicy.FAIL:
                raise ProductNotFound(product_id)
            logger.warning(
                "Ordered product missing from catalog",
                order_id=order_id,
                product_id=product_id,
            )
            names[product_id] = self._placeholder_name

        return to_order_dto(order, names)
