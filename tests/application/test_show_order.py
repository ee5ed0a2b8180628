"""Integration tests for the ShowOrder use case."""

from decimal import Decimal

import pytest

from orderflow.application.create_order import CreateOrderHandler
from orderflow.application.dto import OrderItemSpec
from orderflow.application.show_order import MissingProductPolicy, ShowOrderHandler
from orderflow.domain.exceptions import OrderNotFound, ProductNotFound
from tests.fakes import FakeOrderRepository, FakeProductCatalog, product


def _setup():
    order_repo = FakeOrderRepository()
    catalog = FakeProductCatalog([product(1, "Widget", "10"), product(2, "Gadget", "5")])
    create = CreateOrderHandler(order_repo, catalog)
    dto = create.handle([OrderItemSpec(1, 2), OrderItemSpec(2, 1)])
    catalog.calls.clear()
    return order_repo, catalog, dto.id


class TestShowOrder:

    def test_returns_enriched_order(self):
        order_repo, catalog, order_id = _setup()
        dto = ShowOrderHandler(order_repo, catalog).handle(order_id)
        assert dto.id == order_id
        assert dto.total_amount == Decimal("25")
        assert {i.product_id: i.name for i in dto.items} == {1: "Widget", 2: "Gadget"}
        assert catalog.calls == [{1, 2}]

    def test_unknown_order(self):
        order_repo, catalog, _ = _setup()
        with pytest.raises(OrderNotFound, match="nope"):
            ShowOrderHandler(order_repo, catalog).handle("nope")
        assert catalog.calls == []

    def test_renamed_product_shows_new_name_but_old_price(self):
        order_repo, catalog, order_id = _setup()
        catalog.save(product(1, "Widget Pro", "99"))

        dto = ShowOrderHandler(order_repo, catalog).handle(order_id)
        widget = next(i for i in dto.items if i.product_id == 1)
        assert widget.name == "Widget Pro"
        assert widget.price == Decimal("10")
        assert dto.total_amount == Decimal("25")


class TestMissingProductPolicy:

    def test_placeholder_by_default(self):
        order_repo, catalog, order_id = _setup()
        catalog.remove(2)

        dto = ShowOrderHandler(order_repo, catalog).handle(order_id)
        names = {i.product_id: i.name for i in dto.items}
        assert names == {1: "Widget", 2: "Unavailable product"}

    def test_custom_placeholder(self):
        order_repo, catalog, order_id = _setup()
        catalog.remove(2)

        handler = ShowOrderHandler(order_repo, catalog, placeholder_name="(removed)")
        names = {i.product_id: i.name for i in handler.handle(order_id).items}
        assert names[2] == "(removed)"

    def test_fail_policy(self):
        order_repo, catalog, order_id = _setup()
        catalog.remove(2)

        handler = ShowOrderHandler(
            order_repo, catalog, missing_product_policy=MissingProductPolicy.FAIL
        )
        with pytest.raises(ProductNotFound, match="Product 2"):
            handler.handle(order_id)
