"""Integration tests for the ChangeOrderStatus use case."""

import pytest

from orderflow.application.change_order_status import ChangeOrderStatusHandler
from orderflow.application.create_order import CreateOrderHandler
from orderflow.application.dto import OrderItemSpec
from orderflow.domain.exceptions import OrderNotFound, ValidationError
from orderflow.domain.model.order import OrderStatus
from tests.fakes import FakeOrderRepository, FakeProductCatalog, product


def _setup():
    order_repo = FakeOrderRepository()
    catalog = FakeProductCatalog([product(1, "Widget", "10")])
    dto = CreateOrderHandler(order_repo, catalog).handle([OrderItemSpec(1, 2)])
    catalog.calls.clear()
    return order_repo, catalog, dto.id


class TestChangeOrderStatus:

    def test_updates_status(self):
        order_repo, _, order_id = _setup()
        dto = ChangeOrderStatusHandler(order_repo).handle(order_id, "PAID")
        assert dto.status == "PAID"
        assert order_repo.get_by_id(order_id).status == OrderStatus.PAID

    def test_same_status_twice_is_idempotent(self):
        order_repo, _, order_id = _setup()
        handler = ChangeOrderStatusHandler(order_repo)

        first = handler.handle(order_id, "DELIVERED")
        writes = order_repo.writes
        second = handler.handle(order_id, "DELIVERED")

        assert second == first
        assert order_repo.writes == writes

    def test_current_status_performs_no_write(self):
        order_repo, _, order_id = _setup()
        writes = order_repo.writes
        dto = ChangeOrderStatusHandler(order_repo).handle(order_id, "PENDING")
        assert dto.status == "PENDING"
        assert order_repo.writes == writes

    def test_totals_unchanged(self):
        order_repo, _, order_id = _setup()
        dto = ChangeOrderStatusHandler(order_repo).handle(order_id, "CANCELLED")
        assert dto.total_items == 2
        assert str(dto.total_amount) == "20.00"

    def test_backward_transition_accepted_by_default(self):
        order_repo, _, order_id = _setup()
        handler = ChangeOrderStatusHandler(order_repo)
        handler.handle(order_id, "DELIVERED")
        assert handler.handle(order_id, "PENDING").status == "PENDING"

    def test_does_not_call_catalog(self):
        order_repo, catalog, order_id = _setup()
        ChangeOrderStatusHandler(order_repo).handle(order_id, "PAID")
        assert catalog.calls == []


class TestChangeOrderStatusErrors:

    def test_unknown_order(self):
        order_repo, _, _ = _setup()
        with pytest.raises(OrderNotFound):
            ChangeOrderStatusHandler(order_repo).handle("missing", "PAID")

    def test_unknown_status(self):
        order_repo, _, order_id = _setup()
        with pytest.raises(ValidationError, match="Invalid order status"):
            ChangeOrderStatusHandler(order_repo).handle(order_id, "SHIPPED")


class TestTransitionTable:

    TABLE = {
        OrderStatus.PENDING: {OrderStatus.PAID, OrderStatus.CANCELLED},
        OrderStatus.PAID: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    }

    def test_listed_transition_accepted(self):
        order_repo, _, order_id = _setup()
        handler = ChangeOrderStatusHandler(order_repo, transitions=self.TABLE)
        assert handler.handle(order_id, "PAID").status == "PAID"
        assert handler.handle(order_id, "DELIVERED").status == "DELIVERED"

    def test_unlisted_transition_rejected_without_write(self):
        order_repo, _, order_id = _setup()
        handler = ChangeOrderStatusHandler(order_repo, transitions=self.TABLE)
        writes = order_repo.writes
        with pytest.raises(ValidationError, match="from PENDING to DELIVERED"):
            handler.handle(order_id, "DELIVERED")
        assert order_repo.writes == writes
        assert order_repo.get_by_id(order_id).status == OrderStatus.PENDING
