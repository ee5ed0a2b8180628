"""Integration tests for the ListOrders use case (pagination)."""

import pytest

from orderflow.application.create_order import CreateOrderHandler
from orderflow.application.dto import OrderItemSpec, OrderListQuery
from orderflow.application.list_orders import ListOrdersHandler
from orderflow.domain.exceptions import ValidationError
from orderflow.domain.model.order import OrderStatus
from tests.fakes import FakeOrderRepository, FakeProductCatalog, product


def _setup(order_count: int) -> tuple[ListOrdersHandler, FakeOrderRepository, list[str]]:
    order_repo = FakeOrderRepository()
    catalog = FakeProductCatalog([product(1, "Widget", "10")])
    create = CreateOrderHandler(order_repo, catalog)
    ids = [create.handle([OrderItemSpec(1, 1)]).id for _ in range(order_count)]
    return ListOrdersHandler(order_repo), order_repo, ids


class TestListOrdersPagination:

    def test_defaults(self):
        handler, _, ids = _setup(3)
        page = handler.handle(OrderListQuery())
        assert [o.id for o in page.data] == ids
        assert page.meta.current_page == 1
        assert page.meta.per_page == 10
        assert page.meta.total_pages == 1
        assert page.meta.next_page is None
        assert page.meta.previous_page is None

    def test_total_pages_rounds_up(self):
        handler, _, _ = _setup(25)
        page = handler.handle(OrderListQuery(limit=10))
        assert page.meta.total_items == 25
        assert page.meta.total_pages == 3
        assert page.meta.next_page == 2
        assert page.meta.previous_page is None

    def test_last_page(self):
        handler, _, ids = _setup(25)
        page = handler.handle(OrderListQuery(page=3, limit=10))
        assert [o.id for o in page.data] == ids[20:]
        assert page.meta.next_page is None
        assert page.meta.previous_page == 2

    def test_middle_page(self):
        handler, _, ids = _setup(25)
        page = handler.handle(OrderListQuery(page=2, limit=10))
        assert [o.id for o in page.data] == ids[10:20]
        assert page.meta.next_page == 3
        assert page.meta.previous_page == 1

    def test_page_beyond_end_is_empty_with_meta(self):
        handler, _, _ = _setup(5)
        page = handler.handle(OrderListQuery(page=4, limit=2))
        assert page.data == []
        assert page.meta.total_items == 5
        assert page.meta.total_pages == 3
        assert page.meta.current_page == 4
        assert page.meta.next_page is None
        assert page.meta.previous_page == 3

    def test_no_orders(self):
        handler, _, _ = _setup(0)
        page = handler.handle(OrderListQuery())
        assert page.data == []
        assert page.meta.total_items == 0
        assert page.meta.total_pages == 0
        assert page.meta.next_page is None

    def test_repeated_calls_are_stable(self):
        handler, _, _ = _setup(7)
        first = handler.handle(OrderListQuery(page=2, limit=3))
        second = handler.handle(OrderListQuery(page=2, limit=3))
        assert first == second


class TestListOrdersStatusFilter:

    def test_filters_by_status(self):
        handler, order_repo, ids = _setup(4)
        order_repo.update_status(ids[1], OrderStatus.PAID)
        order_repo.update_status(ids[3], OrderStatus.PAID)

        page = handler.handle(OrderListQuery(status="PAID"))
        assert [o.id for o in page.data] == [ids[1], ids[3]]
        assert page.meta.total_items == 2

    def test_unknown_status_rejected(self):
        handler, _, _ = _setup(1)
        with pytest.raises(ValidationError, match="Invalid order status"):
            handler.handle(OrderListQuery(status="LOST"))


class TestListOrdersValidation:

    @pytest.mark.parametrize("page,limit", [(0, 10), (1, 0), (-1, 5)])
    def test_non_positive_window_rejected(self, page, limit):
        handler, _, _ = _setup(1)
        with pytest.raises(ValidationError, match="greater than or equal to 1"):
            handler.handle(OrderListQuery(page=page, limit=limit))
