"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import pika
from sqlalchemy import Engine

from orderflow.application.change_order_status import ChangeOrderStatusHandler
from orderflow.application.create_order import CreateOrderHandler
from orderflow.application.list_orders import ListOrdersHandler
from orderflow.application.show_order import ShowOrderHandler
from orderflow.domain.repository.product_catalog import ProductCatalog
from orderflow.infrastructure.config import Settings
from orderflow.infrastructure.messaging.catalog_client import RabbitMQProductCatalog
from orderflow.infrastructure.messaging.order_endpoint import OrderEndpoint
from orderflow.infrastructure.messaging.order_server import OrderRpcServer
from orderflow.infrastructure.messaging.retrying_catalog import RetryingProductCatalog
from orderflow.infrastructure.persistence.database import (
    create_database_engine,
    create_session_factory,
)
from orderflow.infrastructure.persistence.sqlalchemy_order_repository import (
    SqlAlchemyOrderRepository,
)


@lru_cache(maxsize=1)
def settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=1)
def engine() -> Engine:
    url = settings().database_url
    if url.startswith("sqlite:///"):
        Path(url.removeprefix("sqlite:///")).parent.mkdir(parents=True, exist_ok=True)
    return create_database_engine(url)


def order_repository() -> SqlAlchemyOrderRepository:
    return SqlAlchemyOrderRepository(create_session_factory(engine()))


def product_catalog() -> ProductCatalog:
    config = settings()
    catalog: ProductCatalog = RabbitMQProductCatalog(
        pika.URLParameters(config.rabbitmq_url),
        routing_key=config.catalog_routing_key,
        timeout=config.catalog_timeout,
    )
    if config.catalog_retries > 0:
        catalog = RetryingProductCatalog(
            catalog,
            retries=config.catalog_retries,
            backoff=config.catalog_retry_backoff,
        )
    return catalog


def create_order_handler() -> CreateOrderHandler:
    return CreateOrderHandler(order_repository(), product_catalog())


def list_orders_handler() -> ListOrdersHandler:
    return ListOrdersHandler(order_repository())


def show_order_handler() -> ShowOrderHandler:
    return ShowOrderHandler(
        order_repository(),
        product_catalog(),
        missing_product_policy=settings().missing_product_policy,
    )


def change_order_status_handler() -> ChangeOrderStatusHandler:
    return ChangeOrderStatusHandler(order_repository())


def order_endpoint() -> OrderEndpoint:
    return OrderEndpoint(
        create_order=create_order_handler(),
        list_orders=list_orders_handler(),
        show_order=show_order_handler(),
        change_status=change_order_status_handler(),
    )


def order_server() -> OrderRpcServer:
    config = settings()
    return OrderRpcServer(
        pika.URLParameters(config.rabbitmq_url),
        queue=config.orders_queue,
        endpoint=order_endpoint(),
    )
