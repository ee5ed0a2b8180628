"""RabbitMQ request/reply client for the product catalog service.

Each ``resolve`` call opens a connection, declares an exclusive reply
queue, publishes the id list to the catalog's command queue and waits a
bounded time for the correlated answer.
"""

from __future__ import annotations

import json
import time
import uuid
from collections.abc import Callable

import pika
import pika.exceptions
import structlog

from orderflow.domain.exceptions import CatalogUnavailable, ValidationError
from orderflow.domain.model.product import ProductRecord
from orderflow.domain.model.value_objects import Money
from orderflow.domain.repository.product_catalog import ProductCatalog

logger = structlog.get_logger(__name__)


class RabbitMQProductCatalog(ProductCatalog):

    def __init__(
        self,
        parameters: pika.connection.Parameters,
        routing_key: str = "validate_product",
        timeout: float = 5.0,
        connection_factory: Callable[[pika.connection.Parameters], pika.BlockingConnection] = pika.BlockingConnection,
    ) -> None:
        self._parameters = parameters
        self._routing_key = routing_key
        self._timeout = timeout
        self._connection_factory = connection_factory

    def resolve(self, product_ids: set[int]) -> dict[int, ProductRecord]:
        if not product_ids:
            return {}

        body = self._call(json.dumps(sorted(product_ids)))
        records = self._parse_reply(body)
        return {pid: record for pid, record in records.items() if pid in product_ids}

    # --- Transport ------------------------------------------------------------

    def _call(self, payload: str) -> bytes:
        correlation_id = str(uuid.uuid4())
        replies: list[bytes] = []

        def on_reply(_channel, _method, properties, body: bytes) -> None:
            if properties.correlation_id == correlation_id:
                replies.append(body)

        try:
            connection = self._connection_factory(self._parameters)
        except pika.exceptions.AMQPError as exc:
            raise CatalogUnavailable(f"Cannot connect to catalog broker: {exc!r}") from exc

        try:
            channel = connection.channel()
            result = channel.queue_declare(queue="", exclusive=True)
            reply_queue = result.method.queue
            channel.basic_consume(
                queue=reply_queue, on_message_callback=on_reply, auto_ack=True
            )
            channel.basic_publish(
                exchange="",
                routing_key=self._routing_key,
                body=payload,
                properties=pika.BasicProperties(
                    reply_to=reply_queue,
                    correlation_id=correlation_id,
                    content_type="application/json",
                    expiration=str(int(self._timeout * 1000)),
                ),
            )

            deadline = time.monotonic() + self._timeout
            while not replies:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    logger.warning(
                        "Catalog request timed out",
                        routing_key=self._routing_key,
                        timeout=self._timeout,
                    )
                    raise CatalogUnavailable(
                        f"Catalog did not reply within {self._timeout:g}s"
                    )
                connection.process_data_events(time_limit=remaining)
        except pika.exceptions.AMQPError as exc:
            raise CatalogUnavailable(f"Catalog request failed: {exc!r}") from exc
        finally:
            if connection.is_open:
                connection.close()

        return replies[0]

    # --- Reply decoding -------------------------------------------------------

    @staticmethod
    def _parse_reply(body: bytes) -> dict[int, ProductRecord]:
        try:
            raw = json.loads(body)
        except ValueError as exc:
            raise CatalogUnavailable("Catalog reply is not valid JSON") from exc

        if isinstance(raw, dict) and "error" in raw:
            raise CatalogUnavailable(f"Catalog replied with an error: {raw['error']}")
        if not isinstance(raw, list):
            raise CatalogUnavailable("Catalog reply must be a list of products")

        records: dict[int, ProductRecord] = {}
        for entry in raw:
            try:
                record = ProductRecord(
                    id=int(entry["id"]),
                    name=str(entry["name"]),
                    price=Money.of(entry["price"]).rounded(),
                )
            except (KeyError, TypeError, ValueError, ArithmeticError, ValidationError) as exc:
                raise CatalogUnavailable(f"Malformed product in catalog reply: {entry!r}") from exc
            records[record.id] = record
        return records
