"""RabbitMQ RPC server exposing the order endpoint.

Requests arrive on the orders queue as ``{"pattern": ..., "data": ...}``
and the endpoint's answer is published to the request's ``reply_to``
queue under the same correlation id.
"""

from __future__ import annotations

import json
import time
from collections.abc import Callable
from http import HTTPStatus

import pika
import pika.exceptions
import structlog

from orderflow.domain.exceptions import ValidationError
from orderflow.infrastructure.messaging.order_endpoint import OrderEndpoint

logger = structlog.get_logger(__name__)

INTERNAL_ERROR = {
    "kind": "InternalError",
    "status": int(HTTPStatus.INTERNAL_SERVER_ERROR),
    "message": "Internal server error",
}


class OrderRpcServer:

    def __init__(
        self,
        parameters: pika.connection.Parameters,
        queue: str,
        endpoint: OrderEndpoint,
        connection_factory: Callable[[pika.connection.Parameters], pika.BlockingConnection] = pika.BlockingConnection,
        reconnect_delay: float = 5.0,
    ) -> None:
        self._parameters = parameters
        self._queue = queue
        self._endpoint = endpoint
        self._connection_factory = connection_factory
        self._reconnect_delay = reconnect_delay

    def serve_forever(self) -> None:
        """Consume requests until interrupted, reconnecting when the broker drops."""
        while True:
            connection = None
            try:
                connection = self._connection_factory(self._parameters)
                channel = connection.channel()
                channel.queue_declare(queue=self._queue, durable=True)
                channel.basic_qos(prefetch_count=1)
                channel.basic_consume(queue=self._queue, on_message_callback=self._on_request)
            except pika.exceptions.AMQPError:
                # Broker may still be booting (common in Docker Compose)
                logger.warning("RabbitMQ not ready, retrying", delay=self._reconnect_delay)
                if connection is not None and connection.is_open:
                    connection.close()
                time.sleep(self._reconnect_delay)
                continue

            logger.info("Order server listening", queue=self._queue)
            try:
                channel.start_consuming()
            except KeyboardInterrupt:
                channel.stop_consuming()
                connection.close()
                return
            except pika.exceptions.AMQPConnectionError:
                logger.warning("Lost connection to RabbitMQ, reconnecting")
                continue

    def handle_message(self, body: bytes) -> bytes:
        """Decode one request, run it and encode the reply.

        Never raises: unexpected failures become a 500 error reply so one
        bad message cannot stop the consumer.
        """
        try:
            request = json.loads(body)
        except ValueError:
            reply = {"error": ValidationError("Request is not valid JSON").to_dict()}
        else:
            if not isinstance(request, dict) or not isinstance(request.get("pattern"), str):
                reply = {"error": ValidationError("Request must carry a 'pattern'").to_dict()}
            else:
                try:
                    reply = self._endpoint.dispatch(request["pattern"], request.get("data"))
                except Exception:
                    logger.exception("Order request crashed", pattern=request["pattern"])
                    reply = {"error": INTERNAL_ERROR}
        return json.dumps(reply).encode("utf-8")

    def _on_request(self, channel, method, properties, body: bytes) -> None:
        reply = self.handle_message(body)
        if properties.reply_to:
            channel.basic_publish(
                exchange="",
                routing_key=properties.reply_to,
                body=reply,
                properties=pika.BasicProperties(
                    correlation_id=properties.correlation_id,
                    content_type="application/json",
                ),
            )
        else:
            logger.warning("Dropping reply for request without reply_to")
        channel.basic_ack(delivery_tag=method.delivery_tag)
