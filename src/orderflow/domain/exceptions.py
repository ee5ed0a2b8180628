"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the inbound endpoint and the CLI can catch them uniformly.  Each concrete
error carries a machine-readable ``kind`` and a status classification that
callers map onto their transport (HTTP-like codes).
"""

from __future__ import annotations

from http import HTTPStatus


class DomainException(Exception):
    """Base class for all domain errors."""

    status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR

    @property
    def kind(self) -> str:
        return type(self).__name__

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "status": int(self.status),
            "message": str(self),
        }


class ValidationError(DomainException):
    """Malformed input or a violated business rule."""

    status = HTTPStatus.BAD_REQUEST


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    status = HTTPStatus.NOT_FOUND


class ProductNotFound(EntityNotFoundError):

    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class OrderNotFound(EntityNotFoundError):

    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order with ID {order_id} not found")
        self.order_id = order_id


class CatalogUnavailable(DomainException):
    """The catalog round-trip could not complete."""

    status = HTTPStatus.SERVICE_UNAVAILABLE


class StoreError(DomainException):
    """Persistence failure translated out of the storage engine.

    ``operation`` and ``entity_id`` identify what was being attempted so the
    message is useful without the underlying driver exception.
    """

    action = "access"

    def __init__(self, operation: str, entity_id: str | None = None) -> None:
        target = f" (order {entity_id})" if entity_id is not None else ""
        super().__init__(f"Failed to {self.action} store during {operation}{target}")
        self.operation = operation
        self.entity_id = entity_id


class StoreWriteFailed(StoreError):
    action = "write to"


class StoreReadFailed(StoreError):
    action = "read from"
