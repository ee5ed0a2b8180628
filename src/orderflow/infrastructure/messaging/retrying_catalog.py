"""Retry wrapper around a ProductCatalog.

The catalog client itself never retries; wrapping it is an explicit
deployment choice made in the composition root.
"""

from __future__ import annotations

import time
from collections.abc import Callable

import structlog

from orderflow.domain.exceptions import CatalogUnavailable
from orderflow.domain.model.product import ProductRecord
from orderflow.domain.repository.product_catalog import ProductCatalog

logger = structlog.get_logger(__name__)


class RetryingProductCatalog(ProductCatalog):

    def __init__(
        self,
        inner: ProductCatalog,
        retries: int,
        backoff: float = 0.5,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._inner = inner
        self._retries = retries
        self._backoff = backoff
        self._sleep = sleep

    def resolve(self, product_ids: set[int]) -> dict[int, ProductRecord]:
        attempt = 0
        while True:
            try:
                return self._inner.resolve(product_ids)
            except CatalogUnavailable as exc:
                if attempt >= self._retries:
                    raise
                attempt += 1
                logger.warning(
                    "Catalog unavailable, retrying",
                    attempt=attempt,
                    retries=self._retries,
                    error=str(exc),
                )
                self._sleep(self._backoff)
