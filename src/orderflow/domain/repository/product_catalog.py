"""Abstract gateway to the remote product catalog.

The catalog is owned by another service; the only question this system
asks it is "which of these ids exist, and what are their names and
prices right now?".
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from orderflow.domain.model.product import ProductRecord


class ProductCatalog(ABC):

    @abstractmethod
    def resolve(self, product_ids: set[int]) -> dict[int, ProductRecord]:
        """Resolve *product_ids* in a single round-trip.

        The result may omit ids the catalog does not know; detecting that
        is the caller's job.  Raises CatalogUnavailable when the call
        cannot complete.
        """
