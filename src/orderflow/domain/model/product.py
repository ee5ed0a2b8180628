"""Product records as returned by the catalog service.

The catalog owns products; this system never persists them.  A
ProductRecord is a read-time snapshot used to price new orders and to
enrich order responses with product names.
"""

from __future__ import annotations

from dataclasses import dataclass

from orderflow.domain.model.value_objects import Money


@dataclass(frozen=True)
class ProductRecord:

    id: int
    name: str
    price: Money
