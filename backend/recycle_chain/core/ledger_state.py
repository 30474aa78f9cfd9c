"""Ledger State — immutable snapshot of every manufacturer, product and product item.

Invariants:
    - At most one Manufacturer per identity; records never change once created
    - Product ids are sequential from 1 (next_product_id) and never reused
    - Product.unit_count equals the number of items created for that product
    - sequence is the position of the last accepted operation (0 = empty ledger)
    - A LedgerState is never mutated after construction; ledger.apply builds a new one

Design Decisions:
    - Frozen dataclasses + read-only copy-on-write maps: readers hold a consistent snapshot
      without locking, writers never expose a half-applied batch
    - Only the dicts an operation touches are copied; untouched maps are shared
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from recycle_chain.core.domain_types import (
    EventKind, Identity, ProductId, ProductItemId, ProductStatus,
)


@dataclass(frozen=True)
class Manufacturer:
    """Registered manufacturer profile."""
    identity: Identity
    name: str
    location: str
    contact: str


@dataclass(frozen=True)
class ToxicItem:
    """One entry of a product's toxic-material manifest."""
    name: str
    weight: int


@dataclass(frozen=True)
class Product:
    """Catalog entry owned by exactly one manufacturer."""
    id: ProductId
    name: str
    toxic_items: tuple[ToxicItem, ...]
    manufacturer: Identity
    unit_count: int = 0


@dataclass(frozen=True)
class ProductItem:
    """One physical, individually tracked unit of a product."""
    id: ProductItemId
    product_id: ProductId
    status: ProductStatus = ProductStatus.MANUFACTURED


def _freeze_value(value: Any) -> Any:
    return tuple(value) if isinstance(value, list) else value


@dataclass(frozen=True)
class LedgerEvent:
    """Immutable fact stamped with the sequence of the operation that produced it.

    The payload is stored read-only with lists turned into tuples, so events
    handed to readers cannot rewrite the log.
    """
    sequence: int
    kind: EventKind
    payload: Mapping[str, Any]

    def __post_init__(self):
        if not isinstance(self.payload, MappingProxyType):
            object.__setattr__(self, "payload", MappingProxyType({
                key: _freeze_value(value) for key, value in self.payload.items()
            }))

    def to_dict(self) -> dict:
        """JSON-safe copy: tuples become lists again."""
        return {
            "sequence": self.sequence,
            "kind": self.kind.value,
            "payload": {
                key: list(value) if isinstance(value, tuple) else value
                for key, value in self.payload.items()
            },
        }


@dataclass(frozen=True)
class LedgerState:
    """Complete ledger snapshot, pure data, no IO.

    The three maps are read-only views; a plain dict passed in is wrapped on
    construction.
    """

    manufacturers: Mapping[Identity, Manufacturer] = field(default_factory=dict)
    products: Mapping[ProductId, Product] = field(default_factory=dict)
    items: Mapping[ProductItemId, ProductItem] = field(default_factory=dict)
    next_product_id: int = 1
    sequence: int = 0

    def __post_init__(self):
        for name in ("manufacturers", "products", "items"):
            value = getattr(self, name)
            if not isinstance(value, MappingProxyType):
                object.__setattr__(self, name, MappingProxyType(dict(value)))

    # --- Computed properties ---------------------------------------------------

    @property
    def product_count(self) -> int:
        return len(self.products)

    @property
    def item_count(self) -> int:
        return len(self.items)
