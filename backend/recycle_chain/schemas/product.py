"""Product Schemas — catalog creation, item batches, and product views.

Invariants:
    - toxic_weights are non-negative integers
    - toxic_names entries are non-empty after stripping
    - count is passed through unbounded; the ledger owns the 1..10 window
"""

from pydantic import BaseModel, Field, field_validator

from recycle_chain.core.ledger_state import Product


class ProductCreate(BaseModel):
    """Product creation — manifest as parallel name/weight arrays."""
    name: str = Field(min_length=1, max_length=200)
    toxic_names: list[str] = Field(default_factory=list)
    toxic_weights: list[int] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v

    @field_validator("toxic_names")
    @classmethod
    def strip_toxic_names(cls, v: list[str]) -> list[str]:
        names = [n.strip() for n in v]
        if any(not n for n in names):
            raise ValueError("toxic material names cannot be empty")
        return names

    @field_validator("toxic_weights")
    @classmethod
    def non_negative_weights(cls, v: list[int]) -> list[int]:
        if any(w < 0 for w in v):
            raise ValueError("toxic material weights must be non-negative")
        return v


class ToxicItemResponse(BaseModel):
    name: str
    weight: int


class ProductResponse(BaseModel):
    id: int
    name: str
    toxic_items: list[ToxicItemResponse]
    manufacturer: str
    unit_count: int

    @classmethod
    def from_entity(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.id,
            name=product.name,
            toxic_items=[
                ToxicItemResponse(name=t.name, weight=t.weight)
                for t in product.toxic_items
            ],
            manufacturer=product.manufacturer,
            unit_count=product.unit_count,
        )


class ProductCreated(BaseModel):
    product_id: int


class ProductItemsCreate(BaseModel):
    count: int


class ProductItemsAdded(BaseModel):
    product_id: int
    item_ids: list[str]
