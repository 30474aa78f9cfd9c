"""Product Item Schemas — batch transitions and item views."""

from pydantic import BaseModel, Field

from recycle_chain.core.domain_types import ProductStatus
from recycle_chain.core.ledger_state import ProductItem
from recycle_chain.core.lifecycle import next_action


class ProductItemBatch(BaseModel):
    """Batch of item ids for sell/return/recycle. Applied all-or-nothing."""
    item_ids: list[str] = Field(max_length=1000)


class ProductItemAdvance(ProductItemBatch):
    """Advance items one step from the status the caller last saw."""
    current_status: ProductStatus


class ProductItemResponse(BaseModel):
    id: str
    product_id: int
    status: ProductStatus
    status_ordinal: int
    next_action: str | None = None

    @classmethod
    def from_entity(cls, item: ProductItem) -> "ProductItemResponse":
        action = next_action(item.status)
        return cls(
            id=item.id,
            product_id=item.product_id,
            status=item.status,
            status_ordinal=item.status.ordinal,
            next_action=action.value if action else None,
        )


class StatusChanged(BaseModel):
    item_ids: list[str]
    new_status: ProductStatus
    new_status_ordinal: int

    @classmethod
    def of(cls, item_ids: list[str], new_status: ProductStatus) -> "StatusChanged":
        return cls(
            item_ids=item_ids,
            new_status=new_status,
            new_status_ordinal=new_status.ordinal,
        )
