from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SellableItem(BaseModel):
    """Snapshot of a menu item as returned by the catalog lookup."""
    model_config = ConfigDict(frozen=True)

    item_id: int = Field(description="Unique catalog item identifier")
    display_name: str = Field(description="Item name shown to customers")
    unit_price: float = Field(ge=0, description="Current selling price of one unit")
