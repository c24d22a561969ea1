from __future__ import annotations

from pydantic import BaseModel, Field

from .catalog import SellableItem
from .promotions import Promotion


class PromotionTotals(BaseModel):
    """Prices of a whole promotion bundle, before and after its discount."""
    original_total: float = Field(ge=0, description="Sum of quantity x unit price over every line")
    discounted_total: float = Field(description="What the customer pays for the bundle")
    savings: float = Field(description="original_total - discounted_total")


class BestOffer(BaseModel):
    """The single promotion advertised for one catalog item."""
    item: SellableItem = Field(description="The item the offer was resolved for")
    promotion: Promotion = Field(description="Winning promotion")
    normalized_discount: float = Field(description="Discount as a percentage of the item's unit price")
    label: str = Field(description="Badge text, e.g. '20% OFF'")
    unit_price_after_discount: float = Field(ge=0, description="Per-unit price once the discount applies")
