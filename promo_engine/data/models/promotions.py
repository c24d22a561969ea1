from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class PromotionKind(str, Enum):
    """Which authoring form produced the promotion."""
    COMBO = "COMBO"
    NXM = "NXM"


class DiscountType(str, Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED_AMOUNT = "FIXED_AMOUNT"


class LifecycleState(str, Enum):
    """Validity status of a promotion at a given instant. Never stored."""
    INACTIVE = "INACTIVE"
    SCHEDULED = "SCHEDULED"
    ACTIVE = "ACTIVE"
    EXPIRED = "EXPIRED"


class PromotionDetailLine(BaseModel):
    """One catalog item taking part in a promotion."""
    model_config = ConfigDict(frozen=True)

    item_id: int = Field(description="Referenced catalog item")
    quantity: int = Field(default=1, ge=1, description="Units of the item in the bundle")


class PromotionImage(BaseModel):
    """Display-only attachment. The engine carries it through untouched."""
    model_config = ConfigDict(frozen=True)

    image_id: Optional[int] = Field(default=None, description="Identifier assigned by the image service")
    url: str = Field(description="Public URL of the image")
    denomination: str = Field(default="", description="Alt text / caption")


class Promotion(BaseModel):
    """
    Canonical promotion record.

    Both authoring shapes (combo and N×M) normalize into this one model.
    Instances are immutable: edits go through authoring and produce a new
    record that replaces the old one in the store.
    """
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = Field(default=None, description="Store-assigned identifier, None until persisted")
    denomination: str = Field(min_length=3, description="Promotion name")
    description: Optional[str] = Field(default=None, description="Free text describing the discount")
    kind: PromotionKind = Field(description="Authoring shape the record came from")
    discount_type: DiscountType = Field(description="How discount_value is applied")
    discount_value: float = Field(ge=0, description="Percentage (0-100) or currency amount")
    minimum_quantity: int = Field(ge=1, description="Units required to trigger the promotion")
    valid_from: datetime = Field(description="First instant the promotion applies")
    valid_until: datetime = Field(description="Last instant the promotion applies")
    enabled_by_admin: bool = Field(default=True, description="Manual on/off override")
    detail_lines: Tuple[PromotionDetailLine, ...] = Field(min_length=1, description="Items in the promotion, in authoring order")
    images: Tuple[PromotionImage, ...] = Field(default=(), description="Display-only attachments")

    def item_ids(self) -> List[int]:
        return [line.item_id for line in self.detail_lines]

    def references(self, item_id: int) -> bool:
        return any(line.item_id == item_id for line in self.detail_lines)

    def to_record(self) -> dict:
        """The draft record shape a store expects for create/update (no id)."""
        return self.model_dump(exclude={"id"})
