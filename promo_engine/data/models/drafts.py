from __future__ import annotations

from datetime import date
from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter, computed_field

from promo_engine.config import get_config

from .promotions import DiscountType, PromotionImage


def _default_time_from() -> str:
    return get_config().default_time_from


def _default_time_until() -> str:
    return get_config().default_time_until


def _default_discount_value() -> float:
    return get_config().default_discount_value


def _date_to_text(value):
    # Form widgets hand over strings; accept real dates too.
    if isinstance(value, date):
        return value.isoformat()
    return value


DateText = Annotated[str, BeforeValidator(_date_to_text)]


class DetailLineDraft(BaseModel):
    """A line being edited in the combo form. Quantity is checked on validation, not here."""
    model_config = ConfigDict(frozen=True)

    item_id: int
    quantity: int = 1


class ComboDraft(BaseModel):
    """Combo form contents: a fixed bundle of items at a single discount."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["COMBO"] = "COMBO"
    denomination: str = ""
    description: Optional[str] = None
    valid_from_date: DateText = ""
    valid_from_time: str = Field(default_factory=_default_time_from)
    valid_until_date: DateText = ""
    valid_until_time: str = Field(default_factory=_default_time_until)
    discount_type: DiscountType = DiscountType.PERCENTAGE
    discount_value: float = Field(default_factory=_default_discount_value)
    enabled_by_admin: bool = True
    detail_lines: Tuple[DetailLineDraft, ...] = ()
    images: Tuple[PromotionImage, ...] = ()

    @computed_field
    @property
    def minimum_quantity(self) -> int:
        """Units needed to trigger the combo, derived from the current lines."""
        return max(1, sum(line.quantity for line in self.detail_lines))


class NxMDraft(BaseModel):
    """N×M form contents: take `buy` units from the eligible set, pay for `pay`."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["NXM"] = "NXM"
    denomination: str = ""
    description: Optional[str] = None
    valid_from_date: DateText = ""
    valid_from_time: str = Field(default_factory=_default_time_from)
    valid_until_date: DateText = ""
    valid_until_time: str = Field(default_factory=_default_time_until)
    enabled_by_admin: bool = True
    buy: int = 2
    pay: int = 1
    eligible_item_ids: Tuple[int, ...] = ()
    images: Tuple[PromotionImage, ...] = ()


PromotionDraft = Annotated[Union[ComboDraft, NxMDraft], Field(discriminator="kind")]

_draft_adapter: TypeAdapter[PromotionDraft] = TypeAdapter(PromotionDraft)


def parse_draft(data: dict) -> Union[ComboDraft, NxMDraft]:
    """Build the right draft variant from raw form data using its `kind` tag."""
    return _draft_adapter.validate_python(data)
