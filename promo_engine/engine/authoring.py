"""
Promotion authoring.

Turns the two admin form shapes (combo and N×M) into canonical Promotion
records. Validation collects every violated rule before reporting, so a form
can show all of its inline messages in one pass.
"""
from __future__ import annotations

import math
import re
from datetime import date, datetime, time
from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated, List, Tuple, Type, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, ValidationError
from pydantic_core import PydanticCustomError

from ..data.models import (
    ComboDraft,
    DetailLineDraft,
    DiscountType,
    NxMDraft,
    Promotion,
    PromotionDetailLine,
    PromotionKind,
)
from ..errors import FieldError, PromotionValidationError
from ..logging import get_logger

logger = get_logger(__name__)

MIN_DENOMINATION_LENGTH = 3
MIN_NXM_BUY = 2
MIN_NXM_PAY = 1
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


# ---------- numeric / time helpers ----------

def round_half_up(value: Union[Decimal, float, int]) -> int:
    """Round to the nearest integer, halves away from zero (12.5 -> 13)."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def nxm_discount_percentage(buy: int, pay: int) -> int:
    """Percentage that makes `buy` units cost what `pay` units cost."""
    return round_half_up(Decimal(buy - pay) * 100 / Decimal(buy))


def parse_time(value: str) -> time:
    match = TIME_PATTERN.match(value.strip())
    if not match:
        raise ValueError(f"Invalid time {value!r}, expected HH:MM")
    return time(int(match.group(1)), int(match.group(2)))


def combine_instant(date_text: str, time_text: str) -> datetime:
    """Combine the separate date and time form fields into one instant."""
    return datetime.combine(date.fromisoformat(date_text.strip()), parse_time(time_text))


def split_instant(instant: datetime) -> Tuple[str, str]:
    return instant.date().isoformat(), instant.strftime("%H:%M")


# ---------- field rules ----------

def _check_denomination(value: str) -> str:
    if len(value.strip()) < MIN_DENOMINATION_LENGTH:
        raise PydanticCustomError(
            "denomination_too_short",
            f"Denomination is required (at least {MIN_DENOMINATION_LENGTH} characters)",
        )
    return value


def _check_optional_denomination(value: str) -> str:
    # Blank means "let the N×M normalization name it".
    if value.strip():
        _check_denomination(value)
    return value


def _check_date(value: str) -> str:
    try:
        date.fromisoformat(value.strip())
    except ValueError:
        raise PydanticCustomError("invalid_date", "Invalid date (expected YYYY-MM-DD)") from None
    return value


def _check_time(value: str) -> str:
    if not TIME_PATTERN.match(value.strip()):
        raise PydanticCustomError("invalid_time", "Invalid time (expected HH:MM)")
    return value


def _check_non_negative(value: float) -> float:
    if not math.isfinite(value):
        raise PydanticCustomError("non_finite_discount", "The discount value must be a finite number")
    if value < 0:
        raise PydanticCustomError("negative_discount", "The discount value must be zero or positive")
    return value


def _check_quantity(value: int) -> int:
    if value < 1:
        raise PydanticCustomError("quantity_too_low", "Quantity must be at least 1")
    return value


def _check_lines(lines: tuple) -> tuple:
    if not lines:
        raise PydanticCustomError("no_lines", "Select at least one item for the combo")
    item_ids = [line.item_id for line in lines]
    if len(set(item_ids)) != len(item_ids):
        raise PydanticCustomError("duplicate_lines", "Each item can appear only once in a combo")
    return lines


def _check_buy(value: int) -> int:
    if value < MIN_NXM_BUY:
        raise PydanticCustomError("buy_too_low", f"The customer must take {MIN_NXM_BUY} or more units")
    return value


def _check_pay(value: int) -> int:
    if value < MIN_NXM_PAY:
        raise PydanticCustomError("pay_too_low", f"The customer must pay for at least {MIN_NXM_PAY} unit")
    return value


def _check_eligible(values: tuple) -> tuple:
    if not values:
        raise PydanticCustomError("no_items", "Select at least one item")
    return values


Denomination = Annotated[str, AfterValidator(_check_denomination)]
OptionalDenomination = Annotated[str, AfterValidator(_check_optional_denomination)]
DateField = Annotated[str, AfterValidator(_check_date)]
TimeField = Annotated[str, AfterValidator(_check_time)]


class _LineRules(BaseModel):
    model_config = ConfigDict(extra="ignore")

    item_id: int
    quantity: Annotated[int, AfterValidator(_check_quantity)]


class _ComboRules(BaseModel):
    model_config = ConfigDict(extra="ignore")

    denomination: Denomination
    valid_from_date: DateField
    valid_from_time: TimeField
    valid_until_date: DateField
    valid_until_time: TimeField
    discount_type: DiscountType
    discount_value: Annotated[float, AfterValidator(_check_non_negative)]
    detail_lines: Annotated[Tuple[_LineRules, ...], AfterValidator(_check_lines)]


class _NxMRules(BaseModel):
    model_config = ConfigDict(extra="ignore")

    denomination: OptionalDenomination
    valid_from_date: DateField
    valid_from_time: TimeField
    valid_until_date: DateField
    valid_until_time: TimeField
    buy: Annotated[int, AfterValidator(_check_buy)]
    pay: Annotated[int, AfterValidator(_check_pay)]
    eligible_item_ids: Annotated[Tuple[int, ...], AfterValidator(_check_eligible)]


def _field_errors(rules: Type[BaseModel], draft: BaseModel) -> List[FieldError]:
    try:
        rules.model_validate(draft.model_dump())
    except ValidationError as exc:
        return [
            FieldError(field=".".join(str(part) for part in err["loc"]), message=err["msg"])
            for err in exc.errors()
        ]
    return []


def _window_errors(draft: Union[ComboDraft, NxMDraft]) -> List[FieldError]:
    # Only comparable once both ends parse; unparseable ends already have their own error.
    try:
        valid_from = combine_instant(draft.valid_from_date, draft.valid_from_time)
        valid_until = combine_instant(draft.valid_until_date, draft.valid_until_time)
    except ValueError:
        return []
    if valid_until <= valid_from:
        return [FieldError(field="valid_until_date", message="The end date and time must be after the start")]
    return []


# ---------- combo ----------

def check_combo(draft: ComboDraft) -> List[FieldError]:
    """Every rule the combo draft violates, in field order. Empty means valid."""
    errors = _field_errors(_ComboRules, draft)
    errors += _window_errors(draft)
    if draft.discount_type == DiscountType.PERCENTAGE and draft.discount_value > 100:
        errors.append(FieldError(field="discount_value", message="A percentage discount cannot exceed 100"))
    return errors


def normalize_combo(draft: ComboDraft) -> Promotion:
    return Promotion(
        denomination=draft.denomination.strip(),
        description=(draft.description or "").strip() or None,
        kind=PromotionKind.COMBO,
        discount_type=draft.discount_type,
        discount_value=draft.discount_value,
        minimum_quantity=draft.minimum_quantity,
        valid_from=combine_instant(draft.valid_from_date, draft.valid_from_time),
        valid_until=combine_instant(draft.valid_until_date, draft.valid_until_time),
        enabled_by_admin=draft.enabled_by_admin,
        detail_lines=[PromotionDetailLine(item_id=line.item_id, quantity=line.quantity) for line in draft.detail_lines],
        images=draft.images,
    )


def validate_combo(draft: ComboDraft) -> Promotion:
    """
    Validate a combo draft and build its canonical record.

    Raises:
        PromotionValidationError: with every violated rule, when the draft is invalid.
    """
    errors = check_combo(draft)
    if errors:
        logger.debug(f"Combo draft '{draft.denomination}' rejected with {len(errors)} error(s)")
        raise PromotionValidationError(errors)
    return normalize_combo(draft)


# ---------- N×M ----------

def check_nxm(draft: NxMDraft) -> List[FieldError]:
    """Every rule the N×M draft violates. Empty means valid."""
    errors = _field_errors(_NxMRules, draft)
    errors += _window_errors(draft)
    if draft.pay >= draft.buy:
        errors.append(FieldError(field="pay", message="The units paid must be fewer than the units taken"))
    return errors


def normalize_nxm(draft: NxMDraft) -> Promotion:
    """
    Express "take N, pay M" as a flat percentage over the eligible items.

    The conversion is lossy: the stored record cannot be told apart from a
    percentage combo with the same lines.
    """
    label = f"Promotion {draft.buy}x{draft.pay}"
    eligible = tuple(dict.fromkeys(draft.eligible_item_ids))
    return Promotion(
        denomination=draft.denomination.strip() or label,
        description=(draft.description or "").strip() or label,
        kind=PromotionKind.NXM,
        discount_type=DiscountType.PERCENTAGE,
        discount_value=nxm_discount_percentage(draft.buy, draft.pay),
        minimum_quantity=draft.buy,
        valid_from=combine_instant(draft.valid_from_date, draft.valid_from_time),
        valid_until=combine_instant(draft.valid_until_date, draft.valid_until_time),
        enabled_by_admin=draft.enabled_by_admin,
        detail_lines=[PromotionDetailLine(item_id=item_id, quantity=1) for item_id in eligible],
        images=draft.images,
    )


def validate_nxm(draft: NxMDraft) -> Promotion:
    """
    Validate an N×M draft and build its canonical record.

    Raises:
        PromotionValidationError: with every violated rule, when the draft is invalid.
    """
    errors = check_nxm(draft)
    if errors:
        logger.debug(f"NxM draft '{draft.denomination}' rejected with {len(errors)} error(s)")
        raise PromotionValidationError(errors)
    return normalize_nxm(draft)


# ---------- dispatch on the draft tag ----------

def check(draft: Union[ComboDraft, NxMDraft]) -> List[FieldError]:
    if isinstance(draft, NxMDraft):
        return check_nxm(draft)
    return check_combo(draft)


def normalize(draft: Union[ComboDraft, NxMDraft]) -> Promotion:
    if isinstance(draft, NxMDraft):
        return normalize_nxm(draft)
    return normalize_combo(draft)


def validate(draft: Union[ComboDraft, NxMDraft]) -> Promotion:
    if isinstance(draft, NxMDraft):
        return validate_nxm(draft)
    return validate_combo(draft)


# ---------- combo line editing ----------

def add_line(draft: ComboDraft, item_id: int) -> ComboDraft:
    """Append an item with quantity 1. Items already in the combo are left alone."""
    if any(line.item_id == item_id for line in draft.detail_lines):
        return draft
    lines = draft.detail_lines + (DetailLineDraft(item_id=item_id, quantity=1),)
    return draft.model_copy(update={"detail_lines": lines})


def remove_line(draft: ComboDraft, item_id: int) -> ComboDraft:
    lines = tuple(line for line in draft.detail_lines if line.item_id != item_id)
    return draft.model_copy(update={"detail_lines": lines})


def set_line_quantity(draft: ComboDraft, item_id: int, quantity: int) -> ComboDraft:
    """Change one line's quantity, clamped to at least 1."""
    quantity = max(1, quantity)
    lines = tuple(
        line.model_copy(update={"quantity": quantity}) if line.item_id == item_id else line
        for line in draft.detail_lines
    )
    return draft.model_copy(update={"detail_lines": lines})


# ---------- edit prefill ----------

def combo_draft_from_promotion(promotion: Promotion) -> ComboDraft:
    from_date, from_time = split_instant(promotion.valid_from)
    until_date, until_time = split_instant(promotion.valid_until)
    return ComboDraft(
        denomination=promotion.denomination,
        description=promotion.description,
        valid_from_date=from_date,
        valid_from_time=from_time,
        valid_until_date=until_date,
        valid_until_time=until_time,
        discount_type=promotion.discount_type,
        discount_value=promotion.discount_value,
        enabled_by_admin=promotion.enabled_by_admin,
        detail_lines=[DetailLineDraft(item_id=line.item_id, quantity=line.quantity) for line in promotion.detail_lines],
        images=promotion.images,
    )


def nxm_draft_from_promotion(promotion: Promotion) -> NxMDraft:
    """
    Best-effort N×M form prefill.

    Takes buy from minimum_quantity and derives pay back from the stored
    percentage; not a guaranteed inverse of normalize_nxm.
    """
    from_date, from_time = split_instant(promotion.valid_from)
    until_date, until_time = split_instant(promotion.valid_until)
    buy = promotion.minimum_quantity
    pay = round_half_up(Decimal(buy) * (1 - Decimal(str(promotion.discount_value)) / 100))
    return NxMDraft(
        denomination=promotion.denomination,
        description=promotion.description,
        valid_from_date=from_date,
        valid_from_time=from_time,
        valid_until_date=until_date,
        valid_until_time=until_time,
        enabled_by_admin=promotion.enabled_by_admin,
        buy=buy,
        pay=pay,
        eligible_item_ids=promotion.item_ids(),
        images=promotion.images,
    )
