from __future__ import annotations

from typing import Iterable, List, Optional

from ..config import get_config
from ..data.models import BestOffer, DiscountType, Promotion, SellableItem
from ..logging import get_logger
from .pricing import apply_discount

logger = get_logger(__name__)


def normalized_discount(promotion: Promotion, unit_price: float) -> float:
    """
    Express a promotion's effect as a percentage of one item's unit price.

    Percentage promotions already are; fixed amounts are divided by the price.
    A free item (price 0) cannot be discounted further, so it normalizes to 0.
    """
    if promotion.discount_type == DiscountType.PERCENTAGE:
        return promotion.discount_value
    if unit_price <= 0:
        return 0.0
    return promotion.discount_value * 100 / unit_price


def format_amount(value: float) -> str:
    """Whole amounts without decimals, anything else with two."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"


def discount_label(promotion: Promotion, currency_symbol: Optional[str] = None) -> str:
    if promotion.discount_type == DiscountType.PERCENTAGE:
        return f"{promotion.discount_value:g}% OFF"
    if currency_symbol is None:
        currency_symbol = get_config().currency_symbol
    return f"{currency_symbol}{format_amount(promotion.discount_value)} OFF"


def candidates_for(item_id: int, promotions: Iterable[Promotion]) -> List[Promotion]:
    """Promotions that list the item among their detail lines, order preserved."""
    return [p for p in promotions if p.references(item_id)]


def resolve_best_offer(item: SellableItem, active: Iterable[Promotion]) -> Optional[BestOffer]:
    """
    Pick the promotion to advertise for `item`.

    Args:
        item: The catalog item, with its current unit price.
        active: Promotions already filtered to the ACTIVE state.
    Returns:
        BestOffer for the largest normalized discount, or None when no
        promotion names the item. Equal discounts keep the first one found.
    """
    best: Optional[Promotion] = None
    best_value = 0.0
    for candidate in candidates_for(item.item_id, active):
        value = normalized_discount(candidate, item.unit_price)
        if best is None or value > best_value:
            best, best_value = candidate, value

    if best is None:
        return None

    logger.debug(f"Best offer for item {item.item_id}: promotion {best.id} ({best_value:.2f}%)")
    return BestOffer(
        item=item,
        promotion=best,
        normalized_discount=best_value,
        label=discount_label(best),
        unit_price_after_discount=max(0.0, apply_discount(item.unit_price, best.discount_type, best.discount_value)),
    )
