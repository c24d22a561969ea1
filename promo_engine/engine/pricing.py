from __future__ import annotations

from typing import Mapping

from ..data.interface import CatalogLookup
from ..data.models import DiscountType, Promotion, PromotionTotals
from ..errors import ItemNotFoundError


def apply_discount(amount: float, discount_type: DiscountType, discount_value: float) -> float:
    """
    Price left after applying a discount to `amount`.

    Fixed amounts never push the price below zero. Percentages are trusted to
    be within 0-100; authoring rejects anything else.
    """
    if discount_type == DiscountType.PERCENTAGE:
        return amount * (1 - discount_value / 100)
    return max(0.0, amount - discount_value)


def price_promotion(promotion: Promotion, unit_prices: Mapping[int, float]) -> PromotionTotals:
    """
    Original and discounted price of a promotion's whole bundle.

    Args:
        promotion: The promotion to price.
        unit_prices: Resolved unit price for every item the promotion references.
    Returns:
        PromotionTotals: original total, discounted total and savings.
    Raises:
        ItemNotFoundError: If a referenced item has no price.
    """
    original = 0.0
    for line in promotion.detail_lines:
        if line.item_id not in unit_prices:
            raise ItemNotFoundError(line.item_id)
        original += line.quantity * unit_prices[line.item_id]

    discounted = apply_discount(original, promotion.discount_type, promotion.discount_value)
    return PromotionTotals(
        original_total=original,
        discounted_total=discounted,
        savings=original - discounted,
    )


def compute_totals(promotion: Promotion, catalog: CatalogLookup) -> PromotionTotals:
    """Price a promotion with current catalog prices. Lookup failures propagate."""
    unit_prices = {
        item_id: catalog.get_unit_price(item_id).unit_price
        for item_id in promotion.item_ids()
    }
    return price_promotion(promotion, unit_prices)
