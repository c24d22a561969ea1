from __future__ import annotations

from datetime import datetime
from typing import Iterable, List

from ..data.models import Promotion, PromotionListFilters
from .lifecycle import lifecycle_state


def filter_promotions(
    promotions: Iterable[Promotion],
    filters: PromotionListFilters,
    now: datetime,
) -> List[Promotion]:
    """Apply the admin list filters. States are computed at `now`, never read from storage."""
    result = []
    search = filters.search.strip().lower() if filters.search and filters.search.strip() else None
    for promotion in promotions:
        if search and search not in promotion.denomination.lower():
            continue
        if filters.state is not None and lifecycle_state(promotion, now) != filters.state:
            continue
        if filters.enabled is not None and promotion.enabled_by_admin != filters.enabled:
            continue
        result.append(promotion)
    return result
