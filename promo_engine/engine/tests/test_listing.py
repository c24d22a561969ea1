from datetime import datetime

import pytest

from promo_engine.data.models import LifecycleState, PromotionListFilters
from promo_engine.engine.listing import filter_promotions

NOW = datetime(2024, 1, 15)


@pytest.fixture
def promotions(make_promotion):
    return [
        make_promotion(denomination="Burger Monday"),
        make_promotion(denomination="Pizza Friday", valid_from=datetime(2024, 2, 1), valid_until=datetime(2024, 2, 2)),
        make_promotion(denomination="Old burger deal", valid_from=datetime(2023, 1, 1), valid_until=datetime(2023, 1, 2)),
        make_promotion(denomination="Hidden burger", enabled_by_admin=False),
    ]


def names(promotions):
    return [p.denomination for p in promotions]


def test_no_filters_returns_everything(promotions):
    assert filter_promotions(promotions, PromotionListFilters(), NOW) == promotions


def test_search_is_case_insensitive(promotions):
    result = filter_promotions(promotions, PromotionListFilters(search="  BURGER "), NOW)
    assert names(result) == ["Burger Monday", "Old burger deal", "Hidden burger"]


@pytest.mark.parametrize("state, expected", [
    (LifecycleState.ACTIVE, ["Burger Monday"]),
    (LifecycleState.SCHEDULED, ["Pizza Friday"]),
    (LifecycleState.EXPIRED, ["Old burger deal"]),
    (LifecycleState.INACTIVE, ["Hidden burger"]),
])
def test_state_is_computed_at_listing_time(promotions, state, expected):
    assert names(filter_promotions(promotions, PromotionListFilters(state=state), NOW)) == expected


def test_enabled_filter(promotions):
    assert names(filter_promotions(promotions, PromotionListFilters(enabled=False), NOW)) == ["Hidden burger"]


def test_filters_combine(promotions):
    filters = PromotionListFilters(search="burger", enabled=True, state=LifecycleState.EXPIRED)
    assert names(filter_promotions(promotions, filters, NOW)) == ["Old burger deal"]
