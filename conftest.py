from datetime import datetime

import pytest

from promo_engine.config import set_config_for_test
from promo_engine.data.backends.memory_backend import InMemoryCatalog, InMemoryPromotionStore
from promo_engine.data.models import (
    DiscountType,
    Promotion,
    PromotionDetailLine,
    PromotionKind,
    SellableItem,
)

BURGER, FRIES, COLA, PIZZA = 1, 2, 3, 4


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for var in [
        "APP_ENV", "LOG_LEVEL", "DATA_DIR", "CATALOG_FILE", "CURRENCY_SYMBOL",
        "DEFAULT_TIME_FROM", "DEFAULT_TIME_UNTIL", "DEFAULT_DISCOUNT_VALUE",
    ]:
        monkeypatch.delenv(var, raising=False)
    set_config_for_test()
    yield


@pytest.fixture
def menu():
    return [
        SellableItem(item_id=BURGER, display_name="Burger", unit_price=10.0),
        SellableItem(item_id=FRIES, display_name="Fries", unit_price=5.0),
        SellableItem(item_id=COLA, display_name="Cola", unit_price=2.5),
        SellableItem(item_id=PIZZA, display_name="Pizza", unit_price=12.0),
    ]


@pytest.fixture
def catalog(menu):
    return InMemoryCatalog(menu)


@pytest.fixture
def store():
    return InMemoryPromotionStore()


@pytest.fixture
def make_promotion():
    """Build a canonical promotion with sensible defaults; lines as (item_id, qty) pairs."""
    def _make(
        lines=((BURGER, 1),),
        discount_type=DiscountType.PERCENTAGE,
        discount_value=10.0,
        valid_from=datetime(2024, 1, 10, 0, 0),
        valid_until=datetime(2024, 1, 20, 23, 59),
        enabled_by_admin=True,
        denomination="Test promo",
        kind=PromotionKind.COMBO,
        promotion_id=None,
    ):
        return Promotion(
            id=promotion_id,
            denomination=denomination,
            kind=kind,
            discount_type=discount_type,
            discount_value=discount_value,
            minimum_quantity=max(1, sum(q for _, q in lines)),
            valid_from=valid_from,
            valid_until=valid_until,
            enabled_by_admin=enabled_by_admin,
            detail_lines=[PromotionDetailLine(item_id=i, quantity=q) for i, q in lines],
        )
    return _make
