from __future__ import annotations

from itertools import count
from typing import Dict, Iterable, List, Optional

from ...errors import DuplicateDenominationError, ItemNotFoundError, PromotionNotFoundError
from ...logging import get_logger
from ..interface import CatalogLookup, PromotionStore
from ..models import Promotion, SellableItem

logger = get_logger(__name__)


class InMemoryCatalog(CatalogLookup):
    """Dictionary-backed catalog, mostly useful for tests and demos."""

    def __init__(self, items: Iterable[SellableItem] = ()) -> None:
        self._items: Dict[int, SellableItem] = {item.item_id: item for item in items}

    def get_unit_price(self, item_id: int) -> SellableItem:
        try:
            return self._items[item_id]
        except KeyError:
            raise ItemNotFoundError(item_id) from None

    def list_items(self) -> List[SellableItem]:
        return list(self._items.values())


def _denomination_key(denomination: str) -> str:
    return denomination.strip().lower()


class InMemoryPromotionStore(PromotionStore):
    """
    In-process promotion store.
    - Assigns increasing integer ids.
    - Denominations are unique, compared case-insensitively.
    - Every write swaps in a new mapping instead of mutating the current one.
    """

    def __init__(self, promotions: Iterable[Promotion] = ()) -> None:
        self._ids = count(1)
        self._records: Dict[int, Promotion] = {}
        for promotion in promotions:
            self.create(promotion)

    # ---------- helpers ----------

    def _get(self, promotion_id: int) -> Promotion:
        try:
            return self._records[promotion_id]
        except KeyError:
            raise PromotionNotFoundError(promotion_id) from None

    def _ensure_unique(self, denomination: str, ignore_id: Optional[int] = None) -> None:
        key = _denomination_key(denomination)
        for existing in self._records.values():
            if existing.id != ignore_id and _denomination_key(existing.denomination) == key:
                raise DuplicateDenominationError(denomination)

    # ---------- interface implementation ----------

    def list(self) -> List[Promotion]:
        return list(self._records.values())

    def create(self, record: Promotion) -> Promotion:
        self._ensure_unique(record.denomination)
        stored = record.model_copy(update={"id": next(self._ids)})
        self._records = {**self._records, stored.id: stored}
        logger.debug(f"Stored promotion {stored.id} ({stored.denomination})")
        return stored

    def update(self, promotion_id: int, record: Promotion) -> Promotion:
        self._get(promotion_id)
        self._ensure_unique(record.denomination, ignore_id=promotion_id)
        stored = record.model_copy(update={"id": promotion_id})
        self._records = {**self._records, promotion_id: stored}
        return stored

    def set_enabled(self, promotion_id: int, enabled: bool) -> Promotion:
        stored = self._get(promotion_id).model_copy(update={"enabled_by_admin": enabled})
        self._records = {**self._records, promotion_id: stored}
        return stored

    def delete(self, promotion_id: int) -> None:
        self._get(promotion_id)
        self._records = {pid: p for pid, p in self._records.items() if pid != promotion_id}

    def search(self, denomination: str) -> List[Promotion]:
        fragment = _denomination_key(denomination)
        return [p for p in self._records.values() if fragment in p.denomination.lower()]
