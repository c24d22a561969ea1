from __future__ import annotations

from datetime import datetime
from itertools import count
from typing import Iterable, List, Optional, Tuple, Union

from .data.interface import CatalogLookup, PromotionStore
from .data.models import (
    BestOffer,
    ComboDraft,
    LifecycleState,
    NxMDraft,
    Promotion,
    PromotionListFilters,
    PromotionTotals,
)
from .engine import authoring
from .engine.best_offer import candidates_for, resolve_best_offer
from .engine.lifecycle import active_promotions, lifecycle_state
from .engine.listing import filter_promotions
from .engine.pricing import compute_totals
from .errors import PersistenceError, PromotionNotFoundError
from .logging import get_logger


class PromotionService:
    """
    Single owner of the in-memory promotion snapshot.

    - The snapshot is an immutable tuple, replaced wholesale after every
      successful write or fetch; readers never see a half-applied change.
    - Every snapshot replacement takes a ticket. A fetch that completes with
      an older ticket than the one already applied is dropped (last response
      wins).
    - Lifecycle states are computed on each read from the caller's `now`.
    """

    def __init__(self, store: PromotionStore, catalog: CatalogLookup) -> None:
        self.store = store
        self.catalog = catalog
        self.logger = get_logger(__name__)
        self._snapshot: Tuple[Promotion, ...] = ()
        self._tickets = count(1)
        self._applied_ticket = 0

    @property
    def promotions(self) -> Tuple[Promotion, ...]:
        """The current snapshot."""
        return self._snapshot

    # ---------- snapshot management ----------

    def begin_refresh(self) -> int:
        """Reserve a ticket for a fetch that is about to start."""
        return next(self._tickets)

    def apply_refresh(self, ticket: int, promotions: Iterable[Promotion]) -> bool:
        """Install a fetched list unless something newer already replaced the snapshot.

        Returns:
            bool: True if the list was installed, False if it was stale.
        """
        if ticket < self._applied_ticket:
            self.logger.debug(f"Discarding stale promotion fetch (ticket {ticket} < {self._applied_ticket})")
            return False
        self._applied_ticket = ticket
        self._snapshot = tuple(promotions)
        return True

    def refresh(self) -> Tuple[Promotion, ...]:
        """Fetch every promotion from the store and replace the snapshot."""
        ticket = self.begin_refresh()
        try:
            fetched = self.store.list()
        except PersistenceError as e:
            self.logger.error(f"Failed to load promotions: {e}")
            raise
        self.apply_refresh(ticket, fetched)
        self.logger.info(f"Loaded {len(self._snapshot)} promotions")
        return self._snapshot

    def _replace(self, promotions: Iterable[Promotion]) -> None:
        self._applied_ticket = next(self._tickets)
        self._snapshot = tuple(promotions)

    def _find(self, promotion_id: int) -> Promotion:
        for promotion in self._snapshot:
            if promotion.id == promotion_id:
                return promotion
        raise PromotionNotFoundError(promotion_id)

    def _swap(self, updated: Promotion) -> None:
        # The store accepted the write, so a record missing from the snapshot is appended.
        if any(p.id == updated.id for p in self._snapshot):
            self._replace(updated if p.id == updated.id else p for p in self._snapshot)
        else:
            self._replace(self._snapshot + (updated,))

    # ---------- writes ----------

    def create(self, draft: Union[ComboDraft, NxMDraft]) -> Promotion:
        """Validate a draft and persist it as a new promotion.

        Raises:
            PromotionValidationError: If the draft breaks any authoring rule (nothing is written).
            PersistenceError: If the store refuses the record.
        """
        record = authoring.validate(draft)
        try:
            created = self.store.create(record)
        except PersistenceError as e:
            self.logger.warning(f"Could not create promotion '{record.denomination}': {e}")
            raise
        self._replace(self._snapshot + (created,))
        self.logger.info(f"Created {created.kind.value} promotion {created.id} ({created.denomination})")
        return created

    def update(self, promotion_id: int, draft: Union[ComboDraft, NxMDraft]) -> Promotion:
        """Validate a draft and replace an existing promotion with it."""
        record = authoring.validate(draft)
        try:
            updated = self.store.update(promotion_id, record)
        except PersistenceError as e:
            self.logger.warning(f"Could not update promotion {promotion_id}: {e}")
            raise
        self._swap(updated)
        self.logger.info(f"Updated promotion {updated.id} ({updated.denomination})")
        return updated

    def set_enabled(self, promotion_id: int, enabled: bool) -> Promotion:
        try:
            updated = self.store.set_enabled(promotion_id, enabled)
        except PersistenceError as e:
            self.logger.warning(f"Could not change promotion {promotion_id}: {e}")
            raise
        self._swap(updated)
        self.logger.info(f"Promotion {promotion_id} {'enabled' if enabled else 'disabled'}")
        return updated

    def toggle_enabled(self, promotion_id: int) -> Promotion:
        """Flip the administrator override of a promotion in the snapshot."""
        current = self._find(promotion_id)
        return self.set_enabled(promotion_id, not current.enabled_by_admin)

    def delete(self, promotion_id: int) -> None:
        try:
            self.store.delete(promotion_id)
        except PersistenceError as e:
            self.logger.warning(f"Could not delete promotion {promotion_id}: {e}")
            raise
        self._replace(p for p in self._snapshot if p.id != promotion_id)
        self.logger.info(f"Deleted promotion {promotion_id}")

    def search(self, denomination: str) -> List[Promotion]:
        """Ask the store for promotions by name. The snapshot is left as is."""
        return self.store.search(denomination)

    # ---------- reads ----------

    def lifecycle_state(self, promotion: Promotion, now: Optional[datetime] = None) -> LifecycleState:
        return lifecycle_state(promotion, now or datetime.now())

    def compute_totals(self, promotion: Promotion) -> PromotionTotals:
        """Bundle totals at current catalog prices. ItemNotFoundError propagates."""
        return compute_totals(promotion, self.catalog)

    def available_promotions(self, item_id: int, now: Optional[datetime] = None) -> List[Promotion]:
        """ACTIVE promotions that include the item, in snapshot order."""
        return candidates_for(item_id, active_promotions(self._snapshot, now or datetime.now()))

    def resolve_best_offer(self, item_id: int, now: Optional[datetime] = None) -> Optional[BestOffer]:
        """Best ACTIVE promotion for a cart item, or None if no promotion applies.

        Raises:
            ItemNotFoundError: If the catalog does not know the item.
        """
        item = self.catalog.get_unit_price(item_id)
        return resolve_best_offer(item, active_promotions(self._snapshot, now or datetime.now()))

    def list_promotions(
        self,
        filters: Optional[PromotionListFilters] = None,
        now: Optional[datetime] = None,
    ) -> List[Promotion]:
        return filter_promotions(self._snapshot, filters or PromotionListFilters(), now or datetime.now())
