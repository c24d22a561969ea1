from __future__ import annotations

from typing import List, Protocol

from .models import Promotion, SellableItem


# ---- Catalog lookup protocol ----

class CatalogLookup(Protocol):
    """
    Read-only view of the menu used to price promotions.

    Implementations raise ItemNotFoundError for unknown ids; they never return
    a placeholder price.
    """

    def get_unit_price(self, item_id: int) -> SellableItem:
        """Resolve an item id to its display name and current unit price."""
        ...

    def list_items(self) -> List[SellableItem]:
        """List every sellable item."""
        ...


# ---- Promotion store protocol ----

class PromotionStore(Protocol):
    """
    Persistence contract for promotions.

    IMPORTANT:
    - Records are replaced as a whole; there is no partial patch operation.
    - Write failures raise PersistenceError (or a subclass).
    """

    def list(self) -> List[Promotion]:
        """Return every stored promotion in insertion order."""
        ...

    def create(self, record: Promotion) -> Promotion:
        """Persist a new promotion and return it with its assigned id."""
        ...

    def update(self, promotion_id: int, record: Promotion) -> Promotion:
        """Replace the promotion with the given id."""
        ...

    def set_enabled(self, promotion_id: int, enabled: bool) -> Promotion:
        """Flip the administrator override."""
        ...

    def delete(self, promotion_id: int) -> None:
        """Remove a promotion."""
        ...

    def search(self, denomination: str) -> List[Promotion]:
        """Promotions whose denomination contains the fragment (case-insensitive)."""
        ...
