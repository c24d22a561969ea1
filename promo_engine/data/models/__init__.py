from .catalog import SellableItem
from .promotions import (
    PromotionKind,
    DiscountType,
    LifecycleState,
    PromotionDetailLine,
    PromotionImage,
    Promotion,
)
from .drafts import (
    DetailLineDraft,
    ComboDraft,
    NxMDraft,
    PromotionDraft,
    parse_draft,
)
from .results import PromotionTotals, BestOffer
from .filters import PromotionListFilters

__all__ = [
    # Catalog
    "SellableItem",
    # Promotion records
    "PromotionKind",
    "DiscountType",
    "LifecycleState",
    "PromotionDetailLine",
    "PromotionImage",
    "Promotion",
    # Drafts
    "DetailLineDraft",
    "ComboDraft",
    "NxMDraft",
    "PromotionDraft",
    "parse_draft",
    # Results
    "PromotionTotals",
    "BestOffer",
    # Filter classes
    "PromotionListFilters",
]
