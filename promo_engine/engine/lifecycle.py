from __future__ import annotations

from datetime import datetime
from typing import Iterable, List

from ..data.models import LifecycleState, Promotion


def lifecycle_state(promotion: Promotion, now: datetime) -> LifecycleState:
    """
    Derive a promotion's state at `now`.

    The administrator override wins over the validity window. Both window
    bounds are inclusive. Call it on every read; the result goes stale as
    time passes.

    Stored instants are naive local times. An aware `now` is converted to
    local time before comparing.
    """
    if now.tzinfo is not None:
        now = now.astimezone().replace(tzinfo=None)
    if not promotion.enabled_by_admin:
        return LifecycleState.INACTIVE
    if now < promotion.valid_from:
        return LifecycleState.SCHEDULED
    if now > promotion.valid_until:
        return LifecycleState.EXPIRED
    return LifecycleState.ACTIVE


def active_promotions(promotions: Iterable[Promotion], now: datetime) -> List[Promotion]:
    """Promotions currently in force, in their original order."""
    return [p for p in promotions if lifecycle_state(p, now) == LifecycleState.ACTIVE]
