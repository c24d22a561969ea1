from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from .promotions import LifecycleState


class PromotionListFilters(BaseModel):
    """Filters for the admin promotion list."""
    search: Optional[str] = Field(default=None, description="Case-insensitive fragment of the denomination")
    state: Optional[LifecycleState] = Field(default=None, description="Lifecycle state computed at listing time")
    enabled: Optional[bool] = Field(default=None, description="Manual override filter (True = enabled only)")
