from __future__ import annotations

from typing import Iterable, List

from pydantic import BaseModel, Field


class FieldError(BaseModel):
    """A single violated rule, scoped to the draft field that caused it."""
    field: str = Field(description="Draft field the message belongs to (dotted for nested lines)")
    message: str = Field(description="Human readable message for inline display")


class PromotionError(Exception):
    """Base class for every error raised by the promotion engine."""


class PromotionValidationError(PromotionError):
    """
    Raised when a draft violates one or more authoring rules.

    Always carries the complete set of field errors so the caller can render
    every inline message at once. Nothing is persisted when this is raised.
    """

    def __init__(self, errors: Iterable[FieldError]) -> None:
        self.errors: List[FieldError] = list(errors)
        summary = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(f"{len(self.errors)} validation error(s): {summary}")

    def by_field(self) -> dict[str, List[str]]:
        """Group the messages by field name."""
        grouped: dict[str, List[str]] = {}
        for error in self.errors:
            grouped.setdefault(error.field, []).append(error.message)
        return grouped


class PersistenceError(PromotionError):
    """The promotion store refused a write. str(exc) is the form-level message."""


class DuplicateDenominationError(PersistenceError):
    def __init__(self, denomination: str) -> None:
        self.denomination = denomination
        super().__init__(f"A promotion named '{denomination}' already exists")


class PromotionNotFoundError(PersistenceError):
    def __init__(self, promotion_id: int) -> None:
        self.promotion_id = promotion_id
        super().__init__(f"Promotion {promotion_id} not found")


class ItemNotFoundError(PromotionError, LookupError):
    """The catalog cannot resolve an item id referenced by a promotion or a cart line."""

    def __init__(self, item_id: int) -> None:
        self.item_id = item_id
        super().__init__(f"Catalog item {item_id} not found")
