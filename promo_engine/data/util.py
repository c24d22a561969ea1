from __future__ import annotations

from typing import Literal

from ..config import get_config
from .backends.csv_backend import CsvCatalog
from .backends.memory_backend import InMemoryCatalog, InMemoryPromotionStore
from .interface import CatalogLookup, PromotionStore


def get_catalog(kind: Literal["csv", "memory"] = "csv") -> CatalogLookup:
    if kind == "csv":
        # Reads from configured CSV folder
        config = get_config()
        return CsvCatalog(data_dir=config.data_dir, catalog_file=config.catalog_file)
    if kind == "memory":
        return InMemoryCatalog()
    raise ValueError(f"Unknown catalog kind: {kind}")


def get_promotion_store(kind: Literal["memory"] = "memory") -> PromotionStore:
    if kind == "memory":
        return InMemoryPromotionStore()
    raise ValueError(f"Unknown promotion store kind: {kind}")
