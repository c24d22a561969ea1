from __future__ import annotations

from pathlib import Path
from typing import Dict, List

import pandas as pd

from ...config import get_config
from ...errors import ItemNotFoundError
from ..interface import CatalogLookup
from ..models import SellableItem

REQUIRED_COLUMNS = ["item_id", "name", "unit_price"]


class CsvCatalog(CatalogLookup):
    """
    CSV-backed catalog.
    - Loads `catalog_file` from `data_dir` once at construction.
    - Lookups are served from the loaded frame; edit the file and build a new
      instance to pick up price changes.
    """

    def __init__(self, data_dir: str | Path = None, catalog_file: str = None) -> None:
        config = get_config()
        if data_dir is None:
            data_dir = config.data_dir
        if catalog_file is None:
            catalog_file = config.catalog_file

        self.data_dir = Path(data_dir)

        # If the path is relative, make it relative to the repository root
        if not self.data_dir.is_absolute():
            current = Path.cwd()
            repo_root = None

            # Look up the directory tree for pyproject.toml
            for parent in [current] + list(current.parents):
                if (parent / "pyproject.toml").exists():
                    repo_root = parent
                    break

            if repo_root:
                self.data_dir = repo_root / self.data_dir
            else:
                # Fallback to current directory
                self.data_dir = current / self.data_dir

        self._items = self._index(self._load_items(self.data_dir / catalog_file))

    # ---------- loading helpers ----------

    @staticmethod
    def _load_items(path: Path) -> pd.DataFrame:
        if not path.parent.exists():
            raise FileNotFoundError(
                f"Data directory not found: {path.parent}\n"
                f"Please either:\n"
                f"  1. Generate sample data: python -m promo_engine.data.seed_data\n"
                f"  2. Set DATA_DIR environment variable to point to your data directory\n"
                f"  3. Create a .env file with DATA_DIR=/path/to/your/data"
            )
        if not path.exists():
            raise FileNotFoundError(
                f"Catalog file missing: {path}\n"
                f"  Expected columns: {', '.join(REQUIRED_COLUMNS)}\n\n"
                f"Please either:\n"
                f"  1. Generate sample data: python -m promo_engine.data.seed_data\n"
                f"  2. Set CATALOG_FILE to the name of your catalog CSV"
            )

        try:
            items = pd.read_csv(path)
        except Exception as e:
            raise RuntimeError(
                f"Error reading catalog CSV {path}: {e}\n"
                f"Please check that the file is valid and readable."
            ) from e

        missing = [c for c in REQUIRED_COLUMNS if c not in items.columns]
        if missing:
            raise ValueError(f"Catalog CSV {path} is missing columns: {', '.join(missing)}")

        # Ensure types
        items["item_id"] = items["item_id"].astype(int)
        items["unit_price"] = items["unit_price"].astype(float)
        return items

    @staticmethod
    def _index(items: pd.DataFrame) -> Dict[int, SellableItem]:
        return {
            int(row.item_id): SellableItem(
                item_id=int(row.item_id),
                display_name=str(row.name),
                unit_price=float(row.unit_price),
            )
            for row in items[REQUIRED_COLUMNS].itertuples(index=False)
        }

    # ---------- interface implementation ----------

    def get_unit_price(self, item_id: int) -> SellableItem:
        try:
            return self._items[item_id]
        except KeyError:
            raise ItemNotFoundError(item_id) from None

    def list_items(self) -> List[SellableItem]:
        return list(self._items.values())
