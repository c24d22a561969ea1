import pandas as pd
import pytest

from promo_engine.config import set_config_for_test
from promo_engine.data.backends.csv_backend import CsvCatalog
from promo_engine.data.seed_data import main as seed_main
from promo_engine.data.util import get_catalog, get_promotion_store
from promo_engine.errors import ItemNotFoundError


@pytest.fixture
def menu_dir(tmp_path):
    data_dir = tmp_path / "menu"
    data_dir.mkdir()
    pd.DataFrame(
        {"item_id": [1, 2], "name": ["Burger", "Fries"], "category": ["Burgers", "Sides"], "unit_price": [10, 5.5]}
    ).to_csv(data_dir / "products.csv", index=False)
    return data_dir


def test_loads_items_from_csv(menu_dir):
    catalog = CsvCatalog(data_dir=menu_dir)
    burger = catalog.get_unit_price(1)
    assert burger.display_name == "Burger"
    assert burger.unit_price == 10.0
    assert [item.item_id for item in catalog.list_items()] == [1, 2]


def test_unknown_item_raises(menu_dir):
    with pytest.raises(ItemNotFoundError):
        CsvCatalog(data_dir=menu_dir).get_unit_price(3)


def test_missing_directory(tmp_path):
    with pytest.raises(FileNotFoundError, match="Data directory not found"):
        CsvCatalog(data_dir=tmp_path / "nowhere")


def test_missing_file(menu_dir):
    with pytest.raises(FileNotFoundError, match="Catalog file missing"):
        CsvCatalog(data_dir=menu_dir, catalog_file="menu.csv")


def test_missing_columns(menu_dir):
    pd.DataFrame({"item_id": [1], "name": ["Burger"]}).to_csv(menu_dir / "broken.csv", index=False)
    with pytest.raises(ValueError, match="unit_price"):
        CsvCatalog(data_dir=menu_dir, catalog_file="broken.csv")


def test_relative_dir_resolves_from_repository_root(tmp_path, menu_dir, monkeypatch):
    (tmp_path / "pyproject.toml").write_text("[project]\nname = 'x'\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)
    catalog = CsvCatalog(data_dir="menu")
    assert catalog.data_dir == tmp_path / "menu"


def test_factory_reads_configured_location(menu_dir):
    set_config_for_test(data_dir=str(menu_dir))
    assert get_catalog("csv").get_unit_price(2).unit_price == 5.5
    assert get_catalog("memory").list_items() == []
    assert get_promotion_store().list() == []
    with pytest.raises(ValueError):
        get_catalog("sql")


def test_seeded_menu_is_readable(tmp_path):
    outdir = tmp_path / "seeded"
    assert seed_main(["--items", "12", "--output-dir", str(outdir), "--seed", "7"]) == 0
    catalog = CsvCatalog(data_dir=outdir)
    items = catalog.list_items()
    assert len(items) == 12
    assert all(item.unit_price > 0 for item in items)
    assert seed_main(["--output-dir", str(outdir), "--no-overwrite"]) == 2
