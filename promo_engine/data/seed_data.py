#!/usr/bin/env python3
"""
seed_data.py

Generates a fake restaurant menu to a catalog CSV under a local folder
(default: sample_data), in the format CsvCatalog reads.

Run:
  python -m promo_engine.data.seed_data --items 40 --seed 42
"""

from __future__ import annotations
import argparse
import csv
import os
import random
import sys
from typing import Dict, List, Optional

from promo_engine.config import get_config

# -----------------------------
# Menu vocabulary
# -----------------------------

MENU = {
    "Burgers": (6.0, 14.0, ["Classic", "Cheese", "Bacon", "Double", "Veggie", "BBQ", "Spicy"]),
    "Pizzas": (8.0, 18.0, ["Margherita", "Pepperoni", "Napolitana", "Four Cheese", "Fugazzeta", "Hawaiian"]),
    "Sides": (2.5, 7.0, ["Fries", "Onion Rings", "Wedges", "Nuggets", "Salad"]),
    "Drinks": (1.5, 4.5, ["Cola", "Lemonade", "Iced Tea", "Orange Juice", "Water"]),
    "Desserts": (3.0, 8.0, ["Brownie", "Ice Cream", "Flan", "Cheesecake"]),
}

CSV_HEADERS = ["item_id", "name", "category", "unit_price"]


# -----------------------------
# Utility functions
# -----------------------------

def ensure_dir(path: str) -> None:
    if not os.path.exists(path):
        os.makedirs(path, exist_ok=True)

def price_round(p: float) -> float:
    # Menu prices end in .00 or .50
    return max(0.5, round(p * 2) / 2)


# -----------------------------
# Core generators
# -----------------------------

def gen_menu_items(n: int) -> List[Dict]:
    items = []
    item_id = 1
    categories = list(MENU.keys())
    while item_id <= n:
        category = categories[(item_id - 1) % len(categories)]
        low, high, names = MENU[category]
        base = random.choice(names)
        size = random.choice(["", " Small", " Large"])
        items.append({
            "item_id": item_id,
            "name": f"{base}{size} #{item_id}",
            "category": category,
            "unit_price": price_round(random.uniform(low, high)),
        })
        item_id += 1
    return items


def write_csv(path: str, rows: List[Dict], headers: List[str]) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=headers)
        w.writeheader()
        for r in rows:
            w.writerow(r)


# -----------------------------
# Main
# -----------------------------

def main(argv: Optional[List[str]] = None) -> int:
    config = get_config()

    parser = argparse.ArgumentParser(description="Generate a fake restaurant menu CSV.")
    parser.add_argument("--items", type=int, default=config.default_seed_items, help="Number of menu items.")
    parser.add_argument("--output-dir", type=str, default=config.data_dir)
    parser.add_argument("--catalog-file", type=str, default=config.catalog_file)
    parser.add_argument("--seed", type=int, default=config.default_seed_value)
    parser.add_argument("--no-overwrite", action="store_true", help="Fail if the CSV already exists.")
    args = parser.parse_args(argv)

    if args.items < 1:
        print("--items must be at least 1", file=sys.stderr)
        return 2

    random.seed(args.seed)

    outdir = args.output_dir
    ensure_dir(outdir)
    path = os.path.join(outdir, args.catalog_file)
    if args.no_overwrite and os.path.exists(path):
        print(f"Refusing to overwrite existing file: {path}", file=sys.stderr)
        return 2

    items = gen_menu_items(args.items)
    write_csv(path, items, CSV_HEADERS)

    print(f"Generated data in {outdir}")
    print(f" menu items: {len(items)} -> {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
