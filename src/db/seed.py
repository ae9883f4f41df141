"""
Seed data generator -- builds the in-memory sales table.

Product and region cycle by row index so filter results are predictable;
only ``amount`` is random, drawn from a seeded Faker instance.
"""
from __future__ import annotations

from datetime import datetime

from faker import Faker

from src.db.dataset import Row
from src.governance.catalog_loader import DatasetCatalog, load_catalog

# ── Tunables ─────────────────────────────────────────────
DEFAULT_ROWS = 100
DEFAULT_SEED = 42
AMOUNT_MIN = 100
AMOUNT_MAX = 1099
BASE_YEAR = 2023


def build_sales_rows(
    count: int = DEFAULT_ROWS,
    seed: int = DEFAULT_SEED,
    catalog: DatasetCatalog | None = None,
) -> list[Row]:
    """Return *count* deterministic rows for the given *seed*."""
    if catalog is None:
        catalog = load_catalog()
    products = catalog.products
    regions = catalog.regions

    fake = Faker()
    fake.seed_instance(seed)

    return [
        Row(
            id=i + 1,
            product=products[i % len(products)],
            region=regions[i % len(regions)],
            amount=fake.random_int(min=AMOUNT_MIN, max=AMOUNT_MAX),
            date=datetime(BASE_YEAR, i % 12 + 1, i % 28 + 1),
        )
        for i in range(count)
    ]
