"""
Unit tests -- in-memory dataset store and seed generator.
"""
from datetime import datetime

import pytest

from src.db.dataset import InMemoryDataset, Row, UnknownTableError, get_dataset
from src.db.seed import AMOUNT_MAX, AMOUNT_MIN, build_sales_rows


def test_seed_shape():
    rows = build_sales_rows(100)
    assert len(rows) == 100
    assert [r.id for r in rows] == list(range(1, 101))


def test_seed_cycles_product_and_region():
    rows = build_sales_rows(12)
    assert [r.product for r in rows[:3]] == ["Laptop", "Phone", "Tablet"]
    assert [r.region for r in rows[:4]] == ["North", "South", "East", "West"]
    assert rows[3].product == "Laptop"
    assert rows[4].region == "North"


def test_seed_dates():
    rows = build_sales_rows(30)
    assert rows[0].date == datetime(2023, 1, 1)
    assert rows[13].date == datetime(2023, 2, 14)
    assert rows[28].date == datetime(2023, 5, 1)


def test_seed_amounts_in_range():
    assert all(AMOUNT_MIN <= r.amount <= AMOUNT_MAX for r in build_sales_rows(100))


def test_seed_deterministic():
    assert build_sales_rows(20, seed=7) == build_sales_rows(20, seed=7)



def test_store_returns_rows_in_order():
    rows = build_sales_rows(5)
    store = InMemoryDataset({"sales": rows})
    assert list(store.get_all_rows("sales")) == rows
    assert store.table_names() == ["sales"]


def test_store_unknown_table():
    store = InMemoryDataset({"sales": []})
    with pytest.raises(UnknownTableError):
        store.get_all_rows("orders")


def test_store_is_immutable_snapshot():
    rows = build_sales_rows(3)
    store = InMemoryDataset({"sales": rows})
    rows.append(rows[0])
    assert len(store.get_all_rows("sales")) == 3


def test_row_is_frozen():
    row = build_sales_rows(1)[0]
    with pytest.raises(AttributeError):
        row.amount = 0  # type: ignore[misc]


def test_row_as_dict():
    row = Row(id=1, product="Phone", region="East", amount=120, date=datetime(2023, 4, 5))
    assert row.as_dict() == {
        "id": 1, "product": "Phone", "region": "East",
        "amount": 120, "date": "2023-04-05T00:00:00",
    }


def test_default_dataset_is_shared():
    ds = get_dataset()
    assert ds is get_dataset()
    assert len(ds.get_all_rows("sales")) == 100
