"""
Read-only in-memory dataset store.

The copilot reads rows only through the ``RowSource`` protocol, so tests
can inject fixture rows and the service can share one immutable snapshot
across every request.
"""
from __future__ import annotations

import datetime
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Mapping, Protocol, Sequence

from src.core.config import get_settings
from src.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Row:
    """One sale."""

    id: int
    product: str
    region: str
    amount: float
    date: datetime.datetime

    def as_dict(self) -> dict[str, Any]:
        """JSON-safe representation (date as ISO-8601)."""
        return {
            "id": self.id,
            "product": self.product,
            "region": self.region,
            "amount": self.amount,
            "date": self.date.isoformat(),
        }


class UnknownTableError(KeyError):
    """Raised when a RowSource is asked for a table it does not hold."""


class RowSource(Protocol):
    def get_all_rows(self, table_name: str) -> Sequence[Row]:
        ...


class InMemoryDataset:
    """Immutable mapping of table name -> ordered rows."""

    def __init__(self, tables: Mapping[str, Sequence[Row]]):
        self._tables: dict[str, tuple[Row, ...]] = {
            name: tuple(rows) for name, rows in tables.items()
        }

    def get_all_rows(self, table_name: str) -> Sequence[Row]:
        try:
            return self._tables[table_name]
        except KeyError:
            raise UnknownTableError(table_name) from None

    def table_names(self) -> list[str]:
        return list(self._tables)


@lru_cache
def get_dataset() -> InMemoryDataset:
    """Return the process-wide seeded dataset (built once, never mutated)."""
    from src.db.seed import build_sales_rows
    from src.governance.catalog_loader import load_catalog

    settings = get_settings()
    catalog = load_catalog()
    rows = build_sales_rows(settings.dataset_size, seed=settings.dataset_seed, catalog=catalog)
    logger.info("Dataset seeded  table=%s  rows=%d", catalog.table_name, len(rows))
    return InMemoryDataset({catalog.table_name: rows})
