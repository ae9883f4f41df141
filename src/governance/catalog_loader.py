"""
Loads, parses, and caches the dataset catalog YAML into typed objects.

The catalog is the single source of truth for:
  - the name of the one queryable table
  - the table's fields
  - the enumerated product and region vocabularies
  - how many rows a plain SELECT previews
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from functools import lru_cache
from typing import Any

import yaml

_CATALOG_PATH = Path(__file__).resolve().parents[2] / "semantic_layer" / "dataset_model.yml"


# ── Typed domain objects ─────────────────────────────────

@dataclass(frozen=True)
class FieldDef:
    name: str
    type: str
    description: str = ""


@dataclass(frozen=True)
class DatasetCatalog:
    """Fully parsed dataset catalog."""

    version: int
    table_name: str
    description: str
    fields: tuple[FieldDef, ...]
    products: tuple[str, ...]
    regions: tuple[str, ...]
    preview_rows: int = 5

    # ── Convenience look-ups ─────────────────────────

    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    def product_keywords(self) -> list[str]:
        """Lower-cased product names, as matched in questions."""
        return [p.lower() for p in self.products]

    def region_keywords(self) -> list[str]:
        return [r.lower() for r in self.regions]


# ── Parsing ──────────────────────────────────────────────

def _parse_field(raw: dict[str, Any]) -> FieldDef:
    return FieldDef(
        name=raw["name"],
        type=raw.get("type", "string"),
        description=raw.get("description", ""),
    )


def _parse_catalog(raw_yaml: dict[str, Any]) -> DatasetCatalog:
    table = raw_yaml.get("table") or {}
    vocab = raw_yaml.get("vocabulary") or {}
    select = raw_yaml.get("select") or {}
    return DatasetCatalog(
        version=raw_yaml.get("version", 1),
        table_name=table["name"],
        description=table.get("description", ""),
        fields=tuple(_parse_field(f) for f in table.get("fields", [])),
        products=tuple(vocab.get("products", [])),
        regions=tuple(vocab.get("regions", [])),
        preview_rows=int(select.get("preview_rows", 5)),
    )


# ── Public API ───────────────────────────────────────────

def load_catalog_from(path: Path) -> DatasetCatalog:
    """Parse a catalog file at *path* (uncached)."""
    with open(path) as f:
        raw = yaml.safe_load(f)
    return _parse_catalog(raw)


@lru_cache
def load_catalog() -> DatasetCatalog:
    """Load and cache the default dataset catalog."""
    return load_catalog_from(_CATALOG_PATH)
