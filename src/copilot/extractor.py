"""
Extractor -- converts a natural-language question into a QueryIntent.

Deterministic keyword extraction only.  Extraction never fails: a question
with no recognisable cue becomes a plain SELECT with no filters.
"""
from __future__ import annotations

import re

from src.copilot.intent import FilterSet, OperationKind, QueryIntent
from src.governance.catalog_loader import DatasetCatalog, load_catalog
from src.core.logging import get_logger

logger = get_logger(__name__)

# ── Operation cues ───────────────────────────────────────

# Applied in order; each later match overwrites the earlier one, so the
# final precedence is AVG > COUNT > SUM.
_OPERATION_CUES: list[tuple[str, OperationKind]] = [
    ("total",    OperationKind.SUM),
    ("how many", OperationKind.COUNT),
    ("average",  OperationKind.AVERAGE),
]

# ── Filter extraction helpers ────────────────────────────

# "in north", "in north, south and east"
_REGION_RE = re.compile(r"in\s+([a-z\s,]+)")

_REGION_SPLIT_RE = re.compile(r"\s+and\s+|\s+or\s+|\s*,\s*")


def _product_pattern(catalog: DatasetCatalog) -> re.Pattern[str]:
    names = "|".join(re.escape(p) for p in catalog.product_keywords())
    return re.compile(rf"\b({names})s?\b")


def classify(question: str) -> OperationKind:
    """Infer the aggregation from lexical cues in *question*."""
    q = question.lower()
    operation = OperationKind.SELECT
    for cue, kind in _OPERATION_CUES:
        if cue in q:
            operation = kind
    return operation


def _extract_regions(q: str) -> list[str] | None:
    m = _REGION_RE.search(q)
    if not m:
        return None
    regions = [part.strip().lower() for part in _REGION_SPLIT_RE.split(m.group(1))]
    regions = [r for r in regions if r]
    return regions or None


def extract_filters(question: str, catalog: DatasetCatalog | None = None) -> FilterSet:
    """Best-effort extraction of region and product filters from NL."""
    if catalog is None:
        catalog = load_catalog()
    q = question.lower()

    product: str | None = None
    m = _product_pattern(catalog).search(q)
    if m:
        product = m.group(1)

    return FilterSet(region=_extract_regions(q), product=product)


# ── Public API ───────────────────────────────────────────

def extract_intent(question: str, catalog: DatasetCatalog | None = None) -> QueryIntent:
    """Parse *question* into a QueryIntent over the catalog's table."""
    if catalog is None:
        catalog = load_catalog()

    intent = QueryIntent(
        source_table=catalog.table_name,
        operation=classify(question),
        filters=extract_filters(question, catalog),
    )
    logger.info("Extractor -> %s", intent.model_dump_json())
    return intent
