"""
Executor -- applies a QueryIntent to dataset rows.

Filters the rows, computes the requested aggregation, and renders a
display-only pseudo-query describing what ran.  The pseudo-query is never
parsed or executed.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from src.copilot.intent import FilterSet, OperationKind, QueryIntent
from src.db.dataset import Row
from src.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_PREVIEW_ROWS = 5

# AVG is recognised by the extractor but has no aggregation of its own:
# it lists rows exactly like SELECT.
AVERAGE_NOT_IMPLEMENTED = "average_not_implemented"


@dataclass
class ExecutionResult:
    result: int | float | list[Row]
    rendered_query: str
    matched_count: int
    fallback: str | None = None


# ── Filtering ────────────────────────────────────────────

def row_matches(row: Row, filters: FilterSet) -> bool:
    """True when *row* satisfies every active filter."""
    if filters.region is not None and row.region.lower() not in filters.region:
        return False
    if filters.product is not None and row.product.lower() != filters.product:
        return False
    return True


def apply_filters(rows: Iterable[Row], filters: FilterSet) -> list[Row]:
    return [r for r in rows if row_matches(r, filters)]


# ── Pseudo-query rendering ───────────────────────────────

def quote_literal(value: Any) -> str:
    """Render *value* as a single-quoted literal, doubling embedded quotes."""
    return "'{}'".format(str(value).replace("'", "''"))


def render_predicates(filters: FilterSet) -> list[str]:
    clauses: list[str] = []
    if filters.region is not None:
        clauses.append("region IN ({})".format(", ".join(quote_literal(r) for r in filters.region)))
    if filters.product is not None:
        clauses.append("product = {}".format(quote_literal(filters.product)))
    return clauses


def render_query(intent: QueryIntent) -> str:
    """Build ``SELECT <projection> FROM <table>[ WHERE ...]`` for display."""
    projection = "*" if intent.operation is OperationKind.SELECT else intent.operation.value
    sql = "SELECT {} FROM {}".format(projection, intent.source_table)
    clauses = render_predicates(intent.filters)
    if clauses:
        sql += " WHERE " + " AND ".join(clauses)
    return sql


# ── Aggregation ──────────────────────────────────────────

def aggregate(
    operation: OperationKind,
    rows: list[Row],
    preview_rows: int = DEFAULT_PREVIEW_ROWS,
) -> int | float | list[Row]:
    if operation is OperationKind.COUNT:
        return len(rows)
    if operation is OperationKind.SUM:
        return sum(r.amount for r in rows)
    # SELECT, and AVG via AVERAGE_NOT_IMPLEMENTED
    return rows[:preview_rows]


def execute_intent(
    intent: QueryIntent,
    rows: Iterable[Row],
    preview_rows: int = DEFAULT_PREVIEW_ROWS,
) -> ExecutionResult:
    """Run *intent* over *rows* and return result, pseudo-query and match count."""
    matched = apply_filters(rows, intent.filters)

    fallback = None
    if intent.operation is OperationKind.AVERAGE:
        fallback = AVERAGE_NOT_IMPLEMENTED
        logger.info("AVG has no aggregation; listing rows as SELECT (%s)", fallback)

    result = aggregate(intent.operation, matched, preview_rows)
    rendered = render_query(intent)
    logger.info("Executed %s  matched=%d", rendered, len(matched))
    return ExecutionResult(
        result=result,
        rendered_query=rendered,
        matched_count=len(matched),
        fallback=fallback,
    )
