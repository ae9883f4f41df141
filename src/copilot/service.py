"""
Copilot service -- the three entry points behind the HTTP API.

  validate                    raw query string -> {valid, message}
  explain                     raw query string -> {query, explanation}
  run_natural_language_query  question -> intent -> execute -> result

Empty input is reported before any parsing.  Only ``explain`` rejects
grammar-invalid strings; ``validate`` reports them as ``valid=False`` and
the natural-language path never grammar-checks its input.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from src.copilot.intent import OperationKind, QueryIntent
from src.copilot.extractor import extract_intent
from src.copilot.executor import ExecutionResult, execute_intent
from src.copilot.explainer import explain_query
from src.governance.grammar import validate_query
from src.governance.catalog_loader import DatasetCatalog, load_catalog
from src.db.dataset import RowSource, get_dataset
from src.core.errors import EmptyQueryError, InvalidQueryError
from src.core.logging import get_logger
from src.core.utils import normalise_text, timer

logger = get_logger(__name__)

MISSING_QUERY_EXAMPLE = "Try: 'Show total sales in North region last month'"


@dataclass
class ValidationResult:
    valid: bool

    @property
    def message(self) -> str:
        return "Valid SQL query." if self.valid else "Invalid SQL query."


@dataclass
class ExplainResult:
    query: str
    explanation: str


@dataclass
class NLQueryResult:
    question: str
    intent: QueryIntent
    result: Any
    rendered_query: str
    matched_count: int
    latency_ms: int = 0
    fallback: str | None = None

    @property
    def explanation(self) -> str:
        return f"Found {self.matched_count} records matching your criteria"


def validate(text: str | None) -> ValidationResult:
    """Grammar-check a raw query string."""
    query = normalise_text(text)
    if not query:
        raise EmptyQueryError()
    valid = validate_query(query)
    logger.info("Copilot.validate | valid=%s | query=%s", valid, query[:80])
    return ValidationResult(valid=valid)


def explain(text: str | None) -> ExplainResult:
    """Describe a raw query string; it must pass the grammar check first."""
    query = normalise_text(text)
    if not query:
        raise EmptyQueryError()
    if not validate_query(query):
        logger.info("Copilot.explain rejected invalid query=%s", query[:80])
        raise InvalidQueryError()
    return ExplainResult(query=query, explanation=explain_query(query))


def _wrap_result(operation: OperationKind, execution: ExecutionResult) -> Any:
    """Shape the aggregation for the response body."""
    if operation is OperationKind.COUNT:
        return {"count": execution.result}
    if operation is OperationKind.SUM:
        return {"total": execution.result}
    return [row.as_dict() for row in execution.result]


def run_natural_language_query(
    text: str | None,
    source: RowSource | None = None,
    catalog: DatasetCatalog | None = None,
) -> NLQueryResult:
    """End-to-end: question -> intent -> filtered, aggregated result.

    Parameters
    ----------
    text : str
        Natural-language question.
    source : RowSource, optional
        Where rows come from.  Defaults to the seeded in-memory dataset.
    catalog : DatasetCatalog, optional
        Vocabulary and preview size.  Defaults to the YAML catalog.
    """
    question = normalise_text(text)
    if not question:
        raise EmptyQueryError("Missing query")
    if source is None:
        source = get_dataset()
    if catalog is None:
        catalog = load_catalog()

    logger.info("Copilot.query | question=%s", question[:120])
    with timer() as t:
        intent = extract_intent(question, catalog)
        rows = source.get_all_rows(intent.source_table)
        execution = execute_intent(intent, rows, preview_rows=catalog.preview_rows)

    return NLQueryResult(
        question=question,
        intent=intent,
        result=_wrap_result(intent.operation, execution),
        rendered_query=execution.rendered_query,
        matched_count=execution.matched_count,
        latency_ms=t["elapsed_ms"],
        fallback=execution.fallback,
    )
