"""
Unit tests -- copilot service: validate / explain / natural-language query.
"""
from datetime import datetime

import pytest

from src.copilot.executor import AVERAGE_NOT_IMPLEMENTED
from src.copilot.intent import OperationKind
from src.copilot.service import (
    NLQueryResult,
    explain,
    run_natural_language_query,
    validate,
)
from src.core.errors import CopilotError, EmptyQueryError, InvalidQueryError
from src.db.dataset import InMemoryDataset, Row


@pytest.fixture
def source():
    rows = [
        Row(id=1, product="Laptop", region="North", amount=150, date=datetime(2023, 1, 1)),
        Row(id=2, product="Phone", region="South", amount=250, date=datetime(2023, 2, 2)),
        Row(id=3, product="Laptop", region="North", amount=350, date=datetime(2023, 3, 3)),
    ]
    return InMemoryDataset({"sales": rows})



def test_validate_valid():
    result = validate("SELECT * FROM sales")
    assert result.valid is True
    assert result.message == "Valid SQL query."


def test_validate_invalid_is_not_an_error():
    result = validate("hello there")
    assert result.valid is False
    assert result.message == "Invalid SQL query."


@pytest.mark.parametrize("text", [None, "", "   "])
def test_validate_empty_raises(text):
    with pytest.raises(EmptyQueryError):
        validate(text)



def test_explain_valid():
    result = explain("  SELECT * FROM sales  ")
    assert result.query == "SELECT * FROM sales"
    assert "all columns" in result.explanation


def test_explain_invalid_raises():
    with pytest.raises(InvalidQueryError):
        explain("DROP TABLE sales")


def test_explain_empty_raises():
    with pytest.raises(EmptyQueryError):
        explain("")


def test_errors_are_value_errors():
    assert issubclass(EmptyQueryError, CopilotError)
    assert issubclass(InvalidQueryError, ValueError)



def test_query_count(source):
    result = run_natural_language_query("how many laptops in north", source=source)
    assert isinstance(result, NLQueryResult)
    assert result.intent.operation == OperationKind.COUNT
    assert result.result == {"count": 2}
    assert result.matched_count == 2
    assert result.rendered_query == (
        "SELECT COUNT FROM sales WHERE region IN ('north') AND product = 'laptop'"
    )
    assert result.explanation == "Found 2 records matching your criteria"


def test_query_sum(source):
    result = run_natural_language_query("total laptop sales", source=source)
    assert result.result == {"total": 500}
    assert result.matched_count == 2


def test_query_select_returns_row_dicts(source):
    result = run_natural_language_query("show phone sales", source=source)
    assert result.result == [{
        "id": 2, "product": "Phone", "region": "South",
        "amount": 250, "date": "2023-02-02T00:00:00",
    }]


def test_query_average_falls_back_to_rows(source):
    result = run_natural_language_query("average laptop amount", source=source)
    assert result.fallback == AVERAGE_NOT_IMPLEMENTED
    assert [r["id"] for r in result.result] == [1, 3]
    assert result.rendered_query == "SELECT AVG FROM sales WHERE product = 'laptop'"


def test_query_no_match(source):
    result = run_natural_language_query("how many sales in atlantis", source=source)
    assert result.result == {"count": 0}
    assert result.matched_count == 0


def test_query_missing_raises():
    with pytest.raises(EmptyQueryError, match="Missing query"):
        run_natural_language_query("")


def test_query_uses_seeded_dataset_by_default():
    result = run_natural_language_query("how many laptops")
    assert result.result == {"count": 34}
    assert result.latency_ms >= 0
