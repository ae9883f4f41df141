"""
Unit tests -- QueryIntent model defaults and constraints.
"""
import pytest
from pydantic import ValidationError

from src.copilot.intent import FilterSet, OperationKind, QueryIntent


def test_query_intent_defaults():
    intent = QueryIntent()
    assert intent.source_table == "sales"
    assert intent.operation == OperationKind.SELECT
    assert intent.filters.is_empty()


def test_query_intent_full():
    intent = QueryIntent(
        source_table="sales",
        operation=OperationKind.SUM,
        filters=FilterSet(region=["north", "south"], product="tablet"),
    )
    assert intent.operation.value == "SUM"
    assert intent.filters.region == ["north", "south"]
    assert not intent.filters.is_empty()


def test_filter_keys_restricted():
    with pytest.raises(ValidationError):
        FilterSet(country=["india"])


def test_operation_values():
    assert [op.value for op in OperationKind] == ["SELECT", "COUNT", "SUM", "AVG"]
