"""POST /validate, /explain, /query -- the copilot endpoints."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from fastapi import APIRouter, Depends, HTTPException

from src.api.auth import require_api_key
from src.copilot import service
from src.copilot.service import MISSING_QUERY_EXAMPLE
from src.core.errors import CopilotError, EmptyQueryError
from src.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(dependencies=[Depends(require_api_key)])



class QueryRequest(BaseModel):
    query: str | None = Field(None, description="Query string or natural-language question")


class ValidateResponse(BaseModel):
    valid: bool
    message: str


class ExplainResponse(BaseModel):
    query: str
    explanation: str


class FilterResponse(BaseModel):
    region: list[str] | None = None
    product: str | None = None


class IntentResponse(BaseModel):
    source_table: str
    operation: str
    filters: FilterResponse


class QueryResponse(BaseModel):
    question: str
    result: Any
    explanation: str
    pseudo_sql: str
    matched_count: int
    intent: IntentResponse
    latency_ms: int
    fallback: str | None = None



@router.post("/validate", response_model=ValidateResponse)
def validate_endpoint(req: QueryRequest):
    """Grammar-check a raw query string."""
    try:
        result = service.validate(req.query)
    except CopilotError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return ValidateResponse(valid=result.valid, message=result.message)


@router.post("/explain", response_model=ExplainResponse)
def explain_endpoint(req: QueryRequest):
    """Describe a grammar-valid query string in plain language."""
    try:
        result = service.explain(req.query)
    except CopilotError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return ExplainResponse(query=result.query, explanation=result.explanation)


@router.post("/query", response_model=QueryResponse)
def query_endpoint(req: QueryRequest):
    """Full pipeline: question -> intent -> filter -> aggregate -> pseudo-query."""
    try:
        result = service.run_natural_language_query(req.query)
    except EmptyQueryError as exc:
        raise HTTPException(
            status_code=400,
            detail={"error": str(exc), "example": MISSING_QUERY_EXAMPLE},
        )
    except Exception:
        logger.exception("Copilot.query failed")
        raise HTTPException(
            status_code=500,
            detail={"error": "Server error", "message": "Please try again later"},
        )

    return QueryResponse(
        question=result.question,
        result=result.result,
        explanation=result.explanation,
        pseudo_sql=result.rendered_query,
        matched_count=result.matched_count,
        intent=IntentResponse(
            source_table=result.intent.source_table,
            operation=result.intent.operation.value,
            filters=FilterResponse(**result.intent.filters.model_dump()),
        ),
        latency_ms=result.latency_ms,
        fallback=result.fallback,
    )
