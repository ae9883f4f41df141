"""
GET /catalog -- dataset metadata endpoint.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.api.auth import require_api_key
from src.copilot.intent import OperationKind
from src.governance.catalog_loader import load_catalog

router = APIRouter(dependencies=[Depends(require_api_key)])



class FieldItem(BaseModel):
    name: str
    type: str
    description: str


class CatalogResponse(BaseModel):
    table: str
    description: str
    fields: list[FieldItem]
    products: list[str]
    regions: list[str]
    operations: list[str]
    preview_rows: int



@router.get("/catalog", response_model=CatalogResponse)
def full_catalog() -> CatalogResponse:
    """Return the table, its fields, and the vocabulary the extractor understands."""
    catalog = load_catalog()
    return CatalogResponse(
        table=catalog.table_name,
        description=catalog.description,
        fields=[
            FieldItem(name=f.name, type=f.type, description=f.description)
            for f in catalog.fields
        ],
        products=list(catalog.products),
        regions=list(catalog.regions),
        operations=[op.value for op in OperationKind],
        preview_rows=catalog.preview_rows,
    )
