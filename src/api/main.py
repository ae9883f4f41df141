"""
FastAPI application entry-point.

Run:  python -m src.api.main
"""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.routers import catalog, query
from src.core.config import get_settings
from src.core.logging import get_logger
from src.db.dataset import get_dataset

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Seed the dataset once, before the first request.
    get_dataset()
    yield


app = FastAPI(
    title="Sales Query Copilot",
    version="0.1.0",
    description="Natural-language questions over an in-memory sales table",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(query.router, tags=["Copilot"])
app.include_router(catalog.router, tags=["Catalog"])


@app.get("/health")
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    port = get_settings().api_port
    logger.info("Server running on http://localhost:%d", port)
    uvicorn.run(app, host="0.0.0.0", port=port)
