"""
FastAPI application entry point.

Run with ``uvicorn tripsearch.main:app`` or ``python -m tripsearch.main``.
Set TRIPSEARCH_LOG_JSON=1 for JSON log lines.
"""

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tripsearch.api import router as search_router
from tripsearch.shared.contracts.search_record import STAGES
from tripsearch.shared.logging.config import setup_logging


API_VERSION = "0.1.0"

setup_logging(
    level=logging.INFO,
    json_format=os.environ.get("TRIPSEARCH_LOG_JSON", "").lower() in ("1", "true", "yes"),
)


def create_app() -> FastAPI:
    """Assemble the app: CORS, the search router and service endpoints."""
    application = FastAPI(
        title="TripSearch",
        description="Vibe-driven multi-agent trip search built with LangGraph",
        version=API_VERSION,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=os.environ.get("TRIPSEARCH_CORS_ORIGINS", "*").split(","),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.include_router(search_router)

    @application.get("/")
    async def root():
        """Service information."""
        return {
            "name": "TripSearch",
            "version": API_VERSION,
            "stages": list(STAGES),
            "endpoints": search_router.prefix,
        }

    @application.get("/health")
    async def health():
        return {"status": "healthy"}

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.environ.get("PORT", "8000")))
