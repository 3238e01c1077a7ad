"""
FastAPI endpoints for trip searches.

Start a search (runs in the background), poll its status and progress,
or execute a search synchronously.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from pydantic import BaseModel, Field

from tripsearch.shared.contracts.search_input import SearchInput
from tripsearch.shared.contracts.search_record import (
    SearchOutcome,
    SearchProgress,
    SearchResults,
    SearchStatus,
)
from tripsearch.shared.errors import SearchNotFoundError
from tripsearch.workflow import SearchWorkflow


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/search", tags=["search"])

# Workflow instance (shared across requests)
_workflow: Optional[SearchWorkflow] = None


def get_workflow() -> SearchWorkflow:
    """Get or create the shared workflow instance."""
    global _workflow
    if _workflow is None:
        _workflow = SearchWorkflow.from_env()
    return _workflow


# ============================================================================
# Request/Response Models
# ============================================================================


class StartSearchResponse(BaseModel):
    """Response for a newly started search."""

    search_id: str = Field(description="Search identifier to poll")
    status: str = Field(default="started")
    estimated_time: int = Field(description="Rough completion time in seconds")


class SearchStatusResponse(BaseModel):
    """Status, progress and (once completed) results of a search."""

    search_id: str
    status: SearchStatus
    progress: SearchProgress
    results: Optional[SearchResults] = Field(default=None)
    error: Optional[str] = Field(default=None)
    created_at: datetime
    completed_at: Optional[datetime] = Field(default=None)


def estimate_search_seconds(nights: int) -> int:
    return min(60, 20 + nights * 5)


# ============================================================================
# Endpoints
# ============================================================================


@router.post("/start", response_model=StartSearchResponse)
def start_search(
    request: SearchInput,
    background_tasks: BackgroundTasks,
    workflow: SearchWorkflow = Depends(get_workflow),
) -> StartSearchResponse:
    """
    Start a new search.

    Creates the search record and runs the pipeline after the response
    has been sent.
    """
    record = workflow.start_search(request)
    background_tasks.add_task(workflow.run_search, record.id, record.input)

    return StartSearchResponse(
        search_id=record.id,
        estimated_time=estimate_search_seconds(request.nights),
    )


@router.get("/{search_id}", response_model=SearchStatusResponse)
def get_search_status(
    search_id: str,
    workflow: SearchWorkflow = Depends(get_workflow),
) -> SearchStatusResponse:
    """Get search status, per-stage progress and results when completed."""
    try:
        record = workflow.store.get_search(search_id)
    except SearchNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Search not found: {search_id}",
        )

    return SearchStatusResponse(
        search_id=record.id,
        status=record.status,
        progress=record.progress,
        results=record.results if record.status == "completed" else None,
        error=record.error_message,
        created_at=record.created_at,
        completed_at=record.completed_at,
    )


@router.post("/{search_id}/execute", response_model=SearchOutcome)
def execute_search(
    search_id: str,
    workflow: SearchWorkflow = Depends(get_workflow),
) -> SearchOutcome:
    """Run the search pipeline synchronously and return its outcome."""
    try:
        record = workflow.store.get_search(search_id)
    except SearchNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Search not found: {search_id}",
        )

    outcome = workflow.run_search(record.id, record.input)
    if outcome.status == "error":
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Search execution failed: {outcome.error}",
        )
    return outcome
