"""
Search record, progress and outcome contracts.

The progress record maps each pipeline stage to its status. It is created
with every stage ``pending`` and only ever merged into afterwards.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional, Literal

from pydantic import BaseModel, Field

from tripsearch.shared.contracts.itinerary import SuggestedDay
from tripsearch.shared.contracts.results import (
    ActivityResult,
    DiningResult,
    LodgingResult,
)
from tripsearch.shared.contracts.search_input import SearchInput


AgentStatus = Literal["pending", "searching", "done", "error"]
SearchStatus = Literal["pending", "searching", "completed", "error"]

STAGE_PLAN = "plan"
STAGE_LODGING = "lodging"
STAGE_ACTIVITY = "activity"
STAGE_DINING = "dining"
STAGE_AGGREGATE = "aggregate"

STAGES = (STAGE_PLAN, STAGE_LODGING, STAGE_ACTIVITY, STAGE_DINING, STAGE_AGGREGATE)

SearchProgress = Dict[str, AgentStatus]


def initial_progress() -> SearchProgress:
    """Progress map with every stage pending."""
    return {stage: "pending" for stage in STAGES}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SearchResults(BaseModel):
    """Everything a completed search produced."""

    search_id: str
    lodging: List[LodgingResult] = Field(default_factory=list)
    activity: List[ActivityResult] = Field(default_factory=list)
    dining: List[DiningResult] = Field(default_factory=list)
    itinerary: List[SuggestedDay] = Field(default_factory=list)
    chosen_lodging: Optional[LodgingResult] = Field(default=None)
    degraded: bool = Field(
        default=False,
        description="True if the plan or itinerary came from a deterministic fallback",
    )


class SearchRecord(BaseModel):
    """Stored state of one search request."""

    id: str
    input: SearchInput
    status: SearchStatus = Field(default="pending")
    progress: SearchProgress = Field(default_factory=initial_progress)
    error_message: Optional[str] = Field(default=None)
    results: Optional[SearchResults] = Field(default=None)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
    completed_at: Optional[datetime] = Field(default=None)


class SearchOutcome(BaseModel):
    """Terminal result of ``run_search``."""

    search_id: str
    status: Literal["completed", "error"]
    results: Optional[SearchResults] = Field(default=None)
    error: Optional[str] = Field(default=None)
