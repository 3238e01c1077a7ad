"""
Pipeline state schema.

Carries the search input and each stage's handoff through the
plan -> search -> aggregate graph.
"""

from typing import List, Optional, TypedDict

from tripsearch.shared.contracts.itinerary import Itinerary
from tripsearch.shared.contracts.results import (
    ActivityResult,
    DiningResult,
    LodgingResult,
)
from tripsearch.shared.contracts.search_input import SearchInput
from tripsearch.shared.contracts.search_plan import SearchPlan


class PipelineState(TypedDict, total=False):
    """
    State schema for the search pipeline graph.

    Handoff slots are populated as stages complete.
    """

    # Request
    search_id: str
    search_input: SearchInput

    # Stage handoffs
    plan: Optional[SearchPlan]
    lodging: List[LodgingResult]
    activity: List[ActivityResult]
    dining: List[DiningResult]
    itinerary: Optional[Itinerary]
