"""Data contracts passed between pipeline stages."""

from tripsearch.shared.contracts.search_input import SearchInput
from tripsearch.shared.contracts.search_plan import SearchPlan
from tripsearch.shared.contracts.results import (
    LocationInfo,
    LodgingResult,
    ActivityResult,
    DiningResult,
)
from tripsearch.shared.contracts.itinerary import SuggestedDay, TimeBlock, Itinerary
from tripsearch.shared.contracts.search_record import (
    SearchProgress,
    SearchRecord,
    SearchResults,
    SearchOutcome,
    STAGES,
)

__all__ = [
    "SearchInput",
    "SearchPlan",
    "LocationInfo",
    "LodgingResult",
    "ActivityResult",
    "DiningResult",
    "SuggestedDay",
    "TimeBlock",
    "Itinerary",
    "SearchProgress",
    "SearchRecord",
    "SearchResults",
    "SearchOutcome",
    "STAGES",
]
