"""
TripSearch: vibe-driven multi-agent trip search.

This package contains:
- shared/: Common infrastructure (generative client, logging, contracts, reference tables)
- plan/: Plan deriver turning a trip request into a search plan
- search/: Lodging, activity and dining providers plus the concurrent coordinator
- aggregate/: Itinerary aggregator and deterministic fallback composer
- progress/: Merge-only progress tracking
- store/: Search record store
- graph/: Top-level pipeline (plan -> search -> aggregate)
"""

from tripsearch.workflow import SearchWorkflow
from tripsearch.graph.build import create_search_pipeline

__all__ = ["SearchWorkflow", "create_search_pipeline"]
