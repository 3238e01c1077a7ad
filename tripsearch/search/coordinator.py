"""
Search coordinator.

Runs the lodging, activity and dining providers concurrently as parallel
branches of a LangGraph fan-out graph and waits for all three to settle.
A provider returning an empty list still counts as a finished stage.
"""

import logging
from typing import List, Optional, Tuple, TypedDict

from langgraph.graph import StateGraph, START, END

from tripsearch.config import SearchConfig, DEFAULT_CONFIG
from tripsearch.progress.tracker import ProgressTracker
from tripsearch.search.providers.activity import ActivityProvider
from tripsearch.search.providers.base import SearchProvider
from tripsearch.search.providers.dining import DiningProvider
from tripsearch.search.providers.lodging import LodgingProvider
from tripsearch.shared.contracts.results import (
    ActivityResult,
    DiningResult,
    LodgingResult,
)
from tripsearch.shared.contracts.search_plan import SearchPlan


logger = logging.getLogger(__name__)


class SearchBranchState(TypedDict, total=False):
    """
    State for the fan-out graph.

    Each branch writes only its own results key, so parallel updates
    never collide.
    """

    search_id: str
    plan: SearchPlan
    lodging_results: List[LodgingResult]
    activity_results: List[ActivityResult]
    dining_results: List[DiningResult]


SearchTriple = Tuple[List[LodgingResult], List[ActivityResult], List[DiningResult]]


class SearchCoordinator:
    """Concurrent fan-out over the three search providers."""

    def __init__(
        self,
        lodging: LodgingProvider,
        activity: ActivityProvider,
        dining: DiningProvider,
        tracker: ProgressTracker,
        config: Optional[SearchConfig] = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.tracker = tracker
        self.branches = [
            (lodging, self.config.lodging_count, "lodging_results"),
            (activity, self.config.activity_count, "activity_results"),
            (dining, self.config.dining_count, "dining_results"),
        ]
        self._graph = self._build_graph()

    def _make_branch(self, provider: SearchProvider, count: int, output_key: str):
        """Wrap a provider as a graph node that reports its own stage."""

        def branch(state: SearchBranchState) -> dict:
            search_id = state["search_id"]
            results = provider.search(state["plan"], count, search_id=search_id)
            self.tracker.mark(search_id, provider.stage, "done")
            return {output_key: results}

        return branch

    def _build_graph(self):
        """
        Build the fan-out graph.

        The graph structure is:
            START -> lodging  -> END
            START -> activity -> END
            START -> dining   -> END
        """
        graph = StateGraph(SearchBranchState)

        for provider, count, output_key in self.branches:
            graph.add_node(provider.stage, self._make_branch(provider, count, output_key))
            graph.add_edge(START, provider.stage)
            graph.add_edge(provider.stage, END)

        return graph.compile()

    def run_searches(self, search_id: str, plan: SearchPlan) -> SearchTriple:
        """
        Run all three providers concurrently and wait for every one.

        Each stage is marked ``searching`` right before dispatch and
        ``done`` as soon as its provider returns. Store errors propagate.

        Returns:
            (lodging, activity, dining) result lists
        """
        _log = f"[search={search_id}] [graph=search] [node=coordinator] "
        stages = [provider.stage for provider, _, _ in self.branches]

        self.tracker.update_progress(search_id, {stage: "searching" for stage in stages})
        logger.info(f"{_log}Dispatching providers | stages={stages}")

        final_state = self._graph.invoke(
            {"search_id": search_id, "plan": plan},
            config={"recursion_limit": self.config.recursion_limit},
        )

        lodging = final_state.get("lodging_results", [])
        activity = final_state.get("activity_results", [])
        dining = final_state.get("dining_results", [])

        logger.info(
            f"{_log}All providers settled | lodging={len(lodging)}, "
            f"activity={len(activity)}, dining={len(dining)}"
        )
        return lodging, activity, dining
