"""
Search pipeline graph construction.

Builds the top-level graph that sequences plan -> search -> aggregate.
Each node reports its stage through the progress tracker; the search
node delegates the concurrent fan-out to the coordinator.
"""

import logging
from typing import Any, Dict

from langgraph.graph import StateGraph, START, END

from tripsearch.aggregate.aggregator import ItineraryAggregator
from tripsearch.graph.state import PipelineState
from tripsearch.plan.deriver import PlanDeriver
from tripsearch.progress.tracker import ProgressTracker
from tripsearch.search.coordinator import SearchCoordinator
from tripsearch.shared.contracts.search_record import STAGE_AGGREGATE, STAGE_PLAN


logger = logging.getLogger(__name__)


def create_search_pipeline(
    deriver: PlanDeriver,
    coordinator: SearchCoordinator,
    aggregator: ItineraryAggregator,
    tracker: ProgressTracker,
):
    """
    Create and compile the search pipeline graph.

    The graph structure is:
        START -> plan_node -> search_node -> aggregate_node -> END

    The aggregate node only runs once the search node has returned, i.e.
    after all three providers settled.

    Args:
        deriver: Plan deriver
        coordinator: Search coordinator (runs the providers concurrently)
        aggregator: Itinerary aggregator
        tracker: Progress tracker shared by every stage

    Returns:
        Compiled LangGraph application ready for execution.
    """

    def plan_node(state: PipelineState) -> Dict[str, Any]:
        search_id = state["search_id"]
        logger.info(f"[search={search_id}] [graph=pipeline] [node=plan] Entering node")

        tracker.mark(search_id, STAGE_PLAN, "searching")
        plan = deriver.derive_plan(state["search_input"], search_id=search_id)
        tracker.mark(search_id, STAGE_PLAN, "done")

        return {"plan": plan}

    def search_node(state: PipelineState) -> Dict[str, Any]:
        search_id = state["search_id"]
        logger.info(f"[search={search_id}] [graph=pipeline] [node=search] Entering node")

        lodging, activity, dining = coordinator.run_searches(search_id, state["plan"])

        return {"lodging": lodging, "activity": activity, "dining": dining}

    def aggregate_node(state: PipelineState) -> Dict[str, Any]:
        search_id = state["search_id"]
        logger.info(f"[search={search_id}] [graph=pipeline] [node=aggregate] Entering node")

        tracker.mark(search_id, STAGE_AGGREGATE, "searching")
        itinerary = aggregator.aggregate(
            state["plan"],
            state.get("lodging", []),
            state.get("activity", []),
            state.get("dining", []),
            search_id=search_id,
        )
        tracker.mark(search_id, STAGE_AGGREGATE, "done")

        return {"itinerary": itinerary}

    graph = StateGraph(PipelineState)

    graph.add_node("plan_node", plan_node)
    graph.add_node("search_node", search_node)
    graph.add_node("aggregate_node", aggregate_node)

    graph.add_edge(START, "plan_node")
    graph.add_edge("plan_node", "search_node")
    graph.add_edge("search_node", "aggregate_node")
    graph.add_edge("aggregate_node", END)

    return graph.compile()
