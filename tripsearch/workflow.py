"""
Search workflow entry point.

``SearchWorkflow.run_search`` runs plan derivation, the concurrent
searches and aggregation, persists the results and always resolves to a
terminal outcome. Generation failures are absorbed inside each stage;
anything that still escapes (e.g. the record store being unreachable)
marks the search as ``error``.

Every stage is side-effect free apart from its generative call and its
own progress key, so an external executor may re-run the workflow for a
search. A re-run produces fresh result ids and replaces, rather than
appends to, the stored results.
"""

import logging
from typing import Optional

from tripsearch.aggregate.aggregator import ItineraryAggregator
from tripsearch.config import SearchConfig, DEFAULT_CONFIG
from tripsearch.graph.build import create_search_pipeline
from tripsearch.plan.deriver import PlanDeriver
from tripsearch.progress.tracker import ProgressTracker
from tripsearch.search.coordinator import SearchCoordinator
from tripsearch.search.providers.activity import ActivityProvider
from tripsearch.search.providers.dining import DiningProvider
from tripsearch.search.providers.lodging import LodgingProvider
from tripsearch.shared.contracts.search_input import SearchInput
from tripsearch.shared.contracts.search_record import (
    SearchOutcome,
    SearchRecord,
    SearchResults,
)
from tripsearch.shared.llm.client import (
    GenerativeService,
    OpenAIGenerator,
    create_openai_client,
)
from tripsearch.store.base import RecordStore
from tripsearch.store.memory import InMemoryRecordStore


logger = logging.getLogger(__name__)


class SearchWorkflow:
    """
    Wires the pipeline stages to one generative service and one store.

    Collaborators are passed in; the process that creates the workflow
    owns their lifecycle.
    """

    def __init__(
        self,
        store: RecordStore,
        generator: GenerativeService,
        config: Optional[SearchConfig] = None,
    ):
        self.store = store
        self.generator = generator
        self.config = config or DEFAULT_CONFIG
        self.tracker = ProgressTracker(store)

        self.deriver = PlanDeriver(generator)
        self.coordinator = SearchCoordinator(
            LodgingProvider(generator, rerank=self.config.rerank),
            ActivityProvider(generator, rerank=self.config.rerank),
            DiningProvider(generator, rerank=self.config.rerank),
            self.tracker,
            self.config,
        )
        self.aggregator = ItineraryAggregator(generator, self.config)
        self._graph = create_search_pipeline(
            self.deriver, self.coordinator, self.aggregator, self.tracker
        )

    @classmethod
    def from_env(
        cls,
        store: Optional[RecordStore] = None,
        config: Optional[SearchConfig] = None,
    ) -> "SearchWorkflow":
        """Build a workflow with an OpenAI generator configured from the environment."""
        config = config or SearchConfig.from_env()
        client = create_openai_client(timeout=config.llm_timeout)
        generator = OpenAIGenerator(client, model=config.model)
        return cls(store or InMemoryRecordStore(), generator, config)

    def start_search(self, search_input: SearchInput) -> SearchRecord:
        """Create the pending record for a new search."""
        record = self.store.create_search(search_input)
        logger.info(
            f"[search={record.id}] [api=start] Search created | "
            f"destination={search_input.destination}, nights={search_input.nights}"
        )
        return record

    def run_search(self, search_id: str, search_input: SearchInput) -> SearchOutcome:
        """
        Run the full search for an existing record.

        Never raises: resolves to ``completed`` with results or to
        ``error`` with the captured message.
        """
        _log = f"[search={search_id}] [graph=pipeline] [api=run] "
        logger.info(
            f"{_log}Pipeline starting | destination={search_input.destination}, "
            f"dates={search_input.start_date}..{search_input.end_date}, "
            f"vibes={search_input.vibes}, budget={search_input.budget}"
        )

        try:
            self.store.set_status(search_id, "searching")

            final_state = self._graph.invoke(
                {"search_id": search_id, "search_input": search_input},
                config={"recursion_limit": self.config.recursion_limit},
            )

            plan = final_state["plan"]
            itinerary = final_state["itinerary"]
            results = SearchResults(
                search_id=search_id,
                lodging=final_state.get("lodging", []),
                activity=final_state.get("activity", []),
                dining=final_state.get("dining", []),
                itinerary=itinerary.days,
                chosen_lodging=itinerary.chosen_lodging,
                degraded=plan.fallback or itinerary.fallback,
            )

            self.store.save_results(search_id, results)
            self.store.set_status(search_id, "completed")
        except Exception as e:
            message = str(e) or e.__class__.__name__
            logger.exception(f"{_log}Pipeline failed: {message}")
            self._mark_failed(search_id, message)
            return SearchOutcome(search_id=search_id, status="error", error=message)

        logger.info(
            f"{_log}Pipeline finished | status=completed, days={len(results.itinerary)}, "
            f"lodging={len(results.lodging)}, activity={len(results.activity)}, "
            f"dining={len(results.dining)}, degraded={results.degraded}"
        )
        return SearchOutcome(search_id=search_id, status="completed", results=results)

    def _mark_failed(self, search_id: str, message: str) -> None:
        """Record the failure; stages still in flight are marked ``error``."""
        try:
            record = self.store.get_search(search_id)
            in_flight = {
                stage: "error"
                for stage, status in record.progress.items()
                if status == "searching"
            }
            if in_flight:
                self.tracker.update_progress(search_id, in_flight)
            self.store.set_status(search_id, "error", error_message=message)
        except Exception:
            logger.exception(f"[search={search_id}] Could not record failure in the store")
