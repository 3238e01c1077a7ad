"""
Base search provider.

The three providers share one flow: build a category prompt from the
plan, request ``count`` candidates, attach fresh ids, keep scores and
vibe matches inside their invariants, and sort by vibe score. A provider
never raises from ``search``; a failed category yields an empty list.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Generic, Iterable, List, Type, TypeVar

from pydantic import BaseModel

from tripsearch.search.scoring import VibeScore
from tripsearch.shared.contracts.search_plan import SearchPlan
from tripsearch.shared.llm.client import GenerativeService
from tripsearch.shared.reference import normalize_vibe


logger = logging.getLogger(__name__)

C = TypeVar("C", bound=BaseModel)
R = TypeVar("R", bound=BaseModel)


def new_result_id(prefix: str) -> str:
    """Generate a unique result id such as ``lodging_3f2a...``."""
    return f"{prefix}_{uuid.uuid4().hex}"


def filter_vibe_match(matched: Iterable[str], plan_vibes: Iterable[str]) -> List[str]:
    """
    Restrict matched vibes to the plan's vibe list.

    Comparison is case-insensitive; the plan's spelling is kept and
    duplicates are dropped.
    """
    canonical = {}
    for vibe in plan_vibes:
        canonical.setdefault(normalize_vibe(vibe), vibe)

    result: List[str] = []
    for vibe in matched:
        name = canonical.get(normalize_vibe(vibe))
        if name is not None and name not in result:
            result.append(name)
    return result


def rank_by_vibe_score(results: List[R]) -> List[R]:
    """Sort descending by vibe score; ties keep their input order."""
    return sorted(results, key=lambda r: r.vibe_score, reverse=True)


class SearchProvider(ABC, Generic[C, R]):
    """
    Common behavior for the lodging, activity and dining providers.

    Subclasses declare their stage name, id prefix, schemas and prompts.
    """

    stage: str
    id_prefix: str
    list_schema: Type[BaseModel]
    list_field: str
    result_type: Type[R]
    system_prompt: str

    def __init__(self, generator: GenerativeService, rerank: bool = False):
        self.generator = generator
        self.rerank = rerank

    @abstractmethod
    def build_prompt(self, plan: SearchPlan, count: int) -> str:
        """Build the category-specific instruction."""

    @abstractmethod
    def score(self, candidate: C, vibes: Iterable[str]) -> VibeScore:
        """Deterministic vibe score for one candidate."""

    def search(self, plan: SearchPlan, count: int, search_id: str = "unknown") -> List[R]:
        """
        Search for up to ``count`` results matching the plan.

        Args:
            plan: The shared search plan
            count: Number of results to request
            search_id: Used for log context only

        Returns:
            Results sorted by vibe score (descending), or an empty list if
            generation failed for any reason
        """
        _log = f"[search={search_id}] [stage={self.stage}] "
        logger.info(f"{_log}Searching | destination={plan.destination}, count={count}")

        try:
            response = self.generator.generate(
                self.build_prompt(plan, count),
                self.list_schema,
                system=self.system_prompt,
            )
            candidates = list(getattr(response, self.list_field))[:count]
            results = [self._to_result(c, plan) for c in candidates]
            if self.rerank:
                results = self.rescore(results, plan)
        except Exception as e:
            logger.exception(f"{_log}Search failed, returning no results: {e}")
            return []

        results = rank_by_vibe_score(results)
        logger.info(
            f"{_log}Search complete | results={len(results)}, "
            f"top_score={results[0].vibe_score if results else 'N/A'}"
        )
        return results

    def rescore(self, results: List[R], plan: SearchPlan) -> List[R]:
        """
        Re-rank results with the deterministic vibe score.

        Returns new result objects; ids are preserved.
        """
        vibes = plan.vibe_interpretation.vibes
        rescored = []
        for result in results:
            scored = self.score(result, vibes)
            rescored.append(
                result.model_copy(
                    update={
                        "vibe_score": scored.score,
                        "vibe_match": filter_vibe_match(scored.matched_vibes, vibes),
                    }
                )
            )
        return rank_by_vibe_score(rescored)

    def _to_result(self, candidate: C, plan: SearchPlan) -> R:
        data = candidate.model_dump()
        data["vibe_match"] = filter_vibe_match(data.get("vibe_match", []), plan.vibe_interpretation.vibes)
        data["id"] = new_result_id(self.id_prefix)
        return self.result_type.model_validate(data)
