"""
Dining provider.

Finds restaurants for breakfast, lunch and dinner within the plan's
price tier.
"""

from typing import Iterable

from tripsearch.search.prompts import DINING_SYSTEM_PROMPT, build_dining_prompt
from tripsearch.search.providers.base import SearchProvider
from tripsearch.search.schemas import DiningList
from tripsearch.search.scoring import VibeScore, score_dining
from tripsearch.shared.contracts.results import DiningCandidate, DiningResult
from tripsearch.shared.contracts.search_plan import SearchPlan
from tripsearch.shared.contracts.search_record import STAGE_DINING


class DiningProvider(SearchProvider[DiningCandidate, DiningResult]):
    stage = STAGE_DINING
    id_prefix = "dining"
    list_schema = DiningList
    list_field = "restaurants"
    result_type = DiningResult
    system_prompt = DINING_SYSTEM_PROMPT

    def build_prompt(self, plan: SearchPlan, count: int) -> str:
        return build_dining_prompt(plan, count)

    def score(self, candidate: DiningCandidate, vibes: Iterable[str]) -> VibeScore:
        return score_dining(candidate, vibes)
