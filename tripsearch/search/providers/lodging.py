"""
Lodging provider.

Finds accommodation matching the plan's price band, star ratings,
amenities and neighborhoods.
"""

from typing import Iterable

from tripsearch.search.prompts import LODGING_SYSTEM_PROMPT, build_lodging_prompt
from tripsearch.search.providers.base import SearchProvider
from tripsearch.search.schemas import LodgingList
from tripsearch.search.scoring import VibeScore, score_lodging
from tripsearch.shared.contracts.results import LodgingCandidate, LodgingResult
from tripsearch.shared.contracts.search_plan import SearchPlan
from tripsearch.shared.contracts.search_record import STAGE_LODGING


class LodgingProvider(SearchProvider[LodgingCandidate, LodgingResult]):
    stage = STAGE_LODGING
    id_prefix = "lodging"
    list_schema = LodgingList
    list_field = "lodging"
    result_type = LodgingResult
    system_prompt = LODGING_SYSTEM_PROMPT

    def build_prompt(self, plan: SearchPlan, count: int) -> str:
        return build_lodging_prompt(plan, count)

    def score(self, candidate: LodgingCandidate, vibes: Iterable[str]) -> VibeScore:
        return score_lodging(candidate, vibes)
