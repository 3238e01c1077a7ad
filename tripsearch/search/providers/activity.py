"""
Activity provider.

Finds tours, attractions and experiences, each tagged with the time of
day it suits best.
"""

from typing import Iterable

from tripsearch.search.prompts import ACTIVITY_SYSTEM_PROMPT, build_activity_prompt
from tripsearch.search.providers.base import SearchProvider
from tripsearch.search.schemas import ActivityList
from tripsearch.search.scoring import VibeScore, score_activity
from tripsearch.shared.contracts.results import ActivityCandidate, ActivityResult
from tripsearch.shared.contracts.search_plan import SearchPlan
from tripsearch.shared.contracts.search_record import STAGE_ACTIVITY


class ActivityProvider(SearchProvider[ActivityCandidate, ActivityResult]):
    stage = STAGE_ACTIVITY
    id_prefix = "activity"
    list_schema = ActivityList
    list_field = "activities"
    result_type = ActivityResult
    system_prompt = ACTIVITY_SYSTEM_PROMPT

    def build_prompt(self, plan: SearchPlan, count: int) -> str:
        return build_activity_prompt(plan, count)

    def score(self, candidate: ActivityCandidate, vibes: Iterable[str]) -> VibeScore:
        return score_activity(candidate, vibes)
