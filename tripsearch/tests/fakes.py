"""
Test doubles and builders shared by the test modules.

``FakeGenerator`` stands in for the generative service: responses are
scripted per target schema, and any schema without a script fails with
``GenerationError`` the way a real timeout or malformed output would.
"""

import threading
from datetime import date
from typing import Any, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel

from tripsearch.plan.deriver import build_default_plan
from tripsearch.shared.contracts.results import (
    ActivityCandidate,
    ActivityResult,
    DiningCandidate,
    DiningResult,
    LocationInfo,
    LodgingCandidate,
    LodgingResult,
)
from tripsearch.shared.contracts.search_input import SearchInput
from tripsearch.shared.contracts.search_plan import SearchPlan
from tripsearch.shared.errors import GenerationError, StoreError
from tripsearch.store.memory import InMemoryRecordStore


# A scripted response: a ready model instance, an exception to raise, or a
# callable receiving the instruction and returning one of those
Script = Any


class FakeGenerator:
    """Scripted ``GenerativeService``; thread-safe so parallel branches can share it."""

    def __init__(self, responses: Optional[Dict[Type[BaseModel], Script]] = None):
        self.responses: Dict[Type[BaseModel], Script] = dict(responses or {})
        self.calls: List[Tuple[str, str]] = []
        self._lock = threading.Lock()

    def generate(self, instruction: str, schema: Type[BaseModel], system: Optional[str] = None):
        with self._lock:
            self.calls.append((schema.__name__, instruction))

        response = self.responses.get(schema)
        if response is None:
            raise GenerationError(f"No scripted response for {schema.__name__}")
        if callable(response) and not isinstance(response, BaseModel):
            response = response(instruction)
        if isinstance(response, Exception):
            raise response
        return response

    def schemas_called(self) -> List[str]:
        with self._lock:
            return [name for name, _ in self.calls]

    def instructions_for(self, schema: Type[BaseModel]) -> List[str]:
        with self._lock:
            return [text for name, text in self.calls if name == schema.__name__]


class FailingStore(InMemoryRecordStore):
    """In-memory store that fails selected operations with ``StoreError``."""

    def __init__(self, fail_on: Tuple[str, ...] = ()):
        super().__init__()
        self.fail_on = set(fail_on)

    def _maybe_fail(self, operation: str) -> None:
        if operation in self.fail_on:
            raise StoreError(f"store unavailable during {operation}")

    def upsert_progress(self, search_id, partial):
        self._maybe_fail("upsert_progress")
        return super().upsert_progress(search_id, partial)

    def set_status(self, search_id, status, error_message=None):
        self._maybe_fail("set_status")
        return super().set_status(search_id, status, error_message=error_message)

    def save_results(self, search_id, results):
        self._maybe_fail("save_results")
        return super().save_results(search_id, results)


# ============================================================================
# Builders
# ============================================================================


def make_search_input(**overrides) -> SearchInput:
    """Three-night Lisbon trip for a foodie/cultural couple."""
    data = {
        "destination": "Lisbon",
        "start_date": date(2026, 3, 1),
        "end_date": date(2026, 3, 4),
        "travelers": 2,
        "traveler_type": "couple",
        "vibes": ["foodie", "cultural"],
        "budget": "moderate",
    }
    data.update(overrides)
    return SearchInput(**data)


def make_plan(**input_overrides) -> SearchPlan:
    """A non-fallback plan for the Lisbon trip."""
    plan = build_default_plan(make_search_input(**input_overrides))
    return plan.model_copy(update={"country": "Portugal", "fallback": False})


def _location(name: str = "Baixa") -> LocationInfo:
    return LocationInfo(name=name, address=f"{name}, Lisbon", lat=38.71, lng=-9.14, neighborhood=name)


def make_lodging_candidate(name: str = "Hotel Baixa", vibe_score: int = 70, **overrides) -> LodgingCandidate:
    data = {
        "name": name,
        "description": "Comfortable stay in the center",
        "location": _location(),
        "vibe_score": vibe_score,
        "star_rating": 4,
        "user_rating": 8.7,
        "review_count": 1200,
        "price_per_night": 150.0,
        "total_price": 450.0,
        "amenities": ["wifi", "breakfast"],
    }
    data.update(overrides)
    return LodgingCandidate(**data)


def make_activity_candidate(
    name: str = "Tram 28 Tour",
    vibe_score: int = 60,
    best_time_of_day: str = "any",
    **overrides,
) -> ActivityCandidate:
    data = {
        "name": name,
        "description": "Classic ride through the old town",
        "location": _location("Alfama"),
        "vibe_score": vibe_score,
        "category": "tour",
        "duration": 90,
        "price": 20.0,
        "rating": 4.5,
        "best_time_of_day": best_time_of_day,
    }
    data.update(overrides)
    return ActivityCandidate(**data)


def make_dining_candidate(
    name: str = "Taberna",
    vibe_score: int = 65,
    meal_types: Tuple[str, ...] = ("dinner",),
    price_level: int = 2,
    **overrides,
) -> DiningCandidate:
    data = {
        "name": name,
        "description": "Neighborhood tavern",
        "location": _location("Bairro Alto"),
        "vibe_score": vibe_score,
        "cuisine_types": ["Portuguese"],
        "price_level": price_level,
        "rating": 4.6,
        "meal_types": list(meal_types),
    }
    data.update(overrides)
    return DiningCandidate(**data)


def make_lodging(result_id: str, vibe_score: int = 70, price_per_night: float = 150.0, **overrides) -> LodgingResult:
    candidate = make_lodging_candidate(
        name=f"Hotel {result_id}", vibe_score=vibe_score, price_per_night=price_per_night, **overrides
    )
    return LodgingResult(id=result_id, **candidate.model_dump())


def make_activity(
    result_id: str,
    best_time_of_day: str = "any",
    vibe_score: int = 60,
    price: float = 20.0,
    **overrides,
) -> ActivityResult:
    candidate = make_activity_candidate(
        name=f"Activity {result_id}",
        vibe_score=vibe_score,
        best_time_of_day=best_time_of_day,
        price=price,
        **overrides,
    )
    return ActivityResult(id=result_id, **candidate.model_dump())


def make_dining(
    result_id: str,
    meal_types: Tuple[str, ...] = ("dinner",),
    price_level: int = 2,
    vibe_score: int = 65,
    **overrides,
) -> DiningResult:
    candidate = make_dining_candidate(
        name=f"Restaurant {result_id}",
        vibe_score=vibe_score,
        meal_types=meal_types,
        price_level=price_level,
        **overrides,
    )
    return DiningResult(id=result_id, **candidate.model_dump())


def all_result_ids(results: List[BaseModel]) -> set:
    return {r.id for r in results}
