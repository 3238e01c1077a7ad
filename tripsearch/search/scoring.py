"""
Deterministic vibe scoring.

Scores a result against the requested vibes by keyword matching over its
text fields. Used to re-rank generated results independently of the
score the generative service assigned.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, NamedTuple, Tuple

from tripsearch.shared.contracts.results import (
    ActivityCandidate,
    DiningCandidate,
    LodgingCandidate,
    clamp_vibe_score,
)
from tripsearch.shared.reference import keywords_for_vibe, normalize_vibe


class VibeScore(NamedTuple):
    score: int
    matched_vibes: List[str]


@dataclass(frozen=True)
class VibeBonus:
    """Extra points when ``vibe`` is requested and any of ``keywords`` appears."""

    vibe: str
    points: int
    keywords: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ScoringRule:
    """
    Scoring parameters for one result category.

    Attributes:
        base: Starting score before any match
        points_per_match: Points per matched keyword
        bonuses: Category-specific vibe bonuses
    """

    base: int
    points_per_match: int
    bonuses: Tuple[VibeBonus, ...] = field(default_factory=tuple)


LODGING_RULE = ScoringRule(
    base=50,
    points_per_match=10,
    bonuses=(
        VibeBonus("romantic", 20, ("boutique",)),
        VibeBonus("relaxation", 25, ("spa",)),
        VibeBonus("wellness", 20, ("spa", "fitness")),
    ),
)

ACTIVITY_RULE = ScoringRule(base=0, points_per_match=15)

DINING_RULE = ScoringRule(
    base=50,
    points_per_match=12,
    bonuses=(
        # Empty keywords: applies whenever the vibe is requested
        VibeBonus("foodie", 15),
        VibeBonus("romantic", 20, ("intimate",)),
        VibeBonus("cultural", 20, ("traditional",)),
    ),
)


def score_text(text: str, vibes: Iterable[str], rule: ScoringRule) -> VibeScore:
    """
    Score free text against a list of vibes.

    Args:
        text: Text to search (matched case-insensitively)
        vibes: Requested vibes, in the caller's spelling
        rule: Category scoring parameters

    Returns:
        Clamped score and the vibes that matched at least one keyword,
        in request order
    """
    text = text.lower()
    vibes = list(vibes)
    requested = {normalize_vibe(v) for v in vibes}
    matched: List[str] = []
    seen = set()
    score = rule.base

    for vibe in vibes:
        key = normalize_vibe(vibe)
        if key in seen:
            continue
        seen.add(key)
        matches = [k for k in keywords_for_vibe(vibe) if k.lower() in text]
        if matches:
            matched.append(vibe)
            score += len(matches) * rule.points_per_match

    for bonus in rule.bonuses:
        if bonus.vibe not in requested:
            continue
        if not bonus.keywords or any(k in text for k in bonus.keywords):
            score += bonus.points

    return VibeScore(clamp_vibe_score(score), matched)


def score_lodging(lodging: LodgingCandidate, vibes: Iterable[str]) -> VibeScore:
    text = f"{lodging.name} {lodging.description} {' '.join(lodging.amenities)}"
    return score_text(text, vibes, LODGING_RULE)


def score_activity(activity: ActivityCandidate, vibes: Iterable[str]) -> VibeScore:
    text = f"{activity.name} {activity.description} {activity.category}"
    return score_text(text, vibes, ACTIVITY_RULE)


def score_dining(dining: DiningCandidate, vibes: Iterable[str]) -> VibeScore:
    text = f"{dining.name} {dining.description} {' '.join(dining.cuisine_types)}"
    return score_text(text, vibes, DINING_RULE)
