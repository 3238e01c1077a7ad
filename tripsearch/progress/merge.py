"""
Progress map merge rule.

A partial update is shallow-merged over the current map: stages absent
from the partial keep their value. Stages move forward only
(pending -> searching -> done | error); a write that would move a stage
backwards is ignored, so replayed or late writes cannot regress it.
"""

from typing import Dict, Mapping

from tripsearch.shared.contracts.search_record import SearchProgress


STATUS_RANK: Dict[str, int] = {
    "pending": 0,
    "searching": 1,
    "done": 2,
    "error": 2,
}


def validate_status(stage: str, status: str) -> None:
    if status not in STATUS_RANK:
        raise ValueError(f"Unknown status {status!r} for stage {stage!r}")


def merge_progress(
    current: Mapping[str, str],
    partial: Mapping[str, str],
) -> SearchProgress:
    """
    Merge ``partial`` over ``current`` and return a new map.

    Idempotent, and updates for different stages commute.

    Args:
        current: Progress map as stored
        partial: Stage -> status updates

    Returns:
        The merged progress map (inputs are not modified)

    Raises:
        ValueError: If a status value is unknown
    """
    merged = dict(current)
    for stage, status in partial.items():
        validate_status(stage, status)
        existing = merged.get(stage)
        if existing is not None and STATUS_RANK.get(existing, 0) > STATUS_RANK[status]:
            continue
        merged[stage] = status
    return merged
