"""
Progress tracker.

Thin layer over the record store that every stage uses to report its
status. Each stage only ever writes its own key, so concurrent writers
never need to coordinate beyond the store's merge rule.
"""

import logging
from typing import Mapping

from tripsearch.shared.contracts.search_record import AgentStatus, SearchProgress
from tripsearch.shared.logging.config import log_stage_transition
from tripsearch.store.base import RecordStore


logger = logging.getLogger(__name__)


class ProgressTracker:
    """Merge-only progress updates for a search record."""

    def __init__(self, store: RecordStore):
        self.store = store

    def update_progress(
        self,
        search_id: str,
        partial: Mapping[str, AgentStatus],
    ) -> SearchProgress:
        """
        Merge a partial stage -> status map into the stored progress.

        Safe to call repeatedly with the same update. Store errors propagate.

        Returns:
            The progress map after the merge
        """
        progress = self.store.upsert_progress(search_id, dict(partial))
        log_stage_transition(
            "progress_update",
            search_id,
            progress,
            extra=dict(partial),
            logger=logger,
        )
        return progress

    def mark(self, search_id: str, stage: str, status: AgentStatus) -> SearchProgress:
        """Set a single stage's status."""
        return self.update_progress(search_id, {stage: status})
