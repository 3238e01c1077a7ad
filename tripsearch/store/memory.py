"""
In-memory record store.

Process-local storage guarded by a lock. Suitable for tests and a single
API process; swap for a database-backed ``RecordStore`` in production.
"""

import threading
import uuid
from datetime import datetime, timezone
from typing import Dict, Optional

from tripsearch.progress.merge import merge_progress
from tripsearch.shared.contracts.search_input import SearchInput
from tripsearch.shared.contracts.search_record import (
    SearchProgress,
    SearchRecord,
    SearchResults,
    SearchStatus,
)
from tripsearch.shared.errors import SearchNotFoundError
from tripsearch.store.base import RecordStore


class InMemoryRecordStore(RecordStore):
    """Dict-backed store; every public call holds the lock for its duration."""

    def __init__(self):
        self._records: Dict[str, SearchRecord] = {}
        self._lock = threading.Lock()

    def create_search(self, search_input: SearchInput) -> SearchRecord:
        record = SearchRecord(id=str(uuid.uuid4()), input=search_input)
        with self._lock:
            self._records[record.id] = record
        return record.model_copy(deep=True)

    def get_search(self, search_id: str) -> SearchRecord:
        with self._lock:
            return self._get(search_id).model_copy(deep=True)

    def upsert_progress(self, search_id: str, partial: Dict[str, str]) -> SearchProgress:
        with self._lock:
            record = self._get(search_id)
            progress = merge_progress(record.progress, partial)
            self._records[search_id] = record.model_copy(
                update={"progress": progress, "updated_at": _utcnow()}
            )
            return dict(progress)

    def set_status(
        self,
        search_id: str,
        status: SearchStatus,
        error_message: Optional[str] = None,
    ) -> SearchRecord:
        with self._lock:
            record = self._get(search_id)
            now = _utcnow()
            update = {
                "status": status,
                "error_message": error_message,
                "updated_at": now,
            }
            if status == "completed":
                update["completed_at"] = now
            record = record.model_copy(update=update)
            self._records[search_id] = record
            return record.model_copy(deep=True)

    def save_results(self, search_id: str, results: SearchResults) -> None:
        with self._lock:
            record = self._get(search_id)
            self._records[search_id] = record.model_copy(
                update={"results": results.model_copy(deep=True), "updated_at": _utcnow()}
            )

    def _get(self, search_id: str) -> SearchRecord:
        record = self._records.get(search_id)
        if record is None:
            raise SearchNotFoundError(search_id)
        return record


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)
