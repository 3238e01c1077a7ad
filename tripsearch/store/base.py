"""
Record store boundary.

The pipeline only needs atomic progress merges, status updates and
result storage. Implementations must make each call atomic on its own;
no call spans more than one operation.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional

from tripsearch.shared.contracts.search_input import SearchInput
from tripsearch.shared.contracts.search_record import (
    SearchProgress,
    SearchRecord,
    SearchResults,
    SearchStatus,
)


class RecordStore(ABC):
    """Persistent store for search records."""

    @abstractmethod
    def create_search(self, search_input: SearchInput) -> SearchRecord:
        """Create a pending record with every stage pending."""

    @abstractmethod
    def get_search(self, search_id: str) -> SearchRecord:
        """
        Return the record for ``search_id``.

        Raises:
            SearchNotFoundError: If the id is unknown
        """

    @abstractmethod
    def upsert_progress(self, search_id: str, partial: Dict[str, str]) -> SearchProgress:
        """Merge ``partial`` into the stored progress and return the result."""

    @abstractmethod
    def set_status(
        self,
        search_id: str,
        status: SearchStatus,
        error_message: Optional[str] = None,
    ) -> SearchRecord:
        """Update the overall status (and error message)."""

    @abstractmethod
    def save_results(self, search_id: str, results: SearchResults) -> None:
        """Store the full result set, replacing any previous one."""
