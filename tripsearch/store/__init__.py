"""Search record storage."""

from tripsearch.store.base import RecordStore
from tripsearch.store.memory import InMemoryRecordStore

__all__ = ["RecordStore", "InMemoryRecordStore"]
