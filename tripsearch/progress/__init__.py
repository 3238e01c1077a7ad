"""Search progress tracking."""

from tripsearch.progress.merge import merge_progress
from tripsearch.progress.tracker import ProgressTracker

__all__ = ["merge_progress", "ProgressTracker"]
