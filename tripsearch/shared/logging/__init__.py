"""Logging configuration and utilities."""

from tripsearch.shared.logging.config import (
    setup_logging,
    log_stage_transition,
    StructuredFormatter,
)

__all__ = [
    "setup_logging",
    "log_stage_transition",
    "StructuredFormatter",
]
