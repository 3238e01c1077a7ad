"""
Shared infrastructure for all pipeline stages.

Modules:
- llm: Generative service boundary and OpenAI implementation
- logging: Structured JSON logging
- contracts: Data contracts passed between stages
- reference: Static vibe and budget tables
- errors: Error taxonomy
"""

from tripsearch.shared.llm.client import GenerativeService, OpenAIGenerator
from tripsearch.shared.logging.config import setup_logging, log_stage_transition

__all__ = [
    "GenerativeService",
    "OpenAIGenerator",
    "setup_logging",
    "log_stage_transition",
]
