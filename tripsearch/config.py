"""
Configuration for the search pipeline.

Centralizes model, result-count and aggregation options. Values can be
overridden from ``TRIPSEARCH_*`` environment variables (a ``.env`` file is
loaded if present).
"""

import os
from dataclasses import dataclass, fields

from dotenv import load_dotenv


@dataclass
class SearchConfig:
    """
    Configuration for a search run.

    Attributes:
        model: LLM model used for every generative call
        llm_timeout: Generative call timeout in seconds
        lodging_count: Lodging results requested per search
        activity_count: Activity results requested per search
        dining_count: Dining results requested per search
        aggregate_top_lodging: Lodging items summarized for the aggregator
        aggregate_top_activity: Activity items summarized for the aggregator
        aggregate_top_dining: Dining items summarized for the aggregator
        rerank: Replace generated vibe scores with deterministic ones
        recursion_limit: Maximum number of graph steps
    """

    model: str = "gpt-4.1-mini"
    llm_timeout: int = 60
    lodging_count: int = 10
    activity_count: int = 15
    dining_count: int = 12
    aggregate_top_lodging: int = 5
    aggregate_top_activity: int = 20
    aggregate_top_dining: int = 15
    rerank: bool = False
    recursion_limit: int = 10

    @classmethod
    def from_env(cls, prefix: str = "TRIPSEARCH_") -> "SearchConfig":
        """
        Build a config from environment variables.

        Each field maps to ``<prefix><FIELD_NAME>``, e.g. TRIPSEARCH_MODEL or
        TRIPSEARCH_LODGING_COUNT. Unset variables keep their defaults.
        """
        load_dotenv()
        overrides = {}
        for f in fields(cls):
            raw = os.environ.get(f"{prefix}{f.name.upper()}")
            if raw is None:
                continue
            if f.type in (bool, "bool"):
                overrides[f.name] = raw.strip().lower() in ("1", "true", "yes", "on")
            elif f.type in (int, "int"):
                overrides[f.name] = int(raw)
            else:
                overrides[f.name] = raw
        return cls(**overrides)


# Default configuration instance
DEFAULT_CONFIG = SearchConfig()
