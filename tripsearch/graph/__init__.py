"""
Top-level search pipeline graph.

Sequences the plan deriver, the concurrent search fan-out and the
itinerary aggregator:
    plan -> (lodging | activity | dining) -> aggregate
"""

from tripsearch.graph.build import create_search_pipeline

__all__ = ["create_search_pipeline"]
