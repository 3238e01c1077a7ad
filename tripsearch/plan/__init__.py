"""
Plan deriver.

Turns the raw trip request into the structured search plan shared by the
lodging, activity and dining providers.
"""

from tripsearch.plan.deriver import PlanDeriver, build_default_plan

__all__ = ["PlanDeriver", "build_default_plan"]
