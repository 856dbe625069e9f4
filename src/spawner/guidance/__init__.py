"""
Guidance for agents: unstick advice and development plans.
"""

from spawner.guidance.planner import PLAN_RULES, Planner, PlanRule
from spawner.guidance.unstick import STRATEGIES, UnstickAdvisor

__all__ = [
    "PLAN_RULES",
    "PlanRule",
    "Planner",
    "STRATEGIES",
    "UnstickAdvisor",
]
