"""LLM integration for the fitness coach."""

from .client import LLMClient, RetryConfig
from .coach import CoachClient, estimate_calories, fallback_plan

__all__ = [
    "CoachClient",
    "LLMClient",
    "RetryConfig",
    "estimate_calories",
    "fallback_plan",
]
