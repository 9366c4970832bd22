"""Aggregate application use cases."""

from .notifications import AudienceResolver, FanoutDispatcher, FanoutOrchestrator

__all__ = [
    "AudienceResolver",
    "FanoutDispatcher",
    "FanoutOrchestrator",
]
