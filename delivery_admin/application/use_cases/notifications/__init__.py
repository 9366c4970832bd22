"""Push notification fan-out: audience resolution, dispatch and orchestration."""

from .audience import AudienceResolver, CategoryAudience
from .dispatch import (
    PUSH_NOTIFICATION_EVENT,
    DispatchReport,
    FailurePolicy,
    FanoutDispatcher,
    RecipientFailure,
)
from .orchestrator import FanoutOrchestrator, FanoutRun, FanoutState, TriggerResult

__all__ = [
    "AudienceResolver",
    "CategoryAudience",
    "DispatchReport",
    "FailurePolicy",
    "FanoutDispatcher",
    "FanoutOrchestrator",
    "FanoutRun",
    "FanoutState",
    "PUSH_NOTIFICATION_EVENT",
    "RecipientFailure",
    "TriggerResult",
]
