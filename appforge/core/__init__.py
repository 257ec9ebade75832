"""Core functionality for appforge."""

from appforge.core.events import Event, EventBus, get_event_bus
from appforge.core.exceptions import (
    AppForgeError,
    CompletionError,
    CompletionTimeoutError,
    InvalidBlueprintError,
    MalformedResponseError,
    PartialBatchError,
    RateLimitedError,
    RunNotFoundError,
    TransportError,
    TruncatedContentError,
)
from appforge.core.session import RunManager, get_run_manager

__all__ = [
    "AppForgeError",
    "CompletionError",
    "CompletionTimeoutError",
    "InvalidBlueprintError",
    "MalformedResponseError",
    "PartialBatchError",
    "RateLimitedError",
    "RunNotFoundError",
    "TransportError",
    "TruncatedContentError",
    "Event",
    "EventBus",
    "get_event_bus",
    "RunManager",
    "get_run_manager",
]
