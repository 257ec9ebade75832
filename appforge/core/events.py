"""Event system for Server-Sent Events (SSE)."""

import asyncio
import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

TERMINAL_EVENTS = ("run_completed", "error")


@dataclass
class Event:
    """An SSE event."""

    event_type: str
    data: dict[str, Any]
    timestamp: datetime = field(default_factory=datetime.utcnow)

    def to_sse(self) -> str:
        """Convert to SSE format."""
        data_json = json.dumps({**self.data, "timestamp": self.timestamp.isoformat()})
        return f"event: {self.event_type}\ndata: {data_json}\n\n"

    @property
    def is_terminal(self) -> bool:
        return self.event_type in TERMINAL_EVENTS


class EventBus:
    """Simple event bus for generation run events."""

    def __init__(self):
        self._subscribers: dict[UUID, asyncio.Queue[Event]] = {}

    def subscribe(self, run_id: UUID) -> asyncio.Queue[Event]:
        """Subscribe to events for a run."""
        if run_id not in self._subscribers:
            self._subscribers[run_id] = asyncio.Queue()
        return self._subscribers[run_id]

    def unsubscribe(self, run_id: UUID) -> None:
        """Unsubscribe from run events."""
        self._subscribers.pop(run_id, None)

    async def publish(self, run_id: UUID | None, event: Event) -> None:
        """Publish an event for a run. Runs without an id publish nowhere."""
        if run_id is not None and run_id in self._subscribers:
            await self._subscribers[run_id].put(event)

    async def publish_phase_started(self, run_id: UUID | None, phase: str) -> None:
        await self.publish(
            run_id,
            Event(event_type="phase_started", data={"phase": phase}),
        )

    async def publish_phase_completed(
        self, run_id: UUID | None, phase: str, duration_ms: int, outcome: str
    ) -> None:
        await self.publish(
            run_id,
            Event(
                event_type="phase_completed",
                data={"phase": phase, "duration_ms": duration_ms, "outcome": outcome},
            ),
        )

    async def publish_file_generated(
        self, run_id: UUID | None, path: str, lines: int
    ) -> None:
        await self.publish(
            run_id,
            Event(event_type="file_generated", data={"path": path, "lines": lines}),
        )

    async def publish_warning(
        self, run_id: UUID | None, phase: str, code: str, reason: str, path: str | None
    ) -> None:
        """Publish a recoverable problem, e.g. a truncated artifact being replaced."""
        await self.publish(
            run_id,
            Event(
                event_type="warning",
                data={"phase": phase, "code": code, "reason": reason, "path": path},
            ),
        )

    async def publish_run_completed(
        self, run_id: UUID | None, file_count: int, completion_calls: int
    ) -> None:
        await self.publish(
            run_id,
            Event(
                event_type="run_completed",
                data={"file_count": file_count, "completion_calls": completion_calls},
            ),
        )

    async def publish_error(
        self, run_id: UUID | None, error: str, phase: str | None = None
    ) -> None:
        await self.publish(
            run_id,
            Event(event_type="error", data={"error": error, "phase": phase}),
        )


# Singleton instance
_event_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    """Get the event bus singleton."""
    global _event_bus
    if _event_bus is None:
        _event_bus = EventBus()
    return _event_bus
