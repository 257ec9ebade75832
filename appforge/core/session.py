"""In-memory bookkeeping for generation runs."""

from datetime import datetime, timedelta
from functools import lru_cache
from uuid import UUID

from appforge.models.blueprint import Blueprint
from appforge.models.run import GenerationRun, RunStatus


class RunManager:
    """Keeps generation runs in memory with a time-to-live.

    Runs are process-local; restarting the service forgets them.
    """

    def __init__(self, ttl_hours: int = 24):
        self._runs: dict[UUID, GenerationRun] = {}
        self._ttl = timedelta(hours=ttl_hours)

    async def create_run(self, blueprint: Blueprint) -> GenerationRun:
        run = GenerationRun(blueprint=blueprint)
        self._runs[run.id] = run
        return run

    async def get_run(self, run_id: UUID) -> GenerationRun | None:
        run = self._runs.get(run_id)
        if run and datetime.utcnow() - run.created_at > self._ttl:
            del self._runs[run_id]
            return None
        return run

    async def update_run(self, run: GenerationRun) -> GenerationRun:
        run.updated_at = datetime.utcnow()
        self._runs[run.id] = run
        return run

    async def delete_run(self, run_id: UUID) -> bool:
        return self._runs.pop(run_id, None) is not None

    async def list_runs(
        self,
        status: RunStatus | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> tuple[list[GenerationRun], int]:
        """List runs, newest first, with optional status filtering."""
        runs = list(self._runs.values())
        if status:
            runs = [r for r in runs if r.status == status]
        runs.sort(key=lambda r: r.created_at, reverse=True)

        total = len(runs)
        return runs[offset : offset + limit], total

    async def cleanup_expired(self) -> int:
        """Remove expired runs. Returns count of removed runs."""
        now = datetime.utcnow()
        expired = [
            rid for rid, run in self._runs.items() if now - run.created_at > self._ttl
        ]
        for rid in expired:
            del self._runs[rid]
        return len(expired)

    def clear(self) -> None:
        self._runs.clear()


# Singleton instance
_run_manager: RunManager | None = None


@lru_cache
def get_run_manager() -> RunManager:
    """Get the run manager singleton."""
    global _run_manager
    if _run_manager is None:
        _run_manager = RunManager()
    return _run_manager
