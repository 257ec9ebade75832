"""Generation run models."""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from appforge.models.blueprint import Blueprint
from appforge.models.generation import GenerationResult, GenerationWarning, PhaseReport


class RunStatus(str, Enum):
    """Generation run status."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class GenerationCreate(BaseModel):
    """Request model for starting a generation run.

    The blueprint is kept as raw JSON and validated by the orchestrator.
    """

    blueprint: dict[str, Any]


class GenerationRun(BaseModel):
    """A generation run and its outcome."""

    id: UUID = Field(default_factory=uuid4)
    status: RunStatus = RunStatus.PENDING
    blueprint: Blueprint

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    completed_at: datetime | None = None

    current_phase: str | None = None
    result: GenerationResult | None = None
    error: str | None = None

    def mark_running(self) -> None:
        self.status = RunStatus.RUNNING

    def mark_completed(self, result: GenerationResult) -> None:
        self.status = RunStatus.COMPLETED
        self.result = result
        self.current_phase = None
        self.completed_at = datetime.utcnow()

    def mark_failed(self, error: str) -> None:
        self.status = RunStatus.FAILED
        self.error = error
        self.completed_at = datetime.utcnow()


class RunResponse(BaseModel):
    """API response for a run, without file contents."""

    id: UUID
    name: str
    domain: str
    status: RunStatus
    created_at: datetime
    completed_at: datetime | None = None
    current_phase: str | None = None
    file_count: int = 0
    completion_calls: int = 0
    cache_hits: int = 0
    phases: list[PhaseReport] = Field(default_factory=list)
    warnings: list[GenerationWarning] = Field(default_factory=list)
    error: str | None = None

    @classmethod
    def from_run(cls, run: GenerationRun) -> "RunResponse":
        data: dict[str, Any] = {
            "id": run.id,
            "name": run.blueprint.metadata.name,
            "domain": run.blueprint.domain,
            "status": run.status,
            "created_at": run.created_at,
            "completed_at": run.completed_at,
            "current_phase": run.current_phase,
            "error": run.error,
        }
        if run.result is not None:
            data.update(
                file_count=run.result.file_count,
                completion_calls=run.result.completion_calls,
                cache_hits=run.result.cache_hits,
                phases=run.result.phases,
                warnings=run.result.warnings,
            )
        return cls(**data)


class RunFilesResponse(BaseModel):
    """File tree of a completed run."""

    id: UUID
    files: dict[str, str]
