"""Dependency injection for API endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, status

from appforge.core.events import EventBus, get_event_bus
from appforge.core.orchestrator import PhaseOrchestrator, get_orchestrator
from appforge.core.session import RunManager, get_run_manager
from appforge.models.run import GenerationRun
from appforge.services.artifact_cache import ArtifactCache, get_artifact_cache


async def get_runs() -> RunManager:
    """Get the run manager."""
    return get_run_manager()


async def get_events() -> EventBus:
    """Get the event bus."""
    return get_event_bus()


async def get_cache() -> ArtifactCache:
    """Get the artifact cache."""
    return get_artifact_cache()


async def get_pipeline() -> PhaseOrchestrator:
    """Get the phase orchestrator."""
    return get_orchestrator()


async def get_run_by_id(
    run_id: UUID,
    runs: Annotated[RunManager, Depends(get_runs)],
) -> GenerationRun:
    """Get a run by ID or raise 404."""
    run = await runs.get_run(run_id)
    if not run:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Run not found: {run_id}",
        )
    return run


# Type aliases for cleaner signatures
RunsDep = Annotated[RunManager, Depends(get_runs)]
EventsDep = Annotated[EventBus, Depends(get_events)]
CacheDep = Annotated[ArtifactCache, Depends(get_cache)]
OrchestratorDep = Annotated[PhaseOrchestrator, Depends(get_pipeline)]
RunDep = Annotated[GenerationRun, Depends(get_run_by_id)]
