"""Generation run endpoints."""

import asyncio
import json
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, HTTPException, Query, status
from pydantic import BaseModel
from sse_starlette.sse import EventSourceResponse

from appforge.api.deps import EventsDep, OrchestratorDep, RunDep, RunsDep
from appforge.core.events import Event
from appforge.core.orchestrator import PhaseOrchestrator
from appforge.models.run import (
    GenerationCreate,
    RunFilesResponse,
    RunResponse,
    RunStatus,
)
from appforge.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

KEEPALIVE_SECONDS = 30.0


class RunListResponse(BaseModel):
    """Response for listing runs."""

    runs: list[RunResponse]
    total: int
    limit: int
    offset: int


async def run_generation_background(run_id: UUID, orchestrator: PhaseOrchestrator) -> None:
    """Background task that executes a stored run."""
    try:
        await orchestrator.execute(run_id)
    except Exception as e:
        # The run is already marked failed and the error event published
        logger.error("generation.background_failed", run_id=str(run_id), error=str(e))


@router.post(
    "",
    response_model=RunResponse,
    status_code=status.HTTP_202_ACCEPTED,
    summary="Start a generation run",
    description="Validate a blueprint and generate its file tree in the background.",
)
async def create_generation(
    body: GenerationCreate,
    runs: RunsDep,
    orchestrator: OrchestratorDep,
    background_tasks: BackgroundTasks,
) -> RunResponse:
    blueprint = orchestrator.validate_blueprint(body.blueprint)
    run = await runs.create_run(blueprint)
    logger.info("generation.accepted", run_id=str(run.id), domain=blueprint.domain)

    background_tasks.add_task(run_generation_background, run.id, orchestrator)
    return RunResponse.from_run(run)


@router.get("", response_model=RunListResponse, summary="List generation runs")
async def list_generations(
    runs: RunsDep,
    status_filter: Annotated[RunStatus | None, Query(alias="status")] = None,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> RunListResponse:
    page, total = await runs.list_runs(status=status_filter, limit=limit, offset=offset)
    return RunListResponse(
        runs=[RunResponse.from_run(r) for r in page],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/{run_id}", response_model=RunResponse, summary="Get a generation run")
async def get_generation(run: RunDep) -> RunResponse:
    return RunResponse.from_run(run)


@router.delete(
    "/{run_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Forget a generation run",
)
async def delete_generation(run: RunDep, runs: RunsDep) -> None:
    await runs.delete_run(run.id)


@router.get(
    "/{run_id}/files",
    response_model=RunFilesResponse,
    summary="Get the generated file tree",
)
async def get_generation_files(run: RunDep) -> RunFilesResponse:
    if run.status != RunStatus.COMPLETED or run.result is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Run {run.id} is {run.status.value}; files are available once it completes",
        )
    return RunFilesResponse(id=run.id, files=run.result.files)


@router.get("/{run_id}/stream", summary="Stream run events (SSE)")
async def stream_generation_events(run: RunDep, events: EventsDep) -> EventSourceResponse:
    """Stream real-time events for a run using Server-Sent Events."""

    async def event_generator():
        # A finished run has nothing left to publish
        if run.status in (RunStatus.COMPLETED, RunStatus.FAILED):
            yield {
                "event": "run_completed" if run.status == RunStatus.COMPLETED else "error",
                "data": json.dumps(
                    {"run_id": str(run.id), "status": run.status.value, "error": run.error}
                ),
            }
            return

        queue = events.subscribe(run.id)
        try:
            yield {
                "event": "connected",
                "data": json.dumps({"run_id": str(run.id), "status": run.status.value}),
            }

            while True:
                try:
                    event: Event = await asyncio.wait_for(queue.get(), timeout=KEEPALIVE_SECONDS)
                except asyncio.TimeoutError:
                    yield {"event": "keepalive", "data": "{}"}
                    continue

                yield {"event": event.event_type, "data": json.dumps(event.data, default=str)}
                if event.is_terminal:
                    break
        finally:
            events.unsubscribe(run.id)

    return EventSourceResponse(event_generator())
