"""Phase Orchestrator.

Runs the generation phases in their fixed order and turns a blueprint into
a virtual file tree. A failing phase never ends the run: it is logged,
recorded as a warning and replaced by its deterministic fallback. The only
error that escapes is an invalid blueprint, raised before any completion
call.
"""

import time
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any
from uuid import UUID

from pydantic import ValidationError

from appforge.config import Settings, get_settings
from appforge.core.assembler import FileAssembler
from appforge.core.events import EventBus, get_event_bus
from appforge.core.exceptions import (
    CompletionError,
    InvalidBlueprintError,
    MalformedResponseError,
    PartialBatchError,
    RunNotFoundError,
    TruncatedContentError,
)
from appforge.core.pacing import FixedIntervalGate
from appforge.core.session import RunManager, get_run_manager
from appforge.generators.nextjs.fallbacks import FallbackLibrary
from appforge.models.blueprint import Blueprint
from appforge.models.generation import (
    GenerationResult,
    GenerationWarning,
    PhaseOutcome,
    PhaseReport,
    WarningCode,
)
from appforge.models.run import GenerationRun
from appforge.phases.base import BasePhase, PhaseContext
from appforge.phases.registry import default_phases
from appforge.services.artifact_cache import ArtifactCache, get_artifact_cache
from appforge.services.completion import (
    AnthropicCompletionClient,
    CompletionClient,
    RetryingCompletionClient,
    RetryPolicy,
)
from appforge.services.compressor import PromptCompressor, PromptStep
from appforge.services.smart_cache import SmartCache, get_smart_cache
from appforge.utils.debug import save_run_debug
from appforge.utils.logging import get_logger
from appforge.validation.validator import ContentValidator


def warning_code_for(error: Exception) -> WarningCode:
    """Warning code recorded when a phase falls back because of ``error``."""
    if isinstance(error, PartialBatchError):
        return WarningCode.PARTIAL_BATCH
    if isinstance(error, TruncatedContentError):
        return WarningCode.TRUNCATED
    if isinstance(error, MalformedResponseError):
        return WarningCode.MALFORMED_RESPONSE
    if isinstance(error, CompletionError):
        return WarningCode.COMPLETION_FAILED
    return WarningCode.PHASE_FAILED


@dataclass
class _RunCounters:
    completion_calls: int = 0


class PhaseOrchestrator:
    """Drives the generation phases for one blueprint at a time.

    Pipeline phases:
    1. base_structure - package.json, layout, global CSS, homepage, configs
    2. state_scaffolding - React contexts and Providers
    3. business_components - domain components
    4. extended_templates - dashboard and blog templates
    5. custom_components - cached plus batched UI components
    6. pages - one request per page
    """

    def __init__(
        self,
        client: CompletionClient,
        cache: ArtifactCache,
        settings: Settings | None = None,
        compressor: PromptCompressor | None = None,
        validator: ContentValidator | None = None,
        gate: FixedIntervalGate | None = None,
        retry_policy: RetryPolicy | None = None,
        events: EventBus | None = None,
        smart_cache: SmartCache | None = None,
        phases: list[BasePhase] | None = None,
        assembler: FileAssembler | None = None,
        runs: RunManager | None = None,
        fallbacks: FallbackLibrary | None = None,
    ):
        self.settings = settings or get_settings()
        self.cache = cache
        self.fallbacks = fallbacks or FallbackLibrary()
        self.compressor = compressor or PromptCompressor(self.settings.compression_min_chars)
        self.validator = validator or ContentValidator(
            self.fallbacks, disable_checks=self.settings.disable_truncation_check
        )
        self.gate = gate or FixedIntervalGate(self.settings.pacing_interval_seconds)
        self.retry_policy = retry_policy or RetryPolicy(
            max_attempts=self.settings.max_completion_attempts,
            size_threshold=self.settings.large_call_threshold,
            backoff_seconds=self.settings.retry_backoff_seconds,
        )
        self.client = RetryingCompletionClient(client, self.retry_policy)
        self.events = events or get_event_bus()
        self.smart_cache = smart_cache
        self.phases = phases if phases is not None else default_phases()
        self.assembler = assembler or FileAssembler()
        self.runs = runs
        self.logger = get_logger("orchestrator")

    def validate_blueprint(self, blueprint: Blueprint | Mapping[str, Any]) -> Blueprint:
        """Parse and check a blueprint.

        Raises:
            InvalidBlueprintError: If the blueprint fails validation
        """
        if isinstance(blueprint, Blueprint):
            return blueprint
        if not isinstance(blueprint, Mapping):
            raise InvalidBlueprintError("expected a JSON object")

        data = dict(blueprint)
        if "designStyle" not in data and "design_style" not in data:
            data["designStyle"] = self.settings.default_style
        try:
            return Blueprint.model_validate(data)
        except ValidationError as e:
            errors = [
                {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
                for err in e.errors()
            ]
            raise InvalidBlueprintError(f"{e.error_count()} validation error(s)", errors) from e

    async def run(
        self,
        blueprint: Blueprint | Mapping[str, Any],
        run_id: UUID | None = None,
    ) -> GenerationResult:
        """Run every phase and return the assembled file tree.

        Args:
            blueprint: A Blueprint or its JSON form
            run_id: Optional run to report progress and events for

        Returns:
            The generation result

        Raises:
            InvalidBlueprintError: If the blueprint is invalid
        """
        bp = self.validate_blueprint(blueprint)
        counters = _RunCounters()
        started = time.perf_counter()

        async def complete(prompt: str, max_tokens: int, step: PromptStep | None = None) -> str:
            return await self._complete(counters, prompt, max_tokens, step)

        self.logger.info(
            "orchestrator.run.started",
            run_id=str(run_id) if run_id else None,
            name=bp.metadata.name,
            domain=bp.domain,
            style=bp.style,
            tech=bp.tech,
        )

        files: dict[str, str] = {}
        warnings: list[GenerationWarning] = []
        reports: list[PhaseReport] = []
        cache_hits = 0

        for phase in self.phases:
            await self._set_current_phase(run_id, phase.name)
            await self.events.publish_phase_started(run_id, phase.name)
            self.logger.info("orchestrator.phase.started", phase=phase.name)

            ctx = PhaseContext(
                phase=phase.name,
                blueprint=bp,
                files=MappingProxyType(dict(files)),
                settings=self.settings,
                cache=self.cache,
                validator=self.validator,
                fallbacks=self.fallbacks,
                complete=complete,
                smart_cache=self.smart_cache,
            )
            calls_before = counters.completion_calls
            phase_started = time.perf_counter()

            try:
                artifacts = await phase.produce(ctx)
                outcome = PhaseOutcome.DEGRADED if ctx.warnings else PhaseOutcome.COMPLETED
            except Exception as e:
                message = getattr(e, "message", None) or str(e) or type(e).__name__
                self.logger.error(
                    "orchestrator.phase.failed",
                    phase=phase.name,
                    error=type(e).__name__,
                    message=message,
                )
                ctx.warn(warning_code_for(e), message)
                artifacts = phase.fallback(ctx)
                outcome = PhaseOutcome.FALLBACK

            files = self.assembler.merge(files, artifacts)
            duration_ms = int((time.perf_counter() - phase_started) * 1000)
            cache_hits += ctx.cache_hits
            warnings.extend(ctx.warnings)
            reports.append(
                PhaseReport(
                    name=phase.name,
                    outcome=outcome,
                    files=[a.path for a in artifacts],
                    duration_ms=duration_ms,
                    completion_calls=counters.completion_calls - calls_before,
                    cache_hits=ctx.cache_hits,
                )
            )

            for warning in ctx.warnings:
                await self.events.publish_warning(
                    run_id, warning.phase, warning.code.value, warning.reason, warning.path
                )
            for artifact in artifacts:
                await self.events.publish_file_generated(run_id, artifact.path, artifact.lines)
            await self.events.publish_phase_completed(
                run_id, phase.name, duration_ms, outcome.value
            )
            self.logger.info(
                "orchestrator.phase.completed",
                phase=phase.name,
                outcome=outcome.value,
                files=len(artifacts),
                duration_ms=duration_ms,
                warnings=len(ctx.warnings),
            )

        files = self.assembler.repair(files, bp)
        result = GenerationResult(
            files=files,
            warnings=warnings,
            phases=reports,
            completion_calls=counters.completion_calls,
            cache_hits=cache_hits,
            duration_ms=int((time.perf_counter() - started) * 1000),
        )

        self._persist_smart_cache()
        if self.settings.save_debug_data:
            save_run_debug(
                str(run_id or "adhoc"),
                bp.model_dump(mode="json", by_alias=True),
                result.summary(),
            )

        await self.events.publish_run_completed(
            run_id, result.file_count, result.completion_calls
        )
        self.logger.info(
            "orchestrator.run.completed",
            run_id=str(run_id) if run_id else None,
            files=result.file_count,
            completion_calls=result.completion_calls,
            cache_hits=result.cache_hits,
            warnings=len(result.warnings),
            duration_ms=result.duration_ms,
        )
        return result

    async def execute(self, run_id: UUID) -> GenerationRun:
        """Run the pipeline for a stored run and record its outcome.

        Raises:
            RunNotFoundError: If the run does not exist
        """
        runs = self.runs or get_run_manager()
        run = await runs.get_run(run_id)
        if not run:
            raise RunNotFoundError(str(run_id))

        run.mark_running()
        await runs.update_run(run)

        try:
            result = await self.run(run.blueprint, run_id=run.id)
        except Exception as e:
            self.logger.error("orchestrator.run.failed", run_id=str(run_id), error=str(e))
            phase = run.current_phase
            run.mark_failed(str(e))
            await runs.update_run(run)
            await self.events.publish_error(run_id, str(e), phase)
            raise

        run.mark_completed(result)
        await runs.update_run(run)
        return run

    async def _complete(
        self,
        counters: _RunCounters,
        prompt: str,
        max_tokens: int,
        step: PromptStep | None,
    ) -> str:
        compressed = self.compressor.compress(prompt, step)
        await self.gate.acquire()
        counters.completion_calls += 1
        self.logger.debug(
            "orchestrator.completion.requested",
            step=step,
            max_tokens=max_tokens,
            prompt_length=len(compressed),
        )
        return await self.client.complete(
            compressed, max_tokens, self.settings.completion_temperature
        )

    async def _set_current_phase(self, run_id: UUID | None, phase: str) -> None:
        if self.runs is None or run_id is None:
            return
        run = await self.runs.get_run(run_id)
        if run:
            run.current_phase = phase
            await self.runs.update_run(run)

    def _persist_smart_cache(self) -> None:
        if self.smart_cache is None:
            return
        try:
            self.smart_cache.save()
        except OSError as e:
            self.logger.warning("orchestrator.smart_cache_save_failed", error=str(e))


# Singleton instance
_orchestrator: PhaseOrchestrator | None = None


def get_orchestrator() -> PhaseOrchestrator:
    """Get the orchestrator singleton, wired from settings."""
    global _orchestrator
    if _orchestrator is None:
        config = get_settings()
        _orchestrator = PhaseOrchestrator(
            client=AnthropicCompletionClient(
                api_key=config.anthropic_api_key,
                model=config.anthropic_model,
                timeout=config.completion_timeout_seconds,
            ),
            cache=get_artifact_cache(),
            settings=config,
            smart_cache=get_smart_cache(),
            runs=get_run_manager(),
        )
    return _orchestrator
