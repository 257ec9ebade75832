"""Custom components phase: cached components plus one batched request."""

from pathlib import PurePosixPath

from appforge.config import Settings
from appforge.core.exceptions import PartialBatchError
from appforge.generators.nextjs.naming import kebab_case, pascal_case
from appforge.models.cache import CachedArtifact
from appforge.models.generation import ArtifactRole, FileArtifact, WarningCode
from appforge.phases import prompts
from appforge.phases.base import BasePhase, PhaseContext
from appforge.services.artifact_cache import component_path
from appforge.validation.cleaning import parse_json_object

DEFAULT_COMPONENTS = ("button", "card", "modal", "form", "table")

MIN_COMPONENT_LENGTH = 100


def required_components(names) -> list[str]:
    """Kebab-case component names in first-seen order, or the default set."""
    required: list[str] = []
    for name in names:
        normalized = kebab_case(name)
        if normalized and normalized not in required:
            required.append(normalized)
    return required or list(DEFAULT_COMPONENTS)


class CustomComponentsPhase(BasePhase):
    """Reusable UI components.

    Every cached component for the run's style and tech is emitted as is.
    The uncached ones are requested in a single batched call whose reply is
    a JSON object of path to source. A batch with too few usable components
    is rejected as a whole, and the orchestrator switches to the
    deterministic component set.
    """

    @property
    def name(self) -> str:
        return "custom_components"

    @property
    def description(self) -> str:
        return "Cached components plus a batched request for the missing ones"

    @property
    def uses_network(self) -> bool:
        return True

    def token_budget(self, settings: Settings) -> int:
        return settings.max_tokens_components

    async def produce(self, ctx: PhaseContext) -> list[FileArtifact]:
        cached = ctx.cache.cached_for(ctx.style, ctx.tech)
        ctx.record_cache_hits(len(cached))
        artifacts = [FileArtifact(path=path, content=code) for path, code in cached.items()]

        required = required_components(ctx.blueprint.components)
        to_generate = ctx.cache.filter_uncached(required, ctx.style, ctx.tech)
        skipped = to_generate[ctx.settings.max_custom_components :]
        to_generate = to_generate[: ctx.settings.max_custom_components]
        if skipped:
            self.logger.info("phase.custom_components.capped", omitted=skipped)
        if not to_generate:
            self.logger.info("phase.custom_components.all_cached", count=len(cached))
            return artifacts

        targets = {component_path(name): pascal_case(name) for name in to_generate}
        raw = await ctx.complete(
            prompts.components_batch(ctx.blueprint, targets),
            ctx.settings.max_tokens_components,
            "components",
        )
        received = self._by_name(parse_json_object(raw), to_generate)

        valid: dict[str, str] = {}
        for name, code in received.items():
            reason = self._rejection(ctx, code)
            if reason is None:
                valid[name] = ctx.validator.clean(code, "tsx")
            else:
                self.logger.warning(
                    "phase.custom_components.rejected", name=name, reason=reason
                )

        minimum = min(ctx.settings.min_valid_components, len(to_generate))
        if len(valid) < minimum:
            raise PartialBatchError(valid=len(valid), expected=len(to_generate), minimum=minimum)

        for name in to_generate:
            path = component_path(name)
            if name in valid:
                ctx.cache.put(
                    CachedArtifact(name=name, style=ctx.style, tech=ctx.tech, content=valid[name])
                )
                artifacts.append(FileArtifact(path=path, content=valid[name]))
                continue
            ctx.warn(
                WarningCode.PARTIAL_BATCH,
                f"Component '{name}' missing or unusable in batch reply",
                path=path,
                kind="tsx",
            )
            artifacts.append(ctx.fallback(path, ArtifactRole.COMPONENT))

        self.logger.info(
            "phase.custom_components.batch_done",
            requested=len(to_generate),
            valid=len(valid),
        )
        return artifacts

    def fallback(self, ctx: PhaseContext) -> list[FileArtifact]:
        cached = ctx.cache.cached_for(ctx.style, ctx.tech)
        files = dict(cached)
        for path, code in ctx.fallbacks.component_set().items():
            files.setdefault(path, code)
        return [FileArtifact(path=path, content=code) for path, code in files.items()]

    @staticmethod
    def _by_name(reply: dict, expected: list[str]) -> dict[str, str]:
        """Map reply keys, either file paths or bare names, onto expected names."""
        by_path = {component_path(name): name for name in expected}
        matched: dict[str, str] = {}
        for key, value in reply.items():
            if not isinstance(value, str):
                continue
            if "/" in key:
                name = by_path.get(key)
            else:
                name = kebab_case(PurePosixPath(key).stem)
            if name in expected and name not in matched:
                matched[name] = value
        return matched

    @staticmethod
    def _rejection(ctx: PhaseContext, code: str) -> str | None:
        cleaned = ctx.validator.clean(code, "tsx")
        if "export" not in cleaned:
            return "no export"
        if len(cleaned.strip()) <= MIN_COMPONENT_LENGTH:
            return "too short"
        return ctx.validator.truncation_reason(cleaned, "tsx")
