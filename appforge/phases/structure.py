"""Base structure phase: configuration and entry files, one call per file."""

from dataclasses import dataclass

from appforge.config import Settings
from appforge.core.exceptions import CompletionError, MalformedResponseError
from appforge.models.generation import ArtifactRole, FileArtifact, WarningCode
from appforge.phases import prompts
from appforge.phases.base import BasePhase, PhaseContext


@dataclass(frozen=True)
class BaseFileSpec:
    path: str
    role: ArtifactRole
    budget_setting: str

    def budget(self, settings: Settings) -> int:
        return getattr(settings, self.budget_setting)


# Later files may reference earlier ones, so the order is fixed.
BASE_FILES: tuple[BaseFileSpec, ...] = (
    BaseFileSpec("package.json", ArtifactRole.PACKAGE_JSON, "max_tokens_package_json"),
    BaseFileSpec("app/layout.tsx", ArtifactRole.LAYOUT, "max_tokens_layout"),
    BaseFileSpec("app/globals.css", ArtifactRole.GLOBALS_CSS, "max_tokens_globals_css"),
    BaseFileSpec("app/page.tsx", ArtifactRole.HOMEPAGE, "max_tokens_homepage"),
    BaseFileSpec("tailwind.config.js", ArtifactRole.TAILWIND_CONFIG, "max_tokens_tailwind_config"),
)

STATIC_FILES: tuple[tuple[str, ArtifactRole], ...] = (
    ("postcss.config.js", ArtifactRole.POSTCSS_CONFIG),
    ("README.md", ArtifactRole.README),
)


class BaseStructurePhase(BasePhase):
    """Generates the project skeleton file by file.

    Each file gets its own small budget and its own failure isolation: a
    failed or truncated file is replaced by its fallback while the
    remaining files still get their attempt.
    """

    @property
    def name(self) -> str:
        return "base_structure"

    @property
    def description(self) -> str:
        return "package.json, root layout, global CSS, homepage and build configuration"

    @property
    def uses_network(self) -> bool:
        return True

    def token_budget(self, settings: Settings) -> int:
        return max(spec.budget(settings) for spec in BASE_FILES)

    async def produce(self, ctx: PhaseContext) -> list[FileArtifact]:
        artifacts: list[FileArtifact] = []
        for spec in BASE_FILES:
            existing = list(ctx.files) + [a.path for a in artifacts]
            prompt = prompts.base_file(ctx.blueprint, spec.path, existing)
            try:
                raw = await ctx.complete(prompt, spec.budget(ctx.settings), "base")
            except CompletionError as e:
                code = (
                    WarningCode.MALFORMED_RESPONSE
                    if isinstance(e, MalformedResponseError)
                    else WarningCode.COMPLETION_FAILED
                )
                self.logger.warning(
                    "phase.base_structure.file_failed",
                    path=spec.path,
                    error=type(e).__name__,
                    message=e.message,
                )
                ctx.warn(code, e.message, path=spec.path)
                artifacts.append(ctx.fallback(spec.path, spec.role))
                continue
            artifacts.append(ctx.validate(raw, spec.path, spec.role))

        artifacts.extend(ctx.fallback(path, role) for path, role in STATIC_FILES)
        return artifacts

    def fallback(self, ctx: PhaseContext) -> list[FileArtifact]:
        files = [(spec.path, spec.role) for spec in BASE_FILES] + list(STATIC_FILES)
        return [ctx.fallback(path, role) for path, role in files]
