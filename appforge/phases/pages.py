"""Pages phase: one request per selected page."""

from appforge.config import Settings
from appforge.core.exceptions import CompletionError, MalformedResponseError
from appforge.models.blueprint import Blueprint, PageSpec
from appforge.models.generation import ArtifactRole, FileArtifact, WarningCode
from appforge.phases import prompts
from appforge.phases.base import BasePhase, PhaseContext

GENERATED_PRIORITIES = ("high", "medium")


def page_file(spec: PageSpec) -> str:
    """``/products`` -> ``app/products/page.tsx``."""
    return f"app{spec.path}/page.tsx"


def select_pages(blueprint: Blueprint, limit: int) -> tuple[list[PageSpec], list[PageSpec]]:
    """Pages to generate and pages omitted by the cap.

    Low priority pages and the root path are never candidates; the homepage
    belongs to the base structure.
    """
    candidates = [
        p for p in blueprint.pages if p.priority in GENERATED_PRIORITIES and p.path != "/"
    ]
    return candidates[:limit], candidates[limit:]


class PagesPhase(BasePhase):
    """Generates the application's pages."""

    @property
    def name(self) -> str:
        return "pages"

    @property
    def description(self) -> str:
        return "High and medium priority pages, one request each"

    @property
    def uses_network(self) -> bool:
        return True

    def token_budget(self, settings: Settings) -> int:
        return settings.max_tokens_page

    async def produce(self, ctx: PhaseContext) -> list[FileArtifact]:
        selected, omitted = select_pages(ctx.blueprint, ctx.settings.max_pages)
        if omitted:
            self.logger.info(
                "phase.pages.capped",
                max_pages=ctx.settings.max_pages,
                omitted=[p.path for p in omitted],
            )

        artifacts: list[FileArtifact] = []
        for spec in selected:
            path = page_file(spec)
            existing = list(ctx.files) + [a.path for a in artifacts]
            prompt = prompts.page(ctx.blueprint, spec, path, existing)
            try:
                raw = await ctx.complete(prompt, ctx.settings.max_tokens_page, "pages")
            except CompletionError as e:
                self.logger.warning(
                    "phase.pages.page_failed",
                    path=path,
                    error=type(e).__name__,
                    message=e.message,
                )
                code = (
                    WarningCode.MALFORMED_RESPONSE
                    if isinstance(e, MalformedResponseError)
                    else WarningCode.COMPLETION_FAILED
                )
                ctx.warn(code, e.message, path=path)
                artifacts.append(ctx.fallback(path, ArtifactRole.PAGE, page_spec=spec))
                continue
            artifacts.append(ctx.validate(raw, path, ArtifactRole.PAGE, page_spec=spec))
        return artifacts

    def fallback(self, ctx: PhaseContext) -> list[FileArtifact]:
        selected, _ = select_pages(ctx.blueprint, ctx.settings.max_pages)
        return [
            ctx.fallback(page_file(spec), ArtifactRole.PAGE, page_spec=spec) for spec in selected
        ]
