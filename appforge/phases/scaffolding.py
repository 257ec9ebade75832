"""Deterministic phases: state contexts, business components, extended templates."""

from abc import abstractmethod

from appforge.generators.nextjs.business import business_components_for, business_index
from appforge.generators.nextjs.contexts import DomainTemplate, contexts_for, providers
from appforge.generators.nextjs.extended import extended_templates_for
from appforge.models.generation import FileArtifact
from appforge.phases.base import BasePhase, PhaseContext


def _artifact(template: DomainTemplate, content: str | None = None) -> FileArtifact:
    return FileArtifact(path=template.path, content=content or template.content)


class StateScaffoldingPhase(BasePhase):
    """React contexts for the domain plus the ``Providers`` wrapper."""

    @property
    def name(self) -> str:
        return "state_scaffolding"

    @property
    def description(self) -> str:
        return "React contexts and the Providers component for the domain"

    async def produce(self, ctx: PhaseContext) -> list[FileArtifact]:
        templates = contexts_for(ctx.blueprint.domain) + [providers(ctx.blueprint.domain)]
        return [_artifact(t) for t in templates]

    def fallback(self, ctx: PhaseContext) -> list[FileArtifact]:
        # Layouts import Providers, so a pass-through wrapper keeps them valid.
        return [_artifact(providers("blog"))]


class CacheCheckedPhase(BasePhase):
    """A template phase where a cached artifact of the same name wins."""

    @abstractmethod
    def templates(self, ctx: PhaseContext) -> list[DomainTemplate]:
        """Templates the phase emits for this run."""

    def render(self, ctx: PhaseContext, template: DomainTemplate) -> str:
        return template.content

    def cached_content(self, ctx: PhaseContext, template: DomainTemplate) -> str | None:
        cached = ctx.cache.get(template.cache_name, ctx.style, ctx.tech)
        if cached is None:
            return None
        ctx.record_cache_hits()
        self.logger.debug(f"phase.{self.name}.cache_hit", name=template.cache_name)
        return cached.content

    async def produce(self, ctx: PhaseContext) -> list[FileArtifact]:
        artifacts = []
        for template in self.templates(ctx):
            content = self.cached_content(ctx, template) or self.render(ctx, template)
            artifacts.append(_artifact(template, content))
        return artifacts

    def fallback(self, ctx: PhaseContext) -> list[FileArtifact]:
        return [_artifact(t) for t in self.templates(ctx)]


class BusinessComponentsPhase(CacheCheckedPhase):
    """Domain components wired to the generated contexts."""

    @property
    def name(self) -> str:
        return "business_components"

    @property
    def description(self) -> str:
        return "Domain business components and their barrel file"

    def templates(self, ctx: PhaseContext) -> list[DomainTemplate]:
        components = business_components_for(ctx.blueprint.domain)
        if not components:
            return []
        return components + [business_index(components)]


class ExtendedTemplatesPhase(CacheCheckedPhase):
    """Dashboard and blog templates, memoised in the smart cache."""

    @property
    def name(self) -> str:
        return "extended_templates"

    @property
    def description(self) -> str:
        return "Extended dashboard and blog templates"

    def templates(self, ctx: PhaseContext) -> list[DomainTemplate]:
        return extended_templates_for(ctx.blueprint.domain)

    def render(self, ctx: PhaseContext, template: DomainTemplate) -> str:
        if ctx.smart_cache is None:
            return template.content
        domain = ctx.blueprint.domain
        return ctx.smart_cache.get_or_set(
            "domain",
            f"{domain}-{template.name}",
            lambda: template.content,
            domain=domain,
        )
