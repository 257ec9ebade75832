"""Base phase class for all generation phases."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Mapping

from appforge.config import Settings
from appforge.generators.nextjs.fallbacks import FallbackLibrary
from appforge.models.blueprint import Blueprint, PageSpec
from appforge.models.generation import (
    ArtifactKind,
    ArtifactRole,
    FileArtifact,
    GenerationWarning,
    WarningCode,
    kind_for_path,
)
from appforge.services.artifact_cache import ArtifactCache
from appforge.services.compressor import PromptStep
from appforge.services.smart_cache import SmartCache
from appforge.utils.logging import get_logger
from appforge.validation.validator import ContentValidator

CompleteFn = Callable[[str, int, PromptStep | None], Awaitable[str]]


@dataclass
class PhaseContext:
    """Everything a phase may read or call during one run.

    ``files`` is a read-only view of the output accumulated so far.
    ``complete`` is the orchestrator's gateway to the completion service:
    it compresses the prompt, waits on the pacing gate and applies the
    retry policy.
    """

    phase: str
    blueprint: Blueprint
    files: Mapping[str, str]
    settings: Settings
    cache: ArtifactCache
    validator: ContentValidator
    fallbacks: FallbackLibrary
    complete: CompleteFn
    smart_cache: SmartCache | None = None
    warnings: list[GenerationWarning] = field(default_factory=list)
    cache_hits: int = 0

    @property
    def style(self) -> str:
        return self.blueprint.style

    @property
    def tech(self) -> str:
        return self.blueprint.tech

    def warn(
        self,
        code: WarningCode,
        reason: str,
        path: str | None = None,
        kind: ArtifactKind | None = None,
    ) -> None:
        self.warnings.append(
            GenerationWarning(phase=self.phase, code=code, reason=reason, path=path, kind=kind)
        )

    def record_cache_hits(self, count: int = 1) -> None:
        self.cache_hits += count

    def validate(
        self,
        content: str,
        path: str,
        role: ArtifactRole,
        page_spec: PageSpec | None = None,
    ) -> FileArtifact:
        """Validate model output for ``path``, substituting a fallback if truncated."""
        kind = kind_for_path(path)
        outcome = self.validator.validate(
            content,
            path=path,
            kind=kind,
            role=role,
            blueprint=self.blueprint,
            phase=self.phase,
            page_spec=page_spec,
        )
        if outcome.warning is not None:
            self.warnings.append(outcome.warning)
        return FileArtifact(path=path, content=outcome.content, kind=kind)

    def fallback(
        self,
        path: str,
        role: ArtifactRole,
        page_spec: PageSpec | None = None,
    ) -> FileArtifact:
        content = self.fallbacks.for_role(
            role, self.blueprint, path=path, page_spec=page_spec
        )
        return FileArtifact(path=path, content=content, kind=kind_for_path(path))


class BasePhase(ABC):
    """Base class for generation phases.

    All phases should inherit from this class and implement:
    - name: Phase identifier
    - description: What the phase produces
    - produce(): Generate the phase's artifacts
    - fallback(): Deterministic artifacts used when produce() fails
    """

    def __init__(self):
        self.logger = get_logger(f"phase.{self.name}")

    @property
    @abstractmethod
    def name(self) -> str:
        """Phase name/identifier."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what this phase produces."""

    @property
    def uses_network(self) -> bool:
        """Whether the phase calls the completion service."""
        return False

    def token_budget(self, settings: Settings) -> int:
        """Largest ``max_tokens`` of any single call the phase makes."""
        return 0

    @abstractmethod
    async def produce(self, ctx: PhaseContext) -> list[FileArtifact]:
        """Produce the phase's artifacts. May raise; the orchestrator falls back."""

    @abstractmethod
    def fallback(self, ctx: PhaseContext) -> list[FileArtifact]:
        """Deterministic replacement output. Must not raise."""
