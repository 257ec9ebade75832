"""Content validation: cleanup, truncation detection and fallback substitution."""

from dataclasses import dataclass

from appforge.generators.nextjs.fallbacks import FallbackLibrary
from appforge.models.blueprint import Blueprint, PageSpec
from appforge.models.generation import (
    ArtifactKind,
    ArtifactRole,
    GenerationWarning,
    WarningCode,
)
from appforge.utils.logging import get_logger
from appforge.validation.cleaning import strip_wrappers
from appforge.validation.strategies import strategy_for

logger = get_logger(__name__)


@dataclass
class ValidationOutcome:
    """Result of validating one artifact."""

    content: str
    replaced: bool = False
    reason: str | None = None
    warning: GenerationWarning | None = None


class ContentValidator:
    """Decides whether model output is usable and substitutes a fallback when not.

    In the default mode only the strict tier of each strategy can reject
    content. With ``disable_checks`` set, output is cleaned but never
    rejected.
    """

    def __init__(
        self,
        fallbacks: FallbackLibrary | None = None,
        disable_checks: bool = False,
    ):
        self.fallbacks = fallbacks or FallbackLibrary()
        self.disable_checks = disable_checks

    def clean(self, content: str, kind: ArtifactKind) -> str:
        cleaned = strip_wrappers(content, kind)
        strategy = strategy_for(kind)
        if strategy is not None:
            cleaned = strategy.repair(cleaned)
        return cleaned

    def truncation_reason(self, content: str, kind: ArtifactKind) -> str | None:
        """Strict-tier verdict for already cleaned content."""
        if self.disable_checks:
            return None
        strategy = strategy_for(kind)
        if strategy is None:
            return None if content.strip() else "empty content"
        if strategy.is_possibly_truncated(content):
            logger.debug(
                "validator.possibly_truncated",
                kind=kind,
                reasons=strategy.possible_reasons(content),
            )
        return strategy.definite_reason(content)

    def validate(
        self,
        content: str,
        *,
        path: str,
        kind: ArtifactKind,
        role: ArtifactRole,
        blueprint: Blueprint,
        phase: str,
        page_spec: PageSpec | None = None,
    ) -> ValidationOutcome:
        cleaned = self.clean(content, kind)
        reason = self.truncation_reason(cleaned, kind)
        if reason is None:
            return ValidationOutcome(content=cleaned)

        fallback = self.fallbacks.for_role(
            role, blueprint, path=path, page_spec=page_spec
        )
        logger.warning(
            "validator.truncation_fallback",
            phase=phase,
            path=path,
            kind=kind,
            role=role.value,
            reason=reason,
            received_length=len(cleaned),
        )
        return ValidationOutcome(
            content=fallback,
            replaced=True,
            reason=reason,
            warning=GenerationWarning(
                phase=phase,
                code=WarningCode.MALFORMED_RESPONSE if kind == "json" else WarningCode.TRUNCATED,
                reason=reason,
                path=path,
                kind=kind,
            ),
        )
