"""Generation data models."""

from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

ArtifactKind = Literal["json", "css", "tsx", "ts", "js", "md"]

EXTENSION_KINDS: dict[str, ArtifactKind] = {
    ".json": "json",
    ".css": "css",
    ".tsx": "tsx",
    ".jsx": "tsx",
    ".ts": "ts",
    ".js": "js",
    ".mjs": "js",
    ".cjs": "js",
    ".md": "md",
}


def kind_for_path(path: str) -> ArtifactKind:
    """Infer the artifact kind from a file extension."""
    suffix = PurePosixPath(path).suffix.lower()
    if suffix not in EXTENSION_KINDS:
        raise ValueError(f"Cannot infer artifact kind for '{path}'")
    return EXTENSION_KINDS[suffix]


class ArtifactRole(str, Enum):
    """What a file is for; selects the matching fallback."""

    PACKAGE_JSON = "package_json"
    LAYOUT = "layout"
    GLOBALS_CSS = "globals_css"
    HOMEPAGE = "homepage"
    TAILWIND_CONFIG = "tailwind_config"
    POSTCSS_CONFIG = "postcss_config"
    README = "readme"
    COMPONENT = "component"
    PAGE = "page"
    GENERIC = "generic"


class FileArtifact(BaseModel):
    """A single generated file."""

    path: str
    content: str
    kind: ArtifactKind

    @model_validator(mode="before")
    @classmethod
    def _infer_kind(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("kind") and data.get("path"):
            data = {**data, "kind": kind_for_path(data["path"])}
        return data

    @property
    def lines(self) -> int:
        return len(self.content.splitlines())


class WarningCode(str, Enum):
    """Why an artifact was replaced or a phase degraded."""

    TRUNCATED = "truncated"
    MALFORMED_RESPONSE = "malformed_response"
    COMPLETION_FAILED = "completion_failed"
    PARTIAL_BATCH = "partial_batch"
    PHASE_FAILED = "phase_failed"


class GenerationWarning(BaseModel):
    """A recoverable problem recorded during a run."""

    phase: str
    code: WarningCode
    reason: str
    path: str | None = None
    kind: ArtifactKind | None = None


class PhaseOutcome(str, Enum):
    """How a phase finished."""

    COMPLETED = "completed"
    DEGRADED = "degraded"
    FALLBACK = "fallback"


class PhaseReport(BaseModel):
    """Per-phase accounting."""

    name: str
    outcome: PhaseOutcome = PhaseOutcome.COMPLETED
    files: list[str] = Field(default_factory=list)
    duration_ms: int = 0
    completion_calls: int = 0
    cache_hits: int = 0


class GenerationResult(BaseModel):
    """Final output of a run: the virtual file tree plus run metadata."""

    files: dict[str, str] = Field(default_factory=dict)
    warnings: list[GenerationWarning] = Field(default_factory=list)
    phases: list[PhaseReport] = Field(default_factory=list)
    completion_calls: int = 0
    cache_hits: int = 0
    duration_ms: int = 0

    @property
    def file_count(self) -> int:
        return len(self.files)

    @property
    def total_lines(self) -> int:
        return sum(len(content.splitlines()) for content in self.files.values())

    def summary(self) -> dict[str, Any]:
        """Compact description of the run, without file contents."""
        return {
            "file_count": self.file_count,
            "total_lines": self.total_lines,
            "paths": sorted(self.files),
            "completion_calls": self.completion_calls,
            "cache_hits": self.cache_hits,
            "duration_ms": self.duration_ms,
            "warnings": [w.model_dump(mode="json") for w in self.warnings],
            "phases": [p.model_dump(mode="json") for p in self.phases],
        }
