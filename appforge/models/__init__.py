"""Data models for appforge."""

from appforge.models.blueprint import (
    Blueprint,
    BlueprintMetadata,
    Domain,
    PageSpec,
    PagesStructure,
    TechStack,
    normalize_domain,
)
from appforge.models.cache import CachedArtifact, CacheStats, cache_key
from appforge.models.generation import (
    ArtifactKind,
    ArtifactRole,
    FileArtifact,
    GenerationResult,
    GenerationWarning,
    PhaseOutcome,
    PhaseReport,
    WarningCode,
    kind_for_path,
)
from appforge.models.run import (
    GenerationCreate,
    GenerationRun,
    RunFilesResponse,
    RunResponse,
    RunStatus,
)

__all__ = [
    # Blueprint models
    "Blueprint",
    "BlueprintMetadata",
    "Domain",
    "PageSpec",
    "PagesStructure",
    "TechStack",
    "normalize_domain",
    # Cache models
    "CachedArtifact",
    "CacheStats",
    "cache_key",
    # Generation models
    "ArtifactKind",
    "ArtifactRole",
    "FileArtifact",
    "GenerationResult",
    "GenerationWarning",
    "PhaseOutcome",
    "PhaseReport",
    "WarningCode",
    "kind_for_path",
    # Run models
    "GenerationCreate",
    "GenerationRun",
    "RunFilesResponse",
    "RunResponse",
    "RunStatus",
]
