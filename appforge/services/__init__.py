"""Services for appforge: completion, caching and prompt compression."""

from appforge.services.artifact_cache import (
    ArtifactCache,
    ArtifactStore,
    JsonFileStore,
    MemoryStore,
    component_path,
    get_artifact_cache,
)
from appforge.services.completion import (
    AnthropicCompletionClient,
    CompletionClient,
    RetryingCompletionClient,
    RetryPolicy,
)
from appforge.services.compressor import CompressionStats, PromptCompressor, estimate_tokens
from appforge.services.smart_cache import SmartCache, SmartCacheMetrics, get_smart_cache

__all__ = [
    "ArtifactCache",
    "ArtifactStore",
    "JsonFileStore",
    "MemoryStore",
    "component_path",
    "get_artifact_cache",
    "AnthropicCompletionClient",
    "CompletionClient",
    "RetryingCompletionClient",
    "RetryPolicy",
    "CompressionStats",
    "PromptCompressor",
    "estimate_tokens",
    "SmartCache",
    "SmartCacheMetrics",
    "get_smart_cache",
]
