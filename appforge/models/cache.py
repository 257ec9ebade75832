"""Artifact cache models."""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_VERSION = "1.0.0"


def cache_key(name: str, style: str, tech: str) -> str:
    """Key of a cached artifact in the persisted JSON document.

    Only used on disk. Records are identified by their own fields when loaded.
    """
    return f"{name}-{style}-{tech}"


class CachedArtifact(BaseModel):
    """A reusable artifact keyed by (name, style, tech).

    Persisted as ``{name, code, style, tech, version}``.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    style: str
    tech: str
    content: str = Field(alias="code")
    version: str = DEFAULT_VERSION

    @property
    def key(self) -> str:
        return cache_key(self.name, self.style, self.tech)

    @property
    def identity(self) -> tuple[str, str, str]:
        return (self.name, self.style, self.tech)

    def to_record(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)


class CacheStats(BaseModel):
    """Breakdown of cache entries."""

    total: int
    by_style: dict[str, int] = Field(default_factory=dict)
    by_tech: dict[str, int] = Field(default_factory=dict)
