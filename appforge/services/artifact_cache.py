"""Persistent cache of reusable generated artifacts.

Entries are keyed by ``(name, style, tech)`` and never evicted; removing
an entry is an explicit operator action. The backing store is injected so
tests can run against memory instead of disk.
"""

import json
import os
from pathlib import Path
from typing import Any, Iterable, Protocol

from pydantic import ValidationError

from appforge.config import get_settings
from appforge.generators.nextjs.naming import kebab_case, pascal_case
from appforge.models.cache import CachedArtifact, CacheStats, cache_key
from appforge.utils.logging import get_logger

logger = get_logger(__name__)

COMPONENT_PATHS: dict[str, str] = {
    "navbar": "components/ui/Navbar.tsx",
    "footer": "components/ui/Footer.tsx",
    "button": "components/ui/Button.tsx",
    "card": "components/ui/Card.tsx",
    "modal": "components/ui/Modal.tsx",
    "form": "components/ui/Form.tsx",
    "table": "components/ui/Table.tsx",
    "sidebar": "components/ui/Sidebar.tsx",
    "hero": "components/ui/Hero.tsx",
    "auth-form": "components/auth/AuthForm.tsx",
    "loading": "components/ui/Loading.tsx",
}


def component_path(name: str) -> str:
    """File path a cached component is written to."""
    return COMPONENT_PATHS.get(name) or f"components/ui/{pascal_case(name)}.tsx"


class ArtifactStore(Protocol):
    """Backing storage for the artifact cache."""

    def load(self) -> dict[str, dict[str, Any]] | None:
        """Return all records, or None when the store has never been written."""
        ...

    def save(self, records: dict[str, dict[str, Any]]) -> None:
        """Replace all records."""
        ...


class JsonFileStore:
    """A single JSON document, read fully on load and rewritten on every save.

    Writes are read-modify-write of the whole file, so two processes
    sharing one path can lose each other's updates.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> dict[str, dict[str, Any]] | None:
        if not self.path.exists():
            return None
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error("artifact_cache.load_failed", path=str(self.path), error=str(e))
            return None
        if not isinstance(data, dict):
            logger.error("artifact_cache.load_failed", path=str(self.path), error="not an object")
            return None
        return data

    def save(self, records: dict[str, dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(records, f, indent=2)
        os.replace(tmp_path, self.path)


class MemoryStore:
    """In-process store. ``initial=None`` behaves like a store never written."""

    def __init__(self, initial: dict[str, dict[str, Any]] | None = None):
        self.records = None if initial is None else dict(initial)
        self.saves = 0

    def load(self) -> dict[str, dict[str, Any]] | None:
        return None if self.records is None else dict(self.records)

    def save(self, records: dict[str, dict[str, Any]]) -> None:
        self.records = dict(records)
        self.saves += 1


DEFAULT_STYLE = "modern"
DEFAULT_TECH = "nextjs"

DEFAULT_NAVBAR = """'use client';

import Link from 'next/link';

export default function Navbar() {
  return (
    <nav className="fixed top-0 z-50 w-full border-b border-gray-200 bg-white/90 backdrop-blur-lg">
      <div className="mx-auto flex h-16 max-w-7xl items-center justify-between px-4 sm:px-6 lg:px-8">
        <Link href="/" className="text-xl font-bold text-gray-900">
          Logo
        </Link>
        <div className="hidden space-x-8 md:flex">
          <Link href="/features" className="text-gray-600 transition-colors hover:text-gray-900">
            Features
          </Link>
          <Link href="/pricing" className="text-gray-600 transition-colors hover:text-gray-900">
            Pricing
          </Link>
          <Link href="/contact" className="text-gray-600 transition-colors hover:text-gray-900">
            Contact
          </Link>
        </div>
      </div>
    </nav>
  );
}
"""

DEFAULT_BUTTON = """import React, { ButtonHTMLAttributes, forwardRef } from 'react';

interface ButtonProps extends ButtonHTMLAttributes<HTMLButtonElement> {
  variant?: 'primary' | 'secondary' | 'outline';
  isLoading?: boolean;
}

const variants = {
  primary: 'bg-blue-600 text-white hover:bg-blue-700',
  secondary: 'bg-gray-100 text-gray-900 hover:bg-gray-200',
  outline: 'border border-gray-300 text-gray-900 hover:bg-gray-50',
};

const Button = forwardRef<HTMLButtonElement, ButtonProps>(
  ({ variant = 'primary', isLoading = false, className = '', children, ...props }, ref) => (
    <button
      ref={ref}
      disabled={isLoading || props.disabled}
      className={`inline-flex items-center justify-center rounded-lg px-4 py-2 font-medium transition-colors disabled:opacity-50 ${variants[variant]} ${className}`}
      {...props}
    >
      {isLoading ? 'Loading...' : children}
    </button>
  )
);

Button.displayName = 'Button';

export default Button;
"""

DEFAULT_LOADING = """export default function Loading({ label = 'Loading' }: { label?: string }) {
  return (
    <div className="flex min-h-[200px] items-center justify-center" role="status" aria-label={label}>
      <div className="h-10 w-10 animate-spin rounded-full border-4 border-blue-600 border-t-transparent" />
      <span className="sr-only">{label}</span>
    </div>
  );
}
"""

DEFAULT_ARTIFACTS: tuple[CachedArtifact, ...] = (
    CachedArtifact(name="navbar", style=DEFAULT_STYLE, tech=DEFAULT_TECH, content=DEFAULT_NAVBAR),
    CachedArtifact(name="button", style=DEFAULT_STYLE, tech=DEFAULT_TECH, content=DEFAULT_BUTTON),
    CachedArtifact(name="loading", style=DEFAULT_STYLE, tech=DEFAULT_TECH, content=DEFAULT_LOADING),
)


CacheIdentity = tuple[str, str, str]


def normalize_name(name: str) -> str:
    """Cache names are kebab-case: ``ProductCard`` and ``product-card`` match."""
    return kebab_case(name) or name


class ArtifactCache:
    """Keyed store of reusable artifacts, written through on every put.

    Entries are held under their ``(name, style, tech)`` triple. The joined
    ``name-style-tech`` string only appears in the persisted document, where
    two triples with the same joined form overwrite each other.
    """

    def __init__(
        self,
        store: ArtifactStore,
        defaults: Iterable[CachedArtifact] = DEFAULT_ARTIFACTS,
    ):
        self.store = store
        self._entries: dict[CacheIdentity, CachedArtifact] = {}

        records = store.load()
        if records is None:
            for artifact in defaults:
                self._add(artifact)
            self._save()
            logger.info("artifact_cache.seeded", count=len(self._entries))
        else:
            for key, record in records.items():
                try:
                    artifact = CachedArtifact.model_validate(record)
                except ValidationError as e:
                    logger.warning("artifact_cache.invalid_record", key=key, error=str(e))
                    continue
                self._add(artifact)
            logger.info("artifact_cache.loaded", count=len(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    @staticmethod
    def _identity(name: str, style: str, tech: str) -> CacheIdentity:
        return (normalize_name(name), style, tech)

    def _add(self, artifact: CachedArtifact) -> CachedArtifact:
        name = normalize_name(artifact.name)
        if name != artifact.name:
            artifact = artifact.model_copy(update={"name": name})
        self._entries[artifact.identity] = artifact
        return artifact

    def _save(self) -> None:
        self.store.save({a.key: a.to_record() for a in self._entries.values()})

    def has(self, name: str, style: str, tech: str) -> bool:
        return self._identity(name, style, tech) in self._entries

    def get(self, name: str, style: str, tech: str) -> CachedArtifact | None:
        return self._entries.get(self._identity(name, style, tech))

    def put(self, artifact: CachedArtifact) -> None:
        artifact = self._add(artifact)
        self._save()
        logger.info("artifact_cache.put", key=artifact.key, size=len(artifact.content))

    def filter_uncached(self, names: Iterable[str], style: str, tech: str) -> list[str]:
        """Names without an entry for this style and tech, in input order."""
        return [name for name in names if not self.has(name, style, tech)]

    def cached_for(self, style: str, tech: str) -> dict[str, str]:
        """Every cached component for a style and tech, keyed by file path."""
        matching = sorted(
            (a for a in self._entries.values() if a.style == style and a.tech == tech),
            key=lambda a: a.name,
        )
        return {component_path(a.name): a.content for a in matching}

    def entries(self) -> list[CachedArtifact]:
        return [self._entries[identity] for identity in sorted(self._entries)]

    def invalidate(self, name: str, style: str, tech: str) -> bool:
        """Remove one entry. Returns whether it existed."""
        identity = self._identity(name, style, tech)
        artifact = self._entries.pop(identity, None)
        if artifact is None:
            return False
        self._save()
        logger.info("artifact_cache.invalidated", key=artifact.key)
        return True

    def clear(self) -> int:
        """Remove every entry, defaults included. Returns the number removed."""
        count = len(self._entries)
        self._entries.clear()
        self._save()
        logger.info("artifact_cache.cleared", count=count)
        return count

    def stats(self) -> CacheStats:
        by_style: dict[str, int] = {}
        by_tech: dict[str, int] = {}
        for artifact in self._entries.values():
            by_style[artifact.style] = by_style.get(artifact.style, 0) + 1
            by_tech[artifact.tech] = by_tech.get(artifact.tech, 0) + 1
        return CacheStats(total=len(self._entries), by_style=by_style, by_tech=by_tech)


# Singleton instance
_artifact_cache: ArtifactCache | None = None


def get_artifact_cache() -> ArtifactCache:
    """Get the artifact cache singleton, backed by the configured JSON file."""
    global _artifact_cache
    if _artifact_cache is None:
        _artifact_cache = ArtifactCache(JsonFileStore(get_settings().cache_path))
    return _artifact_cache
