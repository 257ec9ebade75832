"""Bounded in-memory cache for ancillary lookups.

Unlike the artifact cache this layer evicts: each entry type holds at most
``max_entries`` items (least recently used goes first) and entries expire
after ``ttl_hours``. Nothing depends on it for correctness.
"""

import hashlib
import json
import re
import time
from collections import OrderedDict
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Callable, Literal

from pydantic import BaseModel

from appforge.config import get_settings
from appforge.utils.logging import get_logger

logger = get_logger(__name__)

EntryType = Literal["component", "page", "config", "domain"]
ENTRY_TYPES: tuple[EntryType, ...] = ("component", "page", "config", "domain")


@dataclass
class SmartCacheEntry:
    data: str
    hash: str
    timestamp: float
    domain: str
    size: int
    hit_count: int = 0


class SmartCacheMetrics(BaseModel):
    hits: int = 0
    misses: int = 0
    total_requests: int = 0
    evictions: int = 0
    entries: int = 0

    @property
    def hit_rate(self) -> float:
        if not self.total_requests:
            return 0.0
        return round(self.hits / self.total_requests * 100, 2)


def content_hash(data: str) -> str:
    return hashlib.md5(data.encode("utf-8")).hexdigest()[:16]


class SmartCache:
    def __init__(
        self,
        max_entries: int = 100,
        ttl_hours: float = 24.0,
        path: str | Path | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.max_entries = max_entries
        self.ttl_seconds = ttl_hours * 3600
        self.path = Path(path) if path else None
        self._clock = clock
        self._caches: dict[str, OrderedDict[str, SmartCacheEntry]] = {
            t: OrderedDict() for t in ENTRY_TYPES
        }
        self.metrics = SmartCacheMetrics()
        if self.path:
            self._load()

    def _cache(self, entry_type: str) -> OrderedDict[str, SmartCacheEntry]:
        if entry_type not in self._caches:
            raise ValueError(f"Unknown cache type: {entry_type}")
        return self._caches[entry_type]

    def _expired(self, entry: SmartCacheEntry) -> bool:
        return self._clock() - entry.timestamp > self.ttl_seconds

    def set(self, entry_type: EntryType, key: str, data: str, domain: str = "default") -> None:
        cache = self._cache(entry_type)
        digest = content_hash(data)
        existing = cache.get(key)
        if existing and existing.hash == digest and not self._expired(existing):
            cache.move_to_end(key)
            return

        if key not in cache and len(cache) >= self.max_entries:
            evicted, _ = cache.popitem(last=False)
            self.metrics.evictions += 1
            logger.debug("smart_cache.evicted", type=entry_type, key=evicted)

        cache[key] = SmartCacheEntry(
            data=data,
            hash=digest,
            timestamp=self._clock(),
            domain=domain,
            size=len(data),
        )
        cache.move_to_end(key)

    def get(self, entry_type: EntryType, key: str, domain: str = "default") -> str | None:
        self.metrics.total_requests += 1
        cache = self._cache(entry_type)
        entry = cache.get(key)

        if entry is None:
            self.metrics.misses += 1
            return None
        if self._expired(entry):
            del cache[key]
            self.metrics.misses += 1
            logger.debug("smart_cache.expired", type=entry_type, key=key)
            return None
        if domain != "default" and entry.domain != domain:
            self.metrics.misses += 1
            return None

        entry.hit_count += 1
        cache.move_to_end(key)
        self.metrics.hits += 1
        return entry.data

    def has(self, entry_type: EntryType, key: str) -> bool:
        entry = self._cache(entry_type).get(key)
        return entry is not None and not self._expired(entry)

    def get_or_set(
        self,
        entry_type: EntryType,
        key: str,
        factory: Callable[[], str],
        domain: str = "default",
    ) -> str:
        """Return the cached value, computing and storing it on a miss."""
        cached = self.get(entry_type, key, domain)
        if cached is not None:
            return cached
        data = factory()
        self.set(entry_type, key, data, domain)
        return data

    def invalidate(
        self,
        entry_type: EntryType | None = None,
        pattern: str | None = None,
        domain: str | None = None,
    ) -> int:
        """Drop entries matching every given filter. Returns the count removed."""
        regex = re.compile(pattern) if pattern else None
        types = [entry_type] if entry_type else list(ENTRY_TYPES)
        removed = 0
        for t in types:
            cache = self._cache(t)
            doomed = [
                key
                for key, entry in cache.items()
                if (regex is None or regex.search(key))
                and (domain is None or entry.domain == domain)
            ]
            for key in doomed:
                del cache[key]
            removed += len(doomed)
        logger.info("smart_cache.invalidated", count=removed)
        return removed

    def cleanup_expired(self) -> int:
        removed = 0
        for cache in self._caches.values():
            expired = [key for key, entry in cache.items() if self._expired(entry)]
            for key in expired:
                del cache[key]
            removed += len(expired)
        return removed

    def get_metrics(self) -> SmartCacheMetrics:
        self.metrics.entries = sum(len(c) for c in self._caches.values())
        return self.metrics.model_copy()

    def save(self) -> None:
        if not self.path:
            return
        self.cleanup_expired()
        payload = {
            t: {key: asdict(entry) for key, entry in cache.items()}
            for t, cache in self._caches.items()
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(payload, f)

    def _load(self) -> None:
        if not self.path or not self.path.exists():
            return
        try:
            with open(self.path, encoding="utf-8") as f:
                payload = json.load(f)
            for t, entries in payload.items():
                if t not in self._caches:
                    continue
                for key, raw in entries.items():
                    entry = SmartCacheEntry(**raw)
                    if not self._expired(entry):
                        self._caches[t][key] = entry
        except (OSError, ValueError, TypeError) as e:
            logger.warning("smart_cache.load_failed", path=str(self.path), error=str(e))


# Singleton instance
_smart_cache: SmartCache | None = None


def get_smart_cache() -> SmartCache:
    """Get the smart cache singleton."""
    global _smart_cache
    if _smart_cache is None:
        config = get_settings()
        _smart_cache = SmartCache(
            max_entries=config.smart_cache_max_entries,
            ttl_hours=config.smart_cache_ttl_hours,
            path=config.smart_cache_path,
        )
    return _smart_cache
