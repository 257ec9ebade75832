"""Artifact cache endpoints. Invalidation is an operator action."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel

from appforge.api.deps import CacheDep
from appforge.models.cache import CacheStats
from appforge.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


class CacheEntryResponse(BaseModel):
    """A cache entry without its content."""

    key: str
    name: str
    style: str
    tech: str
    version: str
    size: int


class CacheResponse(BaseModel):
    """Cache statistics and entry listing."""

    stats: CacheStats
    entries: list[CacheEntryResponse]


class CacheClearResponse(BaseModel):
    removed: int


@router.get("", response_model=CacheResponse, summary="Inspect the artifact cache")
async def get_cache(cache: CacheDep) -> CacheResponse:
    return CacheResponse(
        stats=cache.stats(),
        entries=[
            CacheEntryResponse(
                key=a.key,
                name=a.name,
                style=a.style,
                tech=a.tech,
                version=a.version,
                size=len(a.content),
            )
            for a in cache.entries()
        ],
    )


@router.delete(
    "/{name}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Invalidate one cached artifact",
)
async def invalidate_entry(
    name: str,
    cache: CacheDep,
    style: Annotated[str, Query(min_length=1)] = "modern",
    tech: Annotated[str, Query(min_length=1)] = "nextjs",
) -> None:
    if not cache.invalidate(name, style, tech):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No cached artifact '{name}' for style '{style}' and tech '{tech}'",
        )
    logger.info("cache.entry_invalidated", name=name, style=style, tech=tech)


@router.delete("", response_model=CacheClearResponse, summary="Clear the artifact cache")
async def clear_cache(cache: CacheDep) -> CacheClearResponse:
    removed = cache.clear()
    logger.info("cache.cleared", removed=removed)
    return CacheClearResponse(removed=removed)
