"""Pytest configuration and fixtures."""

from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from appforge.api.deps import get_cache, get_pipeline
from appforge.config import Settings
from appforge.core.events import EventBus
from appforge.core.orchestrator import PhaseOrchestrator
from appforge.core.pacing import FixedIntervalGate
from appforge.core.session import RunManager, get_run_manager
from appforge.main import app
from appforge.models.blueprint import Blueprint
from appforge.services.artifact_cache import ArtifactCache, MemoryStore
from appforge.services.completion import RetryPolicy
from tests.helpers import ScriptedCompletionClient


@pytest.fixture
def settings() -> Settings:
    """Settings for tests: no pacing, no persistence side effects."""
    return Settings(
        pacing_interval_seconds=0,
        retry_backoff_seconds=0,
        smart_cache_path=None,
        save_debug_data=False,
    )


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def artifact_cache(memory_store: MemoryStore) -> ArtifactCache:
    """A seeded cache backed by memory."""
    return ArtifactCache(memory_store)


@pytest.fixture
def empty_cache() -> ArtifactCache:
    """A cache whose store was written before and holds nothing."""
    return ArtifactCache(MemoryStore(initial={}))


@pytest.fixture
def completion_client() -> ScriptedCompletionClient:
    return ScriptedCompletionClient()


@pytest.fixture
def make_orchestrator(settings: Settings):
    """Build an orchestrator around a scripted client and a cache."""

    def factory(
        client: ScriptedCompletionClient,
        cache: ArtifactCache,
        **kwargs: Any,
    ) -> PhaseOrchestrator:
        kwargs.setdefault("gate", FixedIntervalGate(0))
        kwargs.setdefault("retry_policy", RetryPolicy(backoff_seconds=0))
        kwargs.setdefault("events", EventBus())
        return PhaseOrchestrator(client=client, cache=cache, settings=settings, **kwargs)

    return factory


@pytest.fixture
def ecommerce_blueprint_data() -> dict[str, Any]:
    """Blueprint JSON for a small online shop."""
    return {
        "metadata": {
            "name": "Acme Store",
            "domain": "ecommerce",
            "description": "An online store for handmade goods",
        },
        "techStack": {"framework": "nextjs", "styling": "tailwind", "language": "typescript"},
        "pagesStructure": {
            "public": [
                {"path": "/", "name": "Home", "priority": "high"},
                {"path": "/products", "name": "Products", "priority": "high"},
                {"path": "/cart", "name": "Cart", "priority": "medium"},
                {"path": "/blog", "name": "Blog", "priority": "low"},
            ]
        },
        "components": ["navbar", "product-card"],
        "features": ["cart", "search"],
        "designStyle": "modern",
    }


@pytest.fixture
def ecommerce_blueprint(ecommerce_blueprint_data: dict[str, Any]) -> Blueprint:
    return Blueprint.model_validate(ecommerce_blueprint_data)


@pytest.fixture
def saas_blueprint() -> Blueprint:
    return Blueprint.model_validate(
        {
            "metadata": {"name": "Metricly", "domain": "saas"},
            "pagesStructure": {
                "public": [
                    {"path": "/dashboard", "name": "Dashboard", "priority": "high"},
                    {"path": "/pricing", "name": "Pricing", "priority": "medium"},
                ]
            },
        }
    )


@pytest.fixture
def run_manager() -> RunManager:
    """Create a fresh run manager for tests."""
    return RunManager()


@pytest.fixture
async def client(make_orchestrator, empty_cache: ArtifactCache) -> AsyncClient:
    """Create an async test client wired to a scripted completion client."""
    # Reset the run manager for each test
    manager = get_run_manager()
    manager.clear()

    scripted = ScriptedCompletionClient()
    orchestrator = make_orchestrator(scripted, empty_cache, runs=manager)
    app.dependency_overrides[get_pipeline] = lambda: orchestrator
    app.dependency_overrides[get_cache] = lambda: empty_cache

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    # Cleanup after test
    app.dependency_overrides.clear()
    manager.clear()
