"""Integration tests for the phase orchestrator."""

import json
from uuid import uuid4

import pytest

from appforge.core.events import EventBus
from appforge.core.exceptions import InvalidBlueprintError, RunNotFoundError
from appforge.generators.nextjs.fallbacks import COMPONENT_SET, homepage
from appforge.models.blueprint import Blueprint
from appforge.models.generation import FileArtifact, PhaseOutcome, WarningCode
from appforge.models.run import RunStatus
from appforge.phases import BasePhase, PhaseContext, default_phases
from tests.helpers import ScriptedCompletionClient, tsx_module

REQUIRED_FILES = (
    "package.json",
    "app/layout.tsx",
    "app/globals.css",
    "app/page.tsx",
    "tailwind.config.js",
    "postcss.config.js",
    "README.md",
    "contexts/CartContext.tsx",
    "contexts/AuthContext.tsx",
    "components/Providers.tsx",
    "components/business/AddToCartButton.tsx",
    "components/business/index.ts",
    "components/ui/Navbar.tsx",
    "components/ui/ProductCard.tsx",
    "app/products/page.tsx",
    "app/cart/page.tsx",
)


class ExplodingPhase(BasePhase):
    """A phase whose produce() always fails."""

    @property
    def name(self) -> str:
        return "exploding"

    @property
    def description(self) -> str:
        return "Always fails"

    async def produce(self, ctx: PhaseContext) -> list[FileArtifact]:
        raise RuntimeError("boom")

    def fallback(self, ctx: PhaseContext) -> list[FileArtifact]:
        return [FileArtifact(path="components/Exploded.tsx", content=tsx_module("Exploded"))]


class TestPhaseOrchestrator:
    """Tests for PhaseOrchestrator.run."""

    @pytest.mark.asyncio
    async def test_full_run_on_empty_cache(self, make_orchestrator, empty_cache, ecommerce_blueprint):
        client = ScriptedCompletionClient()
        orchestrator = make_orchestrator(client, empty_cache)

        result = await orchestrator.run(ecommerce_blueprint)

        for path in REQUIRED_FILES:
            assert path in result.files, path
        assert "app/blog/page.tsx" not in result.files
        assert "import './globals.css'" in result.files["app/layout.tsx"]
        for directive in ("@tailwind base;", "@tailwind components;", "@tailwind utilities;"):
            assert directive in result.files["app/globals.css"]

        # 5 base files, 1 component batch, 2 pages
        assert result.completion_calls == 8
        assert [p.name for p in result.phases] == [p.name for p in default_phases()]
        assert all(p.outcome == PhaseOutcome.COMPLETED for p in result.phases)
        assert result.warnings == []

    @pytest.mark.asyncio
    async def test_accepts_blueprint_json(self, make_orchestrator, empty_cache, ecommerce_blueprint_data):
        data = dict(ecommerce_blueprint_data)
        del data["designStyle"]
        orchestrator = make_orchestrator(ScriptedCompletionClient(), empty_cache)

        result = await orchestrator.run(data)

        assert "package.json" in result.files
        assert empty_cache.has("navbar", "modern", "nextjs")

    @pytest.mark.asyncio
    async def test_truncated_homepage_replaced(self, make_orchestrator, empty_cache, ecommerce_blueprint):
        client = ScriptedCompletionClient({"app/page.tsx": tsx_module("Home") + "<"})
        orchestrator = make_orchestrator(client, empty_cache)

        result = await orchestrator.run(ecommerce_blueprint)

        assert result.files["app/page.tsx"] == homepage(ecommerce_blueprint)
        warning = result.warnings[0]
        assert warning.code == WarningCode.TRUNCATED
        assert warning.path == "app/page.tsx"
        assert result.phases[0].outcome == PhaseOutcome.DEGRADED

    @pytest.mark.asyncio
    async def test_layout_without_css_import_is_repaired(
        self, make_orchestrator, empty_cache, ecommerce_blueprint
    ):
        layout = tsx_module("RootLayout").replace("import React from 'react';\n", "")
        client = ScriptedCompletionClient({"app/layout.tsx": layout})
        orchestrator = make_orchestrator(client, empty_cache)

        result = await orchestrator.run(ecommerce_blueprint)

        assert result.files["app/layout.tsx"].startswith("'use client';\nimport './globals.css';")

    @pytest.mark.asyncio
    async def test_rejected_batch_uses_component_set(self, make_orchestrator, artifact_cache, ecommerce_blueprint):
        bp = ecommerce_blueprint.model_copy(update={"components": ()})
        reply = json.dumps({"components/ui/Modal.tsx": tsx_module("Modal")})
        client = ScriptedCompletionClient({"components/ui/*": reply})
        orchestrator = make_orchestrator(client, artifact_cache)

        result = await orchestrator.run(bp)

        for path in ("components/ui/Card.tsx", "components/ui/AnimatedCounter.tsx", "components/ui/HeroParallax.tsx"):
            assert result.files[path] == COMPONENT_SET[path]
        cached_button = artifact_cache.get("button", "modern", "nextjs").content
        assert result.files["components/ui/Button.tsx"] == cached_button
        assert "components/ui/Modal.tsx" not in result.files
        assert not artifact_cache.has("modal", "modern", "nextjs")

        report = next(p for p in result.phases if p.name == "custom_components")
        assert report.outcome == PhaseOutcome.FALLBACK
        assert [w.code for w in result.warnings] == [WarningCode.PARTIAL_BATCH]

    @pytest.mark.asyncio
    async def test_warm_cache_is_deterministic(self, make_orchestrator, empty_cache, ecommerce_blueprint):
        first = await make_orchestrator(ScriptedCompletionClient(), empty_cache).run(ecommerce_blueprint)
        client = ScriptedCompletionClient()
        second = await make_orchestrator(client, empty_cache).run(ecommerce_blueprint)

        cached_paths = empty_cache.cached_for("modern", "nextjs")
        assert set(cached_paths) == {"components/ui/Navbar.tsx", "components/ui/ProductCard.tsx"}
        for path in cached_paths:
            assert first.files[path] == second.files[path]

        assert "components/ui/*" not in client.targets
        report = next(p for p in second.phases if p.name == "custom_components")
        assert report.completion_calls == 0
        assert report.cache_hits == 2

    @pytest.mark.asyncio
    async def test_cached_components_and_no_pages(self, make_orchestrator, artifact_cache):
        bp = Blueprint.model_validate(
            {"metadata": {"name": "Folio", "domain": "portfolio"}, "components": ["navbar", "button"]}
        )
        client = ScriptedCompletionClient()

        result = await make_orchestrator(client, artifact_cache).run(bp)

        # Only the base structure talks to the completion service
        assert result.completion_calls == 5
        assert all(not t.startswith("components/") for t in client.targets)
        assert result.files["components/ui/Loading.tsx"] == artifact_cache.get(
            "loading", "modern", "nextjs"
        ).content

    @pytest.mark.asyncio
    async def test_invalid_blueprint_rejected_before_any_call(self, make_orchestrator, empty_cache):
        client = ScriptedCompletionClient()
        orchestrator = make_orchestrator(client, empty_cache)

        with pytest.raises(InvalidBlueprintError) as exc_info:
            await orchestrator.run({"metadata": {"name": "X", "domain": "spaceship"}})

        assert client.calls == []
        assert exc_info.value.details["errors"][0]["loc"][:2] == ["metadata", "domain"]

    @pytest.mark.asyncio
    async def test_failing_phase_falls_back(self, make_orchestrator, empty_cache, ecommerce_blueprint):
        phases = default_phases()
        phases.insert(2, ExplodingPhase())
        orchestrator = make_orchestrator(ScriptedCompletionClient(), empty_cache, phases=phases)

        result = await orchestrator.run(ecommerce_blueprint)

        assert "components/Exploded.tsx" in result.files
        report = next(p for p in result.phases if p.name == "exploding")
        assert report.outcome == PhaseOutcome.FALLBACK
        assert result.warnings[0].code == WarningCode.PHASE_FAILED
        assert result.warnings[0].reason == "boom"
        # Later phases still run
        assert "app/cart/page.tsx" in result.files

    @pytest.mark.asyncio
    async def test_events_published(self, make_orchestrator, empty_cache, ecommerce_blueprint):
        events = EventBus()
        run_id = uuid4()
        queue = events.subscribe(run_id)
        orchestrator = make_orchestrator(ScriptedCompletionClient(), empty_cache, events=events)

        result = await orchestrator.run(ecommerce_blueprint, run_id=run_id)

        received = []
        while not queue.empty():
            received.append(queue.get_nowait())
        types = [e.event_type for e in received]
        assert types[0] == "phase_started"
        assert types.count("phase_started") == len(default_phases())
        assert types.count("phase_completed") == len(default_phases())
        assert types[-1] == "run_completed"
        assert received[-1].data["file_count"] == result.file_count
        assert received[-1].is_terminal


class TestOrchestratorExecute:
    """Tests for PhaseOrchestrator.execute."""

    @pytest.mark.asyncio
    async def test_execute_completes_run(self, make_orchestrator, empty_cache, run_manager, ecommerce_blueprint):
        orchestrator = make_orchestrator(ScriptedCompletionClient(), empty_cache, runs=run_manager)
        run = await run_manager.create_run(ecommerce_blueprint)

        finished = await orchestrator.execute(run.id)

        assert finished.status == RunStatus.COMPLETED
        assert finished.result is not None
        assert finished.current_phase is None
        stored = await run_manager.get_run(run.id)
        assert stored.status == RunStatus.COMPLETED

    @pytest.mark.asyncio
    async def test_execute_unknown_run(self, make_orchestrator, empty_cache, run_manager):
        orchestrator = make_orchestrator(ScriptedCompletionClient(), empty_cache, runs=run_manager)

        with pytest.raises(RunNotFoundError):
            await orchestrator.execute(uuid4())
