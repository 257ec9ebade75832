"""Phase registry for managing the generation pipeline."""

from functools import lru_cache

from appforge.phases.base import BasePhase
from appforge.phases.components import CustomComponentsPhase
from appforge.phases.pages import PagesPhase
from appforge.phases.scaffolding import (
    BusinessComponentsPhase,
    ExtendedTemplatesPhase,
    StateScaffoldingPhase,
)
from appforge.phases.structure import BaseStructurePhase
from appforge.utils.logging import get_logger

logger = get_logger(__name__)

# Later phases read what earlier ones produced, so the order is fixed.
DEFAULT_PHASES: tuple[type[BasePhase], ...] = (
    BaseStructurePhase,
    StateScaffoldingPhase,
    BusinessComponentsPhase,
    ExtendedTemplatesPhase,
    CustomComponentsPhase,
    PagesPhase,
)


class PhaseRegistry:
    """Registry of generation phases, kept in registration order."""

    def __init__(self):
        self._phases: dict[str, type[BasePhase]] = {}

    def register(self, phase_class: type[BasePhase]) -> None:
        """Register a phase class."""
        name = phase_class().name

        if name in self._phases:
            logger.warning("phase_registry.overwriting", phase=name)

        self._phases[name] = phase_class
        logger.debug("phase_registry.registered", phase=name)

    def get(self, name: str) -> type[BasePhase] | None:
        """Get a phase class by name."""
        return self._phases.get(name)

    def create(self, name: str) -> BasePhase | None:
        """Create a phase instance by name."""
        phase_class = self.get(name)
        if phase_class:
            return phase_class()
        return None

    def create_all(self) -> list[BasePhase]:
        """Instances of every registered phase, in pipeline order."""
        return [phase_class() for phase_class in self._phases.values()]

    def list_phases(self) -> list[str]:
        """List all registered phase names."""
        return list(self._phases.keys())


def default_phases() -> list[BasePhase]:
    return get_phase_registry().create_all()


# Singleton instance
_registry: PhaseRegistry | None = None


@lru_cache
def get_phase_registry() -> PhaseRegistry:
    """Get the phase registry singleton, populated with the default pipeline."""
    global _registry
    if _registry is None:
        _registry = PhaseRegistry()
        for phase_class in DEFAULT_PHASES:
            _registry.register(phase_class)
    return _registry
