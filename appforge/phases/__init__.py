"""Generation phases."""

from appforge.phases.base import BasePhase, PhaseContext
from appforge.phases.components import CustomComponentsPhase
from appforge.phases.pages import PagesPhase
from appforge.phases.registry import PhaseRegistry, default_phases, get_phase_registry
from appforge.phases.scaffolding import (
    BusinessComponentsPhase,
    ExtendedTemplatesPhase,
    StateScaffoldingPhase,
)
from appforge.phases.structure import BaseStructurePhase

__all__ = [
    "BasePhase",
    "PhaseContext",
    "BaseStructurePhase",
    "StateScaffoldingPhase",
    "BusinessComponentsPhase",
    "ExtendedTemplatesPhase",
    "CustomComponentsPhase",
    "PagesPhase",
    "PhaseRegistry",
    "default_phases",
    "get_phase_registry",
]
