"""Deterministic Next.js templates and fallbacks."""

from appforge.generators.nextjs.business import business_components_for, business_index
from appforge.generators.nextjs.contexts import DomainTemplate, contexts_for, providers
from appforge.generators.nextjs.extended import extended_templates_for
from appforge.generators.nextjs.fallbacks import FallbackLibrary

__all__ = [
    "DomainTemplate",
    "FallbackLibrary",
    "business_components_for",
    "business_index",
    "contexts_for",
    "extended_templates_for",
    "providers",
]
