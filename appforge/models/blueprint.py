"""Blueprint models: the typed description of the application to generate."""

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Domain = Literal["ecommerce", "saas", "portfolio", "blog"]
Priority = Literal["high", "medium", "low"]

DOMAIN_SYNONYMS: dict[str, Domain] = {
    "ecommerce": "ecommerce",
    "shop": "ecommerce",
    "store": "ecommerce",
    "marketplace": "ecommerce",
    "retail": "ecommerce",
    "saas": "saas",
    "dashboard": "saas",
    "analytics": "saas",
    "platform": "saas",
    "app": "saas",
    "portfolio": "portfolio",
    "personal": "portfolio",
    "resume": "portfolio",
    "cv": "portfolio",
    "blog": "blog",
    "cms": "blog",
    "article": "blog",
    "articles": "blog",
    "news": "blog",
}


def normalize_domain(value: str) -> Domain:
    """Map a free-form domain label onto the closed domain set.

    Raises:
        ValueError: If the label matches no known domain.
    """
    key = re.sub(r"[-_\s]", "", value.strip().lower())
    if key not in DOMAIN_SYNONYMS:
        raise ValueError(
            f"Unknown domain '{value}'. Expected one of: ecommerce, saas, portfolio, blog"
        )
    return DOMAIN_SYNONYMS[key]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class BlueprintMetadata(_Frozen):
    """Identity of the application."""

    name: str = Field(..., min_length=1)
    domain: Domain
    description: str = ""

    @field_validator("domain", mode="before")
    @classmethod
    def _normalize_domain(cls, value: object) -> object:
        if isinstance(value, str):
            return normalize_domain(value)
        return value


class TechStack(_Frozen):
    """Target stack of the generated application."""

    framework: str = "nextjs"
    styling: str = "tailwind"
    language: str = "typescript"

    @property
    def tech_id(self) -> str:
        """Cache identifier for the stack, e.g. ``Next.js`` -> ``nextjs``."""
        return re.sub(r"[^a-z0-9]", "", self.framework.lower()) or "nextjs"


class PageSpec(_Frozen):
    """A public page of the application."""

    path: str
    name: str
    priority: Priority = "medium"

    @field_validator("path")
    @classmethod
    def _leading_slash(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith("/"):
            value = f"/{value}"
        if len(value) > 1:
            value = value.rstrip("/")
        return value


class PagesStructure(_Frozen):
    """Page tree of the application."""

    public: tuple[PageSpec, ...] = ()


class Blueprint(_Frozen):
    """Immutable input of a generation run."""

    metadata: BlueprintMetadata
    tech_stack: TechStack = Field(default_factory=TechStack, alias="techStack")
    pages_structure: PagesStructure = Field(
        default_factory=PagesStructure, alias="pagesStructure"
    )
    components: tuple[str, ...] = ()
    features: tuple[str, ...] = ()
    design_style: str = Field(default="modern", alias="designStyle")

    @property
    def domain(self) -> Domain:
        return self.metadata.domain

    @property
    def style(self) -> str:
        return self.design_style

    @property
    def tech(self) -> str:
        return self.tech_stack.tech_id

    @property
    def pages(self) -> tuple[PageSpec, ...]:
        return self.pages_structure.public
