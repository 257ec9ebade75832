"""Unit tests for the deterministic Next.js templates and fallbacks."""

import json

import pytest

from appforge.generators.nextjs import (
    FallbackLibrary,
    business_components_for,
    business_index,
    contexts_for,
    extended_templates_for,
    providers,
)
from appforge.generators.nextjs.fallbacks import COMPONENT_SET
from appforge.generators.nextjs.naming import kebab_case, pascal_case, safe_text
from appforge.models.blueprint import Blueprint, PageSpec
from appforge.models.generation import ArtifactRole, kind_for_path
from appforge.validation.strategies import strategy_for

DOMAINS = ("ecommerce", "saas", "portfolio", "blog")


def assert_complete(path: str, content: str) -> None:
    kind = kind_for_path(path)
    if kind in ("css", "tsx", "ts", "js"):
        assert content.count("{") == content.count("}"), path
    strategy = strategy_for(kind)
    if strategy is not None:
        assert strategy.definite_reason(content) is None, path


def blueprint_for(domain: str) -> Blueprint:
    return Blueprint.model_validate(
        {
            "metadata": {
                "name": "Test {App} <script>",
                "domain": domain,
                "description": "Quotes ' and \" and `ticks` ${x}",
            },
            "pagesStructure": {
                "public": [
                    {"path": "/about-us", "name": "About Us", "priority": "high"},
                    {"path": "/404", "name": "404", "priority": "medium"},
                ]
            },
        }
    )


class TestNaming:
    """Tests for identifier helpers."""

    def test_pascal_case(self):
        assert pascal_case("add-to-cart button") == "AddToCartButton"
        assert pascal_case("404") == "Page404"

    def test_kebab_case(self):
        assert kebab_case("AddToCartButton") == "add-to-cart-button"
        assert kebab_case("product_card") == "product-card"

    def test_safe_text_strips_code_characters(self):
        assert safe_text("Hi {there} <b>'x'</b> $y") == "Hi there bx/b y"


class TestDomainTemplates:
    """Every deterministic template is structurally complete."""

    @pytest.mark.parametrize("domain", DOMAINS)
    def test_contexts_and_providers(self, domain):
        templates = contexts_for(domain) + [providers(domain)]
        for template in templates:
            assert_complete(template.path, template.content)

    @pytest.mark.parametrize("domain", DOMAINS)
    def test_business_components(self, domain):
        templates = business_components_for(domain)
        if templates:
            templates = templates + [business_index(templates)]
        for template in templates:
            assert template.path.startswith("components/business/")
            assert_complete(template.path, template.content)

    @pytest.mark.parametrize("domain", DOMAINS)
    def test_extended_templates(self, domain):
        for template in extended_templates_for(domain):
            assert_complete(template.path, template.content)

    def test_providers_nest_domain_contexts(self):
        content = providers("ecommerce").content

        assert "CartProvider" in content
        assert "AuthProvider" in content
        assert "export function Providers" in content

    def test_blog_providers_pass_through(self):
        content = providers("blog").content

        assert "Provider>" not in content.replace("Providers", "")
        assert_complete("components/Providers.tsx", content)

    def test_business_index_exports_each_component(self):
        templates = business_components_for("ecommerce")
        index = business_index(templates)

        assert index.path == "components/business/index.ts"
        for template in templates:
            assert template.name in index.content

    def test_cache_name_is_kebab(self):
        names = [t.cache_name for t in business_components_for("ecommerce")]
        assert "add-to-cart-button" in names


class TestFallbackLibrary:
    """Every fallback passes the strict truncation check."""

    @pytest.fixture
    def library(self) -> FallbackLibrary:
        return FallbackLibrary()

    @pytest.mark.parametrize("domain", DOMAINS)
    def test_role_fallbacks(self, library, domain):
        bp = blueprint_for(domain)
        paths = {
            ArtifactRole.PACKAGE_JSON: "package.json",
            ArtifactRole.LAYOUT: "app/layout.tsx",
            ArtifactRole.GLOBALS_CSS: "app/globals.css",
            ArtifactRole.HOMEPAGE: "app/page.tsx",
            ArtifactRole.TAILWIND_CONFIG: "tailwind.config.js",
            ArtifactRole.POSTCSS_CONFIG: "postcss.config.js",
            ArtifactRole.README: "README.md",
        }
        for role, path in paths.items():
            assert_complete(path, library.for_role(role, bp, path=path))

    @pytest.mark.parametrize("domain", DOMAINS)
    def test_page_fallbacks(self, library, domain):
        bp = blueprint_for(domain)
        for spec in bp.pages:
            content = library.for_role(ArtifactRole.PAGE, bp, page_spec=spec)
            assert_complete(f"app{spec.path}/page.tsx", content)
            assert "export default function" in content

    def test_component_set(self, library):
        components = library.component_set()

        assert len(components) == 4
        assert set(components) == set(COMPONENT_SET)
        for path, content in components.items():
            assert_complete(path, content)

    def test_generic_component_fallback(self, library):
        bp = blueprint_for("blog")
        content = library.for_role(
            ArtifactRole.COMPONENT, bp, path="components/ui/PricingTable.tsx"
        )

        assert "PricingTable" in content
        assert_complete("components/ui/PricingTable.tsx", content)

    def test_package_json_is_valid(self, library):
        data = json.loads(library.for_role(ArtifactRole.PACKAGE_JSON, blueprint_for("saas")))

        assert "next" in data["dependencies"]
        assert data["scripts"]["build"] == "next build"

    def test_layout_imports_stylesheet_and_providers(self, library):
        content = library.for_role(ArtifactRole.LAYOUT, blueprint_for("portfolio"))

        assert "import './globals.css';" in content
        assert "from '../components/Providers'" in content

    def test_user_text_is_sanitized(self, library):
        content = library.for_role(ArtifactRole.HOMEPAGE, blueprint_for("blog"))

        assert "<script>" not in content
        assert "${x}" not in content

    def test_page_fallback_requires_spec(self, library):
        with pytest.raises(ValueError):
            library.for_role(ArtifactRole.PAGE, blueprint_for("blog"))

    def test_generic_role_has_no_fallback(self, library):
        with pytest.raises(ValueError):
            library.for_role(ArtifactRole.GENERIC, blueprint_for("blog"))
