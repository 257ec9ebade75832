"""Unit tests for content cleaning, truncation strategies and the validator."""

import pytest

from appforge.core.exceptions import MalformedResponseError
from appforge.generators.nextjs.fallbacks import homepage
from appforge.models.generation import ArtifactRole, WarningCode
from appforge.validation import (
    ContentValidator,
    CssTruncation,
    JsConfigTruncation,
    JsonTruncation,
    TsxTruncation,
    parse_json_object,
    strategy_for,
    strip_wrappers,
)
from tests.helpers import GOOD_CSS, GOOD_TAILWIND, tsx_module


class TestStripWrappers:
    """Tests for fence and prose removal."""

    def test_removes_fences(self):
        text = "```tsx\nexport default function A() {\n  return null;\n}\n```"

        assert strip_wrappers(text, "tsx") == "export default function A() {\n  return null;\n}\n"

    def test_removes_leading_prose(self):
        text = "Here is your component:\n\n'use client';\nexport const x = 1;\n"

        assert strip_wrappers(text, "tsx").startswith("'use client';")

    def test_css_starts_at_first_directive(self):
        text = "Sure! Below is the CSS.\n@tailwind base;\n"

        assert strip_wrappers(text, "css") == "@tailwind base;\n"

    def test_empty_input(self):
        assert strip_wrappers("```\n```", "tsx") == ""

    @pytest.mark.parametrize(
        "text",
        [
            "interface Props {\n  title: string;\n}\n\nexport default function A({ title }: Props) {\n  return null;\n}\n",
            "function About() {\n  return null;\n}\n\nexport default About;\n",
            "const items = ['a'];\n\nexport default function List() {\n  return null;\n}\n",
        ],
    )
    def test_keeps_code_before_first_export(self, text):
        assert strip_wrappers(text, "tsx") == text

    def test_keeps_css_rules_before_root(self):
        text = "body {\n  margin: 0;\n}\n\n:root {\n  --primary: #2563eb;\n}\n"

        assert strip_wrappers(text, "css") == text


class TestParseJsonObject:
    """Tests for lenient JSON parsing."""

    def test_plain_object(self):
        assert parse_json_object('{"a": 1}') == {"a": 1}

    def test_fenced_object_with_prose(self):
        text = 'Here you go:\n```json\n{"a": "x"}\n```\nEnjoy!'

        assert parse_json_object(text) == {"a": "x"}

    def test_not_an_object(self):
        with pytest.raises(MalformedResponseError):
            parse_json_object("[1, 2, 3]")

    def test_garbage(self):
        with pytest.raises(MalformedResponseError):
            parse_json_object('{"a": "unterminated')


class TestCssTruncation:
    """Tests for the CSS strategy."""

    strategy = CssTruncation()

    def test_complete_css(self):
        assert self.strategy.definite_reason(GOOD_CSS) is None

    def test_unbalanced_braces(self):
        assert "unbalanced braces" in self.strategy.definite_reason(":root {\n  --a: 1;\n")

    def test_dangling_declaration(self):
        text = "@tailwind base;\nbody { color: red; }\n.card {}\nh1 { margin: 0 }\n  color:"

        assert "mid-declaration" in self.strategy.definite_reason(text)


class TestTsxTruncation:
    """Tests for the TSX strategy."""

    strategy = TsxTruncation()

    def test_complete_component(self):
        assert self.strategy.definite_reason(tsx_module("Widget")) is None

    @pytest.mark.parametrize("tail", [",", " =", " &&", " ||", " <", "("])
    def test_dangling_tokens_are_definite(self, tail):
        text = tsx_module("Widget") + f"const x{tail}"

        assert self.strategy.is_definitely_truncated(text)

    def test_unclosed_jsx_angle(self):
        text = tsx_module("Widget").rstrip() + "\n<"

        assert "dangling" in self.strategy.definite_reason(text)

    def test_paren_imbalance_forgiven_when_long_enough(self):
        text = tsx_module("Widget") + "// stray ( in a comment\n"

        assert self.strategy.is_possibly_truncated(text)
        assert not self.strategy.is_definitely_truncated(text)

    def test_paren_imbalance_definite_when_short(self):
        text = "const a = f(1;\n"

        assert self.strategy.is_definitely_truncated(text)

    def test_missing_brace_is_definite(self):
        text = tsx_module("Widget").rstrip().removesuffix("}")

        assert "unbalanced braces" in self.strategy.definite_reason(text)


class TestJsAndJson:
    """Tests for the JS config and JSON strategies."""

    def test_complete_config(self):
        assert JsConfigTruncation().definite_reason(GOOD_TAILWIND) is None

    def test_config_ends_mid_statement(self):
        text = "module.exports = {\n  content: [],\n  theme: {},\n}\nconst plugins ="

        assert JsConfigTruncation().is_definitely_truncated(text)

    def test_json_repair_trims_wrapping_text(self):
        strategy = JsonTruncation()
        repaired = strategy.repair('noise {"name": "app"} trailing')

        assert repaired == '{"name": "app"}'
        assert strategy.definite_reason(repaired) is None

    def test_json_cut_off(self):
        assert JsonTruncation().is_definitely_truncated('{"name": "app", "deps": {')

    def test_registry(self):
        assert isinstance(strategy_for("ts"), TsxTruncation)
        assert strategy_for("md") is None


class TestContentValidator:
    """Tests for ContentValidator."""

    @pytest.fixture
    def validator(self) -> ContentValidator:
        return ContentValidator()

    def test_valid_content_is_cleaned(self, validator, ecommerce_blueprint):
        outcome = validator.validate(
            "```tsx\n" + tsx_module("Home") + "```",
            path="app/page.tsx",
            kind="tsx",
            role=ArtifactRole.HOMEPAGE,
            blueprint=ecommerce_blueprint,
            phase="base_structure",
        )

        assert not outcome.replaced
        assert outcome.warning is None
        assert outcome.content == tsx_module("Home")

    def test_page_starting_with_interface_is_kept_whole(self, validator, ecommerce_blueprint):
        page = (
            "interface Props {\n  title: string;\n}\n\n"
            "function AboutPage({ title }: Props) {\n"
            "  return (\n"
            '    <main className="mx-auto max-w-4xl px-4 py-16">\n'
            '      <h1 className="text-4xl font-bold">{title}</h1>\n'
            "    </main>\n"
            "  );\n"
            "}\n\n"
            "export default AboutPage;\n"
        )

        outcome = validator.validate(
            page,
            path="app/about/page.tsx",
            kind="tsx",
            role=ArtifactRole.PAGE,
            blueprint=ecommerce_blueprint,
            phase="pages",
            page_spec=ecommerce_blueprint.pages[1],
        )

        assert not outcome.replaced
        assert outcome.content == page

    def test_truncated_content_replaced_by_fallback(self, validator, ecommerce_blueprint):
        outcome = validator.validate(
            tsx_module("Home") + "<",
            path="app/page.tsx",
            kind="tsx",
            role=ArtifactRole.HOMEPAGE,
            blueprint=ecommerce_blueprint,
            phase="base_structure",
        )

        assert outcome.replaced
        assert outcome.content == homepage(ecommerce_blueprint)
        assert outcome.warning.code == WarningCode.TRUNCATED
        assert outcome.warning.path == "app/page.tsx"

    def test_malformed_json_warning(self, validator, ecommerce_blueprint):
        outcome = validator.validate(
            '{"name": ',
            path="package.json",
            kind="json",
            role=ArtifactRole.PACKAGE_JSON,
            blueprint=ecommerce_blueprint,
            phase="base_structure",
        )

        assert outcome.replaced
        assert outcome.warning.code == WarningCode.MALFORMED_RESPONSE

    def test_disabled_checks_keep_content(self, ecommerce_blueprint):
        validator = ContentValidator(disable_checks=True)
        outcome = validator.validate(
            "export const x = (",
            path="app/page.tsx",
            kind="tsx",
            role=ArtifactRole.HOMEPAGE,
            blueprint=ecommerce_blueprint,
            phase="base_structure",
        )

        assert not outcome.replaced
        assert outcome.content == "export const x = (\n"

    def test_markdown_only_rejects_empty(self, validator):
        assert validator.truncation_reason("# Title\n", "md") is None
        assert validator.truncation_reason("  ", "md") == "empty content"
