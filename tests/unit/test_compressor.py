"""Unit tests for prompt compression."""

from appforge.services.compressor import PromptCompressor, estimate_tokens

LONG_PROMPT = (
    "Generate a complete, production-ready dashboard page with the following features: "
    "charts and tables.\n\n\n\nIMPORTANT: Return ONLY the file content, without markdown "
    "code fences.   Make sure the code is responsive and accessible, in TypeScript strict mode. "
    "Do not include any explanations.\nTarget file: app/dashboard/page.tsx"
)


class TestPromptCompressor:
    """Tests for PromptCompressor."""

    def test_short_prompts_pass_through(self):
        prompt = "Generate a complete, production-ready   thing"

        assert PromptCompressor(min_chars=200).compress(prompt) == prompt

    def test_replaces_phrases_and_whitespace(self):
        compressed = PromptCompressor(min_chars=50).compress(LONG_PROMPT)

        assert compressed.startswith("Generate dashboard page Features:")
        assert "! ONLY: the file content, no fences." in compressed
        assert "responsive+a11y" in compressed
        assert "  " not in compressed
        assert "\n\n\n" not in compressed
        assert len(compressed) < len(LONG_PROMPT)

    def test_target_line_survives(self):
        compressed = PromptCompressor(min_chars=50).compress(LONG_PROMPT, step="pages")

        assert "Target file: app/dashboard/page.tsx" in compressed

    def test_step_specific_phrases(self):
        prompt = "Generate exactly one base file of the project. " + "x" * 300

        compressed = PromptCompressor().compress(prompt, step="base")
        assert compressed.startswith("One base file:.")
        assert PromptCompressor().compress(prompt, step="pages").startswith("Generate exactly")

    def test_is_deterministic(self):
        compressor = PromptCompressor(min_chars=50)

        assert compressor.compress(LONG_PROMPT) == compressor.compress(LONG_PROMPT)

    def test_stats(self):
        stats = PromptCompressor.stats("a" * 400, "a" * 100)

        assert stats.original_tokens == 100
        assert stats.compressed_tokens == 25
        assert stats.tokens_saved == 75
        assert stats.percentage_saved == 75.0

    def test_estimate_tokens_rounds_up(self):
        assert estimate_tokens("abcde") == 2
        assert estimate_tokens("") == 0
