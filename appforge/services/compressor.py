"""Deterministic prompt compression.

Shortens stock phrasing and collapses whitespace before a prompt is sent.
Code-shaped text is never rewritten: only instruction phrases are replaced.
"""

import math
import re
from typing import Literal

from pydantic import BaseModel

from appforge.utils.logging import get_logger

logger = get_logger(__name__)

PromptStep = Literal["base", "components", "pages"]

PHRASE_REPLACEMENTS: tuple[tuple[str, str], ...] = (
    ("Generate a complete, production-ready", "Generate"),
    ("with the following features", "Features:"),
    ("Make sure the code is", "Code:"),
    ("responsive and accessible", "responsive+a11y"),
    ("TypeScript strict mode", "TS strict"),
    ("Follow best practices", "Best practices"),
    ("with client and server side validation", "+validation"),
    ("with robust error handling", "+error handling"),
    ("smooth, modern animations", "+animations"),
    ("optimized for performance", "+perf"),
    ("IMPORTANT: ", "! "),
    ("Return ONLY", "ONLY:"),
    ("in the following format", "format:"),
    ("Do not include any explanations", "No prose"),
    ("without markdown code fences", "no fences"),
    ("Next.js 14 with App Router", "Next.js 14+App Router"),
    ("Tailwind CSS utility classes", "Tailwind classes"),
)

STEP_REPLACEMENTS: dict[str, tuple[tuple[str, str], ...]] = {
    "base": (
        ("Generate exactly one base file of the project", "One base file:"),
        ("with every dependency it needs", "+deps"),
        ("with a simple hero section", "+hero"),
    ),
    "components": (
        ("Generate these reusable UI components", "Components:"),
        ("Each value must be the complete source of one file", "values=full source"),
    ),
    "pages": (
        ("Generate only this page, with realistic data", "Page+realistic data:"),
        ("consistent with the rest of the application", "consistent"),
    ),
}


class CompressionStats(BaseModel):
    """Size accounting for one compression. Informational only."""

    original_length: int
    compressed_length: int
    original_tokens: int
    compressed_tokens: int
    tokens_saved: int
    percentage_saved: float


def estimate_tokens(text: str) -> int:
    """Rough token count at four characters per token."""
    return math.ceil(len(text) / 4)


class PromptCompressor:
    def __init__(self, min_chars: int = 200):
        self.min_chars = min_chars

    def compress(self, prompt: str, step: PromptStep | None = None) -> str:
        """Compress a prompt. Prompts shorter than ``min_chars`` pass through."""
        if len(prompt) < self.min_chars:
            return prompt

        compressed = prompt
        for source, target in PHRASE_REPLACEMENTS + STEP_REPLACEMENTS.get(step or "", ()):
            compressed = compressed.replace(source, target)

        compressed = re.sub(r"\n{3,}", "\n\n", compressed)
        compressed = re.sub(r" {2,}", " ", compressed)
        compressed = re.sub(r"\n ", "\n", compressed)
        compressed = compressed.strip()

        stats = self.stats(prompt, compressed)
        logger.debug(
            "compressor.compressed",
            step=step,
            original_tokens=stats.original_tokens,
            compressed_tokens=stats.compressed_tokens,
            percentage_saved=stats.percentage_saved,
        )
        return compressed

    @staticmethod
    def stats(original: str, compressed: str) -> CompressionStats:
        original_tokens = estimate_tokens(original)
        compressed_tokens = estimate_tokens(compressed)
        saved = original_tokens - compressed_tokens
        percentage = round(saved / original_tokens * 100, 1) if original_tokens else 0.0
        return CompressionStats(
            original_length=len(original),
            compressed_length=len(compressed),
            original_tokens=original_tokens,
            compressed_tokens=compressed_tokens,
            tokens_saved=saved,
            percentage_saved=percentage,
        )
