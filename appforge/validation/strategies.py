"""Per-kind truncation detection.

Each strategy offers two tiers:

* ``possible_reasons`` is permissive and lists every structural signal of
  a cut-off response.
* ``definite_reason`` is strict. An unbalanced brace count or a dangling
  final token is always definite. Any other signal is forgiven when the
  braces balance, the text reaches the kind's minimum length and the
  kind's required keyword is present.
"""

import json
import re
from abc import ABC, abstractmethod
from typing import ClassVar

from appforge.models.generation import ArtifactKind


def last_line(text: str) -> str:
    for line in reversed(text.splitlines()):
        if line.strip():
            return line.rstrip()
    return ""


class TruncationStrategy(ABC):
    """Structural completeness check for one artifact kind."""

    kinds: ClassVar[tuple[ArtifactKind, ...]] = ()
    min_length: ClassVar[int] = 0

    def repair(self, text: str) -> str:
        """Cheap deterministic repair applied before checking."""
        return text

    @abstractmethod
    def has_required_keyword(self, text: str) -> bool:
        """Whether the text contains the construct every artifact of this kind needs."""

    @abstractmethod
    def dangling_reason(self, text: str) -> str | None:
        """Reason the final line looks cut off mid-statement, if it does."""

    def balance_reasons(self, text: str) -> list[str]:
        """Bracket mismatches. The first entry, if any, must be the brace check."""
        opened, closed = text.count("{"), text.count("}")
        if opened != closed:
            return [f"unbalanced braces ({opened} open, {closed} close)"]
        return []

    def extra_reasons(self, text: str) -> list[str]:
        """Kind-specific permissive signals beyond balance and keyword."""
        return []

    def possible_reasons(self, text: str) -> list[str]:
        if not text.strip():
            return ["empty content"]
        reasons = self.balance_reasons(text)
        dangling = self.dangling_reason(text)
        if dangling:
            reasons.append(dangling)
        if not self.has_required_keyword(text):
            reasons.append("missing required construct")
        reasons.extend(self.extra_reasons(text))
        return reasons

    def is_possibly_truncated(self, text: str) -> bool:
        return bool(self.possible_reasons(text))

    def definite_reason(self, text: str) -> str | None:
        if not text.strip():
            return "empty content"
        if text.count("{") != text.count("}"):
            return self.balance_reasons(text)[0]
        dangling = self.dangling_reason(text)
        if dangling:
            return dangling
        reasons = self.possible_reasons(text)
        if not reasons:
            return None
        if len(text.strip()) >= self.min_length and self.has_required_keyword(text):
            return None
        return reasons[0]

    def is_definitely_truncated(self, text: str) -> bool:
        return self.definite_reason(text) is not None


class CssTruncation(TruncationStrategy):
    kinds = ("css",)
    min_length = 100

    _CONSTRUCT = re.compile(r"@tailwind|@import|@layer|:root|[^\s{};][^{};]*\{[^{}]*\}")

    def has_required_keyword(self, text: str) -> bool:
        return bool(self._CONSTRUCT.search(text))

    def dangling_reason(self, text: str) -> str | None:
        line = last_line(text)
        if line.endswith((":", ",")):
            return f"ends mid-declaration: '{line.strip()[-40:]}'"
        if "{" in line and "}" not in line:
            return "ends on an unclosed block"
        return None


class TsxTruncation(TruncationStrategy):
    kinds = ("tsx", "ts")
    min_length = 200

    _KEYWORD = re.compile(r"\b(export|function|const|return)\b")
    _DANGLING = (",", "=", "&&", "||", "<", "(")

    def has_required_keyword(self, text: str) -> bool:
        return bool(self._KEYWORD.search(text))

    def balance_reasons(self, text: str) -> list[str]:
        reasons = super().balance_reasons(text)
        opened, closed = text.count("("), text.count(")")
        if opened != closed:
            reasons.append(f"unbalanced parens ({opened} open, {closed} close)")
        return reasons

    def dangling_reason(self, text: str) -> str | None:
        line = last_line(text)
        if line.endswith(self._DANGLING):
            return f"ends on a dangling token: '{line.strip()[-40:]}'"
        return None


class JsConfigTruncation(TruncationStrategy):
    kinds = ("js",)
    min_length = 50

    _KEYWORD = re.compile(r"module\.exports|\bexports\b|\bexport\b")
    _DANGLING = (",", ":", "=", "{")

    def has_required_keyword(self, text: str) -> bool:
        return bool(self._KEYWORD.search(text))

    def dangling_reason(self, text: str) -> str | None:
        line = last_line(text)
        if line.endswith(self._DANGLING):
            return f"ends mid-statement: '{line.strip()[-40:]}'"
        return None


class JsonTruncation(TruncationStrategy):
    """JSON documents are complete exactly when they parse."""

    kinds = ("json",)

    def repair(self, text: str) -> str:
        try:
            json.loads(text)
            return text
        except ValueError:
            return outermost_object(text) or text

    def has_required_keyword(self, text: str) -> bool:
        return True

    def dangling_reason(self, text: str) -> str | None:
        return None

    def balance_reasons(self, text: str) -> list[str]:
        return []

    def extra_reasons(self, text: str) -> list[str]:
        try:
            json.loads(text)
        except ValueError as e:
            return [f"invalid JSON: {e}"]
        return []

    def definite_reason(self, text: str) -> str | None:
        reasons = self.possible_reasons(text)
        return reasons[0] if reasons else None


def outermost_object(text: str) -> str | None:
    """Trim text to the span between the first ``{`` and the last ``}``."""
    start, end = text.find("{"), text.rfind("}")
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]


_STRATEGIES: dict[str, TruncationStrategy] = {}


def register_strategy(strategy: TruncationStrategy) -> None:
    """Register a strategy for each of its kinds, replacing any existing one."""
    for kind in strategy.kinds:
        _STRATEGIES[kind] = strategy


def strategy_for(kind: str) -> TruncationStrategy | None:
    return _STRATEGIES.get(kind)


for _strategy in (CssTruncation(), TsxTruncation(), JsConfigTruncation(), JsonTruncation()):
    register_strategy(_strategy)
