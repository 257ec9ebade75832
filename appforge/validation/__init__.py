"""Validation of generated content."""

from appforge.validation.cleaning import parse_json_object, strip_wrappers
from appforge.validation.strategies import (
    CssTruncation,
    JsConfigTruncation,
    JsonTruncation,
    TruncationStrategy,
    TsxTruncation,
    register_strategy,
    strategy_for,
)
from appforge.validation.validator import ContentValidator, ValidationOutcome

__all__ = [
    "ContentValidator",
    "ValidationOutcome",
    "TruncationStrategy",
    "CssTruncation",
    "TsxTruncation",
    "JsConfigTruncation",
    "JsonTruncation",
    "register_strategy",
    "strategy_for",
    "parse_json_object",
    "strip_wrappers",
]
