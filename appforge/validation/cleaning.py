"""Removal of wrapper markup around model output."""

import json
import re
from typing import Any

from appforge.core.exceptions import MalformedResponseError
from appforge.validation.strategies import outermost_object

_FENCE = re.compile(r"^\s*```[\w.+-]*\s*$", re.MULTILINE)
_CODE_CHARS = re.compile(r"[{};=(]")

_CODE_START: dict[str, re.Pattern[str]] = {
    "tsx": re.compile(r"""^\s*(['"]use client['"]|import\b|export\b)""", re.MULTILINE),
    "ts": re.compile(r"""^\s*(['"]use client['"]|import\b|export\b)""", re.MULTILINE),
    "js": re.compile(r"^\s*(/\*\*|module\.exports|const\b|export\b|import\b)", re.MULTILINE),
    "css": re.compile(r"^\s*(@tailwind|@import|:root)", re.MULTILINE),
}


def is_prose(text: str) -> bool:
    """Whether leading text holds no code characters at all."""
    return not _CODE_CHARS.search(text)


def strip_wrappers(text: str, kind: str) -> str:
    """Drop code-fence lines and any prose before the first line of code.

    Text before the first recognised code line is only dropped when it is
    prose. Anything containing code characters is kept as is.
    """
    cleaned = _FENCE.sub("", text).strip()
    pattern = _CODE_START.get(kind)
    if pattern:
        match = pattern.search(cleaned)
        if match and match.start() > 0 and is_prose(cleaned[: match.start()]):
            cleaned = cleaned[match.start() :].lstrip()
    return cleaned + "\n" if cleaned else ""


def parse_json_object(text: str) -> dict[str, Any]:
    """Parse a JSON object, retrying once on the outermost ``{...}`` span.

    Raises:
        MalformedResponseError: If neither attempt yields a JSON object.
    """
    cleaned = _FENCE.sub("", text).strip()
    candidates = [cleaned]
    span = outermost_object(cleaned)
    if span and span != cleaned:
        candidates.append(span)

    for candidate in candidates:
        try:
            value = json.loads(candidate)
        except ValueError:
            continue
        if isinstance(value, dict):
            return value

    raise MalformedResponseError(
        "Response is not a JSON object",
        {"length": len(text), "preview": text[:120]},
    )
