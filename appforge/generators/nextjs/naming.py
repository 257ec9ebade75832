"""Identifier helpers shared by the Next.js templates."""

import re

_WORD = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")


def words(name: str) -> list[str]:
    return _WORD.findall(name)


def pascal_case(name: str) -> str:
    """``add-to-cart button`` -> ``AddToCartButton``."""
    result = "".join(w[:1].upper() + w[1:].lower() for w in words(name))
    if not result or result[0].isdigit():
        result = f"Page{result}"
    return result


def kebab_case(name: str) -> str:
    """``AddToCartButton`` -> ``add-to-cart-button``."""
    return "-".join(w.lower() for w in words(name))


def safe_text(value: str, limit: int = 160) -> str:
    """Make free text safe to embed in JSX and JS string literals."""
    cleaned = re.sub(r"[{}()<>`\"'\\$]", "", value)
    cleaned = " ".join(cleaned.split())
    return cleaned[:limit]
