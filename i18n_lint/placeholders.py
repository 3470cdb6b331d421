"""Placeholder extraction for ``{name}`` substitution tokens."""

from __future__ import annotations

import re

PLACEHOLDER_PATTERN = re.compile(r"\{([A-Za-z0-9_]+)\}")


def extract_placeholders(text: str) -> frozenset[str]:
    """Return the distinct placeholder names referenced in *text*.

    Malformed braces such as ``{}`` or ``{a-b}`` are not matched.
    """

    return frozenset(match.group(1) for match in PLACEHOLDER_PATTERN.finditer(text))


def placeholders_compatible(left: str, right: str) -> bool:
    return extract_placeholders(left) == extract_placeholders(right)


def format_placeholders(names: frozenset[str] | set[str]) -> str:
    """Render a placeholder set deterministically, e.g. ``{item, user}``."""

    return "{" + ", ".join(sorted(names)) + "}"


__all__ = [
    "PLACEHOLDER_PATTERN",
    "extract_placeholders",
    "placeholders_compatible",
    "format_placeholders",
]
