"""Flatten nested locale documents into dotted-key string maps."""

from __future__ import annotations

import logging
from typing import Any

from .tree import (
    NODE_TYPES,
    BoolNode,
    MapNode,
    Node,
    NullNode,
    NumberNode,
    SeqNode,
    TextNode,
    from_python,
    number_text,
)

logger = logging.getLogger(__name__)

FlatMap = dict[str, str]


def _join(prefix: str, key: str) -> str:
    return key if not prefix else f"{prefix}.{key}"


def _walk(root: Node, out: FlatMap, skipped: list[str]) -> None:
    # explicit stack so deep documents stay clear of the recursion limit
    stack: list[tuple[str, Node]] = [("", root)]
    while stack:
        prefix, node = stack.pop()
        if isinstance(node, MapNode):
            # sorted so that downstream iteration order never depends on the parser
            children = sorted(node.entries, key=lambda item: item[0], reverse=True)
            stack.extend((_join(prefix, key), child) for key, child in children)
        elif isinstance(node, TextNode):
            if prefix:
                out[prefix] = node.value
        elif isinstance(node, NumberNode):
            if prefix:
                out[prefix] = number_text(node.value)
        elif isinstance(node, BoolNode):
            if prefix:
                out[prefix] = "true" if node.value else "false"
        elif isinstance(node, SeqNode):
            skipped.append(prefix or "<root>")
        elif isinstance(node, NullNode):
            pass
        else:  # pragma: no cover - closed union
            raise TypeError(f"Unknown document node: {node!r}")


def flatten(document: Node | Any) -> FlatMap:
    """Return the leaf scalars of *document* keyed by their dotted path.

    Parameters
    ----------
    document:
        A :mod:`i18n_lint.tree` node, or plain data as returned by
        :func:`json.loads` which is converted first.

    Strings are kept as-is, numbers use :func:`~i18n_lint.tree.number_text`
    and booleans become ``"true"``/``"false"``. Null and array nodes produce
    no entry; scalars at the root (empty path) are ignored as well.
    """

    if not isinstance(document, NODE_TYPES):
        document = from_python(document)
    out: FlatMap = {}
    skipped: list[str] = []
    _walk(document, out, skipped)
    if skipped:
        logger.debug("Ignored %d array value(s): %s", len(skipped), ", ".join(skipped))
    return out


__all__ = ["FlatMap", "flatten"]
