"""Format-independent document tree shared by every locale parser."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, time
from typing import Any, Mapping, Union


@dataclass(frozen=True, slots=True)
class MapNode:
    """Object/map node; ``entries`` keep the order produced by the parser."""

    entries: tuple[tuple[str, "Node"], ...] = ()

    def keys(self) -> list[str]:
        return [key for key, _ in self.entries]


@dataclass(frozen=True, slots=True)
class TextNode:
    value: str


@dataclass(frozen=True, slots=True)
class NumberNode:
    value: int | float


@dataclass(frozen=True, slots=True)
class BoolNode:
    value: bool


@dataclass(frozen=True, slots=True)
class NullNode:
    pass


@dataclass(frozen=True, slots=True)
class SeqNode:
    items: tuple["Node", ...] = ()


Node = Union[MapNode, TextNode, NumberNode, BoolNode, NullNode, SeqNode]
NODE_TYPES = (MapNode, TextNode, NumberNode, BoolNode, NullNode, SeqNode)


def number_text(value: int | float) -> str:
    """Return the canonical text of a number.

    Integers use their base-10 form; floats use the shortest representation
    that round-trips (``1.0``, ``0.5``, ``1e+20``). Non-finite floats map to
    ``inf``, ``-inf`` and ``NaN``.
    """

    if isinstance(value, bool):
        raise TypeError("booleans are not numbers here")
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return repr(float(value))


def scalar_text(value: Any) -> str:
    """Render a scalar (used for map keys) with the leaf canonicalisation."""

    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return number_text(value)
    return str(value)


def from_python(obj: Any) -> Node:
    """Convert data returned by ``json``/``yaml`` loaders into a tree."""

    if obj is None:
        return NullNode()
    # bool before int: ``True`` is an ``int`` instance
    if isinstance(obj, bool):
        return BoolNode(obj)
    if isinstance(obj, (int, float)):
        return NumberNode(obj)
    if isinstance(obj, str):
        return TextNode(obj)
    # YAML timestamps
    if isinstance(obj, (date, time)):
        return TextNode(obj.isoformat())
    if isinstance(obj, Mapping):
        return MapNode(
            tuple((scalar_text(key), from_python(value)) for key, value in obj.items())
        )
    if isinstance(obj, (list, tuple)):
        return SeqNode(tuple(from_python(item) for item in obj))
    raise TypeError(f"Unsupported document value: {type(obj).__name__}")


__all__ = [
    "MapNode",
    "TextNode",
    "NumberNode",
    "BoolNode",
    "NullNode",
    "SeqNode",
    "Node",
    "NODE_TYPES",
    "number_text",
    "scalar_text",
    "from_python",
]
