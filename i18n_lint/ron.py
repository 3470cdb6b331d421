"""Reader for Rusty Object Notation (RON) locale files.

Only the value grammar is needed: the result is a :mod:`i18n_lint.tree`
document, not typed Rust data. Structs become maps keyed by field name,
tuples and lists become sequences, ``Some(x)`` unwraps to ``x`` and
``None``, ``()`` and unit variants become null nodes.
"""

from __future__ import annotations

import re

from .tree import (
    BoolNode,
    MapNode,
    Node,
    NullNode,
    NumberNode,
    SeqNode,
    TextNode,
    number_text,
)

_IDENT = re.compile(r"(?:r#)?[A-Za-z_][A-Za-z0-9_]*")
_NUMBER = re.compile(
    r"""
    [+-]?
    (?:
        0x[0-9A-Fa-f_]+
      | 0o[0-7_]+
      | 0b[01_]+
      | (?:[0-9][0-9_]*(?:\.[0-9_]*)? | \.[0-9][0-9_]*)(?:[eE][+-]?[0-9_]+)?
    )
    (?:[iu](?:8|16|32|64|128|size)|f(?:32|64))?
    """,
    re.VERBOSE,
)
_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "0": "\0",
    "b": "\b",
    "f": "\f",
    "\\": "\\",
    '"': '"',
    "'": "'",
    "/": "/",
}


class RonError(ValueError):
    """Syntax error with a 1-based line/column position."""

    def __init__(self, message: str, line: int, column: int) -> None:
        self.message = message
        self.line = line
        self.column = column
        super().__init__(f"{message} at line {line}, column {column}")


class _Reader:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    # -- low level -------------------------------------------------------
    def error(self, message: str, pos: int | None = None) -> RonError:
        pos = self.pos if pos is None else pos
        line = self.text.count("\n", 0, pos) + 1
        column = pos - (self.text.rfind("\n", 0, pos) + 1) + 1
        return RonError(message, line, column)

    def peek(self, offset: int = 0) -> str:
        index = self.pos + offset
        return self.text[index] if index < len(self.text) else ""

    def startswith(self, token: str) -> bool:
        return self.text.startswith(token, self.pos)

    def expect(self, token: str) -> None:
        if not self.startswith(token):
            found = self.peek() or "end of input"
            raise self.error(f"expected '{token}', found '{found}'")
        self.pos += len(token)

    def skip_ws(self) -> None:
        text = self.text
        while self.pos < len(text):
            char = text[self.pos]
            if char in " \t\r\n\ufeff":
                self.pos += 1
            elif text.startswith("//", self.pos):
                end = text.find("\n", self.pos)
                self.pos = len(text) if end == -1 else end + 1
            elif text.startswith("/*", self.pos):
                self.skip_block_comment()
            else:
                break

    def skip_block_comment(self) -> None:
        start = self.pos
        depth = 0
        while self.pos < len(self.text):
            if self.startswith("/*"):
                depth += 1
                self.pos += 2
            elif self.startswith("*/"):
                depth -= 1
                self.pos += 2
                if depth == 0:
                    return
            else:
                self.pos += 1
        raise self.error("unterminated block comment", start)

    def skip_extensions(self) -> None:
        self.skip_ws()
        while self.startswith("#!["):
            end = self.text.find("]", self.pos)
            if end == -1:
                raise self.error("unterminated extension attribute")
            self.pos = end + 1
            self.skip_ws()

    def comma_or(self, closing: str) -> bool:
        """Consume a separator; return True when *closing* ends the list."""

        self.skip_ws()
        if self.startswith(","):
            self.pos += 1
            self.skip_ws()
            return self.startswith(closing)
        if self.startswith(closing):
            return True
        found = self.peek() or "end of input"
        raise self.error(f"expected ',' or '{closing}', found '{found}'")

    # -- values ----------------------------------------------------------
    def document(self) -> Node:
        self.skip_extensions()
        if self.pos >= len(self.text):
            raise self.error("empty document")
        node = self.value()
        self.skip_ws()
        if self.pos < len(self.text):
            raise self.error(f"trailing characters: '{self.peek()}'")
        return node

    def value(self) -> Node:
        self.skip_ws()
        char = self.peek()
        if not char:
            raise self.error("unexpected end of input")
        if char == "{":
            return self.map()
        if char == "[":
            return self.seq()
        if char == "(":
            return self.parens()
        if char == '"':
            return TextNode(self.string())
        if char == "'":
            return TextNode(self.char())
        if self.startswith('r"') or self.startswith("r#\"") or self.startswith("r##"):
            return TextNode(self.raw_string())
        if self.startswith('b"'):
            self.pos += 1
            return TextNode(self.string())
        if char.isdigit() or char in "+-.":
            return self.number()
        if char.isalpha() or char == "_":
            return self.identifier_value()
        raise self.error(f"unexpected character '{char}'")

    def map(self) -> MapNode:
        self.expect("{")
        entries: list[tuple[str, Node]] = []
        self.skip_ws()
        if self.startswith("}"):
            self.pos += 1
            return MapNode(())
        while True:
            # bare identifiers are accepted as keys, like struct fields
            if self.at_field():
                key_text: str | None = self.identifier()
            else:
                key_text = _key_text(self.value())
            self.skip_ws()
            self.expect(":")
            item = self.value()
            # non-scalar keys cannot form a dotted path
            if key_text is not None:
                entries.append((key_text, item))
            if self.comma_or("}"):
                break
        self.expect("}")
        return MapNode(tuple(entries))

    def seq(self) -> SeqNode:
        self.expect("[")
        items: list[Node] = []
        self.skip_ws()
        if not self.startswith("]"):
            while True:
                items.append(self.value())
                if self.comma_or("]"):
                    break
        self.expect("]")
        return SeqNode(tuple(items))

    def parens(self) -> Node:
        """Parse ``()``, a struct body ``(a: 1)`` or a tuple ``(1, 2)``."""

        self.expect("(")
        self.skip_ws()
        if self.startswith(")"):
            self.pos += 1
            return NullNode()
        if self.at_field():
            entries: list[tuple[str, Node]] = []
            while True:
                name = self.identifier()
                self.skip_ws()
                self.expect(":")
                entries.append((name, self.value()))
                if self.comma_or(")"):
                    break
                if not self.at_field():
                    raise self.error("expected struct field name")
            self.expect(")")
            return MapNode(tuple(entries))
        items: list[Node] = []
        while True:
            items.append(self.value())
            if self.comma_or(")"):
                break
        self.expect(")")
        return SeqNode(tuple(items))

    def at_field(self) -> bool:
        match = _IDENT.match(self.text, self.pos)
        if match is None:
            return False
        index = match.end()
        saved = self.pos
        self.pos = index
        self.skip_ws()
        is_field = self.startswith(":") and not self.startswith("::")
        self.pos = saved
        return is_field

    def identifier(self) -> str:
        match = _IDENT.match(self.text, self.pos)
        if match is None:
            raise self.error("expected identifier")
        self.pos = match.end()
        name = match.group(0)
        return name[2:] if name.startswith("r#") else name

    def identifier_value(self) -> Node:
        start = self.pos
        name = self.identifier()
        if name == "true":
            return BoolNode(True)
        if name == "false":
            return BoolNode(False)
        if name == "inf":
            return NumberNode(float("inf"))
        if name == "NaN":
            return NumberNode(float("nan"))
        if name == "None":
            return NullNode()
        self.skip_ws()
        if name == "Some":
            if not self.startswith("("):
                raise self.error("expected '(' after Some", start)
            self.pos += 1
            inner = self.value()
            self.skip_ws()
            self.expect(")")
            return inner
        if self.startswith("("):
            # named struct / tuple struct / enum variant with data
            return self.parens()
        return NullNode()

    def number(self) -> NumberNode:
        start = self.pos
        negative = self.peek() == "-"
        sign_len = 1 if self.peek() in ("+", "-") else 0
        for word, value in (("inf", float("inf")), ("NaN", float("nan"))):
            if self.text.startswith(word, start + sign_len):
                self.pos = start + sign_len + len(word)
                return NumberNode(-value if negative else value)
        match = _NUMBER.match(self.text, start)
        if match is None or not any(ch.isdigit() for ch in match.group(0)):
            raise self.error("invalid number", start)
        self.pos = match.end()
        raw = match.group(0)
        suffix = re.search(r"(?:[iu](?:8|16|32|64|128|size)|f(?:32|64))$", raw)
        is_float_suffix = bool(suffix) and suffix.group(0).startswith("f")
        is_hex = raw.lstrip("+-").startswith(("0x", "0X"))
        # in hex literals f32/f64 are digits, not a suffix
        if suffix and not (is_hex and is_float_suffix):
            raw = raw[: suffix.start()]
        else:
            is_float_suffix = False
        digits = raw.replace("_", "")
        sign = ""
        if digits[:1] in "+-":
            sign, digits = digits[0], digits[1:]
        try:
            for prefix, base in (("0x", 16), ("0o", 8), ("0b", 2)):
                if digits.startswith(prefix):
                    return NumberNode(int(sign + digits[2:], base))
            if is_float_suffix or any(ch in digits for ch in ".eE"):
                return NumberNode(float(sign + digits))
            return NumberNode(int(sign + digits))
        except ValueError as exc:
            raise self.error(f"invalid number '{match.group(0)}'", start) from exc

    def string(self) -> str:
        start = self.pos
        self.expect('"')
        parts: list[str] = []
        while True:
            if self.pos >= len(self.text):
                raise self.error("unterminated string", start)
            char = self.text[self.pos]
            if char == '"':
                self.pos += 1
                return "".join(parts)
            if char == "\\":
                parts.append(self.escape())
            else:
                parts.append(char)
                self.pos += 1

    def escape(self) -> str:
        start = self.pos
        self.pos += 1
        code = self.peek()
        if code in _SIMPLE_ESCAPES:
            self.pos += 1
            return _SIMPLE_ESCAPES[code]
        if code == "\n":
            # line continuation: drop the newline and leading indentation
            self.pos += 1
            while self.peek() in (" ", "\t", "\n", "\r"):
                self.pos += 1
            return ""
        if code == "x":
            hex_digits = self.text[self.pos + 1 : self.pos + 3]
            self.pos += 3
            return self.codepoint(hex_digits, start)
        if code == "u":
            if self.peek(1) == "{":
                end = self.text.find("}", self.pos)
                if end == -1:
                    raise self.error("unterminated unicode escape", start)
                hex_digits = self.text[self.pos + 2 : end]
                self.pos = end + 1
            else:
                hex_digits = self.text[self.pos + 1 : self.pos + 5]
                self.pos += 5
            return self.codepoint(hex_digits, start)
        raise self.error(f"invalid escape '\\{code}'", start)

    def codepoint(self, hex_digits: str, start: int) -> str:
        try:
            return chr(int(hex_digits, 16))
        except ValueError as exc:
            raise self.error(f"invalid escape value '{hex_digits}'", start) from exc

    def raw_string(self) -> str:
        start = self.pos
        self.expect("r")
        hashes = 0
        while self.peek() == "#":
            hashes += 1
            self.pos += 1
        self.expect('"')
        terminator = '"' + "#" * hashes
        end = self.text.find(terminator, self.pos)
        if end == -1:
            raise self.error("unterminated raw string", start)
        content = self.text[self.pos : end]
        self.pos = end + len(terminator)
        return content

    def char(self) -> str:
        start = self.pos
        self.expect("'")
        if self.peek() == "\\":
            value = self.escape()
        else:
            value = self.peek()
            if not value:
                raise self.error("unterminated char", start)
            self.pos += 1
        self.expect("'")
        return value


def _key_text(key: Node) -> str | None:
    if isinstance(key, TextNode):
        return key.value
    if isinstance(key, NumberNode):
        return number_text(key.value)
    if isinstance(key, BoolNode):
        return "true" if key.value else "false"
    return None


def loads(text: str) -> Node:
    """Parse RON *text* into a document tree, raising :class:`RonError`."""

    reader = _Reader(text)
    try:
        return reader.document()
    except RecursionError as exc:
        raise reader.error("nesting too deep") from exc


__all__ = ["RonError", "loads"]
