"""Restricted parser for JavaScript literal values.

Reads the value assigned to a global such as ``window.specConfig`` out of
inline script text without executing it. Only data literals are
understood: objects, arrays, strings, numbers, ``true``, ``false``,
``null`` and ``undefined``. Comments and trailing commas are tolerated.
Any other expression is rejected with ``LiteralSyntaxError``.
"""

import re
from typing import Any, Optional

_WHITESPACE = re.compile(r"(?:\s+|//[^\n]*|/\*.*?\*/)+", re.DOTALL)
_NUMBER = re.compile(r"-?(?:0[xX][0-9a-fA-F]+|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_IDENTIFIER = re.compile(r"[A-Za-z_$][\w$]*")

_KEYWORDS = {"true": True, "false": False, "null": None, "undefined": None}

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}


class LiteralSyntaxError(ValueError):
    """Raised when script text is not a supported literal."""

    def __init__(self, message: str, position: int) -> None:
        self.position = position
        super().__init__(f"{message} at position {position}")


class _Parser:
    def __init__(self, text: str, position: int = 0) -> None:
        self.text = text
        self.pos = position

    def skip_whitespace(self) -> None:
        match = _WHITESPACE.match(self.text, self.pos)
        if match:
            self.pos = match.end()

    def peek(self) -> str:
        self.skip_whitespace()
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def expect(self, char: str) -> None:
        if self.peek() != char:
            raise LiteralSyntaxError(f"Expected {char!r}", self.pos)
        self.pos += 1

    def value(self) -> Any:
        char = self.peek()
        if char == "{":
            return self.object()
        if char == "[":
            return self.array()
        if char in ("'", '"', "`"):
            return self.string()

        match = _NUMBER.match(self.text, self.pos)
        if match:
            self.pos = match.end()
            token = match.group(0)
            if "x" in token.lower():
                return int(token, 16)
            if any(c in token for c in ".eE"):
                return float(token)
            return int(token)

        match = _IDENTIFIER.match(self.text, self.pos)
        if match and match.group(0) in _KEYWORDS:
            self.pos = match.end()
            return _KEYWORDS[match.group(0)]

        raise LiteralSyntaxError("Unsupported expression", self.pos)

    def object(self) -> dict[str, Any]:
        self.expect("{")
        result: dict[str, Any] = {}
        while self.peek() != "}":
            key = self.key()
            self.expect(":")
            result[key] = self.value()
            if self.peek() == ",":
                self.pos += 1
            elif self.peek() != "}":
                raise LiteralSyntaxError("Expected ',' or '}'", self.pos)
        self.pos += 1
        return result

    def key(self) -> str:
        char = self.peek()
        if char in ("'", '"'):
            return self.string()
        match = _IDENTIFIER.match(self.text, self.pos) or _NUMBER.match(
            self.text, self.pos
        )
        if not match:
            raise LiteralSyntaxError("Expected property name", self.pos)
        self.pos = match.end()
        return match.group(0)

    def array(self) -> list[Any]:
        self.expect("[")
        result: list[Any] = []
        while self.peek() != "]":
            result.append(self.value())
            if self.peek() == ",":
                self.pos += 1
            elif self.peek() != "]":
                raise LiteralSyntaxError("Expected ',' or ']'", self.pos)
        self.pos += 1
        return result

    def string(self) -> str:
        quote = self.text[self.pos]
        start = self.pos
        self.pos += 1
        chars: list[str] = []
        while self.pos < len(self.text):
            char = self.text[self.pos]
            if char == quote:
                self.pos += 1
                return "".join(chars)
            if quote == "`" and self.text.startswith("${", self.pos):
                raise LiteralSyntaxError("Template interpolation", self.pos)
            if char == "\\":
                chars.append(self.escape())
                continue
            if char == "\n" and quote != "`":
                break
            chars.append(char)
            self.pos += 1
        raise LiteralSyntaxError("Unterminated string", start)

    def escape(self) -> str:
        self.pos += 1
        if self.pos >= len(self.text):
            raise LiteralSyntaxError("Unterminated escape", self.pos)
        char = self.text[self.pos]
        if char == "u":
            digits = self.text[self.pos + 1 : self.pos + 5]
            if len(digits) == 4 and all(c in "0123456789abcdefABCDEF" for c in digits):
                self.pos += 5
                return chr(int(digits, 16))
            raise LiteralSyntaxError("Invalid unicode escape", self.pos)
        if char == "x":
            digits = self.text[self.pos + 1 : self.pos + 3]
            if len(digits) == 2 and all(c in "0123456789abcdefABCDEF" for c in digits):
                self.pos += 3
                return chr(int(digits, 16))
            raise LiteralSyntaxError("Invalid hex escape", self.pos)
        self.pos += 1
        if char == "\n":
            return ""
        return _ESCAPES.get(char, char)


def parse_literal(text: str) -> Any:
    """Parse a complete JavaScript literal.

    Args:
        text: Literal source, e.g. ``{a: 1, b: ['x']}``.

    Returns:
        The equivalent Python value.

    Raises:
        LiteralSyntaxError: If the text is not a single supported literal.
    """
    parser = _Parser(text)
    value = parser.value()
    if parser.peek() not in ("", ";"):
        raise LiteralSyntaxError("Unexpected trailing content", parser.pos)
    return value


def parse_assigned_literal(text: str, target: str) -> Optional[Any]:
    """Parse the literal assigned to ``target`` in a script.

    Only the first assignment of the form ``target = <literal>`` is read;
    the rest of the script is ignored.

    Args:
        text: Script source.
        target: Assignment target, e.g. ``window.specConfig``.

    Returns:
        The assigned value, or None if the script has no such assignment.

    Raises:
        LiteralSyntaxError: If the assigned value is not a supported literal.
    """
    pattern = re.compile(re.escape(target) + r"\s*=(?!=)")
    match = pattern.search(text)
    if not match:
        return None
    parser = _Parser(text, match.end())
    return parser.value()
