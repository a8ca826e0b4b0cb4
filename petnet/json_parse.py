"""Parser that builds a JSON tree from lenient JSON text.

The accepted syntax is looser than strict JSON. Commas are optional. Line
(``//``) and block (``/* */``) comments are allowed. Integers may be written
in hexadecimal (``0x``) or octal (leading ``0``). Text after the first
complete value is ignored.
"""

from __future__ import annotations

import re
from typing import Optional

from .json_tree import JsonError, JsonNode, JsonType

MAX_JSON_LEN = 16 * 1024 * 1024

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1

_INT_RE = re.compile(r"-?(?:0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)")
_HEX_FLOAT_RE = re.compile(
    r"-?0[xX](?:[0-9a-fA-F]+(?:\.[0-9a-fA-F]*)?|\.[0-9a-fA-F]+)(?:[pP][+-]?[0-9]+)?"
)
_DEC_FLOAT_RE = re.compile(r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_SIMPLE_ESCAPES = {
    "\\": "\\",
    "/": "/",
    '"': '"',
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_VALUE_SKIP = " \t\n\r,"


def _error(message: str, pos: int) -> JsonError:
    return JsonError(f"{message} at position {pos}")


def _unescape(text: str, pos: int) -> tuple[str, int]:
    """Decode a string body starting at ``pos``; return it and the index after the quote."""
    start = pos
    out: list[str] = []
    length = len(text)

    while pos < length:
        char = text[pos]
        pos += 1
        if char == '"':
            return "".join(out), pos
        if char == "\\":
            following = text[pos] if pos < length else ""
            replacement = _SIMPLE_ESCAPES.get(following) if following else None
            if replacement is not None:
                out.append(replacement)
                pos += 1
            else:
                # Unknown escapes are kept as written.
                out.append(char)
        else:
            out.append(char)

    raise _error("no closing quote for string", start)


def unescape_string(s: str) -> str:
    """Decode the body of a quoted string, up to its closing quote."""
    value, _ = _unescape(s, 0)
    return value


def _parse_int_literal(literal: str) -> int:
    negative = literal.startswith("-")
    body = literal[1:] if negative else literal
    if body[:2] in ("0x", "0X"):
        value = int(body[2:], 16)
    elif body.startswith("0"):
        value = int(body, 8)
    else:
        value = int(body, 10)
    return -value if negative else value


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def _at(self, pos: int) -> str:
        return self.text[pos] if 0 <= pos < len(self.text) else ""

    def skip_block_comment(self, pos: int) -> int:
        """Skip a block comment whose body starts at ``pos``."""
        opening = pos - 2
        text = self.text
        if pos >= len(text):
            raise _error("endless comment", opening)

        search = pos + 1
        while True:
            found = text.find("/", search)
            if found < 0:
                raise _error("endless comment", opening)
            if text[found - 1] == "*":
                return found + 1
            search = found + 1

    def parse_key(self) -> Optional[str]:
        """Read an object key and its colon; return None at the closing brace."""
        text = self.text
        while True:
            if self.pos >= len(text):
                raise _error("unexpected chars", self.pos)
            char = text[self.pos]
            self.pos += 1

            if char == '"':
                key, self.pos = _unescape(text, self.pos)
                while self.pos < len(text) and ord(text[self.pos]) <= 32:
                    self.pos += 1
                if self._at(self.pos) == ":":
                    self.pos += 1
                    return key
                raise _error("unexpected chars", self.pos)

            if ord(char) <= 32 or char == ",":
                continue

            if char == "}":
                self.pos -= 1
                return None

            if char == "/":
                following = self._at(self.pos)
                if following == "/":
                    newline = text.find("\n", self.pos + 1)
                    if newline < 0:
                        raise _error("endless comment", self.pos - 1)
                    self.pos = newline + 1
                elif following == "*":
                    self.pos = self.skip_block_comment(self.pos + 1)
                else:
                    raise _error("unexpected chars", self.pos - 1)
                continue

            raise _error("unexpected chars", self.pos - 1)

    def parse_number(self, parent: Optional[JsonNode], key: Optional[str]) -> JsonNode:
        text = self.text
        start = self.pos

        match = _INT_RE.match(text, start)
        if match is None:
            raise _error("invalid number", start)
        value = _parse_int_literal(match.group())
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise _error("invalid number", start)

        end = match.end()
        if self._at(end) in (".", "e", "E") and self._at(end) != "":
            number = self._parse_double(start)
            return JsonNode(JsonType.DOUBLE, key, number, parent)

        self.pos = end
        return JsonNode(JsonType.INTEGER, key, value, parent)

    def _parse_double(self, start: int) -> float:
        text = self.text
        hex_match = _HEX_FLOAT_RE.match(text, start)
        if hex_match is not None:
            try:
                number = float.fromhex(hex_match.group())
            except (OverflowError, ValueError):
                raise _error("invalid number", start) from None
            self.pos = hex_match.end()
            return number

        dec_match = _DEC_FLOAT_RE.match(text, start)
        if dec_match is None:
            raise _error("invalid number", start)
        literal = dec_match.group()
        number = float(literal)
        mantissa = re.split(r"[eE]", literal)[0]
        if number in (float("inf"), float("-inf")) or (
            number == 0.0 and any(digit in mantissa for digit in "123456789")
        ):
            raise _error("invalid number", start)
        self.pos = dec_match.end()
        return number

    def parse_value(self, parent: Optional[JsonNode], key: Optional[str]) -> Optional[JsonNode]:
        """Parse one value; return None, without consuming it, at a closing bracket."""
        text = self.text
        while True:
            char = self._at(self.pos)

            if char == "":
                raise _error("unexpected end of text", self.pos)

            if char in _VALUE_SKIP:
                self.pos += 1
                continue

            if char == "{":
                node = JsonNode(JsonType.OBJECT, key, None, parent)
                self.pos += 1
                while True:
                    new_key = self.parse_key()
                    if self._at(self.pos) == "}":
                        self.pos += 1
                        return node
                    self.parse_value(node, new_key)

            if char == "[":
                node = JsonNode(JsonType.ARRAY, key, None, parent)
                self.pos += 1
                while True:
                    self.parse_value(node, None)
                    if self._at(self.pos) == "]":
                        self.pos += 1
                        return node

            if char == "]":
                return None

            if char == '"':
                value, self.pos = _unescape(text, self.pos + 1)
                return JsonNode(JsonType.STRING, key, value, parent)

            if char == "-" or char.isdigit() and char in "0123456789":
                return self.parse_number(parent, key)

            if char == "t":
                if text.startswith("true", self.pos):
                    self.pos += 4
                    return JsonNode(JsonType.BOOL, key, True, parent)
                raise _error("unexpected chars", self.pos)

            if char == "f":
                if text.startswith("false", self.pos):
                    self.pos += 5
                    return JsonNode(JsonType.BOOL, key, False, parent)
                raise _error("unexpected chars", self.pos)

            if char == "n":
                if text.startswith("null", self.pos):
                    self.pos += 4
                    return JsonNode(JsonType.NULL, key, None, parent)
                raise _error("unexpected chars", self.pos)

            if char == "/":
                following = self._at(self.pos + 1)
                if following == "/":
                    newline = text.find("\n", self.pos + 2)
                    if newline < 0:
                        raise _error("endless comment", self.pos)
                    self.pos = newline + 1
                elif following == "*":
                    self.pos = self.skip_block_comment(self.pos + 2)
                else:
                    raise _error("unexpected chars", self.pos)
                continue

            raise _error("unexpected chars", self.pos)


def parse(text: str | bytes) -> JsonNode:
    """Parse JSON text into a tree and return its root node."""
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("utf-8")

    terminator = text.find("\0")
    if terminator >= 0:
        text = text[:terminator]
    text = text[:MAX_JSON_LEN]

    root = _Parser(text).parse_value(None, None)
    if root is None:
        raise JsonError("no value found in JSON text")
    return root