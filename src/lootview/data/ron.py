"""Reader and writer for the subset of RON used by the asset files.

RON ("Rusty Object Notation") values map onto Python as follows:

  - lists              -> ``list``
  - ``(a, b)``         -> ``RonTuple(None, (a, b))``
  - ``Name(a, b)``     -> ``RonTuple("Name", (a, b))``
  - ``(key: v)``       -> ``RonStruct(None, {"key": v})``
  - ``Name(key: v)``   -> ``RonStruct("Name", {"key": v})``
  - ``Name``           -> ``RonUnit("Name")``
  - strings, integers, floats and booleans -> ``str``, ``int``, ``float``, ``bool``

Line (``//``) and block (``/* */``) comments and trailing commas are accepted.
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Dict, Tuple

_IDENT_START = re.compile(r"[A-Za-z_]")
_IDENT = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_NUMBER = re.compile(
    r"[+-]?(?:0x[0-9A-Fa-f_]+|0b[01_]+|0o[0-7_]+|(?:[0-9][0-9_]*)?(?:\.[0-9_]*)?(?:[eE][+-]?[0-9_]+)?)"
)
_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "0": "\0",
    "\\": "\\",
    '"': '"',
    "'": "'",
}


class RonSyntaxError(ValueError):
    """Raised when text is not well-formed RON."""

    def __init__(self, message: str, *, line: int, column: int) -> None:
        super().__init__(f"{message} (line {line}, column {column})")
        self.line = line
        self.column = column


@dataclass(frozen=True, slots=True)
class RonUnit:
    name: str


@dataclass(frozen=True, slots=True)
class RonTuple:
    name: str | None
    items: Tuple[object, ...] = ()


@dataclass(frozen=True, slots=True)
class RonStruct:
    name: str | None
    fields: Dict[str, object] = field(default_factory=dict)


class _Reader:
    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    # ─── position helpers ────────────────────────────────────────────────

    def _error(self, message: str, pos: int | None = None) -> RonSyntaxError:
        pos = self._pos if pos is None else pos
        line = self._text.count("\n", 0, pos) + 1
        column = pos - (self._text.rfind("\n", 0, pos) + 1) + 1
        return RonSyntaxError(message, line=line, column=column)

    def _peek(self) -> str:
        return self._text[self._pos] if self._pos < len(self._text) else ""

    def _skip_trivia(self) -> None:
        text = self._text
        while self._pos < len(text):
            char = text[self._pos]
            if char.isspace():
                self._pos += 1
            elif text.startswith("//", self._pos):
                end = text.find("\n", self._pos)
                self._pos = len(text) if end == -1 else end + 1
            elif text.startswith("/*", self._pos):
                self._skip_block_comment()
            else:
                return

    def _skip_block_comment(self) -> None:
        start = self._pos
        depth = 0
        text = self._text
        while self._pos < len(text):
            if text.startswith("/*", self._pos):
                depth += 1
                self._pos += 2
            elif text.startswith("*/", self._pos):
                depth -= 1
                self._pos += 2
                if depth == 0:
                    return
            else:
                self._pos += 1
        raise self._error("Unterminated block comment", start)

    def _expect(self, char: str) -> None:
        self._skip_trivia()
        if self._peek() != char:
            found = self._peek() or "end of input"
            raise self._error(f"Expected '{char}', found '{found}'")
        self._pos += 1

    # ─── grammar ─────────────────────────────────────────────────────────

    def read_document(self) -> object:
        self._skip_trivia()
        value = self._read_value()
        self._skip_trivia()
        if self._pos != len(self._text):
            raise self._error("Unexpected trailing characters")
        return value

    def _read_value(self) -> object:
        self._skip_trivia()
        char = self._peek()
        if not char:
            raise self._error("Unexpected end of input")
        if char == "[":
            return self._read_list()
        if char == "(":
            return self._read_parenthesized(None)
        if char == '"':
            return self._read_string()
        if char == "r" and self._text.startswith(('r"', 'r#'), self._pos):
            return self._read_raw_string()
        if _IDENT_START.match(char):
            return self._read_identified()
        if char in "+-.0123456789":
            return self._read_number()
        raise self._error(f"Unexpected character '{char}'")

    def _read_list(self) -> list:
        self._expect("[")
        items: list = []
        while True:
            self._skip_trivia()
            if self._peek() == "]":
                self._pos += 1
                return items
            items.append(self._read_value())
            self._skip_trivia()
            if self._peek() == ",":
                self._pos += 1
            elif self._peek() != "]":
                raise self._error("Expected ',' or ']' in list")

    def _read_identifier(self) -> str:
        match = _IDENT.match(self._text, self._pos)
        if not match:
            raise self._error("Expected identifier")
        self._pos = match.end()
        return match.group(0)

    def _read_identified(self) -> object:
        name = self._read_identifier()
        if name == "true":
            return True
        if name == "false":
            return False
        if name in ("inf", "NaN"):
            return math.inf if name == "inf" else math.nan
        self._skip_trivia()
        if self._peek() == "(":
            return self._read_parenthesized(name)
        return RonUnit(name)

    def _starts_struct_field(self) -> bool:
        match = _IDENT.match(self._text, self._pos)
        if not match:
            return False
        rest = match.end()
        while rest < len(self._text) and self._text[rest].isspace():
            rest += 1
        return self._text.startswith(":", rest)

    def _read_parenthesized(self, name: str | None) -> object:
        self._expect("(")
        self._skip_trivia()
        if self._peek() == ")":
            self._pos += 1
            return RonTuple(name, ())
        if self._starts_struct_field():
            return self._read_struct_body(name)
        items: list = []
        while True:
            self._skip_trivia()
            if self._peek() == ")":
                self._pos += 1
                return RonTuple(name, tuple(items))
            items.append(self._read_value())
            self._skip_trivia()
            if self._peek() == ",":
                self._pos += 1
            elif self._peek() != ")":
                raise self._error("Expected ',' or ')' in tuple")

    def _read_struct_body(self, name: str | None) -> RonStruct:
        fields: Dict[str, object] = {}
        while True:
            self._skip_trivia()
            if self._peek() == ")":
                self._pos += 1
                return RonStruct(name, fields)
            key_pos = self._pos
            key = self._read_identifier()
            if key in fields:
                raise self._error(f"Duplicate field '{key}'", key_pos)
            self._expect(":")
            fields[key] = self._read_value()
            self._skip_trivia()
            if self._peek() == ",":
                self._pos += 1
            elif self._peek() != ")":
                raise self._error("Expected ',' or ')' in struct")

    def _read_string(self) -> str:
        start = self._pos
        self._pos += 1
        chunks: list[str] = []
        text = self._text
        while self._pos < len(text):
            char = text[self._pos]
            if char == '"':
                self._pos += 1
                return "".join(chunks)
            if char == "\\":
                chunks.append(self._read_escape())
                continue
            chunks.append(char)
            self._pos += 1
        raise self._error("Unterminated string", start)

    def _read_escape(self) -> str:
        escape_pos = self._pos
        self._pos += 1
        code = self._peek()
        if code in _SIMPLE_ESCAPES:
            self._pos += 1
            return _SIMPLE_ESCAPES[code]
        if code == "u" and self._text.startswith("u{", self._pos):
            end = self._text.find("}", self._pos)
            if end != -1:
                digits = self._text[self._pos + 2:end]
                try:
                    value = chr(int(digits, 16))
                except ValueError:
                    raise self._error("Invalid unicode escape", escape_pos) from None
                self._pos = end + 1
                return value
        if code == "x":
            digits = self._text[self._pos + 1:self._pos + 3]
            if re.fullmatch(r"[0-9A-Fa-f]{2}", digits):
                self._pos += 3
                return chr(int(digits, 16))
        raise self._error("Invalid escape sequence", escape_pos)

    def _read_raw_string(self) -> str:
        start = self._pos
        self._pos += 1
        hashes = 0
        while self._peek() == "#":
            hashes += 1
            self._pos += 1
        if self._peek() != '"':
            raise self._error("Malformed raw string", start)
        self._pos += 1
        terminator = '"' + "#" * hashes
        end = self._text.find(terminator, self._pos)
        if end == -1:
            raise self._error("Unterminated raw string", start)
        value = self._text[self._pos:end]
        self._pos = end + len(terminator)
        return value

    def _read_number(self) -> int | float:
        start = self._pos
        match = _NUMBER.match(self._text, self._pos)
        literal = match.group(0) if match else ""
        if not literal or literal in "+-.":
            if self._text.startswith(("+inf", "-inf"), start):
                self._pos = start + 4
                return math.inf if self._text[start] == "+" else -math.inf
            raise self._error("Invalid number", start)
        self._pos = match.end()
        cleaned = literal.replace("_", "")
        try:
            if cleaned.lstrip("+-").startswith(("0x", "0b", "0o")):
                return int(cleaned, 0)
            if any(marker in cleaned for marker in ".eE"):
                return float(cleaned)
            return int(cleaned)
        except ValueError:
            raise self._error(f"Invalid number '{literal}'", start) from None


def loads(text: str) -> object:
    """Parse a RON document."""
    return _Reader(text).read_document()


# ─── Writer ──────────────────────────────────────────────────────────────────

def _dump_string(value: str) -> str:
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def _dump_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return repr(value)


def _dump_items(values, indent: str | None, level: int) -> list[str]:
    return [dumps(value, indent=indent, _level=level + 1) for value in values]


def _join(parts: list[str], opener: str, closer: str, indent: str | None, level: int) -> str:
    if not parts:
        return opener + closer
    if indent is None:
        return opener + ", ".join(parts) + closer
    inner = indent * (level + 1)
    body = "".join(f"{inner}{part},\n" for part in parts)
    return f"{opener}\n{body}{indent * level}{closer}"


def dumps(value: object, *, indent: str | None = None, _level: int = 0) -> str:
    """Serialize a value built from the types produced by ``loads``.

    With ``indent`` set, lists are written one element per line; tuples and
    structs always stay on one line.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _dump_float(value)
    if isinstance(value, str):
        return _dump_string(value)
    if isinstance(value, RonUnit):
        return value.name
    if isinstance(value, RonTuple):
        parts = _dump_items(value.items, None, _level)
        return (value.name or "") + _join(parts, "(", ")", None, _level)
    if isinstance(value, RonStruct):
        parts = [f"{key}: {dumps(item, _level=_level + 1)}" for key, item in value.fields.items()]
        return (value.name or "") + _join(parts, "(", ")", None, _level)
    if isinstance(value, (list, tuple)):
        return _join(_dump_items(value, indent, _level), "[", "]", indent, _level)
    raise TypeError(f"Cannot serialize {type(value).__name__} as RON.")
