"""
Recursive-descent JSON decoder.

Every sub-parser takes the index of its first character and returns the
parsed value together with the index just past it.
"""

import math
import re
from collections.abc import Callable
from types import MappingProxyType
from typing import Final
from typing import TypeAlias

from ._config import ParseConfig
from ._errors import JSONDecodeError
from ._profile import track_decode
from ._types import JsonValueOrTransformed
from ._types import Position
from ._types import ValueKind
from ._unicode import HIGH_SURROGATES
from ._unicode import LOW_SURROGATES
from ._unicode import UNESCAPE_CHAR_MAP
from ._unicode import codepoint_to_str
from ._unicode import combine_surrogates

ParseResult: TypeAlias = tuple[JsonValueOrTransformed, Position]
SubParser: TypeAlias = Callable[[Position], ParseResult]

WHITESPACE: Final = frozenset(" \t\r\n")
DELIMITERS: Final = frozenset(" \t\r\n]},")

LITERALS: Final = MappingProxyType({"true": True, "false": False, "null": None})

# First character of a value -> the variant it starts
LOOKAHEAD_KINDS: Final = MappingProxyType(
    {
        '"': ValueKind.STRING,
        "[": ValueKind.ARRAY,
        "{": ValueKind.OBJECT,
        "t": ValueKind.BOOL,
        "f": ValueKind.BOOL,
        "n": ValueKind.NULL,
    }
    | dict.fromkeys("-0123456789", ValueKind.NUMBER)
)

# RFC 8259 number grammar; [0-9] rather than \d to keep to ASCII digits
NUMBER_RE: Final = re.compile(
    r"-?(?:0|[1-9][0-9]*)(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?"
)
HEX4_RE: Final = re.compile(r"[0-9a-fA-F]{4}")
# Run of characters that need no special handling inside a string
STRING_CHUNK_RE: Final = re.compile(r'[^"\\\x00-\x1f]*')


class JsonDecoder:
    """
    Decodes one JSON document.

    A fresh instance is created per call; it owns the position-independent
    state of the parse (nesting depth and the key cache).
    """

    def __init__(self, text: str, config: ParseConfig) -> None:
        self.text = text
        self.length = len(text)
        self.config = config
        self._depth = 0
        self._key_cache: dict[str, str] = {}

        by_kind: dict[ValueKind, SubParser] = {
            ValueKind.STRING: self._parse_string,
            ValueKind.ARRAY: self._parse_array,
            ValueKind.OBJECT: self._parse_object,
            ValueKind.NUMBER: self._parse_number,
            ValueKind.BOOL: self._parse_literal,
            ValueKind.NULL: self._parse_literal,
        }
        # Lookahead character -> sub-parser
        self._parsers: dict[str, SubParser] = {
            char: track_decode(kind, by_kind[kind])
            for char, kind in LOOKAHEAD_KINDS.items()
        }

    def error(self, msg: str, pos: Position) -> JSONDecodeError:
        """Builds a decode error located at ``pos`` in this document."""
        return JSONDecodeError(msg, self.text, pos)

    def decode(self) -> JsonValueOrTransformed:
        """Parses the whole document; only whitespace may follow the value."""
        if self.text.startswith("\ufeff"):
            raise self.error(
                "JSON input should not contain BOM (Byte Order Mark)", 0
            )

        value, pos = self.parse_value(self._skip_whitespace(0))

        pos = self._skip_whitespace(pos)
        if pos < self.length:
            raise self.error("Trailing garbage", pos)

        return value

    def parse_value(self, pos: Position) -> ParseResult:
        """Dispatches on the character at ``pos`` to the matching sub-parser."""
        if pos >= self.length:
            raise self.error("Unexpected end of input", pos)

        char = self.text[pos]
        parser = self._parsers.get(char)
        if parser is None:
            raise self.error(f"Unexpected character '{char}'", pos)
        return parser(pos)

    def _peek(self, pos: Position) -> str:
        return self.text[pos] if pos < self.length else ""

    def _skip_whitespace(self, pos: Position) -> Position:
        text = self.text
        while pos < self.length and text[pos] in WHITESPACE:
            pos += 1
        return pos

    def _scan_token(self, pos: Position) -> Position:
        """Returns the index of the next delimiter (or end of input)."""
        text = self.text
        while pos < self.length and text[pos] not in DELIMITERS:
            pos += 1
        return pos

    def _parse_string(self, start: Position) -> ParseResult:
        text = self.text
        chunks: list[str] = []
        pos = start + 1

        while True:
            chunk = STRING_CHUNK_RE.match(text, pos)
            chunk_end = chunk.end() if chunk else pos
            if chunk_end > pos:
                chunks.append(text[pos:chunk_end])
            pos = chunk_end

            if pos >= self.length:
                raise self.error("Unterminated string", start)

            char = text[pos]
            if char == '"':
                return "".join(chunks), pos + 1
            elif char == "\\":
                decoded, pos = self._parse_escape(pos, start)
                chunks.append(decoded)
            else:
                raise self.error("Control character in string", pos)

    def _parse_escape(
        self, pos: Position, string_start: Position
    ) -> tuple[str, Position]:
        """Decodes the escape sequence whose backslash sits at ``pos``."""
        letter = self.text[pos + 1 : pos + 2]
        if not letter:
            raise self.error("Unterminated string", string_start)

        if letter == "u":
            return self._parse_unicode_escape(pos)

        char = UNESCAPE_CHAR_MAP.get(letter)
        if char is None:
            raise self.error(f"Invalid escape char '{letter}' in string", pos)
        return char, pos + 2

    def _read_hex4(self, pos: Position) -> int | None:
        match = HEX4_RE.match(self.text, pos)
        return int(match.group(), 16) if match else None

    def _parse_unicode_escape(self, pos: Position) -> tuple[str, Position]:
        code_point = self._read_hex4(pos + 2)
        if code_point is None:
            raise self.error("Invalid unicode escape in string", pos)

        if code_point in HIGH_SURROGATES and self.text.startswith(
            "\\u", pos + 6
        ):
            low = self._read_hex4(pos + 8)
            if low is not None and low in LOW_SURROGATES:
                scalar = combine_surrogates(code_point, low)
                return codepoint_to_str(scalar), pos + 12

        if self.config.strict and (
            code_point in HIGH_SURROGATES or code_point in LOW_SURROGATES
        ):
            raise self.error("Unpaired surrogate in unicode escape", pos)

        return codepoint_to_str(code_point), pos + 6

    def _parse_number(self, start: Position) -> ParseResult:
        end = self._scan_token(start)
        token = self.text[start:end]

        if not NUMBER_RE.fullmatch(token):
            raise self.error(f"Invalid number '{token}'", start)

        value = float(token)
        if math.isinf(value):
            raise self.error(f"Number out of range '{token}'", start)
        return value, end

    def _parse_literal(self, start: Position) -> ParseResult:
        end = self._scan_token(start)
        word = self.text[start:end]
        if word not in LITERALS:
            raise self.error(f"Invalid literal '{word}'", start)
        return LITERALS[word], end

    def _enter_container(self, pos: Position) -> None:
        self._depth += 1
        if self._depth > self.config.max_depth:
            raise self.error("Maximum nesting depth exceeded", pos)

    def _parse_array(self, start: Position) -> ParseResult:
        self._enter_container(start)
        values: list[JsonValueOrTransformed] = []

        pos = self._skip_whitespace(start + 1)
        if self._peek(pos) == "]":
            self._depth -= 1
            return values, pos + 1

        while True:
            value, pos = self.parse_value(pos)
            values.append(value)

            pos = self._skip_whitespace(pos)
            char = self._peek(pos)
            if char == "]":
                break
            if char != ",":
                raise self.error("Expected ']' or ','", pos)

            comma_pos = pos
            pos = self._skip_whitespace(pos + 1)
            if self._peek(pos) == "]":
                raise self.error(
                    "Illegal trailing comma before end of array", comma_pos
                )

        self._depth -= 1
        return values, pos + 1

    def _parse_object_key(self, pos: Position) -> tuple[str, Position]:
        """Parses a quoted key, reusing one str object per distinct key."""
        if self._peek(pos) != '"':
            raise self.error("Expected string for key", pos)

        key, pos = self._parse_string(pos)
        return self._key_cache.setdefault(key, key), pos

    def _parse_object(self, start: Position) -> ParseResult:
        self._enter_container(start)
        pairs: list[tuple[str, JsonValueOrTransformed]] = []

        pos = self._skip_whitespace(start + 1)
        if self._peek(pos) == "}":
            self._depth -= 1
            return self._apply_object_hooks(pairs), pos + 1

        while True:
            key, pos = self._parse_object_key(pos)

            pos = self._skip_whitespace(pos)
            if self._peek(pos) != ":":
                raise self.error("Expected ':' after key", pos)

            value, pos = self.parse_value(self._skip_whitespace(pos + 1))
            pairs.append((key, value))

            pos = self._skip_whitespace(pos)
            char = self._peek(pos)
            if char == "}":
                break
            if char != ",":
                raise self.error("Expected '}' or ','", pos)

            comma_pos = pos
            pos = self._skip_whitespace(pos + 1)
            if self._peek(pos) == "}":
                raise self.error(
                    "Illegal trailing comma before end of object",
                    comma_pos,
                )

        self._depth -= 1
        return self._apply_object_hooks(pairs), pos + 1

    def _apply_object_hooks(
        self, pairs: list[tuple[str, JsonValueOrTransformed]]
    ) -> JsonValueOrTransformed:
        """Applies object hooks to parsed pairs; plain dicts keep the last duplicate."""
        if self.config.object_pairs_hook:
            return self.config.object_pairs_hook(pairs)
        obj = dict(pairs)
        if self.config.object_hook:
            return self.config.object_hook(obj)
        return obj
