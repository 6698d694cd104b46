"""
Unicode helpers: escape tables and scalar value to UTF-8 conversion.
"""

from types import MappingProxyType
from typing import Final

# Literal character -> letter following the backslash
ESCAPE_CHAR_MAP: Final = MappingProxyType(
    {
        "\\": "\\",
        '"': '"',
        "\b": "b",
        "\f": "f",
        "\n": "n",
        "\r": "r",
        "\t": "t",
    }
)

# Escape letter -> literal character; "/" is accepted on decode only
UNESCAPE_CHAR_MAP: Final = MappingProxyType(
    {"/": "/"} | {letter: char for char, letter in ESCAPE_CHAR_MAP.items()}
)

MAX_CODE_POINT: Final = 0x10FFFF
HIGH_SURROGATES: Final = range(0xD800, 0xDC00)
LOW_SURROGATES: Final = range(0xDC00, 0xE000)


def escape_char(char: str) -> str:
    """Returns the JSON escape for a control character, quote or backslash."""
    letter = ESCAPE_CHAR_MAP.get(char)
    if letter is not None:
        return "\\" + letter
    return f"\\u{ord(char):04x}"


def combine_surrogates(high: int, low: int) -> int:
    """Combines a UTF-16 surrogate pair into one scalar value."""
    if high not in HIGH_SURROGATES or low not in LOW_SURROGATES:
        raise ValueError(f"not a surrogate pair: {high:04x} {low:04x}")
    return (high - 0xD800) * 0x400 + (low - 0xDC00) + 0x10000


def codepoint_to_utf8(n: int) -> bytes:
    """
    Encodes a scalar value as UTF-8.

    Each range past one byte gets a leading-byte prefix (110, 1110, 11110)
    followed by 10xxxxxx continuation bytes. Surrogate scalars are encoded
    like any other three-byte value; callers decide whether to allow them.
    """
    if n < 0 or n > MAX_CODE_POINT:
        raise ValueError(f"invalid unicode codepoint '{n:x}'")

    if n <= 0x7F:
        return bytes((n,))
    elif n <= 0x7FF:
        return bytes((0xC0 | (n >> 6), 0x80 | (n & 0x3F)))
    elif n <= 0xFFFF:
        return bytes(
            (
                0xE0 | (n >> 12),
                0x80 | ((n >> 6) & 0x3F),
                0x80 | (n & 0x3F),
            )
        )
    return bytes(
        (
            0xF0 | (n >> 18),
            0x80 | ((n >> 12) & 0x3F),
            0x80 | ((n >> 6) & 0x3F),
            0x80 | (n & 0x3F),
        )
    )


def codepoint_to_str(n: int) -> str:
    """
    Decodes the UTF-8 form of a scalar value back into a one-character str.

    ``surrogatepass`` lets lone surrogates through so the permissive decoder
    mode can represent them.
    """
    return codepoint_to_utf8(n).decode("utf-8", errors="surrogatepass")
