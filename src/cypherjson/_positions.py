"""Character/byte offset mapping for error positions in UTF-8 documents."""

from __future__ import annotations

from bisect import bisect_right
from typing import Final


def _utf8_width(char: str) -> int:
    """Number of bytes ``char`` occupies in UTF-8 (lone surrogates count 3)."""
    code_point = ord(char)
    if code_point <= 0x7F:
        return 1
    elif code_point <= 0x7FF:
        return 2
    elif code_point <= 0xFFFF:
        return 3
    return 4


class PositionMapper:
    """Maps character offsets of a decoded document to UTF-8 byte offsets.

    Settings files live on disk as UTF-8 while the decoder works on ``str``,
    so error offsets are character indices. Instead of a full per-character
    table, the mapper keeps a checkpoint every ``checkpoint_interval``
    characters and walks forward from the nearest one.
    """

    def __init__(self, text: str, checkpoint_interval: int = 256) -> None:
        """Initialize position mapper with checkpoint system.

        Args:
            text: The document the offsets refer to
            checkpoint_interval: Characters between checkpoints (default 256)
        """
        if checkpoint_interval <= 0:
            raise ValueError("checkpoint_interval must be positive")

        self.text: Final = text
        self.checkpoint_interval: Final = checkpoint_interval
        # byte offset of character i * checkpoint_interval
        self._checkpoint_bytes: list[int] = []
        self._is_ascii_only: bool = text.isascii()

        if not self._is_ascii_only:
            self._build_checkpoints()

    def _build_checkpoints(self) -> None:
        byte_pos = 0
        for char_pos, char in enumerate(self.text):
            if char_pos % self.checkpoint_interval == 0:
                self._checkpoint_bytes.append(byte_pos)
            byte_pos += _utf8_width(char)
        if len(self.text) % self.checkpoint_interval == 0:
            self._checkpoint_bytes.append(byte_pos)

    def char_to_byte(self, char_pos: int) -> int:
        """Convert character position to byte position.

        Args:
            char_pos: Character position in the document (clamped to its end)

        Returns:
            Byte position in the UTF-8 encoded document
        """
        char_pos = max(0, min(char_pos, len(self.text)))
        if self._is_ascii_only:
            return char_pos

        index = char_pos // self.checkpoint_interval
        checkpoint_char = index * self.checkpoint_interval
        byte_pos = self._checkpoint_bytes[index]
        for char in self.text[checkpoint_char:char_pos]:
            byte_pos += _utf8_width(char)
        return byte_pos

    def byte_to_char(self, byte_pos: int) -> int:
        """Convert byte position to character position.

        A byte offset inside a multi-byte sequence maps to the character
        that sequence encodes.

        Args:
            byte_pos: Byte position in the UTF-8 encoded document

        Returns:
            Character position in the document
        """
        if byte_pos <= 0:
            return 0
        if self._is_ascii_only:
            return min(byte_pos, len(self.text))

        index = bisect_right(self._checkpoint_bytes, byte_pos) - 1
        current_byte = self._checkpoint_bytes[index]
        current_char = index * self.checkpoint_interval

        while current_char < len(self.text):
            width = _utf8_width(self.text[current_char])
            if current_byte + width > byte_pos:
                break
            current_byte += width
            current_char += 1

        return current_char
