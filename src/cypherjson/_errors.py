"""Exception types raised by the codec."""

from functools import cached_property

from ._positions import PositionMapper


class JSONDecodeError(ValueError):
    """
    Handles JSON parsing failures with precise position information.

    Error state containing the source offset and the 1-based line/column it
    maps to, so users can locate the problem in a settings file.
    """

    def __init__(self, msg: str, doc: str = "", pos: int = 0) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos

        # Compute line and column numbers from position
        self.lineno = doc.count("\n", 0, pos) + 1 if doc else 1
        self.colno = pos - doc.rfind("\n", 0, pos) if doc else pos + 1

        super().__init__(f"{msg} at line {self.lineno}, column {self.colno}")

    @cached_property
    def byte_pos(self) -> int:
        """Offset of the error within the UTF-8 encoding of the document."""
        if not self.doc:
            return self.pos
        return PositionMapper(self.doc).char_to_byte(self.pos)

    def __reduce__(self) -> tuple[type, tuple[str, str, int]]:
        return self.__class__, (self.msg, self.doc, self.pos)


class JSONEncodeError(ValueError):
    """
    Raised when a value cannot be serialized.

    Carries only a reason: encode failures are positions in the value tree,
    not in any text.
    """

    def __init__(self, reason: str) -> None:
        if not isinstance(reason, str):
            raise TypeError("reason must be a string")

        self.reason = reason
        super().__init__(reason)

    def __reduce__(self) -> tuple[type, tuple[str]]:
        return self.__class__, (self.reason,)
