"""
Compact JSON encoder with cycle detection.
"""

import re
from collections.abc import Callable
from collections.abc import Iterator
from collections.abc import Mapping
from collections.abc import Sequence
from contextlib import contextmanager
from typing import Any
from typing import Final

from ._config import EncodeConfig
from ._errors import JSONEncodeError
from ._profile import track_encode
from ._types import JsonValueLoose
from ._types import ValueKind
from ._types import is_finite_number
from ._types import value_kind
from ._unicode import escape_char

# Control characters, backslash and double quote
ESCAPE_RE: Final = re.compile(r'[\x00-\x1f\\"]')


def encode_string(s: str) -> str:
    """Quotes s, escaping only what JSON requires."""
    return '"' + ESCAPE_RE.sub(lambda m: escape_char(m.group()), s) + '"'


def encode_number(n: int | float) -> str:
    """Formats n with 14 significant digits, rejecting NaN and infinities."""
    if not is_finite_number(n):
        raise JSONEncodeError(f"unexpected number value '{n!r}'")
    return "%.14g" % float(n)


def _is_index_key(key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool)


class JsonEncoder:
    """
    Serializes one value graph.

    ``_in_progress`` holds the ids of the containers on the current path; a
    container met again while it is still on the path is a cycle. Ids are
    removed when a level finishes, also when it raises, so siblings that share
    a (non-cyclic) child are fine.
    """

    def __init__(self, config: EncodeConfig) -> None:
        self.config = config
        self._in_progress: set[int] = set()
        encoders: dict[ValueKind, Callable[[Any, int], str]] = {
            ValueKind.NULL: lambda obj, depth: "null",
            ValueKind.BOOL: lambda obj, depth: "true" if obj else "false",
            ValueKind.NUMBER: lambda obj, depth: encode_number(obj),
            ValueKind.STRING: lambda obj, depth: encode_string(obj),
            ValueKind.ARRAY: self._encode_array,
            ValueKind.OBJECT: self._encode_mapping,
        }
        self._encoders = {
            kind: track_encode(kind, encoder)
            for kind, encoder in encoders.items()
        }

    def encode(self, obj: JsonValueLoose) -> str:
        """Returns the compact JSON text for obj."""
        return self._encode(obj, 0)

    def _encode(self, obj: JsonValueLoose, depth: int) -> str:
        try:
            kind = value_kind(obj)
        except JSONEncodeError:
            if self.config.default is None:
                raise
            return self._encode_default(obj, depth, self.config.default)
        return self._encoders[kind](obj, depth)

    def _encode_default(
        self, obj: Any, depth: int, default: Callable[[Any], Any]
    ) -> str:
        """Encodes whatever the ``default`` hook turns obj into."""
        with self._visiting(obj, depth + 1):
            return self._encode(default(obj), depth + 1)

    @contextmanager
    def _visiting(self, container: Any, depth: int) -> Iterator[None]:
        if depth > self.config.max_depth:
            raise JSONEncodeError("maximum nesting depth exceeded")

        marker = id(container)
        if marker in self._in_progress:
            raise JSONEncodeError("circular reference")

        self._in_progress.add(marker)
        try:
            yield
        finally:
            self._in_progress.discard(marker)

    def _encode_array(
        self, container: Any, depth: int, items: Sequence[Any] | None = None
    ) -> str:
        """
        Encodes items (default: the container itself) as a JSON array.

        Cycles are tracked by the container, which differs from items for
        index-keyed mappings.
        """
        if items is None:
            items = container
        if not items:
            return "[]"

        parts = []
        with self._visiting(container, depth + 1):
            for index, item in enumerate(items):
                try:
                    parts.append(self._encode(item, depth + 1))
                except JSONEncodeError as exc:
                    kind = type(container).__name__
                    exc.add_note(f"when serializing {kind} item {index}")
                    raise
        return "[" + ",".join(parts) + "]"

    def _encode_mapping(self, obj: Mapping[Any, Any], depth: int) -> str:
        if not obj:
            return "[]" if self.config.empty_mapping_as_array else "{}"

        # A mapping holding index 1 is an array in table form
        if 1 in obj:
            return self._encode_array(obj, depth, self._dense_values(obj))

        items = list(obj.items())
        for key, _ in items:
            if not isinstance(key, str):
                raise JSONEncodeError(
                    "invalid mapping: mixed or invalid key types"
                )

        if self.config.sort_keys:
            items.sort(key=lambda item: item[0])

        parts = []
        with self._visiting(obj, depth + 1):
            for key, value in items:
                try:
                    encoded = self._encode(value, depth + 1)
                    parts.append(encode_string(key) + ":" + encoded)
                except JSONEncodeError as exc:
                    exc.add_note(
                        f"when serializing {type(obj).__name__} item {key!r}"
                    )
                    raise
        return "{" + ",".join(parts) + "}"

    def _dense_values(self, obj: Mapping[Any, Any]) -> list[Any]:
        """Values of an index-keyed mapping in order 1..N."""
        count = 0
        for key in obj:
            if not _is_index_key(key):
                raise JSONEncodeError(
                    "invalid mapping: mixed or invalid key types"
                )
            count += 1

        if set(obj) != set(range(1, count + 1)):
            raise JSONEncodeError("invalid mapping: sparse array")

        return [obj[index] for index in range(1, count + 1)]
