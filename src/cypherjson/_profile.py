"""
Per-variant timing for the decoder and encoder.

With ``CYPHERJSON_PROFILE`` set at import time (and without ``-O``) every
entry of the decoder's lookahead table and the encoder's kind table is
wrapped to record calls, nanoseconds and characters. Decoding counts the
input characters a value spans; encoding counts the characters written.
Times and character counts include nested values.

Profiling off, ``track_decode`` and ``track_encode`` return the callable
they were given.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from dataclasses import replace
from typing import Any
from typing import Literal
from typing import TypeAlias

from ._config import PROFILING_ENABLED
from ._types import Position
from ._types import ValueKind

Direction: TypeAlias = Literal["decode", "encode"]
DecodeStep: TypeAlias = Callable[[Position], tuple[Any, Position]]
EncodeStep: TypeAlias = Callable[[Any, int], str]


@dataclass
class KindStats:
    """Accumulated cost of one value variant in one direction."""

    direction: Direction
    kind: ValueKind
    calls: int = 0
    total_ns: int = 0
    chars: int = 0

    @property
    def key(self) -> str:
        return f"{self.direction}.{self.kind.value}"

    @property
    def mean_ns(self) -> float:
        return self.total_ns / self.calls if self.calls else 0.0

    def add(self, elapsed_ns: int, chars: int) -> None:
        self.calls += 1
        self.total_ns += elapsed_ns
        self.chars += chars


_stats: dict[tuple[Direction, ValueKind], KindStats] = {}


def _stats_for(direction: Direction, kind: ValueKind) -> KindStats:
    stats = _stats.get((direction, kind))
    if stats is None:
        stats = _stats[direction, kind] = KindStats(direction, kind)
    return stats


def track_decode(kind: ValueKind, parser: DecodeStep) -> DecodeStep:
    """Wraps a sub-parser so each value it reads is recorded under kind."""
    if not PROFILING_ENABLED:
        return parser

    def timed(start: Position) -> tuple[Any, Position]:
        began = time.perf_counter_ns()
        value, end = parser(start)
        elapsed = time.perf_counter_ns() - began
        _stats_for("decode", kind).add(elapsed, end - start)
        return value, end

    return timed


def track_encode(kind: ValueKind, encoder: EncodeStep) -> EncodeStep:
    """Wraps a kind encoder so each value it writes is recorded under kind."""
    if not PROFILING_ENABLED:
        return encoder

    def timed(obj: Any, depth: int) -> str:
        began = time.perf_counter_ns()
        text = encoder(obj, depth)
        elapsed = time.perf_counter_ns() - began
        _stats_for("encode", kind).add(elapsed, len(text))
        return text

    return timed


def get_profile() -> dict[str, KindStats]:
    """
    Returns a snapshot of the statistics keyed like ``"decode.string"``.

    Empty when profiling is off.
    """
    return {stats.key: replace(stats) for stats in _stats.values()}


def clear_profile() -> None:
    _stats.clear()
