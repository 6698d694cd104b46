"""
Codec configuration: immutable option sets and environment switches.
"""

import os
from dataclasses import dataclass
from typing import Final

from ._types import DefaultHook
from ._types import ObjectHook
from ._types import ObjectPairsHook

# Read once at import; see _profile
PROFILING_ENABLED: Final = __debug__ and "CYPHERJSON_PROFILE" in os.environ

# Deep enough for any settings file, shallow enough to stay clear of
# Python's default recursion limit
DEFAULT_MAX_DEPTH: Final = 256


def _check_max_depth(max_depth: int) -> None:
    if not isinstance(max_depth, int) or isinstance(max_depth, bool):
        raise TypeError("max_depth must be an integer")
    if max_depth < 1:
        raise ValueError("max_depth must be at least 1")


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures JSON parsing behavior with immutable settings.

    ``strict`` rejects ``\\u`` escapes naming an unpaired UTF-16 surrogate;
    with ``strict=False`` they decode to lone surrogate code points.
    """

    strict: bool = True
    object_hook: ObjectHook = None
    object_pairs_hook: ObjectPairsHook = None
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if not isinstance(self.strict, bool):
            raise TypeError("strict must be a boolean")
        _check_max_depth(self.max_depth)


@dataclass(frozen=True)
class EncodeConfig:
    """
    Configures JSON encoding behavior with immutable settings.

    Output is always compact. ``empty_mapping_as_array`` writes ``[]`` for an
    empty mapping, matching settings files written by table-based encoders.
    """

    sort_keys: bool = False
    default: DefaultHook = None
    empty_mapping_as_array: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if not isinstance(self.sort_keys, bool):
            raise TypeError("sort_keys must be a boolean")
        if not isinstance(self.empty_mapping_as_array, bool):
            raise TypeError("empty_mapping_as_array must be a boolean")
        if self.default is not None and not callable(self.default):
            raise TypeError("default must be callable")
        _check_max_depth(self.max_depth)
