"""
Value model shared by the encoder and decoder.

JSON values are plain Python objects; ``ValueKind`` tags them so the encoder
can dispatch on the variant instead of probing types at every call site.
"""

import math
from collections.abc import Callable
from collections.abc import Mapping
from enum import Enum
from typing import Any
from typing import TypeAlias

from ._errors import JSONEncodeError

# Type aliases for domain concepts - recursive definition
JsonValue = (
    str | float | bool | None | dict[str, "JsonValue"] | list["JsonValue"]
)
Position: TypeAlias = int

# Union type for values that might be transformed by hooks
JsonValueOrTransformed = JsonValue | Any
# More permissive type for values handed to the encoder
JsonValueLoose = Any

# Hook type definitions - hooks can return custom types
ObjectHook = Callable[[dict[str, JsonValue]], Any] | None
ObjectPairsHook = (
    Callable[[list[tuple[str, JsonValueOrTransformed]]], Any] | None
)
DefaultHook = Callable[[Any], Any] | None


class ValueKind(Enum):
    """
    Tags the six JSON value variants.

    Python has no closed sum type, so the variant is derived from the runtime
    type once and then used for table dispatch.
    """

    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


def value_kind(obj: JsonValueLoose) -> ValueKind:
    """
    Classifies a Python object as one of the JSON variants.

    Mappings are always OBJECT here; whether an integer-keyed mapping is
    really an array is decided by the encoder's shape check.
    """
    if obj is None:
        return ValueKind.NULL
    # bool before int: bool subclasses int
    elif isinstance(obj, bool):
        return ValueKind.BOOL
    elif isinstance(obj, int | float):
        return ValueKind.NUMBER
    elif isinstance(obj, str):
        return ValueKind.STRING
    elif isinstance(obj, list | tuple):
        return ValueKind.ARRAY
    elif isinstance(obj, Mapping):
        return ValueKind.OBJECT
    else:
        raise JSONEncodeError(f"unexpected type '{type(obj).__name__}'")


def is_finite_number(n: int | float) -> bool:
    """Returns True when n survives conversion to a finite double."""
    try:
        return math.isfinite(float(n))
    except OverflowError:
        return False


__all__ = [
    "DefaultHook",
    "JsonValue",
    "JsonValueLoose",
    "JsonValueOrTransformed",
    "ObjectHook",
    "ObjectPairsHook",
    "Position",
    "ValueKind",
    "is_finite_number",
    "value_kind",
]
