"""
Small strict JSON codec for settings files.

Decodes JSON text into plain Python values and encodes them back into compact
JSON text. The encoder rejects cycles, sparse index-keyed mappings, non-string
object keys and non-finite numbers; the decoder reports every failure with
its line and column.
"""

from typing import IO
from typing import Any

from ._config import EncodeConfig
from ._config import ParseConfig
from ._decoder import JsonDecoder
from ._encoder import JsonEncoder
from ._errors import JSONDecodeError
from ._errors import JSONEncodeError
from ._positions import PositionMapper
from ._profile import KindStats
from ._profile import clear_profile
from ._profile import get_profile
from ._types import JsonValue
from ._types import JsonValueLoose
from ._types import JsonValueOrTransformed
from ._types import ValueKind
from ._types import value_kind
from ._unicode import codepoint_to_utf8

__version__ = "0.1.2"


def loads(s: str, **kwargs: Any) -> JsonValueOrTransformed:
    """
    Parses a JSON document into Python objects.

    Numbers come back as ``float``. Keyword arguments are ``ParseConfig``
    fields.
    """
    if not isinstance(s, str):
        raise TypeError(
            f"the JSON object must be str, not {type(s).__name__}"
        )

    config = ParseConfig(**kwargs)
    return JsonDecoder(s, config).decode()


def dumps(obj: JsonValueLoose, **kwargs: Any) -> str:
    """
    Serializes Python objects to compact JSON text.

    Keyword arguments are ``EncodeConfig`` fields. An empty mapping is
    written as ``{}``; pass ``empty_mapping_as_array=True`` when the file
    must keep the ``[]`` form older settings files use.
    """
    config = EncodeConfig(**kwargs)
    return JsonEncoder(config).encode(obj)


def load(fp: IO[str], **kwargs: Any) -> JsonValueOrTransformed:
    """
    Parses JSON from a file-like object opened in text mode.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return loads(fp.read(), **kwargs)


def dump(obj: JsonValueLoose, fp: IO[str], **kwargs: Any) -> None:
    """
    Serializes obj and writes the text to a file-like object.

    The whole document is encoded before anything is written, so a failed
    encode leaves fp untouched.
    """
    if not hasattr(fp, "write"):
        raise TypeError("fp must have a write() method")

    fp.write(dumps(obj, **kwargs))


# Names used by existing settings code
decode = loads
encode = dumps

__all__ = [
    "EncodeConfig",
    "JSONDecodeError",
    "JSONEncodeError",
    "JsonDecoder",
    "JsonEncoder",
    "JsonValue",
    "KindStats",
    "ParseConfig",
    "PositionMapper",
    "ValueKind",
    "clear_profile",
    "codepoint_to_utf8",
    "decode",
    "dump",
    "dumps",
    "encode",
    "get_profile",
    "load",
    "loads",
    "value_kind",
]
