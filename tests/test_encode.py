"""
JSON encoding functionality tests.

Validates compact serialization, number formatting, string escaping, the
mapping shape check, cycle detection and the encoder options.
"""

import math
import sys
from collections import OrderedDict
from io import StringIO
from typing import Any

import pytest

import cypherjson
from cypherjson import EncodeConfig
from cypherjson import JsonEncoder


def test_dump() -> None:
    """
    Validates dump to file-like object.
    """
    sio = StringIO()
    cypherjson.dump({"a": [1, 2]}, sio)
    assert sio.getvalue() == '{"a":[1,2]}'


def test_dump_writes_nothing_on_failure() -> None:
    """
    Validates a failed encode leaves the target untouched.
    """
    sio = StringIO()
    with pytest.raises(cypherjson.JSONEncodeError):
        cypherjson.dump({"a": [1, math.nan]}, sio)
    assert sio.getvalue() == ""


def test_dump_requires_write() -> None:
    """
    Validates dump rejects objects without write().
    """
    with pytest.raises(TypeError, match="write"):
        cypherjson.dump([], "out.json")  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, "null"),
        (True, "true"),
        (False, "false"),
        ([1, 2, 3], "[1,2,3]"),
        ((1, "a"), '[1,"a"]'),
        ([], "[]"),
        ({}, "{}"),
        ([[], [[]]], "[[],[[]]]"),
        ({"a": [True, None]}, '{"a":[true,null]}'),
    ],
)
def test_compact_output(value: Any, expected: str) -> None:
    """
    Validates the canonical compact encoding of each variant.
    """
    assert cypherjson.dumps(value) == expected


def test_object_members() -> None:
    """
    Validates object members in either iteration order.
    """
    result = cypherjson.encode({"a": 1, "b": 2})
    assert result in ('{"a":1,"b":2}', '{"b":2,"a":1}')


def test_sort_keys() -> None:
    """
    Validates sort_keys makes member order deterministic.
    """
    value = {"b": 2, "a": 1, "c": {"z": 0, "y": 1}}
    assert (
        cypherjson.dumps(value, sort_keys=True)
        == '{"a":1,"b":2,"c":{"y":1,"z":0}}'
    )


@pytest.mark.parametrize(
    "number,expected",
    [
        (1.0, "1"),
        (0.1, "0.1"),
        (42, "42"),
        (-7, "-7"),
        (-0.0, "-0"),
        (1e20, "1e+20"),
        (1.5e-7, "1.5e-07"),
        (1 / 3, "0.33333333333333"),
        (123456789012345678, "1.2345678901235e+17"),
        (3.14159265358979, "3.1415926535898"),
    ],
)
def test_number_formatting(number: float, expected: str) -> None:
    """
    Validates numbers are written with 14 significant digits.
    """
    assert cypherjson.dumps(number) == expected


@pytest.mark.parametrize(
    "number", [0.1, 1e20, 1.5e-7, 1 / 3, -2.5, 1e300, 5e-324]
)
def test_number_output_reparses(number: float) -> None:
    """
    Validates formatted numbers are valid JSON that decodes to the
    14-digit rounding of the input.
    """
    assert cypherjson.loads(cypherjson.dumps(number)) == float(
        "%.14g" % number
    )


@pytest.mark.parametrize("number", [math.nan, math.inf, -math.inf, 10**400])
def test_non_finite_numbers_rejected(number: float) -> None:
    """
    Validates NaN, infinities and ints beyond double range are rejected.
    """
    with pytest.raises(
        cypherjson.JSONEncodeError, match="unexpected number value"
    ):
        cypherjson.dumps([number])


@pytest.mark.parametrize(
    "text,expected",
    [
        ("plain", '"plain"'),
        ('say "hi"', '"say \\"hi\\""'),
        ("back\\slash", '"back\\\\slash"'),
        ("\b\f\n\r\t", '"\\b\\f\\n\\r\\t"'),
        ("\x00\x01\x1f", '"\\u0000\\u0001\\u001f"'),
        ("a/b", '"a/b"'),
        ("\x7f", '"\x7f"'),
        ("café ✦ \U0001f600", '"café ✦ \U0001f600"'),
    ],
)
def test_string_escaping(text: str, expected: str) -> None:
    """
    Validates only control characters, quote and backslash are escaped.
    """
    assert cypherjson.dumps(text) == expected


def test_keys_are_escaped() -> None:
    """
    Validates object keys use the same escaping as values.
    """
    assert cypherjson.dumps({'k"\n': 1}) == '{"k\\"\\n":1}'


@pytest.mark.parametrize(
    "mapping,expected",
    [
        ({1: "x", 2: "y"}, '["x","y"]'),
        ({2: "y", 1: "x", 3: "z"}, '["x","y","z"]'),
        ({1: {1: True}}, "[[true]]"),
    ],
)
def test_index_keyed_mapping_encodes_as_array(
    mapping: dict[int, Any], expected: str
) -> None:
    """
    Validates a dense 1..N integer-keyed mapping is written as an array.
    """
    assert cypherjson.dumps(mapping) == expected


@pytest.mark.parametrize(
    "mapping",
    [
        {1: "a", 3: "c"},
        {1: "a", 2: "b", 4: "d"},
        {0: "zero", 1: "one"},
        {1: "a", -1: "b"},
    ],
)
def test_sparse_array_rejected(mapping: dict[int, Any]) -> None:
    """
    Validates index-keyed mappings with gaps are rejected.
    """
    with pytest.raises(cypherjson.JSONEncodeError, match="sparse array"):
        cypherjson.dumps(mapping)


@pytest.mark.parametrize(
    "mapping",
    [
        {1: "a", "b": 2},
        {"a": 1, 2: 3},
        {(1, 2): 1},
        {True: 1},
        {1.0: "x"},
        {None: 1},
    ],
)
def test_mixed_or_invalid_keys_rejected(mapping: dict[Any, Any]) -> None:
    """
    Validates mappings with non-string keys outside the index form fail.
    """
    with pytest.raises(
        cypherjson.JSONEncodeError, match="mixed or invalid key types"
    ):
        cypherjson.dumps(mapping)


def test_empty_mapping_as_array() -> None:
    """
    Validates the option reproducing the single-container empty encoding.
    """
    value = {"tabs": {}, "list": []}
    assert (
        cypherjson.dumps(value, empty_mapping_as_array=True)
        == '{"tabs":[],"list":[]}'
    )
    assert cypherjson.dumps(value) == '{"tabs":{},"list":[]}'
    assert cypherjson.loads(
        cypherjson.dumps({}, empty_mapping_as_array=True)
    ) == []


def test_direct_cycle_rejected() -> None:
    """
    Validates containers holding themselves fail without recursing away.
    """
    looped_list: list[Any] = [1]
    looped_list.append(looped_list)
    with pytest.raises(cypherjson.JSONEncodeError, match="circular reference"):
        cypherjson.dumps(looped_list)

    looped_dict: dict[str, Any] = {}
    looped_dict["self"] = looped_dict
    with pytest.raises(cypherjson.JSONEncodeError, match="circular reference"):
        cypherjson.dumps(looped_dict)

    looped_table: dict[int, Any] = {}
    looped_table[1] = looped_table
    with pytest.raises(cypherjson.JSONEncodeError, match="circular reference"):
        cypherjson.dumps(looped_table)


def test_indirect_cycle_rejected() -> None:
    """
    Validates cycles through several containers are detected.
    """
    window: dict[str, Any] = {"tabs": []}
    tab: dict[str, Any] = {"owner": {"window": window}}
    window["tabs"].append(tab)

    with pytest.raises(
        cypherjson.JSONEncodeError, match="circular reference"
    ) as exc_info:
        cypherjson.dumps({"root": window})

    notes = exc_info.value.__notes__
    assert "when serializing dict item 'window'" in notes
    assert "when serializing list item 0" in notes
    assert notes[-1] == "when serializing dict item 'root'"


def test_shared_child_is_not_a_cycle() -> None:
    """
    Validates the same container may appear several times side by side.
    """
    child = [1]
    shared = {"x": child}
    assert cypherjson.dumps([child, child, [child]]) == "[[1],[1],[[1]]]"
    assert cypherjson.dumps([shared, shared]) == '[{"x":[1]},{"x":[1]}]'


def test_encoder_unwinds_after_error() -> None:
    """
    Validates the in-progress set is empty after a failed encode, so the
    same encoder can be reused.
    """
    encoder = JsonEncoder(EncodeConfig())
    bad = {"ok": [1, 2], "bad": [object()]}

    with pytest.raises(cypherjson.JSONEncodeError):
        encoder.encode(bad)
    assert encoder._in_progress == set()

    bad["bad"] = [3]
    assert encoder.encode(bad) == '{"ok":[1,2],"bad":[3]}'


@pytest.mark.parametrize(
    "value,type_name",
    [(object(), "object"), ({1, 2}, "set"), (b"raw", "bytes"), (sys, "module")],
)
def test_unsupported_type_rejected(value: Any, type_name: str) -> None:
    """
    Validates objects outside the six variants fail with their type name.
    """
    with pytest.raises(
        cypherjson.JSONEncodeError, match=f"unexpected type '{type_name}'"
    ):
        cypherjson.dumps(value)


def test_nested_error_context_notes() -> None:
    """
    Validates errors from nested values carry the path as notes.
    """
    with pytest.raises(cypherjson.JSONEncodeError) as exc_info:
        cypherjson.dumps([1, [2, 3, sys]])
    assert exc_info.value.__notes__ == [
        "when serializing list item 2",
        "when serializing list item 1",
    ]

    with pytest.raises(cypherjson.JSONEncodeError) as exc_info:
        cypherjson.dumps((1, (2, 3, sys)))
    assert exc_info.value.__notes__[0] == "when serializing tuple item 2"

    with pytest.raises(cypherjson.JSONEncodeError) as exc_info:
        cypherjson.dumps({"a": {"b": sys}})
    assert exc_info.value.__notes__ == [
        "when serializing dict item 'b'",
        "when serializing dict item 'a'",
    ]


def test_default_hook() -> None:
    """
    Validates default converts unsupported objects before encoding.
    """
    assert cypherjson.dumps({"ids": {3, 1, 2}}, default=sorted) == (
        '{"ids":[1,2,3]}'
    )
    assert cypherjson.dumps([b"ab"], default=lambda b: b.decode()) == '["ab"]'


def test_default_hook_returning_itself() -> None:
    """
    Validates a default hook that never converts is reported as a cycle.
    """
    with pytest.raises(cypherjson.JSONEncodeError, match="circular reference"):
        cypherjson.dumps(object(), default=lambda obj: obj)


def test_encode_mutated() -> None:
    """
    Validates handling of list mutation during encoding.
    """
    a = [object()] * 10

    def crasher(obj: object) -> None:
        del a[-1]

    assert cypherjson.dumps(a, default=crasher) == "[null,null,null,null,null]"


def test_mapping_types() -> None:
    """
    Validates any Mapping is accepted, keeping its iteration order.
    """
    ordered = OrderedDict([("z", 1), ("a", 2)])
    assert cypherjson.dumps(ordered) == '{"z":1,"a":2}'


def test_nesting_limit() -> None:
    """
    Validates deep but acyclic values fail cleanly past max_depth.
    """
    nested: list[Any] = []
    for _ in range(1000):
        nested = [nested]

    with pytest.raises(
        cypherjson.JSONEncodeError, match="maximum nesting depth exceeded"
    ):
        cypherjson.dumps(nested)

    assert cypherjson.dumps([[1]], max_depth=2) == "[[1]]"
    with pytest.raises(cypherjson.JSONEncodeError):
        cypherjson.dumps([[[1]]], max_depth=2)


def test_encode_error_is_value_error() -> None:
    """
    Validates encode failures are ValueErrors carrying only a reason.
    """
    with pytest.raises(ValueError) as exc_info:
        cypherjson.dumps(math.nan)

    err = exc_info.value
    assert isinstance(err, cypherjson.JSONEncodeError)
    assert err.reason == "unexpected number value 'nan'"
    assert not hasattr(err, "lineno")


@pytest.mark.parametrize(
    "option,value,error",
    [
        ("sort_keys", "yes", TypeError),
        ("empty_mapping_as_array", 1, TypeError),
        ("default", "str", TypeError),
        ("max_depth", -1, ValueError),
        ("indent", 2, TypeError),
    ],
)
def test_invalid_encode_options(
    option: str, value: Any, error: type[Exception]
) -> None:
    """
    Validates option checking, including the absence of pretty-printing.
    """
    with pytest.raises(error):
        cypherjson.dumps([], **{option: value})
