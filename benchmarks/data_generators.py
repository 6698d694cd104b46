"""
Test data generators for codec benchmarks.

Creates settings documents of the kind a window library persists:
- Different sizes (single window / many tabs)
- Flag-heavy and string-heavy content
- Keybind strings with escape sequences and non-ASCII labels
"""

import json
import random
import string
from typing import Any

_ESCAPE_PROBABILITY = 0.3
_LABELS = ["Combat", "Visuals", "Movement", "Misc", "Config", "Credits"]
_GLYPHS = ["✦", "★", "→", "é", "ß", "\U0001f5e1"]


def generate_test_value(data_type: str, seed: int = 1234) -> Any:
    """Generates a Python settings value of the specified type."""
    generators = {
        "small_settings": _generate_small_settings,
        "large_settings": _generate_large_settings,
        "flag_array": _generate_flag_array,
        "nested_tabs": _generate_nested_tabs,
        "string_heavy": _generate_string_heavy,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    random.seed(seed)
    return generators[data_type]()


def generate_test_data(data_type: str, seed: int = 1234) -> str:
    """Generates JSON text for the specified type."""
    return json.dumps(generate_test_value(data_type, seed))


def _generate_small_settings() -> dict[str, Any]:
    """One window with a handful of toggles (< 1KB)."""
    return {
        "Info": {"Version": "1.00", "Name": "Cypher"},
        "Window": {
            "Title": "Cypher ✦ Main",
            "Position": [120.0, 80.5],
            "Size": [560.0, 420.0],
            "Draggable": True,
        },
        "Toggles": {"AutoParry": False, "Reach": True, "Fly": False},
        "Scale": 0.1,
    }


def _generate_large_settings() -> dict[str, Any]:
    """Many tabs with toggles, sliders and dropdowns (> 10KB)."""
    return {
        "Info": {"Version": "2.10", "Name": _random_string(12)},
        "Tabs": [
            {
                "Name": f"{random.choice(_LABELS)} {i}",
                "Toggles": {
                    _random_string(8): random.choice([True, False])
                    for _ in range(10)
                },
                "Sliders": {
                    _random_string(8): round(random.uniform(0.0, 100.0), 2)
                    for _ in range(8)
                },
                "Dropdowns": {
                    _random_string(8): [_random_string(6) for _ in range(4)]
                    for _ in range(3)
                },
                "Keybind": random.choice(["Q", "E", "\t", "F", None]),
            }
            for i in range(20)
        ],
    }


def _generate_flag_array() -> list[Any]:
    """A long array of mixed scalars."""
    choices = [
        lambda: random.randint(-1000, 1000),
        lambda: round(random.uniform(-100.0, 100.0), 3),
        lambda: _random_string(random.randint(5, 30)),
        lambda: random.choice([True, False]),
        lambda: None,
    ]
    return [random.choice(choices)() for _ in range(200)]


def _generate_nested_tabs() -> dict[str, Any]:
    """Sections nested several levels deep."""

    def create_section(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"Value": _random_string(10)}

        return {
            "Level": depth,
            "Label": random.choice(_LABELS),
            "Children": [create_section(depth - 1) for _ in range(3)],
            "Collapsed": create_section(depth - 1),
        }

    return create_section(7)


def _generate_string_heavy() -> dict[str, Any]:
    """Labels full of characters that need escaping or are non-ASCII."""

    def create_label() -> str:
        chars = []
        for _ in range(50):
            if random.random() < _ESCAPE_PROBABILITY:
                chars.append(random.choice(['"', "\\", "\n", "\t", "\x01"]))
            elif random.random() < _ESCAPE_PROBABILITY:
                chars.append(random.choice(_GLYPHS))
            else:
                chars.append(
                    random.choice(string.ascii_letters + string.digits + " ")
                )
        return "".join(chars)

    return {
        "Labels": [create_label() for _ in range(100)],
        "Tooltips": {f"tip_{i}": create_label() for i in range(20)},
    }


def _random_string(length: int) -> str:
    """Generates a random string of specified length."""
    return "".join(random.choices(string.ascii_letters, k=length))
