"""
Pytest configuration and shared fixtures for cypherjson tests.
"""

from typing import Any

import pytest


@pytest.fixture
def settings_document() -> dict[str, Any]:
    """
    A window-library settings structure of the kind the codec persists.
    """
    return {
        "Info": {"Version": "1.00", "Name": "Cypher"},
        "Window": {
            "Title": "Cypher ✦ Main",
            "Position": [120.0, 80.5],
            "Draggable": True,
            "Theme": None,
        },
        "Tabs": [
            {
                "Name": "Combat",
                "Toggles": {"AutoParry": False, "Reach": True},
                "Dropdowns": {"Target": ["Nearest", "Lowest HP"]},
            },
            {"Name": "Misc", "Toggles": {"Fly": False}, "Keybind": "\t"},
        ],
        "Scale": 0.1,
    }
