"""Common pytest fixtures for bot tests.

No network: panel data is built in memory and API calls are monkeypatched.
"""

import copy

import pytest

ADMIN_ID = 200

PANEL_DATA = {
    "categories": [
        {"name": "Fun", "icon": "face-laugh"},
        {"name": "Bad", "icon": "skull"},
    ],
    "events": [
        {
            "name": "Clown Invasion",
            "description": "Honk.",
            "type": "clown_invasion",
            "category": "Fun",
            "has_customization": 0,
        },
        {
            "name": "Disco Inferno",
            "description": "Everybody dance.",
            "type": "disco_inferno",
            "category": "Fun",
            "has_customization": 1,
        },
        {
            "name": "Meteor Wave",
            "description": "Rocks from space.",
            "type": "meteor_wave",
            "category": "Bad",
            "has_customization": 1,
        },
        {
            "name": "Space Dust",
            "description": "A little dust.",
            "type": "space_dust",
            "category": "Bad",
            "has_customization": 0,
        },
    ],
}


@pytest.fixture(autouse=True)
def _admin_env(monkeypatch):
    monkeypatch.setenv("ADMIN_TELEGRAM_IDS", f"{ADMIN_ID}, 201")
    monkeypatch.setenv("API_BASE_URL", "http://game.test")
    monkeypatch.delenv("ADMIN_TOKEN", raising=False)


@pytest.fixture
def panel_data():
    return copy.deepcopy(PANEL_DATA)
