"""
conftest.py
-----------
Shared pytest configuration and fixtures for Pixel Commando tests.

Contains:
- Headless pygame mock installed before any game module is imported
- Fixtures for storage, progress, events, sessions, ad vendors and the
  state machine
- Pytest markers
"""

import random
import sys
from concurrent.futures import Future
from unittest.mock import MagicMock

import pytest

# Mock pygame globally before any imports that might use it
mock_pygame = MagicMock()
sys.modules["pygame"] = mock_pygame
sys.modules["pygame.font"] = MagicMock()
sys.modules["pygame.display"] = MagicMock()
sys.modules["pygame.mixer"] = MagicMock()
sys.modules["pygame.key"] = MagicMock()
sys.modules["pygame.event"] = MagicMock()


class MockPygameError(RuntimeError):
    """Stands in for pygame.error so except clauses stay valid."""


mock_pygame.error = MockPygameError
mock_pygame.KEYDOWN = 768
mock_pygame.QUIT = 256
mock_pygame.K_LEFT = 276
mock_pygame.K_RIGHT = 275
mock_pygame.K_UP = 273
mock_pygame.K_DOWN = 274
mock_pygame.K_RETURN = 13
mock_pygame.K_SPACE = 32
mock_pygame.K_ESCAPE = 27
mock_pygame.K_a = 97
mock_pygame.K_d = 100
mock_pygame.K_f = 102
mock_pygame.K_j = 106
mock_pygame.K_m = 109
mock_pygame.K_p = 112
mock_pygame.K_s = 115
mock_pygame.K_w = 119
mock_pygame.K_F8 = 289
for _digit in range(10):
    setattr(mock_pygame, f"K_{_digit}", 48 + _digit)

from pixel_commando.ads.ad_broker import AdBroker  # noqa: E402
from pixel_commando.ads.vendors.base_vendor import AdVendorAdapter, AdOutcome  # noqa: E402
from pixel_commando.core.services.event_manager import EventManager  # noqa: E402
from pixel_commando.core.services.progress_store import ProgressStore  # noqa: E402
from pixel_commando.core.services.storage import KeyValueStore  # noqa: E402
from pixel_commando.scenes.game_session import GameSession  # noqa: E402
from pixel_commando.scenes.state_machine import GameStateMachine  # noqa: E402


# ===========================================================
# Test Doubles
# ===========================================================

class FakeVendor(AdVendorAdapter):
    """Vendor whose requests stay pending until the test resolves them."""

    name = "none"

    def __init__(self, ready=True, raise_on_request=False):
        super().__init__()
        self.ready = ready
        self.raise_on_request = raise_on_request
        self.requests = []
        self.gameplay_calls = []

    def initialize(self):
        return self.ready

    def request_rewarded_ad(self):
        if self.raise_on_request:
            raise RuntimeError("sdk exploded")
        future = Future()
        self.requests.append(future)
        return future

    def resolve(self, outcome=AdOutcome.GRANTED, index=-1):
        future = self.requests[index]
        if not future.done():
            future.set_result(outcome)

    def gameplay_start(self):
        self.gameplay_calls.append("start")

    def gameplay_stop(self):
        self.gameplay_calls.append("stop")


class RecordingAudio:
    """Records ducking calls made by the broker."""

    def __init__(self):
        self.muted = False
        self.ad_active = False
        self.calls = []

    def set_ad_active(self, active):
        self.ad_active = active
        self.calls.append(active)

    def toggle_mute(self):
        self.muted = not self.muted
        return self.muted


# ===========================================================
# Fixtures
# ===========================================================

@pytest.fixture
def storage():
    """In-memory key/value store."""
    return KeyValueStore()


@pytest.fixture
def progress_store(storage):
    return ProgressStore(storage)


@pytest.fixture
def events():
    return EventManager()


@pytest.fixture
def session():
    """Session with a seeded RNG for repeatable cooldowns."""
    return GameSession(random.Random(1234))


@pytest.fixture
def fake_vendor():
    return FakeVendor()


@pytest.fixture
def audio():
    return RecordingAudio()


@pytest.fixture
def broker(fake_vendor, audio):
    return AdBroker(fake_vendor, audio=audio, request_timeout=9.0, init_timeout=8.0)


@pytest.fixture
def machine(progress_store, broker, events, session):
    """State machine sitting on the home screen."""
    return GameStateMachine(progress_store, broker, events=events, session=session)


@pytest.fixture
def playing_machine(machine):
    """State machine that has just started level 1."""
    machine.start_level(1)
    return machine


# ===========================================================
# Test Utilities
# ===========================================================

def clear_world(session):
    """Remove every hazard so the player can move freely."""
    session.enemies = []
    session.enemy_bullets = []
    session.bullets = []


def ground_player(session, x):
    """Stand the player on the ground at x with no invincibility."""
    player = session.player
    player.x = x
    player.y = 400 - player.h
    player.dy = 0
    player.on_ground = True
    player.invincible = 0


# Pytest configuration
def pytest_configure(config):
    """Custom pytest configuration."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "regression: marks tests as regression tests")


def pytest_collection_modifyitems(config, items):
    """Add unit marker to everything not explicitly marked integration."""
    for item in items:
        if "integration" not in item.keywords:
            item.add_marker(pytest.mark.unit)
