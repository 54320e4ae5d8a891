"""
Shared pytest fixtures for the Elemental Frenzy rules engine test suite.

This module provides reusable fixtures for:
- Fresh input buffers and state machines (one per test, never shared)
- Balance configurations
- Recording state-change subscribers
"""

import pytest
import sys

# Ensure project root is in path
import os
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _project_root)

from packages.frenzy.config import EngineConfig, CombatConfig, InputConfig, StateConfig
from packages.frenzy.state.input_buffer import InputBuffer
from packages.frenzy.state.player import PlayerStateMachine


# =============================================================================
# Config Fixtures
# =============================================================================


@pytest.fixture
def default_config():
    """Engine defaults."""
    return EngineConfig()


@pytest.fixture
def tuned_combat():
    """Non-default combat balance for override tests."""
    return CombatConfig(
        base_damage=50,
        strong_multiplier=2.0,
        weak_multiplier=0.5,
        neutral_multiplier=1.0,
        chip_damage_percent=0.1,
    )


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep FRENZY_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("FRENZY_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Input Buffer Fixtures
# =============================================================================


@pytest.fixture
def buffer():
    """Input buffer with default windows (jump 150, attack 100, block 100)."""
    return InputBuffer()


@pytest.fixture
def wide_buffer():
    """Input buffer built from a wider InputConfig."""
    return InputBuffer.from_config(
        InputConfig(jump_buffer_ms=300, attack_buffer_ms=200, block_buffer_ms=250)
    )


# =============================================================================
# Player State Fixtures
# =============================================================================


@pytest.fixture
def machine():
    """Player state machine starting in RUNNING at t=0."""
    return PlayerStateMachine()


@pytest.fixture
def slow_machine():
    """State machine with doubled timed-state durations."""
    return PlayerStateMachine.from_config(
        StateConfig(attacking_ms=600, blocking_ms=800, staggered_ms=1000, recovering_ms=1200),
        timestamp=1000,
    )


class EventRecorder:
    """Subscriber that records every event it receives."""

    def __init__(self, name="recorder", log=None):
        self.name = name
        self.events = []
        self.log = log

    def __call__(self, event):
        self.events.append(event)
        if self.log is not None:
            self.log.append((self.name, event))


@pytest.fixture
def recorder():
    return EventRecorder()


@pytest.fixture
def make_recorder():
    """Factory for recorders sharing an ordering log."""
    def _make(name, log=None):
        return EventRecorder(name, log)
    return _make
