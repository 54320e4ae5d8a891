"""
State module - Per-session mutable state.

Contains:
- Input buffer (time-windowed press memory, key bindings)
- Player state machine (validated transitions, subscribers)
"""

from .input_buffer import (
    InputAction,
    BufferedInput,
    InputBuffer,
    KEY_BINDINGS,
    POINTER_BINDINGS,
    action_for_key,
    action_for_pointer,
    windows_from_config,
)
from .player import (
    PlayerState,
    PlayerStateMachine,
    StateChangeEvent,
    STATE_DURATIONS,
    VALID_TRANSITIONS,
    durations_from_config,
)

__all__ = [
    # Input
    "InputAction", "BufferedInput", "InputBuffer",
    "KEY_BINDINGS", "POINTER_BINDINGS", "action_for_key", "action_for_pointer",
    "windows_from_config",
    # Player
    "PlayerState", "PlayerStateMachine", "StateChangeEvent",
    "STATE_DURATIONS", "VALID_TRANSITIONS", "durations_from_config",
]
