"""
Input Buffer - Remembers recent presses so early inputs still fire.

A press is honored if the action becomes possible within that action's
window (ms). Entries are kept in arrival order; consume() removes the
earliest valid entry for one action. prune() uses the largest window of
all actions, so an entry may linger past its own window until then -
has() and consume() always re-check the exact window.

Timestamps are supplied by the caller; the buffer never reads a clock.

Usage:
    buffer = InputBuffer.from_config(config.input)
    buffer.push(InputAction.JUMP, now)
    ...
    if state_machine.is_grounded() and buffer.consume(InputAction.JUMP, now):
        state_machine.transition(PlayerState.AIRBORNE, now)
    buffer.prune(now)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, Optional

from ..config import DEFAULT_CONFIG, InputConfig

logger = logging.getLogger(__name__)


class InputAction(Enum):
    """Player intents the buffer tracks."""
    JUMP = "jump"
    ATTACK = "attack"
    BLOCK = "block"


@dataclass(frozen=True)
class BufferedInput:
    """One remembered press."""
    action: InputAction
    timestamp: int  # ms


def windows_from_config(config: InputConfig) -> Dict[InputAction, int]:
    """Per-action windows (ms) from an InputConfig."""
    return {
        InputAction.JUMP: config.jump_buffer_ms,
        InputAction.ATTACK: config.attack_buffer_ms,
        InputAction.BLOCK: config.block_buffer_ms,
    }


# =============================================================================
# Key bindings
# =============================================================================

KEY_BINDINGS: Dict[InputAction, tuple] = {
    InputAction.JUMP: ("SPACE", "W"),
    InputAction.ATTACK: ("J",),
    InputAction.BLOCK: ("K",),
}

POINTER_BINDINGS: Dict[str, InputAction] = {
    "left": InputAction.ATTACK,
    "right": InputAction.BLOCK,
}

_KEY_TO_ACTION = {
    key: action for action, keys in KEY_BINDINGS.items() for key in keys
}


def action_for_key(key: str) -> Optional[InputAction]:
    """Translate a key name (case-insensitive) to its action, if bound."""
    return _KEY_TO_ACTION.get(key.upper())


def action_for_pointer(button: str) -> Optional[InputAction]:
    """Translate a pointer button name ("left"/"right") to its action."""
    return POINTER_BINDINGS.get(button.lower())


# =============================================================================
# Buffer
# =============================================================================


class InputBuffer:
    """
    Time-windowed memory of recent input intents.

    Owned by exactly one player session.
    """

    def __init__(self, windows: Optional[Mapping[InputAction, int]] = None):
        """
        Args:
            windows: Per-action window in ms. Actions left out use the
                engine defaults.

        Raises:
            ValueError: If a window is negative
        """
        self._windows = windows_from_config(DEFAULT_CONFIG.input)
        if windows:
            for action, window in windows.items():
                if window < 0:
                    raise ValueError(f"Negative buffer window for {action.value}: {window}")
            self._windows.update(windows)
        self._buffer: List[BufferedInput] = []

    @classmethod
    def from_config(cls, config: InputConfig) -> InputBuffer:
        return cls(windows_from_config(config))

    def window(self, action: InputAction) -> int:
        """Buffer window (ms) for an action."""
        return self._windows[action]

    def _is_valid(self, entry: BufferedInput, action: InputAction, now: int) -> bool:
        return entry.action == action and now - entry.timestamp <= self._windows[action]

    def push(self, action: InputAction, timestamp: int) -> None:
        """Record a press. No deduplication, no capacity limit."""
        self._buffer.append(BufferedInput(action, timestamp))

    def has(self, action: InputAction, now: int) -> bool:
        """True if a press of this action is still inside its window."""
        return any(self._is_valid(entry, action, now) for entry in self._buffer)

    def consume(self, action: InputAction, now: int) -> bool:
        """
        Remove the earliest still-valid press of this action.

        Returns:
            True if one was removed, False if none was buffered
        """
        for index, entry in enumerate(self._buffer):
            if self._is_valid(entry, action, now):
                del self._buffer[index]
                return True
        logger.debug("no buffered %s at t=%s", action.value, now)
        return False

    def prune(self, now: int) -> None:
        """Drop entries older than the largest window of any action."""
        max_window = max(self._windows.values())
        self._buffer = [
            entry for entry in self._buffer if now - entry.timestamp <= max_window
        ]

    def clear(self) -> None:
        self._buffer = []

    def peek(self) -> Optional[BufferedInput]:
        """Oldest entry of any action, without removing it."""
        return self._buffer[0] if self._buffer else None

    @property
    def size(self) -> int:
        """Stored entries, valid or not."""
        return len(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)
