"""
Player State Machine - Player action state with validated transitions.

States:
- Running: default auto-runner state on the ground
- Airborne: jumping or falling
- Attacking: sword swing (300ms)
- Blocking: shield up (400ms)
- Staggered: recoil from a failed block or resisted attack (500ms)
- Recovering: getting up after knockback (600ms)
- Dead: terminal

Transitions are checked against VALID_TRANSITIONS. force_state() bypasses
the table for authoritative overrides (player died, level reset).

The machine does not end timed states by itself. Collaborators compare
get_state_time(now) with state_duration() each tick and transition back
when the duration has elapsed.

Subscribers are called synchronously, in subscription order, before
transition()/force_state() returns.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, FrozenSet, List, Mapping, Optional, Tuple

from ..config import DEFAULT_CONFIG, StateConfig

logger = logging.getLogger(__name__)


class PlayerState(Enum):
    """Player action states."""
    RUNNING = "running"
    AIRBORNE = "airborne"
    ATTACKING = "attacking"
    BLOCKING = "blocking"
    STAGGERED = "staggered"
    RECOVERING = "recovering"
    DEAD = "dead"


def durations_from_config(config: StateConfig) -> Dict[PlayerState, int]:
    """Per-state durations (ms) from a StateConfig."""
    return {
        PlayerState.ATTACKING: config.attacking_ms,
        PlayerState.BLOCKING: config.blocking_ms,
        PlayerState.STAGGERED: config.staggered_ms,
        PlayerState.RECOVERING: config.recovering_ms,
    }


# Running, Airborne and Dead are unbounded and have no entry
STATE_DURATIONS: Dict[PlayerState, int] = durations_from_config(DEFAULT_CONFIG.states)

VALID_TRANSITIONS: Dict[PlayerState, FrozenSet[PlayerState]] = {
    PlayerState.RUNNING: frozenset({
        PlayerState.AIRBORNE,
        PlayerState.ATTACKING,
        PlayerState.BLOCKING,
        PlayerState.STAGGERED,
        PlayerState.DEAD,
    }),
    PlayerState.AIRBORNE: frozenset({
        PlayerState.RUNNING,
        PlayerState.ATTACKING,
        PlayerState.STAGGERED,
        PlayerState.DEAD,
    }),
    PlayerState.ATTACKING: frozenset({
        PlayerState.RUNNING,
        PlayerState.AIRBORNE,
        PlayerState.STAGGERED,
        PlayerState.DEAD,
    }),
    PlayerState.BLOCKING: frozenset({
        PlayerState.RUNNING,
        PlayerState.STAGGERED,
        PlayerState.DEAD,
    }),
    PlayerState.STAGGERED: frozenset({
        PlayerState.RECOVERING,
        PlayerState.DEAD,
    }),
    PlayerState.RECOVERING: frozenset({
        PlayerState.RUNNING,
        PlayerState.DEAD,
    }),
    PlayerState.DEAD: frozenset(),
}

INCAPACITATED_STATES = frozenset({
    PlayerState.STAGGERED,
    PlayerState.RECOVERING,
    PlayerState.DEAD,
})

ACTION_STATES = frozenset({PlayerState.ATTACKING, PlayerState.BLOCKING})


@dataclass(frozen=True)
class StateChangeEvent:
    """Delivered to subscribers on every state change."""
    from_state: PlayerState
    to_state: PlayerState
    timestamp: int


StateChangeCallback = Callable[[StateChangeEvent], None]


class PlayerStateMachine:
    """
    Finite-state model of one player's combat/movement state.

    One instance per player session.
    """

    def __init__(
        self,
        initial_state: PlayerState = PlayerState.RUNNING,
        timestamp: int = 0,
        durations: Optional[Mapping[PlayerState, int]] = None,
    ):
        """
        Args:
            initial_state: Starting state
            timestamp: Entry time (ms) of the starting state
            durations: Per-state durations overriding STATE_DURATIONS

        Raises:
            ValueError: If a duration is negative
        """
        self._state = initial_state
        self._state_timestamp = timestamp
        self._durations = dict(STATE_DURATIONS)
        if durations:
            for state, duration in durations.items():
                if duration < 0:
                    raise ValueError(f"Negative duration for {state.value}: {duration}")
            self._durations.update(durations)
        # (token, callback) so duplicate callbacks unsubscribe independently
        self._listeners: List[Tuple[object, StateChangeCallback]] = []

    @classmethod
    def from_config(cls, config: StateConfig, timestamp: int = 0) -> PlayerStateMachine:
        return cls(timestamp=timestamp, durations=durations_from_config(config))

    @property
    def state(self) -> PlayerState:
        return self._state

    @property
    def state_timestamp(self) -> int:
        """Time (ms) the current state was entered."""
        return self._state_timestamp

    def get_state_time(self, now: int) -> int:
        """Milliseconds spent in the current state."""
        return now - self._state_timestamp

    def state_duration(self, state: Optional[PlayerState] = None) -> Optional[int]:
        """Configured duration (ms) of a state, None if unbounded."""
        return self._durations.get(self._state if state is None else state)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def can_transition(self, new_state: PlayerState) -> bool:
        return new_state in VALID_TRANSITIONS[self._state]

    def transition(self, new_state: PlayerState, timestamp: int) -> bool:
        """
        Move to new_state if the transition table allows it.

        Returns:
            True on success. False leaves the state untouched and notifies
            nobody.
        """
        if not self.can_transition(new_state):
            logger.debug(
                "rejected transition %s -> %s at t=%s",
                self._state.value, new_state.value, timestamp,
            )
            return False
        self._enter(new_state, timestamp)
        return True

    def force_state(self, new_state: PlayerState, timestamp: int) -> None:
        """Set the state unconditionally. Use for authoritative overrides."""
        logger.debug(
            "forced %s -> %s at t=%s", self._state.value, new_state.value, timestamp
        )
        self._enter(new_state, timestamp)

    def reset(self, timestamp: int) -> None:
        """Force back to RUNNING, entered at timestamp (ms)."""
        self.force_state(PlayerState.RUNNING, timestamp)

    def _enter(self, new_state: PlayerState, timestamp: int) -> None:
        event = StateChangeEvent(
            from_state=self._state,
            to_state=new_state,
            timestamp=timestamp,
        )
        self._state = new_state
        self._state_timestamp = timestamp

        for _, callback in list(self._listeners):
            callback(event)

    # -------------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------------

    def subscribe(self, callback: StateChangeCallback) -> Callable[[], None]:
        """
        Register a callback for every future state change.

        Returns:
            Function removing exactly this registration. Extra calls do
            nothing.
        """
        token = object()
        self._listeners.append((token, callback))

        def unsubscribe() -> None:
            for index, (entry_token, _) in enumerate(self._listeners):
                if entry_token is token:
                    del self._listeners[index]
                    return

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def can_act(self) -> bool:
        """False while staggered, recovering or dead."""
        return self._state not in INCAPACITATED_STATES

    def is_grounded(self) -> bool:
        return self._state != PlayerState.AIRBORNE

    def is_acting(self) -> bool:
        """True while attacking or blocking."""
        return self._state in ACTION_STATES
