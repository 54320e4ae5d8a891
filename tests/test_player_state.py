"""
Player State Machine Tests

Tests the transition table, forced overrides, subscriber fan-out and the
state queries the scene layer gates input on.
"""

import pytest

from packages.frenzy.state.player import (
    PlayerState, PlayerStateMachine, StateChangeEvent,
    STATE_DURATIONS, VALID_TRANSITIONS,
)


EXPECTED_TABLE = {
    PlayerState.RUNNING: {
        PlayerState.AIRBORNE, PlayerState.ATTACKING, PlayerState.BLOCKING,
        PlayerState.STAGGERED, PlayerState.DEAD,
    },
    PlayerState.AIRBORNE: {
        PlayerState.RUNNING, PlayerState.ATTACKING, PlayerState.STAGGERED, PlayerState.DEAD,
    },
    PlayerState.ATTACKING: {
        PlayerState.RUNNING, PlayerState.AIRBORNE, PlayerState.STAGGERED, PlayerState.DEAD,
    },
    PlayerState.BLOCKING: {PlayerState.RUNNING, PlayerState.STAGGERED, PlayerState.DEAD},
    PlayerState.STAGGERED: {PlayerState.RECOVERING, PlayerState.DEAD},
    PlayerState.RECOVERING: {PlayerState.RUNNING, PlayerState.DEAD},
    PlayerState.DEAD: set(),
}


class TestTable:

    def test_table_matches(self):
        assert {state: set(targets) for state, targets in VALID_TRANSITIONS.items()} == EXPECTED_TABLE

    def test_no_self_loops(self):
        for state, targets in VALID_TRANSITIONS.items():
            assert state not in targets

    @pytest.mark.parametrize("start", list(PlayerState))
    def test_can_transition_matches_table(self, start):
        machine = PlayerStateMachine(initial_state=start)
        for target in PlayerState:
            assert machine.can_transition(target) == (target in EXPECTED_TABLE[start])

    def test_durations(self):
        assert STATE_DURATIONS == {
            PlayerState.ATTACKING: 300,
            PlayerState.BLOCKING: 400,
            PlayerState.STAGGERED: 500,
            PlayerState.RECOVERING: 600,
        }


class TestTransition:

    def test_starts_running(self, machine):
        assert machine.state == PlayerState.RUNNING
        assert machine.state_timestamp == 0

    def test_valid_transition(self, machine):
        assert machine.transition(PlayerState.ATTACKING, 100)
        assert machine.state == PlayerState.ATTACKING
        assert machine.state_timestamp == 100

    def test_invalid_transition_is_noop(self, machine, recorder):
        machine.transition(PlayerState.BLOCKING, 10)
        machine.subscribe(recorder)
        assert not machine.transition(PlayerState.AIRBORNE, 20)
        assert machine.state == PlayerState.BLOCKING
        assert machine.state_timestamp == 10
        assert recorder.events == []

    def test_stagger_recovery_chain(self, machine):
        assert machine.transition(PlayerState.STAGGERED, 0)
        assert not machine.transition(PlayerState.RUNNING, 500)
        assert machine.transition(PlayerState.RECOVERING, 500)
        assert machine.transition(PlayerState.RUNNING, 1100)

    @pytest.mark.parametrize("target", list(PlayerState))
    def test_dead_is_terminal(self, target):
        machine = PlayerStateMachine(initial_state=PlayerState.DEAD)
        assert not machine.transition(target, 5)
        assert machine.state == PlayerState.DEAD

    def test_can_transition_is_pure(self, machine):
        machine.can_transition(PlayerState.DEAD)
        assert machine.state == PlayerState.RUNNING


class TestForceState:

    def test_force_from_dead(self, recorder):
        machine = PlayerStateMachine(initial_state=PlayerState.DEAD)
        machine.subscribe(recorder)
        machine.force_state(PlayerState.RUNNING, 42)
        assert machine.state == PlayerState.RUNNING
        assert machine.state_timestamp == 42
        assert recorder.events == [
            StateChangeEvent(PlayerState.DEAD, PlayerState.RUNNING, 42)
        ]

    def test_force_outside_table(self, machine):
        machine.force_state(PlayerState.RECOVERING, 7)
        assert machine.state == PlayerState.RECOVERING

    def test_reset(self, machine, recorder):
        machine.transition(PlayerState.DEAD, 300)
        machine.subscribe(recorder)
        machine.reset(450)
        assert machine.state == PlayerState.RUNNING
        assert machine.state_timestamp == 450
        assert machine.get_state_time(500) == 50
        assert recorder.events == [
            StateChangeEvent(PlayerState.DEAD, PlayerState.RUNNING, 450)
        ]

    def test_reset_requires_timestamp(self, machine):
        with pytest.raises(TypeError):
            machine.reset()


class TestSubscribers:

    def test_event_contents(self, machine, recorder):
        machine.subscribe(recorder)
        machine.transition(PlayerState.AIRBORNE, 250)
        assert recorder.events == [
            StateChangeEvent(PlayerState.RUNNING, PlayerState.AIRBORNE, 250)
        ]

    def test_fan_out_in_order(self, machine, make_recorder):
        log = []
        recorders = [make_recorder(name, log) for name in ("a", "b", "c")]
        for r in recorders:
            machine.subscribe(r)
        machine.transition(PlayerState.BLOCKING, 1)
        machine.force_state(PlayerState.DEAD, 2)
        assert [name for name, _ in log] == ["a", "b", "c", "a", "b", "c"]
        for r in recorders:
            assert len(r.events) == 2

    def test_notified_after_state_update(self, machine):
        seen = []
        machine.subscribe(lambda event: seen.append(machine.state))
        machine.transition(PlayerState.ATTACKING, 5)
        assert seen == [PlayerState.ATTACKING]

    def test_unsubscribe(self, machine, recorder):
        unsubscribe = machine.subscribe(recorder)
        machine.transition(PlayerState.AIRBORNE, 1)
        unsubscribe()
        machine.transition(PlayerState.RUNNING, 2)
        assert len(recorder.events) == 1
        assert machine.subscriber_count == 0

    def test_unsubscribe_twice_is_noop(self, machine, recorder, make_recorder):
        other = make_recorder("other")
        unsubscribe = machine.subscribe(recorder)
        machine.subscribe(other)
        unsubscribe()
        unsubscribe()
        assert machine.subscriber_count == 1
        machine.transition(PlayerState.AIRBORNE, 1)
        assert len(other.events) == 1

    def test_duplicate_callback_removed_once(self, machine, recorder):
        """Each registration has its own handle."""
        first = machine.subscribe(recorder)
        machine.subscribe(recorder)
        first()
        machine.transition(PlayerState.AIRBORNE, 1)
        assert len(recorder.events) == 1

    def test_unsubscribe_during_notification(self, machine, make_recorder):
        later = make_recorder("later")
        handles = {}

        def drop_later(event):
            handles["later"]()

        machine.subscribe(drop_later)
        handles["later"] = machine.subscribe(later)
        machine.transition(PlayerState.AIRBORNE, 1)
        machine.transition(PlayerState.RUNNING, 2)
        # Still delivered for the transition in progress, not afterwards
        assert len(later.events) == 1


class TestTiming:

    def test_state_time(self, machine):
        machine.transition(PlayerState.ATTACKING, 1000)
        assert machine.get_state_time(1000) == 0
        assert machine.get_state_time(1300) == 300

    def test_state_duration(self, machine):
        assert machine.state_duration() is None
        machine.transition(PlayerState.BLOCKING, 0)
        assert machine.state_duration() == 400
        assert machine.state_duration(PlayerState.RECOVERING) == 600
        assert machine.state_duration(PlayerState.DEAD) is None

    def test_configured_durations(self, slow_machine):
        assert slow_machine.state_timestamp == 1000
        assert slow_machine.state_duration(PlayerState.STAGGERED) == 1000

    def test_negative_duration_rejected(self):
        with pytest.raises(ValueError, match="blocking"):
            PlayerStateMachine(durations={PlayerState.BLOCKING: -400})

    def test_collaborator_expiry_loop(self, machine):
        """The scene ends a timed state once elapsed >= duration."""
        machine.transition(PlayerState.ATTACKING, 0)
        for now in (100, 200, 299):
            assert machine.get_state_time(now) < machine.state_duration()
        assert machine.get_state_time(300) >= machine.state_duration()
        assert machine.transition(PlayerState.RUNNING, 300)


class TestQueries:

    @pytest.mark.parametrize("state,can_act,grounded,acting", [
        (PlayerState.RUNNING, True, True, False),
        (PlayerState.AIRBORNE, True, False, False),
        (PlayerState.ATTACKING, True, True, True),
        (PlayerState.BLOCKING, True, True, True),
        (PlayerState.STAGGERED, False, True, False),
        (PlayerState.RECOVERING, False, True, False),
        (PlayerState.DEAD, False, True, False),
    ])
    def test_queries(self, state, can_act, grounded, acting):
        machine = PlayerStateMachine(initial_state=state)
        assert machine.can_act() == can_act
        assert machine.is_grounded() == grounded
        assert machine.is_acting() == acting

    def test_instances_are_independent(self):
        first, second = PlayerStateMachine(), PlayerStateMachine()
        first.transition(PlayerState.DEAD, 0)
        assert second.state == PlayerState.RUNNING
