"""
Elemental Frenzy Rules Engine

Deterministic rules for a 2D side-scrolling elemental combat game. The
scene layer (rendering, audio, device polling) calls into this package and
reacts to its results; all timestamps are supplied by the caller.

Core subsystems:
- content: Element cycle, enemy archetypes
- calc: Attack and block resolution
- state: Input buffer, player state machine
- config: Tunable balance values, .env loading

Usage:
    from packages.frenzy import (
        Element, resolve_attack, InputBuffer, InputAction,
        PlayerStateMachine, PlayerState,
    )

    buffer = InputBuffer()
    player = PlayerStateMachine(timestamp=now)

    buffer.push(InputAction.ATTACK, now)
    if player.can_act() and buffer.consume(InputAction.ATTACK, now):
        player.transition(PlayerState.ATTACKING, now)
        result = resolve_attack(Element.FIRE, enemy.defense_element)
        if result.attacker_stagger:
            player.transition(PlayerState.STAGGERED, now)
"""

__version__ = "0.1.0"

# Configuration
from .config import (
    EngineConfig, CombatConfig, InputConfig, StateConfig, GameConfig,
    DEFAULT_CONFIG, load_config,
)
from .errors import FrenzyError, ElementCycleError, ConfigError

# Elements
from .content.elements import (
    Element, ElementMatchup, resolve_matchup,
    next_in_cycle, previous_in_cycle, all_elements,
)

# Enemies
from .content.enemies import (
    EnemyArchetype, EnemyConfig,
    make_grunt, make_shooter, make_elite, create_enemy, roll_enemy,
    count_elements, validate,
)

# Combat
from .calc.combat import (
    AttackResultType, AttackResult, BlockResultType, BlockResult,
    resolve_attack, resolve_block, is_critical_matchup, is_resisted_matchup,
)

# Input
from .state.input_buffer import (
    InputAction, BufferedInput, InputBuffer, action_for_key, action_for_pointer,
)

# Player
from .state.player import (
    PlayerState, PlayerStateMachine, StateChangeEvent,
    STATE_DURATIONS, VALID_TRANSITIONS,
)
