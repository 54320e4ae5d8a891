"""
Calculation utilities for elemental combat.

Contains:
- Attack resolution (critical / normal / resisted)
- Block resolution (perfect / partial / failed)
"""

from .combat import (
    AttackResultType,
    AttackResult,
    BlockResultType,
    BlockResult,
    resolve_attack,
    resolve_block,
    is_critical_matchup,
    is_resisted_matchup,
    apply_multiplier,
    # Constants
    BASE_DAMAGE,
    STRONG_MULT,
    WEAK_MULT,
    NEUTRAL_MULT,
    CHIP_DAMAGE_PERCENT,
)

__all__ = [
    "AttackResultType",
    "AttackResult",
    "BlockResultType",
    "BlockResult",
    "resolve_attack",
    "resolve_block",
    "is_critical_matchup",
    "is_resisted_matchup",
    "apply_multiplier",
    "BASE_DAMAGE",
    "STRONG_MULT",
    "WEAK_MULT",
    "NEUTRAL_MULT",
    "CHIP_DAMAGE_PERCENT",
]
