"""
Combat Resolver - Attack and block outcomes from elemental matchups.

Design principles:
1. Pure functions - no side effects, no state
2. Every number comes from CombatConfig (tunable, never hardwired)
3. Floor to int, minimum 0

Attack (attacker's element vs defender's element):
    STRONG  -> CRITICAL: base * strong_multiplier, guard break
    WEAK    -> RESISTED: base * weak_multiplier, attacker staggers
    NEUTRAL -> NORMAL:   base damage

Block (evaluated from the SHIELD's side against the projectile):
    STRONG  -> PERFECT: no damage
    WEAK    -> FAILED:  full damage, stagger + knockback
    NEUTRAL -> PARTIAL: chip damage (incoming * chip_damage_percent)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..config import DEFAULT_CONFIG, CombatConfig
from ..content.elements import Element, ElementMatchup, resolve_matchup

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
    "STRONG_MULT",
    "WEAK_MULT",
    "NEUTRAL_MULT",
    "CHIP_DAMAGE_PERCENT",
    "BASE_DAMAGE",
]


# =============================================================================
# CONSTANTS - Defaults, overridable through CombatConfig
# =============================================================================

BASE_DAMAGE = DEFAULT_CONFIG.combat.base_damage
STRONG_MULT = DEFAULT_CONFIG.combat.strong_multiplier      # +200% = 3x damage
WEAK_MULT = DEFAULT_CONFIG.combat.weak_multiplier          # 30% damage
NEUTRAL_MULT = DEFAULT_CONFIG.combat.neutral_multiplier
CHIP_DAMAGE_PERCENT = DEFAULT_CONFIG.combat.chip_damage_percent


# =============================================================================
# RESULT TYPES
# =============================================================================

class AttackResultType(Enum):
    """How an attack landed."""
    CRITICAL = "critical"  # Strong matchup - bonus damage, guard break
    NORMAL = "normal"      # Neutral matchup - standard damage
    RESISTED = "resisted"  # Weak matchup - reduced damage, attacker staggers


@dataclass(frozen=True)
class AttackResult:
    """Outcome of a single attack resolution."""
    type: AttackResultType
    damage: int
    attacker_stagger: bool  # Weak matchup recoils the attacker
    guard_break: bool       # Strong matchup breaks the defender's guard


class BlockResultType(Enum):
    """How a block held up."""
    PERFECT = "perfect"  # No damage
    PARTIAL = "partial"  # Chip damage
    FAILED = "failed"    # Full damage + stagger


@dataclass(frozen=True)
class BlockResult:
    """Outcome of a single block resolution."""
    type: BlockResultType
    damage_taken: int
    stagger: bool
    knockback: bool


# =============================================================================
# DAMAGE HELPERS
# =============================================================================

def apply_multiplier(amount: float, multiplier: float) -> int:
    """Scale an amount, floor to int, minimum 0."""
    return max(0, int(amount * multiplier))


# =============================================================================
# ATTACK RESOLUTION
# =============================================================================

def resolve_attack(
    attack_element: Element,
    defense_element: Element,
    base_damage: Optional[int] = None,
    config: Optional[CombatConfig] = None,
) -> AttackResult:
    """
    Resolve an attack against a defender.

    Args:
        attack_element: Element of the attack
        defense_element: Element of the defender
        base_damage: Damage before the matchup (default: config.base_damage)
        config: Balance values (default: engine defaults)

    Returns:
        AttackResult with floored, non-negative damage
    """
    config = config or DEFAULT_CONFIG.combat
    if base_damage is None:
        base_damage = config.base_damage

    matchup = resolve_matchup(attack_element, defense_element)

    if matchup == ElementMatchup.STRONG:
        return AttackResult(
            type=AttackResultType.CRITICAL,
            damage=apply_multiplier(base_damage, config.strong_multiplier),
            attacker_stagger=False,
            guard_break=True,
        )

    if matchup == ElementMatchup.WEAK:
        return AttackResult(
            type=AttackResultType.RESISTED,
            damage=apply_multiplier(base_damage, config.weak_multiplier),
            attacker_stagger=True,
            guard_break=False,
        )

    return AttackResult(
        type=AttackResultType.NORMAL,
        damage=apply_multiplier(base_damage, config.neutral_multiplier),
        attacker_stagger=False,
        guard_break=False,
    )


# =============================================================================
# BLOCK RESOLUTION
# =============================================================================

def resolve_block(
    projectile_element: Element,
    shield_element: Element,
    incoming_damage: int,
    config: Optional[CombatConfig] = None,
) -> BlockResult:
    """
    Resolve a block against an incoming projectile.

    The matchup is read from the shield's side: a Fire shield is STRONG
    against an Earth projectile, so that block is PERFECT.

    Args:
        projectile_element: Element of the incoming projectile
        shield_element: Element of the raised shield
        incoming_damage: Projectile damage before blocking
        config: Balance values (default: engine defaults)

    Returns:
        BlockResult with floored, non-negative damage taken
    """
    config = config or DEFAULT_CONFIG.combat

    matchup = resolve_matchup(shield_element, projectile_element)

    if matchup == ElementMatchup.STRONG:
        return BlockResult(
            type=BlockResultType.PERFECT,
            damage_taken=0,
            stagger=False,
            knockback=False,
        )

    if matchup == ElementMatchup.WEAK:
        return BlockResult(
            type=BlockResultType.FAILED,
            damage_taken=apply_multiplier(incoming_damage, 1.0),
            stagger=True,
            knockback=True,
        )

    return BlockResult(
        type=BlockResultType.PARTIAL,
        damage_taken=apply_multiplier(incoming_damage, config.chip_damage_percent),
        stagger=False,
        knockback=False,
    )


# =============================================================================
# TELEGRAPH CHECKS
# =============================================================================

def is_critical_matchup(attack_element: Element, defense_element: Element) -> bool:
    """True if this attack would land as CRITICAL."""
    return resolve_matchup(attack_element, defense_element) == ElementMatchup.STRONG


def is_resisted_matchup(attack_element: Element, defense_element: Element) -> bool:
    """True if this attack would be RESISTED."""
    return resolve_matchup(attack_element, defense_element) == ElementMatchup.WEAK
