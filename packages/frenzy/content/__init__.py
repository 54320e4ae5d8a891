"""
Content module - Static game definitions.

Contains:
- Element cycle and matchup resolution
- Enemy archetype stat blocks and spawn rolls
"""

from .elements import (
    Element,
    ElementMatchup,
    ELEMENT_ORDER,
    STRONG_AGAINST,
    WEAK_AGAINST,
    resolve_matchup,
    next_in_cycle,
    previous_in_cycle,
    get_strong_against,
    get_weak_against,
    all_elements,
    verify_cycle,
)
from .enemies import (
    EnemyArchetype,
    EnemyConfig,
    MAX_ELEMENTS,
    ARCHETYPE_FACTORIES,
    make_grunt,
    make_shooter,
    make_elite,
    create_enemy,
    roll_enemy,
    count_elements,
    validate,
)

__all__ = [
    # Elements
    "Element", "ElementMatchup", "ELEMENT_ORDER",
    "STRONG_AGAINST", "WEAK_AGAINST",
    "resolve_matchup", "next_in_cycle", "previous_in_cycle",
    "get_strong_against", "get_weak_against", "all_elements", "verify_cycle",
    # Enemies
    "EnemyArchetype", "EnemyConfig", "MAX_ELEMENTS", "ARCHETYPE_FACTORIES",
    "make_grunt", "make_shooter", "make_elite", "create_enemy", "roll_enemy",
    "count_elements", "validate",
]
