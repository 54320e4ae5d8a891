"""
Enemy Archetypes - Stat blocks for each enemy template.

Archetypes:
- Grunt: melee, single defense element (body color resists player attacks)
- Shooter: ranged, single attack element (projectile color)
- Elite: both a defense and an attack element

Rule: an enemy carries at most two elements. The factories below satisfy
this by construction; validate() exists for configs built elsewhere.

Usage:
    grunt = make_grunt(Element.FIRE)
    elite = create_enemy(EnemyArchetype.ELITE, defense=Element.WATER, attack=Element.EARTH)
    spawn = roll_enemy(random.Random(42))
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Sequence

from .elements import Element, all_elements


MAX_ELEMENTS = 2


class EnemyArchetype(Enum):
    """Enemy templates."""
    GRUNT = "grunt"
    SHOOTER = "shooter"
    ELITE = "elite"


@dataclass(frozen=True)
class EnemyConfig:
    """Immutable stat block for one enemy."""
    archetype: EnemyArchetype
    defense_element: Optional[Element]  # Resists player attacks
    attack_element: Optional[Element]   # Element of projectiles
    health: int
    speed_multiplier: float  # 1.0 = normal
    damage: int  # Contact damage dealt to the player


# ============ ARCHETYPE FACTORIES ============

def make_grunt(defense: Element) -> EnemyConfig:
    """Create a grunt (melee, defense element only)."""
    return EnemyConfig(
        archetype=EnemyArchetype.GRUNT,
        defense_element=defense,
        attack_element=None,
        health=100,
        speed_multiplier=1.0,
        damage=20,
    )


def make_shooter(attack: Element) -> EnemyConfig:
    """Create a shooter (ranged, attack element only)."""
    return EnemyConfig(
        archetype=EnemyArchetype.SHOOTER,
        defense_element=None,
        attack_element=attack,
        health=60,
        speed_multiplier=0.8,
        damage=15,
    )


def make_elite(defense: Element, attack: Element) -> EnemyConfig:
    """Create an elite (defense and attack elements)."""
    return EnemyConfig(
        archetype=EnemyArchetype.ELITE,
        defense_element=defense,
        attack_element=attack,
        health=200,
        speed_multiplier=0.7,
        damage=30,
    )


# ============ VALIDATION ============

def count_elements(config: EnemyConfig) -> int:
    """Number of elements the enemy carries (0, 1 or 2)."""
    count = 0
    if config.defense_element is not None:
        count += 1
    if config.attack_element is not None:
        count += 1
    return count


def validate(config: EnemyConfig) -> bool:
    """True if the config respects the element limit. Never raises."""
    return count_elements(config) <= MAX_ELEMENTS


# ============ FACTORY REGISTRY ============

ARCHETYPE_FACTORIES: Dict[EnemyArchetype, Callable[..., EnemyConfig]] = {
    EnemyArchetype.GRUNT: lambda defense, attack: make_grunt(defense),
    EnemyArchetype.SHOOTER: lambda defense, attack: make_shooter(attack),
    EnemyArchetype.ELITE: make_elite,
}

# Which element slots each archetype requires
REQUIRED_ELEMENTS = {
    EnemyArchetype.GRUNT: ("defense",),
    EnemyArchetype.SHOOTER: ("attack",),
    EnemyArchetype.ELITE: ("defense", "attack"),
}


def create_enemy(
    archetype: EnemyArchetype,
    defense: Optional[Element] = None,
    attack: Optional[Element] = None,
) -> EnemyConfig:
    """
    Create an enemy of the given archetype.

    Elements the archetype does not use are ignored.

    Raises:
        ValueError: If an element the archetype requires is missing
    """
    provided = {"defense": defense, "attack": attack}
    missing = [slot for slot in REQUIRED_ELEMENTS[archetype] if provided[slot] is None]
    if missing:
        raise ValueError(
            f"{archetype.value} requires {' and '.join(missing)} element"
        )
    return ARCHETYPE_FACTORIES[archetype](defense, attack)


def roll_enemy(
    rng: random.Random,
    archetypes: Optional[Sequence[EnemyArchetype]] = None,
) -> EnemyConfig:
    """
    Roll a random enemy using a caller-owned RNG.

    Draw order is archetype, then defense element, then attack element, so
    the same seed always spawns the same enemy.
    """
    pool = list(archetypes) if archetypes else list(EnemyArchetype)
    archetype = rng.choice(pool)
    elements = all_elements()
    defense = rng.choice(elements)
    attack = rng.choice(elements)
    return create_enemy(archetype, defense=defense, attack=attack)
