"""
Element System - The four-element rock-paper-scissors cycle.

Cycle (strong against ->):
    Fire -> Earth -> Lightning -> Water -> Fire

Each element is strong against exactly one element (its successor), weak
against exactly one (its predecessor) and neutral against itself. The
weak-against table is the exact inverse of the strong-against table.

Matchups are always read from the first argument's perspective:
    resolve_matchup(Element.FIRE, Element.EARTH)  -> STRONG
    resolve_matchup(Element.FIRE, Element.WATER)  -> WEAK
"""

import logging
from enum import Enum
from typing import Dict, List, Mapping

from ..errors import ElementCycleError

logger = logging.getLogger(__name__)


class Element(Enum):
    """Elemental damage/defense types."""
    FIRE = "fire"
    EARTH = "earth"
    LIGHTNING = "lightning"
    WATER = "water"


class ElementMatchup(Enum):
    """Outcome of comparing two elements, from the attacker's side."""
    STRONG = "strong"    # Attacker has advantage
    NEUTRAL = "neutral"  # No advantage
    WEAK = "weak"        # Defender has advantage


# Stable enumeration order used for listings and spawn rolls
ELEMENT_ORDER = (Element.FIRE, Element.EARTH, Element.LIGHTNING, Element.WATER)

STRONG_AGAINST: Dict[Element, Element] = {
    Element.FIRE: Element.EARTH,
    Element.EARTH: Element.LIGHTNING,
    Element.LIGHTNING: Element.WATER,
    Element.WATER: Element.FIRE,
}

WEAK_AGAINST: Dict[Element, Element] = {
    Element.FIRE: Element.WATER,
    Element.EARTH: Element.FIRE,
    Element.LIGHTNING: Element.EARTH,
    Element.WATER: Element.LIGHTNING,
}


# =============================================================================
# CYCLE INTEGRITY
# =============================================================================

def verify_cycle(
    strong: Mapping[Element, Element],
    weak: Mapping[Element, Element],
) -> None:
    """
    Check that the matchup tables describe one complete cycle.

    Requirements:
    1. Both tables cover every Element
    2. No element is strong or weak against itself
    3. Following strong-against visits every element once and returns home
    4. weak is the exact inverse of strong

    Raises:
        ElementCycleError: On the first violated requirement
    """
    elements = set(Element)
    if set(strong) != elements or set(weak) != elements:
        raise ElementCycleError("matchup tables must cover every element")

    for element in Element:
        if strong[element] == element or weak[element] == element:
            raise ElementCycleError(f"{element.value} cannot match against itself")

    start = ELEMENT_ORDER[0]
    seen = [start]
    current = strong[start]
    while current != start:
        if current in seen:
            raise ElementCycleError(f"strong-against loops early at {current.value}")
        seen.append(current)
        current = strong[current]
    if len(seen) != len(elements):
        raise ElementCycleError(
            f"strong-against cycle covers {len(seen)} of {len(elements)} elements"
        )

    for element, target in strong.items():
        if weak[target] != element:
            raise ElementCycleError(
                f"weak-against is not the inverse of strong-against at {target.value}"
            )


verify_cycle(STRONG_AGAINST, WEAK_AGAINST)


# =============================================================================
# RESOLUTION FUNCTIONS
# =============================================================================

def resolve_matchup(attacker: Element, defender: Element) -> ElementMatchup:
    """
    Resolve the matchup between an attacking and a defending element.

    Falls back to NEUTRAL when neither table relates the pair. With the
    verified 4-cycle this never happens.
    """
    if attacker == defender:
        return ElementMatchup.NEUTRAL

    if STRONG_AGAINST.get(attacker) == defender:
        return ElementMatchup.STRONG

    if WEAK_AGAINST.get(attacker) == defender:
        return ElementMatchup.WEAK

    logger.warning(
        "No matchup relation for %s vs %s, treating as neutral",
        attacker, defender,
    )
    return ElementMatchup.NEUTRAL


def next_in_cycle(element: Element) -> Element:
    """Element that this element is strong against."""
    return STRONG_AGAINST[element]


def previous_in_cycle(element: Element) -> Element:
    """Element that this element is weak against."""
    return WEAK_AGAINST[element]


get_strong_against = next_in_cycle
get_weak_against = previous_in_cycle


def all_elements() -> List[Element]:
    """All elements in cycle order (Fire, Earth, Lightning, Water)."""
    return list(ELEMENT_ORDER)
