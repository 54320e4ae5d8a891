#!/usr/bin/env python3
"""
Elemental Frenzy - Command Line Interface

CLI for checking rules engine outcomes while tuning balance.

Usage:
    python cli.py matchup fire earth
    python cli.py attack fire water --damage 120
    python cli.py block earth fire --damage 40
    python cli.py cycle
    python cli.py enemies --seed 42 --count 5
    python cli.py transitions
    python cli.py controls
    python cli.py --env-file balance.env attack fire earth --json
"""

import argparse
import json
import logging
import sys
import random as py_random
from dataclasses import asdict
from enum import Enum
from typing import Any, Dict, List

from packages.frenzy.config import EngineConfig, load_config
from packages.frenzy.errors import ConfigError
from packages.frenzy.content.elements import (
    Element, resolve_matchup, next_in_cycle, previous_in_cycle, all_elements,
)
from packages.frenzy.content.enemies import EnemyConfig, EnemyArchetype, roll_enemy
from packages.frenzy.calc.combat import AttackResult, BlockResult, resolve_attack, resolve_block
from packages.frenzy.state.input_buffer import KEY_BINDINGS, POINTER_BINDINGS, InputAction
from packages.frenzy.state.player import PlayerState, VALID_TRANSITIONS, durations_from_config

logger = logging.getLogger(__name__)

ELEMENT_NAMES = [element.value for element in Element]


# =============================================================================
# OUTPUT FORMATTING
# =============================================================================

def _jsonable(obj: Any) -> Any:
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, dict):
        return {key: _jsonable(value) for key, value in obj.items()}
    return obj


def format_attack(attack: Element, defense: Element, damage: int, result: AttackResult) -> str:
    """Format an attack resolution."""
    lines = [f"{attack.value.capitalize()} attack vs {defense.value.capitalize()} defense ({damage} base)"]
    lines.append(f"  Result: {result.type.value.upper()}")
    lines.append(f"  Damage: {result.damage}")
    if result.guard_break:
        lines.append("  Guard break!")
    if result.attacker_stagger:
        lines.append("  Attacker staggers")
    return "\n".join(lines)


def format_block(projectile: Element, shield: Element, damage: int, result: BlockResult) -> str:
    """Format a block resolution."""
    lines = [f"{projectile.value.capitalize()} projectile vs {shield.value.capitalize()} shield ({damage} incoming)"]
    lines.append(f"  Result: {result.type.value.upper()}")
    lines.append(f"  Damage taken: {result.damage_taken}")
    if result.stagger:
        lines.append("  Blocker staggers")
    if result.knockback:
        lines.append("  Knockback")
    return "\n".join(lines)


def format_enemy(index: int, enemy: EnemyConfig) -> str:
    """Format one enemy stat block."""
    defense = enemy.defense_element.value if enemy.defense_element else "-"
    attack = enemy.attack_element.value if enemy.attack_element else "-"
    return (
        f"  {index}. {enemy.archetype.value:<8} def={defense:<9} atk={attack:<9} "
        f"hp={enemy.health:<4} speed={enemy.speed_multiplier:<4} dmg={enemy.damage}"
    )


def format_cycle() -> str:
    names = [element.value.capitalize() for element in all_elements()]
    return " -> ".join(names + [names[0]])


def format_controls(config: EngineConfig) -> str:
    """Controls screen text."""
    pointer = {action: button for button, action in POINTER_BINDINGS.items()}
    lines = ["ELEMENTAL FRENZY - CONTROLS", ""]
    for action in InputAction:
        keys = " or ".join(KEY_BINDINGS[action])
        if action in pointer:
            keys += f" / {pointer[action].capitalize()} Click"
        lines.append(f"  {action.value.upper():<9} {keys}")
    strong = config.combat.strong_multiplier
    weak = config.combat.weak_multiplier
    lines += [
        "",
        "ELEMENT CYCLE",
        f"  {format_cycle()}",
        "        (strong against ->)",
        f"  Strong hit = +{round((strong - 1) * 100)}% damage",
        f"  Weak hit = {round(weak * 100)}% damage + stagger",
        "  Correct block = full protection",
        "  Wrong block = knockback",
    ]
    return "\n".join(lines)


# =============================================================================
# COMMANDS
# =============================================================================

def cmd_matchup(args, config: EngineConfig) -> int:
    attacker, defender = Element(args.attacker), Element(args.defender)
    matchup = resolve_matchup(attacker, defender)
    if args.json:
        print(json.dumps({"attacker": attacker.value, "defender": defender.value,
                          "matchup": matchup.value}))
    else:
        print(f"{attacker.value} vs {defender.value}: {matchup.value.upper()}")
    return 0


def cmd_attack(args, config: EngineConfig) -> int:
    attack, defense = Element(args.attack), Element(args.defense)
    damage = config.combat.base_damage if args.damage is None else args.damage
    result = resolve_attack(attack, defense, damage, config=config.combat)
    if args.json:
        print(json.dumps(_jsonable(asdict(result))))
    else:
        print(format_attack(attack, defense, damage, result))
    return 0


def cmd_block(args, config: EngineConfig) -> int:
    projectile, shield = Element(args.projectile), Element(args.shield)
    result = resolve_block(projectile, shield, args.damage, config=config.combat)
    if args.json:
        print(json.dumps(_jsonable(asdict(result))))
    else:
        print(format_block(projectile, shield, args.damage, result))
    return 0


def cmd_cycle(args, config: EngineConfig) -> int:
    print(format_cycle())
    print()
    for element in all_elements():
        print(f"  {element.value:<9} strong vs {next_in_cycle(element).value:<9} "
              f"weak vs {previous_in_cycle(element).value}")
    return 0


def cmd_enemies(args, config: EngineConfig) -> int:
    rng = py_random.Random(args.seed)
    archetypes = [EnemyArchetype(name) for name in args.archetype] if args.archetype else None
    enemies = [roll_enemy(rng, archetypes) for _ in range(args.count)]
    logger.debug("rolled %d enemies with seed %s", len(enemies), args.seed)
    if args.json:
        print(json.dumps([_jsonable(asdict(enemy)) for enemy in enemies]))
        return 0
    print(f"Seed: {args.seed}")
    for i, enemy in enumerate(enemies, 1):
        print(format_enemy(i, enemy))
    return 0


def cmd_transitions(args, config: EngineConfig) -> int:
    durations = durations_from_config(config.states)
    rows: List[Dict[str, Any]] = []
    for state in PlayerState:
        allowed = sorted(target.value for target in VALID_TRANSITIONS[state])
        rows.append({"state": state.value, "duration_ms": durations.get(state), "to": allowed})
    if args.json:
        print(json.dumps(rows))
        return 0
    for row in rows:
        duration = f"{row['duration_ms']}ms" if row["duration_ms"] is not None else "-"
        targets = ", ".join(row["to"]) or "(terminal)"
        print(f"  {row['state']:<11} {duration:>6}  -> {targets}")
    return 0


def cmd_controls(args, config: EngineConfig) -> int:
    print(format_controls(config))
    return 0


# =============================================================================
# MAIN
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Elemental Frenzy - rules engine CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s matchup fire earth
  %(prog)s attack fire water --damage 120
  %(prog)s block earth fire --damage 40
  %(prog)s enemies --seed 42 --count 5
  %(prog)s --env-file balance.env transitions
        """
    )
    parser.add_argument("--env-file", "-e", help="Load FRENZY_* overrides from a .env file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    matchup_parser = subparsers.add_parser("matchup", help="Resolve an element matchup")
    matchup_parser.add_argument("attacker", choices=ELEMENT_NAMES)
    matchup_parser.add_argument("defender", choices=ELEMENT_NAMES)
    matchup_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")

    attack_parser = subparsers.add_parser("attack", help="Resolve an attack")
    attack_parser.add_argument("attack", choices=ELEMENT_NAMES, help="Attack element")
    attack_parser.add_argument("defense", choices=ELEMENT_NAMES, help="Defense element")
    attack_parser.add_argument("--damage", "-d", type=int, help="Base damage (default: configured)")
    attack_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")

    block_parser = subparsers.add_parser("block", help="Resolve a block")
    block_parser.add_argument("projectile", choices=ELEMENT_NAMES, help="Projectile element")
    block_parser.add_argument("shield", choices=ELEMENT_NAMES, help="Shield element")
    block_parser.add_argument("--damage", "-d", type=int, default=20, help="Incoming damage")
    block_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")

    subparsers.add_parser("cycle", help="Show the element cycle")

    enemies_parser = subparsers.add_parser("enemies", help="Roll seeded enemy spawns")
    enemies_parser.add_argument("--seed", "-s", type=int, default=0, help="Spawn seed")
    enemies_parser.add_argument("--count", "-n", type=int, default=5, help="Number of enemies")
    enemies_parser.add_argument("--archetype", "-a", action="append",
                                choices=[a.value for a in EnemyArchetype],
                                help="Restrict to archetype (repeatable)")
    enemies_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")

    transitions_parser = subparsers.add_parser("transitions", help="Show the player state table")
    transitions_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")

    subparsers.add_parser("controls", help="Show controls and element rules")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args.env_file)
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    # Dispatch to command handler
    commands = {
        "matchup": cmd_matchup,
        "attack": cmd_attack,
        "block": cmd_block,
        "cycle": cmd_cycle,
        "enemies": cmd_enemies,
        "transitions": cmd_transitions,
        "controls": cmd_controls,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args, config)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
