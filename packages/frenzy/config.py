"""
Engine Configuration - Tunable balance values for combat, input and states.

Every number the rules engine compares against lives here so balance passes
and deterministic tests can override it without touching code:

- CombatConfig: base damage, matchup multipliers, chip damage
- InputConfig: per-action buffer windows (ms)
- StateConfig: per-state durations (ms)
- GameConfig: presentation constants shared with the scene layer

Values can be overridden from a .env file and/or the process environment
with FRENZY_ prefixed keys, e.g. FRENZY_BASE_DAMAGE=120 or
FRENZY_JUMP_BUFFER_MS=180.

Usage:
    from packages.frenzy.config import load_config

    config = load_config(".env")
    result = resolve_attack(Element.FIRE, Element.EARTH, config=config.combat)
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass, field, fields, replace
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values

from .errors import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "FRENZY_"


# =============================================================================
# Configuration sections
# =============================================================================


@dataclass(frozen=True)
class CombatConfig:
    """Damage values for attack and block resolution."""

    base_damage: int = 100
    strong_multiplier: float = 3.0  # +200% on a strong matchup
    weak_multiplier: float = 0.3  # 30% on a weak matchup
    neutral_multiplier: float = 1.0
    chip_damage_percent: float = 0.25  # damage let through by a partial block


@dataclass(frozen=True)
class InputConfig:
    """How long (ms) an early press is still honored, per action."""

    jump_buffer_ms: int = 150
    attack_buffer_ms: int = 100
    block_buffer_ms: int = 100


@dataclass(frozen=True)
class StateConfig:
    """Duration (ms) of each timed player state."""

    attacking_ms: int = 300
    blocking_ms: int = 400
    staggered_ms: int = 500
    recovering_ms: int = 600


@dataclass(frozen=True)
class GameConfig:
    """Scene-level constants. The engine itself never reads these."""

    base_width: int = 1024
    base_height: int = 768
    scroll_speed: int = 200  # pixels per second


@dataclass(frozen=True)
class EngineConfig:
    """Global configuration container."""

    combat: CombatConfig = field(default_factory=CombatConfig)
    input: InputConfig = field(default_factory=InputConfig)
    states: StateConfig = field(default_factory=StateConfig)
    game: GameConfig = field(default_factory=GameConfig)


DEFAULT_CONFIG = EngineConfig()


# =============================================================================
# Environment loading
# =============================================================================


def _parse_value(key: str, raw: str, default):
    """Convert a raw env string to the type of the field's default."""
    text = raw.strip()
    try:
        value = int(text) if isinstance(default, int) else float(text)
    except ValueError:
        kind = "an integer" if isinstance(default, int) else "a number"
        raise ConfigError(key, raw, f"expected {kind}") from None
    if not math.isfinite(value):
        raise ConfigError(key, raw, "must be a finite number")
    if value < 0:
        raise ConfigError(key, raw, "must not be negative")
    return value


def _apply_overrides(section, values: Mapping[str, str]):
    changes = {}
    for f in fields(section):
        key = ENV_PREFIX + f.name.upper()
        raw = values.get(key)
        if raw is None or raw == "":
            continue
        changes[f.name] = _parse_value(key, raw, getattr(section, f.name))
        logger.debug("config override %s=%s", key, changes[f.name])
    return replace(section, **changes) if changes else section


def load_config(
    env_file: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    base: EngineConfig = DEFAULT_CONFIG,
) -> EngineConfig:
    """
    Build an EngineConfig from defaults, a .env file and the environment.

    Later sources win: defaults < env_file < environ.

    Args:
        env_file: Optional path to a dotenv file
        environ: Environment mapping (defaults to os.environ)
        base: Configuration to start from

    Returns:
        New EngineConfig with overrides applied

    Raises:
        ConfigError: If env_file does not exist, or a recognised key holds a
            malformed, non-finite or negative value
    """
    values: Dict[str, str] = {}
    if env_file is not None:
        if not os.path.isfile(env_file):
            raise ConfigError("env_file", env_file, "file not found")
        file_values = dotenv_values(env_file)
        values.update({k: v for k, v in file_values.items() if v is not None})
    source = os.environ if environ is None else environ
    values.update({k: v for k, v in source.items() if k.startswith(ENV_PREFIX)})

    return EngineConfig(
        combat=_apply_overrides(base.combat, values),
        input=_apply_overrides(base.input, values),
        states=_apply_overrides(base.states, values),
        game=_apply_overrides(base.game, values),
    )
