"""
Core system module for the Wild Combat simulator.

This module contains the fundamental components shared by the engine,
including constants, dice rolling, configuration, correcting validators,
logging and display utilities.
"""

from .constants import (
    ATTACK_SKILLS,
    DEFAULT_ATTACK_SKILL,
    DEFAULT_DAMAGE_MODEL,
    DEFAULT_DEFENSE_SKILL,
    DEFENSE_SKILLS,
    MAX_ROUNDS,
    SESSION_TIMEOUT_MS,
    CombatOutcome,
    DamageModel,
    LogCategory,
    NiceEnum,
)

from .config import (
    CombatConfig,
    parse_damage_model,
)

from .dice import (
    DiceRoller,
    get_default_roller,
    has_doubles,
    roll_dice,
    set_default_roller,
)

from .error_handling import (
    ensure_int_in_range,
    ensure_non_negative_int,
    ensure_string,
)

from .logging import (
    get_logger,
    setup_logging,
)

from .utils import (
    cprint,
    crule,
    format_rolls,
    make_bar,
)

__all__ = [
    # Constants
    "ATTACK_SKILLS",
    "DEFAULT_ATTACK_SKILL",
    "DEFAULT_DAMAGE_MODEL",
    "DEFAULT_DEFENSE_SKILL",
    "DEFENSE_SKILLS",
    "MAX_ROUNDS",
    "SESSION_TIMEOUT_MS",
    "CombatOutcome",
    "DamageModel",
    "LogCategory",
    "NiceEnum",
    # Configuration
    "CombatConfig",
    "parse_damage_model",
    # Dice
    "DiceRoller",
    "get_default_roller",
    "has_doubles",
    "roll_dice",
    "set_default_roller",
    # Validators
    "ensure_int_in_range",
    "ensure_non_negative_int",
    "ensure_string",
    # Logging
    "get_logger",
    "setup_logging",
    # Utilities
    "cprint",
    "crule",
    "format_rolls",
    "make_bar",
]
