"""
Constants and enumerations for the simulator.

Defines global constants, enumerations for log categories, damage models
and combat outcomes used throughout the engine.
"""

from enum import Enum

# Default skill labels used when a combatant does not provide one.
DEFAULT_ATTACK_SKILL = "BREAK"
DEFAULT_DEFENSE_SKILL = "BRACE"

# Skills considered when deriving attack and defense stats from a sheet.
ATTACK_SKILLS = ("BREAK", "HACK", "HUNT")
DEFENSE_SKILLS = ("BRACE", "FLOURISH", "VAULT")

# Safety valves for the session loop.
MAX_ROUNDS = 100
SESSION_TIMEOUT_MS = 1000

# Allowed range for the number of attacks each enemy makes per round.
MIN_ENEMY_ATTACKS = 1
MAX_ENEMY_ATTACKS = 5

# Allowed range for the number of sessions in a batch.
MIN_BATCH_SESSIONS = 1
MAX_BATCH_SESSIONS = 100


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name


class LogCategory(NiceEnum):
    """Presentation tag attached to every combat log entry."""

    PLAYER = "player"
    ENEMY = "enemy"
    NEUTRAL = "neutral"

    @property
    def color(self) -> str:
        """Returns the color string associated with this category."""
        return {
            LogCategory.PLAYER: "bold blue",
            LogCategory.ENEMY: "bold red",
            LogCategory.NEUTRAL: "dim white",
        }.get(self, "dim white")

    def colorize(self, message: str) -> str:
        """Applies category color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class DamageModel(NiceEnum):
    """
    Roll-to-damage tables used when a combatant defends.

    The value of each member is the identifier used by callers to select
    the table for a session.
    """

    ZERO_ONE_TWO = "0,1,2,counter"
    ONE_TWO_ASPECT = "1,2,aspect,counter"
    ONE_ASPECT_TWO_ASPECT = "1,aspect,2aspect,counter"

    @property
    def description(self) -> str:
        """Returns a short human-readable explanation of the table."""
        return {
            DamageModel.ZERO_ONE_TWO: (
                "Roll 6: 0 damage, roll 4-5: 1 damage, roll 1-3: 2 damage."
            ),
            DamageModel.ONE_TWO_ASPECT: (
                "Roll 6: 1 damage, roll 4-5: 2 damage, "
                "roll 1-3: longest aspect track."
            ),
            DamageModel.ONE_ASPECT_TWO_ASPECT: (
                "Roll 6: 1 damage, roll 4-5: longest aspect track, "
                "roll 1-3: twice the longest aspect track."
            ),
        }[self]


DEFAULT_DAMAGE_MODEL = DamageModel.ZERO_ONE_TWO


class CombatOutcome(NiceEnum):
    """Terminal classification of a combat."""

    WIN = "win"
    LOSE = "lose"

    @property
    def color(self) -> str:
        return "bold green" if self == CombatOutcome.WIN else "bold red"
