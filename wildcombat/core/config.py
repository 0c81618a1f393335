"""
Configuration module for the simulator.

Holds the per-session knobs selected by the caller: damage model, enemy
attacks per round, ability usage, debug narration and the session safety
valves.
"""

from typing import Any

from catchery import log_warning
from pydantic import BaseModel, Field, field_validator

from wildcombat.core.constants import (
    DEFAULT_DAMAGE_MODEL,
    MAX_ENEMY_ATTACKS,
    MAX_ROUNDS,
    MIN_ENEMY_ATTACKS,
    SESSION_TIMEOUT_MS,
    DamageModel,
)
from wildcombat.core.error_handling import ensure_int_in_range


def parse_damage_model(value: Any) -> DamageModel:
    """
    Converts a damage model identifier into a `DamageModel`.

    Unknown identifiers fall back to the default model with a warning.

    Args:
        value (Any): A `DamageModel`, its string id, or its member name.

    Returns:
        DamageModel: The matching damage model.

    """
    if isinstance(value, DamageModel):
        return value
    if isinstance(value, str):
        text = value.strip()
        for model in DamageModel:
            if text == model.value or text.upper() == model.name:
                return model
    log_warning(
        f"Unknown damage model {value!r}, using {DEFAULT_DAMAGE_MODEL.value}",
        {"value": value},
    )
    return DEFAULT_DAMAGE_MODEL


class CombatConfig(BaseModel):
    """Settings shared by every round of a session."""

    damage_model: DamageModel = Field(
        default=DEFAULT_DAMAGE_MODEL,
        description="Roll-to-damage table used when a combatant defends.",
    )
    enemy_attacks_per_round: int = Field(
        default=MIN_ENEMY_ATTACKS,
        description="Number of attacks each living enemy makes per round (1-5).",
    )
    use_abilities: bool = Field(
        default=True,
        description="Whether enemies may spend their once-per-session abilities.",
    )
    debug: bool = Field(
        default=False,
        description="Whether the enemy phase appends DEBUG narration to the log.",
    )
    max_rounds: int = Field(
        default=MAX_ROUNDS,
        description="Hard cap on rounds simulated by one session.",
    )
    timeout_ms: int = Field(
        default=SESSION_TIMEOUT_MS,
        description="Wall-clock budget of one session, in milliseconds.",
    )

    @field_validator("damage_model", mode="before")
    @classmethod
    def _coerce_damage_model(cls, value: Any) -> DamageModel:
        return parse_damage_model(value)

    @field_validator("enemy_attacks_per_round", mode="before")
    @classmethod
    def _clamp_attacks(cls, value: Any) -> int:
        return ensure_int_in_range(
            value,
            "enemy_attacks_per_round",
            MIN_ENEMY_ATTACKS,
            MAX_ENEMY_ATTACKS,
        )

    @field_validator("max_rounds", mode="before")
    @classmethod
    def _clamp_rounds(cls, value: Any) -> int:
        return ensure_int_in_range(value, "max_rounds", 1, MAX_ROUNDS)

    @field_validator("timeout_ms", mode="before")
    @classmethod
    def _clamp_timeout(cls, value: Any) -> int:
        return ensure_int_in_range(value, "timeout_ms", 0, SESSION_TIMEOUT_MS)
