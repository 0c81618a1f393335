"""
Combatant module for the simulator.

Defines the canonical combat records for both sides: party members and
enemy instances, together with the aspects that give them tracks and
abilities.
"""

from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from wildcombat.core.constants import DEFAULT_ATTACK_SKILL, DEFAULT_DEFENSE_SKILL
from wildcombat.core.error_handling import (
    ensure_int_in_range,
    ensure_non_negative_int,
    ensure_string,
)

_DEFAULT_SKILLS = {
    "attack_skill": DEFAULT_ATTACK_SKILL,
    "defense_skill": DEFAULT_DEFENSE_SKILL,
}


class CharacterAspect(BaseModel):
    """A capability track on a party member."""

    name: str = Field(
        default="",
        description="The name of the aspect.",
    )
    track: list[int] = Field(
        default_factory=list,
        description="Track bubbles, 0 for unchecked and 1 for checked.",
    )

    @property
    def track_length(self) -> int:
        return len(self.track)


class PartyMember(BaseModel):
    """
    Combat record of a character on the party side.

    `hit_points` is the maximum, derived outside the engine from the
    unchecked capacity tracks. `current_hp` starts at `hit_points` when it
    is not provided and never drops below zero.
    """

    party_id: str = Field(
        description="Identifier unique within the party.",
    )
    name: str = Field(
        description="The display name of the character.",
    )
    hit_points: int = Field(
        default=0,
        description="Maximum hit points.",
    )
    current_hp: int | None = Field(
        default=None,
        description="Current hit points, defaults to hit_points.",
    )
    attack_score: int = Field(
        default=1,
        description="Number of dice rolled when attacking.",
    )
    attack_skill: str = Field(
        default=DEFAULT_ATTACK_SKILL,
        description="Skill label used when attacking.",
    )
    defense_score: int = Field(
        default=1,
        description="Number of dice rolled when defending.",
    )
    defense_skill: str = Field(
        default=DEFAULT_DEFENSE_SKILL,
        description="Skill label used when defending.",
    )
    aspects: list[CharacterAspect] = Field(
        default_factory=list,
        description="Capability tracks, used by the aspect-based damage models.",
    )
    incapacitated: bool = Field(
        default=False,
        description="Transient flag, cleared at the start of every round.",
    )

    @field_validator("hit_points", mode="before")
    @classmethod
    def _correct_hit_points(cls, value: Any) -> int:
        return ensure_non_negative_int(value, "hit_points")

    @field_validator("attack_score", "defense_score", mode="before")
    @classmethod
    def _correct_score(cls, value: Any, info: ValidationInfo) -> int:
        return ensure_int_in_range(value, info.field_name, 1)

    @field_validator("attack_skill", "defense_skill", mode="before")
    @classmethod
    def _correct_skill(cls, value: Any, info: ValidationInfo) -> str:
        return ensure_string(value, info.field_name, _DEFAULT_SKILLS[info.field_name])

    def model_post_init(self, _: Any) -> None:
        """Starts at full hit points unless a current value is given."""
        if self.current_hp is None:
            self.current_hp = self.hit_points
        else:
            self.current_hp = ensure_non_negative_int(
                self.current_hp, "current_hp", 0, {"party_id": self.party_id}
            )

    @property
    def hp(self) -> int:
        """Current hit points, falling back to the maximum."""
        return self.hit_points if self.current_hp is None else self.current_hp

    def is_alive(self) -> bool:
        return self.hp > 0

    def is_dead(self) -> bool:
        return not self.is_alive()

    def take_damage(self, amount: int) -> int:
        """
        Applies damage, clamping hit points at zero.

        Returns:
            int: The hit points after the damage.

        """
        self.current_hp = max(0, self.hp - max(0, amount))
        return self.current_hp

    def defeat(self) -> None:
        """Removes all remaining hit points."""
        self.current_hp = 0

    def longest_aspect_track(self) -> int:
        """Length of the longest aspect track, 1 when there are none."""
        return max((aspect.track_length for aspect in self.aspects), default=0) or 1

    def reset(self) -> None:
        """Restores the member to the state it had before combat."""
        self.current_hp = self.hit_points
        self.incapacitated = False


class EnemyAspect(BaseModel):
    """A named aspect of an enemy, optionally carrying a combat ability."""

    name: str = Field(
        description="The name of the aspect.",
    )
    track_length: int = Field(
        default=0,
        description="Length of the aspect track, contributes to enemy HP.",
    )
    ability: str | None = Field(
        default=None,
        description="Narrative description of the ability, if any.",
    )
    ability_code: str | None = Field(
        default=None,
        description="Code selecting the ability effect, None for cosmetic aspects.",
    )

    @field_validator("track_length", mode="before")
    @classmethod
    def _correct_track_length(cls, value: Any) -> int:
        return ensure_non_negative_int(value, "track_length")

    @property
    def has_ability(self) -> bool:
        return bool(self.ability_code)


class EnemyInstance(BaseModel):
    """
    Combat record of one copy of an enemy in an encounter.

    Multiple copies of the same base enemy are told apart by `instance_id`
    and `unique_name` (e.g. "Spider 1", "Spider 2").
    """

    instance_id: str = Field(
        description="Identifier unique within the encounter.",
    )
    name: str = Field(
        description="The base enemy name.",
    )
    unique_name: str = Field(
        default="",
        description="Display name disambiguating copies of the same enemy.",
    )
    description: str = Field(
        default="",
        description="A brief description of the enemy.",
    )
    aspects: list[EnemyAspect] = Field(
        default_factory=list,
        description="Aspects of the enemy, their tracks sum to its hit points.",
    )
    current_hp: int | None = Field(
        default=None,
        description="Current hit points, defaults to the summed track lengths.",
    )
    used_abilities: set[str] = Field(
        default_factory=set,
        description="Names of ability aspects already spent this session.",
    )

    def model_post_init(self, _: Any) -> None:
        """Defaults missing or malformed fields instead of rejecting them."""
        if not self.unique_name:
            self.unique_name = self.name
        if self.current_hp is None:
            self.current_hp = self.max_hp
        else:
            self.current_hp = ensure_non_negative_int(
                self.current_hp, "current_hp", 0, {"instance_id": self.instance_id}
            )

    @property
    def max_hp(self) -> int:
        """Sum of all aspect track lengths."""
        return sum(aspect.track_length for aspect in self.aspects)

    @property
    def hp(self) -> int:
        """Current hit points, falling back to the summed track lengths."""
        return self.max_hp if self.current_hp is None else self.current_hp

    def is_alive(self) -> bool:
        return self.hp > 0

    def is_dead(self) -> bool:
        return not self.is_alive()

    def take_damage(self, amount: int) -> int:
        """
        Applies damage, clamping hit points at zero.

        Returns:
            int: The hit points after the damage.

        """
        self.current_hp = max(0, self.hp - max(0, amount))
        return self.current_hp

    def available_abilities(self) -> list[EnemyAspect]:
        """Ability aspects that have not been used yet this session."""
        return [
            aspect
            for aspect in self.aspects
            if aspect.has_ability and aspect.name not in self.used_abilities
        ]

    def mark_ability_used(self, aspect: EnemyAspect) -> None:
        self.used_abilities.add(aspect.name)

    def reset(self) -> None:
        """Restores the instance for a new session."""
        self.current_hp = self.max_hp
        self.used_abilities = set()
