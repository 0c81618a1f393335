"""
Builders module for the simulator.

Turns character sheets and enemy definitions into combat records, expands
encounter entries into uniquely named enemy instances and computes the
summary statistics shown before a simulation.
"""

from typing import Any, Iterable, Mapping

from catchery import log_warning
from pydantic import BaseModel, Field, field_validator

from wildcombat.core.constants import (
    ATTACK_SKILLS,
    DEFAULT_ATTACK_SKILL,
    DEFAULT_DEFENSE_SKILL,
    DEFENSE_SKILLS,
)
from wildcombat.core.error_handling import ensure_non_negative_int, ensure_string
from wildcombat.entities.combatant import (
    CharacterAspect,
    EnemyAspect,
    EnemyInstance,
    PartyMember,
)
from wildcombat.entities.roster import Encounter, Party


class SkillRating(BaseModel):
    """The best skill of a group together with its dice count."""

    skill: str = Field(description="The selected skill label.")
    score: int = Field(description="Number of dice granted by the skill.")


class PartyStatistics(BaseModel):
    total_hit_points: int = Field(description="Sum of current party hit points.")
    total_attack_score: int = Field(description="Sum of party attack dice.")
    total_defense_score: int = Field(description="Sum of party defense dice.")


class EncounterStatistics(BaseModel):
    total_hp: int = Field(description="Sum of current enemy hit points.")
    enemy_count: int = Field(description="Number of enemy instances.")


class EncounterEntry(BaseModel):
    """One line of an encounter: which enemy and how many copies."""

    enemy_id: str = Field(description="Identifier of the enemy definition.")
    count: int = Field(default=1, description="Number of copies to field.")

    @field_validator("enemy_id", mode="before")
    @classmethod
    def _correct_enemy_id(cls, value: Any) -> str:
        return ensure_string(value, "enemy_id")

    @field_validator("count", mode="before")
    @classmethod
    def _correct_count(cls, value: Any) -> int:
        return ensure_non_negative_int(value, "count", 1)


def _track_of(aspect: Mapping[str, Any]) -> list[int]:
    value = aspect.get("value")
    if value is None:
        return [0]
    if not isinstance(value, list):
        return []
    return value


def calculate_hit_points(sheet: Mapping[str, Any]) -> int:
    """
    Counts the unchecked bubbles across every aspect track of a sheet.

    Args:
        sheet (Mapping[str, Any]): The character sheet.

    Returns:
        int: The maximum hit points of the character.

    """
    aspects = sheet.get("aspects")
    if not isinstance(aspects, list):
        return 0
    return sum(
        sum(1 for bubble in _track_of(aspect) if bubble == 0)
        for aspect in aspects
        if isinstance(aspect, Mapping)
    )


def _best_skill(
    sheet: Mapping[str, Any], candidates: Iterable[str], default: str
) -> SkillRating:
    skills = sheet.get("skills")
    if not isinstance(skills, Mapping):
        return SkillRating(skill=default, score=1)
    best_skill, best_filled = default, 0
    for name in candidates:
        bubbles = skills.get(name)
        if not isinstance(bubbles, list):
            continue
        filled = sum(1 for bubble in bubbles if bubble == 1)
        if filled > best_filled:
            best_skill, best_filled = name, filled
    return SkillRating(skill=best_skill, score=1 + best_filled)


def calculate_attack_stats(sheet: Mapping[str, Any]) -> SkillRating:
    """Selects the strongest of the attack skills."""
    return _best_skill(sheet, ATTACK_SKILLS, DEFAULT_ATTACK_SKILL)


def calculate_defense_stats(sheet: Mapping[str, Any]) -> SkillRating:
    """Selects the strongest of the defense skills."""
    return _best_skill(sheet, DEFENSE_SKILLS, DEFAULT_DEFENSE_SKILL)


def build_party_member(sheet: Mapping[str, Any], party_id: str) -> PartyMember:
    """
    Derives a party combat record from a character sheet.

    Args:
        sheet (Mapping[str, Any]):
            The character sheet, with `name`, `aspects` (each with a `value`
            track) and `skills` (each a list of bubbles).
        party_id (str):
            Identifier of the character within the party.

    Returns:
        PartyMember: The combat record, at full hit points.

    """
    attack = calculate_attack_stats(sheet)
    defense = calculate_defense_stats(sheet)
    aspects = [
        CharacterAspect(name=str(aspect.get("name", "")), track=_track_of(aspect))
        for aspect in sheet.get("aspects") or []
        if isinstance(aspect, Mapping)
    ]
    return PartyMember(
        party_id=party_id,
        name=str(sheet.get("name") or party_id),
        hit_points=calculate_hit_points(sheet),
        attack_score=attack.score,
        attack_skill=attack.skill,
        defense_score=defense.score,
        defense_skill=defense.skill,
        aspects=aspects,
    )


def build_party(sheets: Iterable[Mapping[str, Any]]) -> Party:
    """Builds a party, numbering members in sheet order."""
    return Party(
        build_party_member(sheet, f"{sheet.get('name', 'member')}-{index}")
        for index, sheet in enumerate(sheets, start=1)
    )


def build_enemy_aspects(definition: Mapping[str, Any]) -> list[EnemyAspect]:
    """Reads the aspects of an enemy definition, accepting camelCase keys."""
    aspects: list[EnemyAspect] = []
    for aspect in definition.get("aspects") or []:
        if not isinstance(aspect, Mapping):
            continue
        aspects.append(
            EnemyAspect(
                name=str(aspect.get("name", "")),
                track_length=aspect.get("track_length", aspect.get("trackLength", 0)) or 0,
                ability=aspect.get("ability"),
                ability_code=aspect.get("ability_code", aspect.get("abilityCode")),
            )
        )
    return aspects


def expand_encounter(
    entries: Iterable[EncounterEntry | Mapping[str, Any]],
    enemy_definitions: Mapping[str, Mapping[str, Any]],
) -> Encounter:
    """
    Expands encounter entries into uniquely named enemy instances.

    Copies of the same base enemy are numbered across the whole encounter,
    so two entries of "Spider" produce "Spider 1", "Spider 2", "Spider 3".

    Args:
        entries:
            Encounter entries, each an `EncounterEntry` or a mapping with
            `enemy_id` (or `enemyId`) and `count`.
        enemy_definitions:
            Enemy definitions keyed by enemy identifier.

    Returns:
        Encounter: The expanded encounter at full hit points.

    """
    counts: dict[str, int] = {}
    instances: list[EnemyInstance] = []
    for raw in entries:
        entry = (
            raw
            if isinstance(raw, EncounterEntry)
            else EncounterEntry(
                enemy_id=raw.get("enemy_id", raw.get("enemyId", "")),
                count=raw.get("count", 1),
            )
        )
        definition = enemy_definitions.get(entry.enemy_id)
        if definition is None:
            log_warning(
                f"Unknown enemy '{entry.enemy_id}' in encounter, skipping",
                {"enemy_id": entry.enemy_id, "available": list(enemy_definitions)},
            )
            continue
        base_name = str(definition.get("name") or entry.enemy_id)
        for _ in range(entry.count):
            counts[base_name] = counts.get(base_name, 0) + 1
            number = counts[base_name]
            instances.append(
                EnemyInstance(
                    instance_id=f"{entry.enemy_id}-{number}",
                    name=base_name,
                    unique_name=f"{base_name} {number}",
                    description=str(definition.get("description") or ""),
                    aspects=build_enemy_aspects(definition),
                )
            )
    return Encounter(instances)


def reset_combat_state(party: Party, encounter: Encounter) -> tuple[Party, Encounter]:
    """
    Returns fresh copies of both sides, ready for a new session.

    Hit points are restored to maximum, incapacitation is cleared and every
    enemy gets an empty set of used abilities.
    """
    reset_party = party.copy()
    for member in reset_party:
        member.reset()
    reset_encounter = encounter.copy()
    for enemy in reset_encounter:
        enemy.reset()
    return reset_party, reset_encounter


def party_stats(party: Party) -> PartyStatistics:
    return PartyStatistics(
        total_hit_points=party.total_hp(),
        total_attack_score=sum(member.attack_score for member in party),
        total_defense_score=sum(member.defense_score for member in party),
    )


def encounter_stats(encounter: Encounter) -> EncounterStatistics:
    return EncounterStatistics(total_hp=encounter.total_hp(), enemy_count=len(encounter))
