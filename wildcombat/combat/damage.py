"""
Damage module for the simulator.

Maps die pools to damage amounts: the attack table used by players and
counter-attacks, the selectable defense tables, and the special table
used against the incapacitate ability.
"""

from typing import Any, Protocol, Sequence

from pydantic import BaseModel, Field

from wildcombat.core.config import parse_damage_model
from wildcombat.core.constants import DEFAULT_DAMAGE_MODEL, DamageModel
from wildcombat.core.dice import has_doubles


class HasAspectTracks(Protocol):
    def longest_aspect_track(self) -> int: ...


class DefenseResult(BaseModel):
    """Outcome of a defense roll against a standard attack."""

    damage: int = Field(
        default=0,
        description="Damage taken by the defender.",
    )
    counter: bool = Field(
        default=False,
        description="True when the defense roll contains doubles.",
    )


class IncapacitateResult(DefenseResult):
    """Outcome of a defense roll against the incapacitate ability."""

    incapacitated: bool = Field(
        default=False,
        description="The defender cannot attack in its next action.",
    )
    fully_incapacitated: bool = Field(
        default=False,
        description="The defender loses all of its hit points.",
    )


def longest_aspect_track(target: HasAspectTracks | None) -> int:
    """
    Length of the target's longest aspect track.

    Args:
        target: The defending combatant, or None.

    Returns:
        int: The longest track length, 1 if the target has no tracks.

    """
    if target is None:
        return 1
    return target.longest_aspect_track() or 1


def calculate_damage(rolls: Sequence[int]) -> int:
    """
    Damage dealt by an attack roll.

    The highest die gives 2 on a 6, 1 on a 4-5 and 0 on a 1-3; doubles add
    one more point.

    Args:
        rolls (Sequence[int]): The attack die pool.

    Returns:
        int: The damage dealt, 0 for an empty pool.

    """
    if not rolls:
        return 0
    highest = max(rolls)
    if highest == 6:
        damage = 2
    elif highest >= 4:
        damage = 1
    else:
        damage = 0
    if has_doubles(rolls):
        damage += 1
    return damage


def calculate_defense_damage(
    rolls: Sequence[int],
    damage_model: DamageModel | str = DEFAULT_DAMAGE_MODEL,
    target: HasAspectTracks | None = None,
) -> DefenseResult:
    """
    Damage taken by a defender, according to the selected damage model.

    | model                    | 6 | 4-5    | 1-3      |
    |--------------------------|---|--------|----------|
    | 0,1,2,counter            | 0 | 1      | 2        |
    | 1,2,aspect,counter       | 1 | 2      | track    |
    | 1,aspect,2aspect,counter | 1 | track  | 2x track |

    where `track` is the defender's longest aspect track. Doubles grant a
    counter-attack regardless of the model.

    Args:
        rolls (Sequence[int]): The defense die pool.
        damage_model (DamageModel | str): The table to use.
        target: The defender, needed by the aspect-based tables.

    Returns:
        DefenseResult: The damage taken and the counter flag.

    """
    if not rolls:
        return DefenseResult(damage=0, counter=False)

    model = parse_damage_model(damage_model)
    highest = max(rolls)
    if model == DamageModel.ZERO_ONE_TWO:
        table = (0, 1, 2)
    elif model == DamageModel.ONE_TWO_ASPECT:
        table = (1, 2, longest_aspect_track(target))
    else:
        track = longest_aspect_track(target)
        table = (1, track, 2 * track)

    if highest == 6:
        damage = table[0]
    elif highest >= 4:
        damage = table[1]
    else:
        damage = table[2]
    return DefenseResult(damage=damage, counter=has_doubles(rolls))


def calculate_incapacitate_defense(rolls: Sequence[int], target: Any = None) -> IncapacitateResult:
    """
    Outcome of defending against the incapacitate ability.

    A 6 takes 1 damage, a 4-5 leaves the defender incapacitated, a 1-3
    removes all of its hit points. Doubles grant a counter-attack.

    Args:
        rolls (Sequence[int]): The defense die pool.
        target: The defender. Unused by the table.

    Returns:
        IncapacitateResult: The defense outcome.

    """
    if not rolls:
        return IncapacitateResult()
    highest = max(rolls)
    counter = has_doubles(rolls)
    if highest == 6:
        return IncapacitateResult(damage=1, counter=counter)
    if highest >= 4:
        return IncapacitateResult(incapacitated=True, counter=counter)
    return IncapacitateResult(fully_incapacitated=True, counter=counter)
