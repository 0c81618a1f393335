"""
Win-condition module for the simulator.

Classifies a combat as ongoing, won or lost from the current hit points
of both sides.
"""

from typing import Iterable

from pydantic import BaseModel, Field

from wildcombat.core.constants import CombatOutcome
from wildcombat.entities.combatant import EnemyInstance, PartyMember


class WinCheck(BaseModel):
    """Result of evaluating the win conditions."""

    is_over: bool = Field(
        description="True when one side has no living combatant.",
    )
    result: CombatOutcome | None = Field(
        default=None,
        description="WIN when all enemies are down, LOSE when the party is.",
    )
    alive_enemies: list[EnemyInstance] = Field(
        default_factory=list,
        description="Enemies with hit points left.",
    )
    alive_party: list[PartyMember] = Field(
        default_factory=list,
        description="Party members with hit points left.",
    )


def check_win_conditions(
    encounter: Iterable[EnemyInstance],
    party: Iterable[PartyMember],
) -> WinCheck:
    """
    Evaluates whether the combat is over.

    The enemy side is checked first, so a state where both sides are down
    counts as a win.

    Args:
        encounter: The enemy instances.
        party: The party members.

    Returns:
        WinCheck: The classification and the living combatants of each side.

    """
    alive_enemies = [enemy for enemy in encounter if enemy.is_alive()]
    alive_party = [member for member in party if member.is_alive()]

    if not alive_enemies:
        result: CombatOutcome | None = CombatOutcome.WIN
    elif not alive_party:
        result = CombatOutcome.LOSE
    else:
        result = None
    return WinCheck(
        is_over=result is not None,
        result=result,
        alive_enemies=alive_enemies,
        alive_party=alive_party,
    )


def format_result(outcome: CombatOutcome, rounds: int) -> str:
    """Builds the result line reported at the end of a combat."""
    verb = "WON" if outcome == CombatOutcome.WIN else "LOST"
    return f"The players {verb} after {rounds} rounds"
