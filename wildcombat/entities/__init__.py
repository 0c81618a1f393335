"""
Entities module for the Wild Combat simulator.

This module contains the combat records of both sides, the rosters that
hold them, and the builders that derive them from sheets and enemy data.
"""

from .combatant import (
    CharacterAspect,
    EnemyAspect,
    EnemyInstance,
    PartyMember,
)
from .roster import (
    Encounter,
    Party,
    Roster,
)
from .builders import (
    EncounterEntry,
    build_party,
    build_party_member,
    encounter_stats,
    expand_encounter,
    party_stats,
    reset_combat_state,
)

__all__ = [
    "CharacterAspect",
    "EnemyAspect",
    "EnemyInstance",
    "PartyMember",
    "Encounter",
    "Party",
    "Roster",
    "EncounterEntry",
    "build_party",
    "build_party_member",
    "encounter_stats",
    "expand_encounter",
    "party_stats",
    "reset_combat_state",
]
