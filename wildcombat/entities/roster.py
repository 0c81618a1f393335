"""
Roster module for the simulator.

A roster owns the combatants of one side in their original order and
indexes them by their stable identifier, so phases can look up the
current state of a combatant instead of searching lists.
"""

from abc import ABC, abstractmethod
from typing import Generic, Iterable, Iterator, TypeVar

from catchery import log_warning

from wildcombat.entities.combatant import EnemyInstance, PartyMember

C = TypeVar("C", PartyMember, EnemyInstance)


class Roster(ABC, Generic[C]):
    """
    Ordered, id-indexed collection of combatants of one side.

    Identifiers are expected to be unique. A combatant whose identifier is
    already taken is skipped with a warning, and the first one is kept.
    """

    def __init__(self, members: Iterable[C] = ()) -> None:
        self._members: list[C] = []
        self._index: dict[str, C] = {}
        for member in members:
            self.add(member)

    @staticmethod
    @abstractmethod
    def key_of(member: C) -> str:
        """The identifier the roster indexes the combatant by."""

    def add(self, member: C) -> None:
        key = self.key_of(member)
        if key in self._index:
            log_warning(
                f"Duplicate combatant identifier: {key}, keeping the first one",
                {"key": key, "name": member.name},
            )
            return
        self._members.append(member)
        self._index[key] = member

    def __iter__(self) -> Iterator[C]:
        return iter(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def __bool__(self) -> bool:
        return bool(self._members)

    def __getitem__(self, key: str) -> C:
        return self._index[key]

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def get(self, key: str) -> C | None:
        return self._index.get(key)

    @property
    def members(self) -> list[C]:
        return list(self._members)

    def alive(self) -> list[C]:
        """Living combatants, in roster order."""
        return [member for member in self._members if member.is_alive()]

    def any_alive(self) -> bool:
        return any(member.is_alive() for member in self._members)

    def lowest_hp_alive(self) -> C | None:
        """
        The living combatant with the lowest current hit points.

        Ties are broken by roster order.
        """
        lowest: C | None = None
        for member in self._members:
            if member.is_alive() and (lowest is None or member.hp < lowest.hp):
                lowest = member
        return lowest

    def total_hp(self) -> int:
        return sum(member.hp for member in self._members)

    def copy(self) -> "Roster[C]":
        """Deep copy of the roster and all its combatants."""
        return type(self)(member.model_copy(deep=True) for member in self._members)


class Party(Roster[PartyMember]):
    """The characters side, indexed by `party_id`."""

    @staticmethod
    def key_of(member: PartyMember) -> str:
        return member.party_id

    def clear_incapacitation(self) -> None:
        for member in self._members:
            member.incapacitated = False


class Encounter(Roster[EnemyInstance]):
    """The enemies side, indexed by `instance_id`."""

    @staticmethod
    def key_of(member: EnemyInstance) -> str:
        return member.instance_id

    def defeated_count(self) -> int:
        return sum(1 for member in self._members if member.is_dead())
