"""
Shared fixtures for the engine tests.
"""

import random
from collections import deque
from typing import Sequence

import pytest

from wildcombat.core.dice import DiceRoller
from wildcombat.entities.combatant import EnemyAspect, EnemyInstance, PartyMember


class ScriptedRoller(DiceRoller):
    """
    Roller returning scripted die values.

    Once the script runs out, `default` is returned for every die. Ability
    selection always picks the first option.
    """

    def __init__(self, values: Sequence[int] = (), default: int | None = None) -> None:
        super().__init__(random.Random(0))
        self.values = deque(values)
        self.default = default
        self.rolled: list[int] = []

    def roll_die(self) -> int:
        if self.values:
            value = self.values.popleft()
        elif self.default is not None:
            value = self.default
        else:
            raise AssertionError("Scripted dice ran out")
        self.rolled.append(value)
        return value

    def choice(self, options):
        return options[0]


class PatternRoller(DiceRoller):
    """
    Roller returning a single die per pool, cycling through `faces`.

    Single-die pools never contain doubles, so no counter-attack happens.
    """

    def __init__(self, faces: Sequence[int]) -> None:
        super().__init__(random.Random(0))
        self.faces = list(faces)
        self.calls = 0

    def roll(self, count: int, cut: int = 0, advantage: int = 0) -> list[int]:
        face = self.faces[self.calls % len(self.faces)]
        self.calls += 1
        return [face]

    def choice(self, options):
        return options[0]


class FakeClock:
    """Clock advancing by a fixed step every time it is read."""

    def __init__(self, start: float = 0.0, step: float = 0.0) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> float:
        current = self.now
        self.now += self.step
        return current


@pytest.fixture
def scripted():
    """Factory building scripted rollers."""
    return ScriptedRoller


@pytest.fixture
def pattern():
    """Factory building single-die pattern rollers."""
    return PatternRoller


@pytest.fixture
def fake_clock():
    return FakeClock


@pytest.fixture
def fighter():
    """A sturdy party member with two dice on both sides."""
    return PartyMember(
        party_id="fighter-1",
        name="Fighter",
        hit_points=10,
        attack_score=2,
        attack_skill="HACK",
        defense_score=2,
        defense_skill="BRACE",
    )


@pytest.fixture
def scout():
    return PartyMember(
        party_id="scout-1",
        name="Scout",
        hit_points=4,
        attack_score=1,
        attack_skill="HUNT",
        defense_score=1,
        defense_skill="VAULT",
    )


@pytest.fixture
def brute():
    """An enemy without abilities and six hit points."""
    return EnemyInstance(
        instance_id="brute-1",
        name="Brute",
        unique_name="Brute 1",
        aspects=[EnemyAspect(name="Thick Hide", track_length=6)],
    )


@pytest.fixture
def spider():
    """An enemy with a single incapacitate ability."""
    return EnemyInstance(
        instance_id="spider-1",
        name="Spider",
        unique_name="Spider 1",
        aspects=[
            EnemyAspect(name="Chitin", track_length=2),
            EnemyAspect(
                name="Venom Fangs",
                track_length=1,
                ability="A paralysing bite.",
                ability_code="incapacitate",
            ),
        ],
    )
