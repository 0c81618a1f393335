"""
Dice module for the simulator.

Provides the six-sided die pool roller used by every attack and defense,
with cut (drop highest) and advantage (extra dice) modifiers.
"""

import random
from collections import Counter
from typing import Sequence, TypeVar

T = TypeVar("T")

DIE_FACES = 6


class DiceRoller:
    """
    Source of die results for the engine.

    Wraps a `random.Random` instance so the generator can be seeded or
    replaced. Tests subclass it and override `roll_die` (and optionally
    `choice`) to script results.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng: random.Random = rng or random.Random()

    def roll_die(self) -> int:
        """Rolls a single six-sided die."""
        return self.rng.randint(1, DIE_FACES)

    def choice(self, options: Sequence[T]) -> T:
        """Picks one element uniformly at random."""
        return self.rng.choice(options)

    def roll(self, count: int, cut: int = 0, advantage: int = 0) -> list[int]:
        """
        Rolls a pool of dice.

        Args:
            count (int):
                Number of base dice.
            cut (int):
                Number of highest dice to remove. At least one die is always
                kept.
            advantage (int):
                Number of extra dice added to the pool.

        Returns:
            list[int]:
                The die values. When a cut is applied the remaining dice are
                returned highest first.

        """
        total = max(0, count + advantage)
        rolls = [self.roll_die() for _ in range(total)]
        if cut > 0 and len(rolls) > 1:
            to_remove = min(cut, len(rolls) - 1)
            return sorted(rolls, reverse=True)[to_remove:]
        return rolls


_default_roller = DiceRoller()


def get_default_roller() -> DiceRoller:
    """Returns the process-wide roller used when none is supplied."""
    return _default_roller


def set_default_roller(roller: DiceRoller) -> DiceRoller:
    """
    Replaces the process-wide roller.

    Returns:
        DiceRoller: The previously installed roller, so callers can restore it.

    """
    global _default_roller
    previous = _default_roller
    _default_roller = roller
    return previous


def roll_dice(
    count: int,
    cut: int = 0,
    advantage: int = 0,
    roller: DiceRoller | None = None,
) -> list[int]:
    """
    Rolls `count + advantage` six-sided dice, dropping the `cut` highest.

    Args:
        count (int): Number of base dice.
        cut (int): Highest dice to remove, never leaving fewer than one.
        advantage (int): Extra dice to add to the pool.
        roller (DiceRoller | None): Source of randomness, default roller if None.

    Returns:
        list[int]: Values in [1, 6].

    """
    return (roller or _default_roller).roll(count, cut, advantage)


def has_doubles(rolls: Sequence[int]) -> bool:
    """Returns True if any face value appears at least twice."""
    return any(count >= 2 for count in Counter(rolls).values())
