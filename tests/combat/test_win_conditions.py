"""
Tests for the win-condition evaluation.
"""

from wildcombat.combat.win_conditions import check_win_conditions, format_result
from wildcombat.core.constants import CombatOutcome


def test_ongoing(fighter, brute):
    """
    Test that combat continues while both sides stand.
    """
    check = check_win_conditions([brute], [fighter])
    assert not check.is_over
    assert check.result is None
    assert len(check.alive_enemies) == 1
    assert len(check.alive_party) == 1


def test_win_when_enemies_are_down(fighter, brute):
    """
    Test that the party wins once every enemy is defeated.
    """
    brute.take_damage(6)
    check = check_win_conditions([brute], [fighter])
    assert check.is_over
    assert check.result == CombatOutcome.WIN
    assert check.alive_enemies == []


def test_lose_when_party_is_down(fighter, brute):
    """
    Test that the party loses once every member is defeated.
    """
    fighter.defeat()
    check = check_win_conditions([brute], [fighter])
    assert check.is_over
    assert check.result == CombatOutcome.LOSE


def test_win_takes_priority(fighter, brute):
    """
    Test that a double wipe counts as a win.
    """
    fighter.defeat()
    brute.take_damage(6)
    assert check_win_conditions([brute], [fighter]).result == CombatOutcome.WIN


def test_empty_sides(brute):
    """
    Test that an empty encounter is won and an empty party loses.
    """
    assert check_win_conditions([], []).result == CombatOutcome.WIN
    assert check_win_conditions([brute], []).result == CombatOutcome.LOSE


def test_format_result():
    assert format_result(CombatOutcome.WIN, 3) == "The players WON after 3 rounds"
    assert format_result(CombatOutcome.LOSE, 12) == "The players LOST after 12 rounds"
