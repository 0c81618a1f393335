"""
Tests for the session loop.
"""

from wildcombat.combat.session import simulate_full_session
from wildcombat.core.config import CombatConfig
from wildcombat.core.constants import CombatOutcome
from wildcombat.entities.roster import Encounter, Party


def test_session_runs_until_win(fighter, brute, pattern, fake_clock):
    """
    Test that a session of sixes is won on the third round.
    """
    result = simulate_full_session(
        Party([fighter]),
        Encounter([brute]),
        roller=pattern([6]),
        clock=fake_clock(),
    )
    assert result.outcome == CombatOutcome.WIN
    assert result.combat_result == "The players WON after 3 rounds"
    assert result.final_round == 3
    assert not result.timeout_occurred
    assert result.final_encounter["brute-1"].hp == 0
    assert result.final_party["fighter-1"].hp == 10
    assert result.log.messages.count("--- Round 3 ---") == 1
    assert result.log.messages[-1] == "The players win!"

    # The inputs are left untouched.
    assert brute.hp == 6


def test_session_loses(scout, brute, pattern, fake_clock):
    """
    Test that a session ends as soon as the party is defeated.
    """
    result = simulate_full_session([scout], [brute], roller=pattern([1]), clock=fake_clock())
    assert result.outcome == CombatOutcome.LOSE
    assert result.combat_result == "The players LOST after 2 rounds"
    assert result.final_round == 2
    assert result.log.messages[-1] == "The players lose!"


def test_session_already_decided(fighter, brute, pattern, fake_clock):
    """
    Test that a decided combat ends before any round is played.
    """
    brute.take_damage(6)
    roller = pattern([6])
    result = simulate_full_session([fighter], [brute], roller=roller, clock=fake_clock())
    assert result.combat_result == "The players WON after 0 rounds"
    assert result.final_round == 1
    assert len(result.log) == 0
    assert roller.calls == 0

    result = simulate_full_session(
        [fighter], [brute], starting_round=4, roller=roller, clock=fake_clock()
    )
    assert result.combat_result == "The players WON after 3 rounds"


def test_session_round_cap(fighter, spider, pattern, fake_clock):
    """
    Test that a stalemate stops at the round cap and spends abilities once.
    """
    # Attacks roll 3 (no damage), defenses roll 6 (no damage).
    result = simulate_full_session(
        [fighter], [spider], roller=pattern([3, 6]), clock=fake_clock()
    )
    assert result.combat_result is None
    assert result.outcome is None
    assert not result.timeout_occurred
    assert result.final_round == 101
    assert result.log.messages[-1] == (
        "Session simulation stopped after 100 rounds to prevent infinite loop"
    )
    assert result.log.messages.count("--- Round 100 ---") == 1

    enemy = result.final_encounter["spider-1"]
    assert enemy.used_abilities == {"Venom Fangs"}
    assert result.log.messages.count("Spider 1 uses Venom Fangs") == 1
    # The incapacitate defense rolled a 6: a single point of damage.
    assert result.final_party["fighter-1"].hp == 9
    assert spider.used_abilities == set()


def test_session_custom_round_cap(fighter, brute, pattern, fake_clock):
    config = CombatConfig(max_rounds=5)
    result = simulate_full_session(
        [fighter], [brute], config=config, roller=pattern([3, 6]), clock=fake_clock()
    )
    assert result.final_round == 6
    assert result.log.messages[-1] == (
        "Session simulation stopped after 5 rounds to prevent infinite loop"
    )


def test_session_timeout(fighter, brute, pattern, fake_clock):
    """
    Test that the session stops once the clock passes the deadline.
    """
    # Deadline is 1.0; the loop reads 0.6 then 1.2.
    clock = fake_clock(start=0.0, step=0.6)
    result = simulate_full_session([fighter], [brute], roller=pattern([3, 6]), clock=clock)
    assert result.timeout_occurred
    assert result.combat_result is None
    assert result.final_round == 2
    assert result.log.messages.count("--- Round 1 ---") == 1
    assert result.log.messages[-1] == "Session simulation timed out after 1 second"


def test_session_explicit_deadline(fighter, brute, pattern, fake_clock):
    """
    Test that an explicit deadline in the past stops the session at once.
    """
    roller = pattern([6])
    result = simulate_full_session(
        [fighter], [brute], roller=roller, clock=fake_clock(start=5.0), deadline=1.0
    )
    assert result.timeout_occurred
    assert result.final_round == 1
    assert roller.calls == 0
    assert result.log.messages == ["Session simulation timed out after 1 second"]
