"""
Tests for the round orchestrator.
"""

from wildcombat.combat.log import CombatLog
from wildcombat.combat.round import RoundOrchestrator, simulate_one_round
from wildcombat.core.config import CombatConfig
from wildcombat.core.constants import CombatOutcome
from wildcombat.entities.roster import Encounter, Party


def test_round_player_and_enemy_phase(fighter, brute, pattern):
    """
    Test a full round where both sides act once.
    """
    party, encounter = Party([fighter]), Encounter([brute])
    result = simulate_one_round(party, encounter, 1, roller=pattern([6]))

    assert not result.is_over
    assert result.combat_result is None
    assert result.encounter["brute-1"].hp == 4
    assert result.party["fighter-1"].hp == 10
    assert result.log.messages == [
        "--- Round 1 ---",
        "Fighter attacks Brute 1 with HACK and rolled 6 (2 dice)",
        "Fighter does 2 damage to Brute 1",
        "Brute 1 attacks Fighter",
        "Fighter defends with BRACE and rolled 6 (2 dice)",
    ]


def test_round_does_not_touch_its_inputs(fighter, brute, pattern):
    """
    Test that the round works on copies of the rosters it is given.
    """
    party, encounter = Party([fighter]), Encounter([brute])
    result = simulate_one_round(party, encounter, 1, roller=pattern([6]))
    assert brute.hp == 6
    assert result.encounter["brute-1"] is not brute


def test_three_rounds_of_sixes_win(fighter, brute, pattern):
    """
    Test that two damage per round defeats a six hit point enemy in three rounds.
    """
    orchestrator = RoundOrchestrator(CombatConfig(damage_model="0,1,2,counter"), pattern([6]))
    party, encounter = Party([fighter]), Encounter([brute])
    for current_round in (1, 2, 3):
        result = orchestrator.simulate_round(party, encounter, current_round)
        party, encounter = result.party, result.encounter
        assert party["fighter-1"].hp == 10

    assert result.is_over
    assert result.outcome == CombatOutcome.WIN
    assert result.combat_result == "The players WON after 3 rounds"
    assert encounter["brute-1"].hp == 0
    assert result.log.messages[-2:] == ["Brute 1 was defeated!", "The players win!"]


def test_round_on_decided_combat_is_a_no_op(fighter, brute, pattern):
    """
    Test that a finished combat is reported without changing state.
    """
    brute.take_damage(6)
    roller = pattern([6])
    result = simulate_one_round([fighter], [brute], 7, roller=roller)
    assert result.is_over
    assert result.combat_result is None
    assert result.log.messages == ["Combat over: All enemies defeated!"]
    assert roller.calls == 0

    fighter.defeat()
    brute.current_hp = 6
    result = simulate_one_round([fighter], [brute], 7, roller=roller)
    assert result.outcome == CombatOutcome.LOSE
    assert result.log.messages == ["Combat over: All party members defeated!"]


def test_round_with_missing_side(fighter, pattern):
    """
    Test that an empty side is reported and nothing is simulated.
    """
    result = simulate_one_round([fighter], [], 1, roller=pattern([6]))
    assert not result.is_over
    assert result.combat_result is None
    assert result.log.messages == ["Cannot simulate: missing party or encounter"]


def test_round_clears_incapacitation(fighter, brute, pattern):
    """
    Test that incapacitation from a previous round does not skip an attack.
    """
    fighter.incapacitated = True
    result = simulate_one_round([fighter], [brute], 2, roller=pattern([6]))
    assert result.encounter["brute-1"].hp == 4
    assert fighter.incapacitated


def test_player_phase_skips_incapacitated_and_dead(fighter, scout, brute, pattern):
    """
    Test that incapacitated members lose their attack and dead members are skipped.
    """
    fighter.incapacitated = True
    scout.defeat()
    party, encounter = Party([fighter, scout]), Encounter([brute])
    phase = RoundOrchestrator(roller=pattern([6])).player_attack_phase(party, encounter)
    assert phase.log.messages == ["Fighter is incapacitated and cannot attack this turn"]
    assert brute.hp == 6


def test_player_phase_targets_weakest_enemy(fighter, scout, brute, spider, pattern):
    """
    Test that every attack goes to the living enemy with the fewest hit points.
    """
    party, encounter = Party([fighter, scout]), Encounter([brute, spider])
    RoundOrchestrator(roller=pattern([6])).player_attack_phase(party, encounter)
    # Fighter drops the spider to 1, Scout finishes it off.
    assert spider.is_dead()
    assert brute.hp == 6


def test_enemy_phase_numbers_multiple_attacks(fighter, brute, pattern):
    config = CombatConfig(enemy_attacks_per_round=2)
    party, encounter = Party([fighter]), Encounter([brute])
    phase = RoundOrchestrator(config, pattern([5])).enemy_attack_phase(encounter, party)
    assert [m for m in phase.log.messages if "attacks" in m] == [
        "Brute 1 attacks Fighter (attack 1/2)",
        "Brute 1 attacks Fighter (attack 2/2)",
    ]
    assert fighter.hp == 8


def test_enemy_phase_stops_when_party_falls(scout, brute, pattern):
    """
    Test that remaining attacks are cancelled once no party member stands.
    """
    scout.current_hp = 2
    config = CombatConfig(enemy_attacks_per_round=3, debug=True)
    party, encounter = Party([scout]), Encounter([brute])
    roller = pattern([1])
    phase = RoundOrchestrator(config, roller).enemy_attack_phase(encounter, party)

    assert scout.is_dead()
    assert roller.calls == 1
    assert phase.log.messages == [
        "DEBUG: Starting enemy attack phase with 1 alive enemies and 1 alive party members",
        "DEBUG: Brute 1 preparing to attack (3 attacks per round)",
        "DEBUG: Brute 1 attack 1 - useAbilities: True, availableAbilities: 0, "
        "will use ability: False",
        "Brute 1 attacks Scout (attack 1/3)",
        "Scout defends with VAULT and rolled 1 (1 dice)",
        "Brute 1 does 2 damage to Scout",
        "Scout was defeated!",
        "DEBUG: Brute 1 attack 2 cancelled - no alive party members",
    ]


def test_enemy_phase_debug_skip(fighter, brute):
    """
    Test that the enemy phase reports when it has nothing to do.
    """
    brute.take_damage(6)
    config = CombatConfig(debug=True)
    phase = RoundOrchestrator(config).enemy_attack_phase(Encounter([brute]), Party([fighter]))
    assert phase.log.messages[-1] == (
        "DEBUG: Enemy attack phase skipped - no valid targets (enemies: 0, party: 1)"
    )


def test_enemy_uses_ability_once_then_attacks(fighter, spider, scripted):
    """
    Test that an ability is spent on the first attack and plain attacks follow.
    """
    config = CombatConfig(enemy_attacks_per_round=2, debug=True)
    party, encounter = Party([fighter]), Encounter([spider])
    phase = RoundOrchestrator(config, scripted([5, 3, 6, 1])).enemy_attack_phase(
        encounter, party
    )
    assert spider.used_abilities == {"Venom Fangs"}
    assert fighter.incapacitated
    assert 'DEBUG: Spider 1 selected ability "Venom Fangs" with abilityCode "incapacitate"' in (
        phase.log.messages
    )
    assert "Spider 1 uses Venom Fangs (attack 1/2)" in phase.log.messages
    assert "Spider 1 attacks Fighter (attack 2/2)" in phase.log.messages


def test_abilities_disabled(fighter, spider, pattern):
    """
    Test that enemies only make plain attacks when abilities are disabled.
    """
    config = CombatConfig(use_abilities=False)
    party, encounter = Party([fighter]), Encounter([spider])
    phase = RoundOrchestrator(config, pattern([6])).enemy_attack_phase(encounter, party)
    assert spider.used_abilities == set()
    assert phase.log.messages[0] == "Spider 1 attacks Fighter"


def test_round_log_is_a_combat_log(fighter, brute, pattern):
    result = simulate_one_round([fighter], [brute], 1, roller=pattern([6]))
    assert isinstance(result.log, CombatLog)
    assert len(result.log) == 5
