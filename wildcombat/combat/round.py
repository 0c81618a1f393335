"""
Round orchestration module for the simulator.

A round runs the player attack phase, then the enemy attack phase, then
checks the win conditions. The orchestrator works on copies of the rosters
it is given and returns them as the new state.
"""

from dataclasses import dataclass
from typing import Iterable

from wildcombat.combat.abilities import (
    AbilityContext,
    resolve_ability,
    resolve_standard_attack,
)
from wildcombat.combat.damage import calculate_damage
from wildcombat.combat.log import CombatLog
from wildcombat.combat.win_conditions import check_win_conditions, format_result
from wildcombat.core.config import CombatConfig
from wildcombat.core.constants import CombatOutcome
from wildcombat.core.dice import DiceRoller, get_default_roller
from wildcombat.core.logging import log_debug
from wildcombat.core.utils import format_rolls
from wildcombat.entities.combatant import EnemyInstance, PartyMember
from wildcombat.entities.roster import Encounter, Party


@dataclass
class PhaseResult:
    """State of both sides after a phase, with the phase narration."""

    party: Party
    encounter: Encounter
    log: CombatLog


@dataclass
class RoundResult:
    """State of both sides after a round."""

    party: Party
    encounter: Encounter
    log: CombatLog
    combat_result: str | None = None
    is_over: bool = False
    outcome: CombatOutcome | None = None


def as_party(party: Party | Iterable[PartyMember]) -> Party:
    return party if isinstance(party, Party) else Party(party)


def as_encounter(encounter: Encounter | Iterable[EnemyInstance]) -> Encounter:
    return encounter if isinstance(encounter, Encounter) else Encounter(encounter)


class RoundOrchestrator:
    """
    Resolves single rounds of combat.

    The orchestrator is stateless between rounds: the rosters passed to
    `simulate_round` are copied, and the copies are returned updated.
    """

    def __init__(
        self,
        config: CombatConfig | None = None,
        roller: DiceRoller | None = None,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            config (CombatConfig | None): Session settings, defaults if None.
            roller (DiceRoller | None): Source of dice, default roller if None.

        """
        self.config: CombatConfig = config or CombatConfig()
        self.roller: DiceRoller = roller or get_default_roller()

    def player_attack_phase(self, party: Party, encounter: Encounter) -> PhaseResult:
        """
        Every living party member attacks the weakest living enemy.

        Incapacitated members skip their attack. The rosters are updated in
        place.

        Args:
            party (Party): The attacking side.
            encounter (Encounter): The defending side.

        Returns:
            PhaseResult: The updated rosters and the phase narration.

        """
        log = CombatLog()
        for member in party:
            if member.is_dead():
                continue
            if member.incapacitated:
                log.neutral(f"{member.name} is incapacitated and cannot attack this turn")
                continue

            target = encounter.lowest_hp_alive()
            if target is None:
                break

            score = member.attack_score
            rolls = self.roller.roll(score)
            damage = calculate_damage(rolls)
            log.player(
                f"{member.name} attacks {target.unique_name} with {member.attack_skill}"
                f" and rolled {format_rolls(rolls)} ({score} dice)"
            )
            if damage > 0:
                target.take_damage(damage)
                log.player(f"{member.name} does {damage} damage to {target.unique_name}")
                if target.is_dead():
                    log.neutral(f"{target.unique_name} was defeated!")
        return PhaseResult(party=party, encounter=encounter, log=log)

    def enemy_attack_phase(self, encounter: Encounter, party: Party) -> PhaseResult:
        """
        Every living enemy makes its attacks against the weakest party member.

        Each attack may be replaced by an unused ability when abilities are
        enabled. The rosters are updated in place.

        Args:
            encounter (Encounter): The attacking side.
            party (Party): The defending side.

        Returns:
            PhaseResult: The updated rosters and the phase narration.

        """
        config = self.config
        log = CombatLog()
        debug = config.debug
        attacks = config.enemy_attacks_per_round

        alive_enemies = encounter.alive()
        alive_party = party.alive()
        if debug:
            log.neutral(
                f"DEBUG: Starting enemy attack phase with {len(alive_enemies)} alive "
                f"enemies and {len(alive_party)} alive party members"
            )
        if not alive_enemies or not alive_party:
            if debug:
                log.neutral(
                    "DEBUG: Enemy attack phase skipped - no valid targets "
                    f"(enemies: {len(alive_enemies)}, party: {len(alive_party)})"
                )
            return PhaseResult(party=party, encounter=encounter, log=log)

        for enemy in alive_enemies:
            if debug:
                log.neutral(
                    f"DEBUG: {enemy.unique_name} preparing to attack "
                    f"({attacks} attacks per round)"
                )
            for attack_num in range(1, attacks + 1):
                if enemy.is_dead():
                    break
                target = party.lowest_hp_alive()
                if target is None:
                    if debug:
                        log.neutral(
                            f"DEBUG: {enemy.unique_name} attack {attack_num} cancelled"
                            " - no alive party members"
                        )
                    break
                if not self._enemy_attack(enemy, target, party, encounter, log, attack_num):
                    break
        return PhaseResult(party=party, encounter=encounter, log=log)

    def _enemy_attack(
        self,
        enemy: EnemyInstance,
        target: PartyMember,
        party: Party,
        encounter: Encounter,
        log: CombatLog,
        attack_num: int,
    ) -> bool:
        config = self.config
        available = enemy.available_abilities()
        use_ability = config.use_abilities and bool(available)
        if config.debug:
            log.neutral(
                f"DEBUG: {enemy.unique_name} attack {attack_num} - useAbilities: "
                f"{config.use_abilities}, availableAbilities: {len(available)}, "
                f"will use ability: {use_ability}"
            )

        ctx = AbilityContext(
            enemy=enemy,
            target=target,
            party=party,
            encounter=encounter,
            log=log,
            damage_model=config.damage_model,
            attacks_per_round=config.enemy_attacks_per_round,
            attack_num=attack_num,
            roller=self.roller,
        )
        if not use_ability:
            return resolve_standard_attack(ctx).should_continue

        ability = self.roller.choice(available)
        enemy.mark_ability_used(ability)
        ctx.ability = ability
        if config.debug:
            log.neutral(
                f'DEBUG: {enemy.unique_name} selected ability "{ability.name}" '
                f'with abilityCode "{ability.ability_code}"'
            )
        log_debug(
            "Enemy uses ability",
            {"enemy": enemy.unique_name, "ability": ability.name, "target": target.name},
        )
        return resolve_ability(ctx).should_continue

    def simulate_round(
        self,
        party: Party | Iterable[PartyMember],
        encounter: Encounter | Iterable[EnemyInstance],
        current_round: int,
    ) -> RoundResult:
        """
        Resolves one full round.

        Empty sides and already decided combats are reported in the log and
        leave the state untouched.

        Args:
            party: The party at the start of the round.
            encounter: The encounter at the start of the round.
            current_round (int): Number of the round, used in the narration.

        Returns:
            RoundResult: The new state of both sides, the round narration and,
            when the combat ends, the result line.

        """
        party = as_party(party)
        encounter = as_encounter(encounter)

        if not party or not encounter:
            log = CombatLog()
            log.neutral("Cannot simulate: missing party or encounter")
            return RoundResult(party=party, encounter=encounter, log=log)

        pre_check = check_win_conditions(encounter, party)
        if pre_check.is_over:
            log = CombatLog()
            if pre_check.result == CombatOutcome.WIN:
                log.neutral("Combat over: All enemies defeated!")
            else:
                log.neutral("Combat over: All party members defeated!")
            return RoundResult(
                party=party,
                encounter=encounter,
                log=log,
                is_over=True,
                outcome=pre_check.result,
            )

        party = party.copy()
        encounter = encounter.copy()
        round_log = CombatLog()
        round_log.neutral(f"--- Round {current_round} ---")

        party.clear_incapacitation()

        player_phase = self.player_attack_phase(party, encounter)
        round_log.extend(player_phase.log)

        enemy_phase = self.enemy_attack_phase(encounter, party)
        round_log.extend(enemy_phase.log)

        win_check = check_win_conditions(encounter, party)
        combat_result: str | None = None
        if win_check.result == CombatOutcome.WIN:
            round_log.player("The players win!")
            combat_result = format_result(CombatOutcome.WIN, current_round)
        elif win_check.result == CombatOutcome.LOSE:
            round_log.enemy("The players lose!")
            combat_result = format_result(CombatOutcome.LOSE, current_round)

        return RoundResult(
            party=party,
            encounter=encounter,
            log=round_log,
            combat_result=combat_result,
            is_over=win_check.is_over,
            outcome=win_check.result,
        )


def simulate_one_round(
    party: Party | Iterable[PartyMember],
    encounter: Encounter | Iterable[EnemyInstance],
    current_round: int,
    config: CombatConfig | None = None,
    roller: DiceRoller | None = None,
) -> RoundResult:
    """Resolves one round with a throwaway orchestrator."""
    return RoundOrchestrator(config, roller).simulate_round(party, encounter, current_round)
