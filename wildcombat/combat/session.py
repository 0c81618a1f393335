"""
Session loop module for the simulator.

Runs rounds until one side is defeated, guarded by a round cap and a
wall-clock deadline. Both guards are soft terminations: they add a notice
to the log and leave the combat result unset.
"""

import time
from dataclasses import dataclass
from typing import Callable, Iterable

from wildcombat.combat.log import CombatLog
from wildcombat.combat.round import RoundOrchestrator, as_encounter, as_party
from wildcombat.combat.win_conditions import check_win_conditions, format_result
from wildcombat.core.config import CombatConfig
from wildcombat.core.constants import CombatOutcome
from wildcombat.core.dice import DiceRoller
from wildcombat.core.logging import log_debug, log_warning
from wildcombat.entities.combatant import EnemyInstance, PartyMember
from wildcombat.entities.roster import Encounter, Party

Clock = Callable[[], float]


@dataclass
class SessionResult:
    """Final state of a session."""

    final_party: Party
    final_encounter: Encounter
    final_round: int
    log: CombatLog
    combat_result: str | None = None
    outcome: CombatOutcome | None = None
    timeout_occurred: bool = False

    @property
    def is_resolved(self) -> bool:
        return self.outcome is not None


def _timeout_notice(timeout_ms: int) -> str:
    seconds = timeout_ms / 1000
    unit = "second" if seconds == 1 else "seconds"
    return f"Session simulation timed out after {seconds:g} {unit}"


def simulate_full_session(
    party: Party | Iterable[PartyMember],
    encounter: Encounter | Iterable[EnemyInstance],
    starting_round: int = 1,
    config: CombatConfig | None = None,
    roller: DiceRoller | None = None,
    clock: Clock = time.monotonic,
    deadline: float | None = None,
) -> SessionResult:
    """
    Simulates rounds until the combat is decided or a safety valve trips.

    Each iteration first checks the deadline, then the round cap, then
    whether the combat was already decided, and only then plays a round.

    Args:
        party: The party entering the session. Left untouched.
        encounter: The encounter entering the session. Left untouched.
        starting_round (int): Number of the first round to play.
        config (CombatConfig | None): Session settings, defaults if None.
        roller (DiceRoller | None): Source of dice, default roller if None.
        clock (Clock): Returns the current time in seconds.
        deadline (float | None): Clock value after which the session stops.
            Defaults to `config.timeout_ms` after the session starts.

    Returns:
        SessionResult: The final rosters, the round reached, the full log,
        the result line (None if capped or timed out) and the timeout flag.

    """
    config = config or CombatConfig()
    orchestrator = RoundOrchestrator(config, roller)
    if deadline is None:
        deadline = clock() + config.timeout_ms / 1000

    current_party = as_party(party).copy()
    current_encounter = as_encounter(encounter).copy()
    current_round = starting_round
    session_log = CombatLog()
    combat_result: str | None = None
    outcome: CombatOutcome | None = None
    timeout_occurred = False

    while True:
        if clock() > deadline:
            session_log.neutral(_timeout_notice(config.timeout_ms))
            log_warning(
                "Session timed out",
                {"round": current_round, "timeout_ms": config.timeout_ms},
            )
            timeout_occurred = True
            break

        if current_round - starting_round >= config.max_rounds:
            session_log.neutral(
                f"Session simulation stopped after {config.max_rounds} rounds"
                " to prevent infinite loop"
            )
            log_warning("Session hit the round cap", {"max_rounds": config.max_rounds})
            break

        pre_check = check_win_conditions(current_encounter, current_party)
        if pre_check.is_over:
            outcome = pre_check.result
            combat_result = format_result(outcome, current_round - 1)
            break

        round_result = orchestrator.simulate_round(
            current_party, current_encounter, current_round
        )
        session_log.extend(round_result.log)
        current_party = round_result.party
        current_encounter = round_result.encounter

        if round_result.is_over:
            outcome = round_result.outcome
            combat_result = round_result.combat_result
            break

        current_round += 1

    log_debug(
        "Session finished",
        {"round": current_round, "result": combat_result, "timeout": timeout_occurred},
    )
    return SessionResult(
        final_party=current_party,
        final_encounter=current_encounter,
        final_round=current_round,
        log=session_log,
        combat_result=combat_result,
        outcome=outcome,
        timeout_occurred=timeout_occurred,
    )
