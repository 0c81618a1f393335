"""
Batch module for the simulator.

Runs many independent sessions of the same fight and aggregates the
outcomes into win/loss statistics.
"""

import time
from typing import Iterable

from pydantic import BaseModel, Field

from wildcombat.combat.log import CombatLog, LogEntry
from wildcombat.combat.round import as_encounter, as_party
from wildcombat.combat.session import Clock, simulate_full_session
from wildcombat.core.config import CombatConfig
from wildcombat.core.constants import MAX_BATCH_SESSIONS, MIN_BATCH_SESSIONS, CombatOutcome
from wildcombat.core.dice import DiceRoller
from wildcombat.core.error_handling import ensure_int_in_range
from wildcombat.core.logging import log_info
from wildcombat.entities.builders import reset_combat_state
from wildcombat.entities.combatant import EnemyInstance, PartyMember
from wildcombat.entities.roster import Encounter, Party


def _ratio(value: int, total: int) -> float:
    return value / total if total > 0 else 0.0


class BatchResult(BaseModel):
    """Aggregated statistics of a batch of sessions."""

    total_sessions: int = Field(
        default=0,
        description="Number of sessions simulated.",
    )
    wins: int = Field(
        default=0,
        description="Sessions won by the party.",
    )
    losses: int = Field(
        default=0,
        description="Sessions lost by the party.",
    )
    unresolved: int = Field(
        default=0,
        description="Sessions stopped by the round cap or the timeout.",
    )
    total_rounds: int = Field(
        default=0,
        description="Rounds played, summed over all sessions.",
    )
    total_party_hp_on_win: int = Field(
        default=0,
        description="Party hit points left, summed over won sessions.",
    )
    total_enemy_hp_on_loss: int = Field(
        default=0,
        description="Enemy hit points left, summed over lost sessions.",
    )
    log: list[LogEntry] = Field(
        default_factory=list,
        description="Every session log, framed by session headers and results.",
    )

    @property
    def win_rate(self) -> float:
        return _ratio(self.wins, self.total_sessions)

    @property
    def loss_rate(self) -> float:
        return _ratio(self.losses, self.total_sessions)

    @property
    def average_rounds(self) -> float:
        return _ratio(self.total_rounds, self.total_sessions)

    @property
    def average_party_hp_on_win(self) -> float:
        return _ratio(self.total_party_hp_on_win, self.wins)

    @property
    def average_enemy_hp_on_loss(self) -> float:
        return _ratio(self.total_enemy_hp_on_loss, self.losses)

    @property
    def summary(self) -> str:
        """One-line summary of the batch."""
        return (
            f"Many Sessions Complete: {self.wins}W/{self.losses}L "
            f"({self.win_rate * 100:.1f}%W, {self.loss_rate * 100:.1f}%L), "
            f"Avg: {self.average_rounds:.1f} rounds"
        )


def simulate_many_sessions(
    party: Party | Iterable[PartyMember],
    encounter: Encounter | Iterable[EnemyInstance],
    sessions: int = 10,
    config: CombatConfig | None = None,
    roller: DiceRoller | None = None,
    clock: Clock = time.monotonic,
) -> BatchResult:
    """
    Simulates independent sessions of the same fight.

    Every session starts at round 1 from a reset copy of both sides, so hit
    points and spent abilities do not carry over. Debug narration is
    disabled for batches.

    Args:
        party: The party to field in every session.
        encounter: The encounter to field in every session.
        sessions (int): Number of sessions, clamped to 1-100.
        config (CombatConfig | None): Session settings, defaults if None.
        roller (DiceRoller | None): Source of dice, default roller if None.
        clock (Clock): Time source for the per-session deadline.

    Returns:
        BatchResult: The aggregated statistics and the framed log.

    """
    sessions = ensure_int_in_range(
        sessions, "sessions", MIN_BATCH_SESSIONS, MAX_BATCH_SESSIONS
    )
    config = (config or CombatConfig()).model_copy(update={"debug": False})
    party = as_party(party)
    encounter = as_encounter(encounter)

    result = BatchResult()
    batch_log = CombatLog()
    for index in range(1, sessions + 1):
        session_party, session_encounter = reset_combat_state(party, encounter)
        session = simulate_full_session(
            session_party,
            session_encounter,
            starting_round=1,
            config=config,
            roller=roller,
            clock=clock,
        )

        result.total_sessions += 1
        result.total_rounds += session.final_round - 1
        if session.outcome == CombatOutcome.WIN:
            result.wins += 1
            result.total_party_hp_on_win += session.final_party.total_hp()
        elif session.outcome == CombatOutcome.LOSE:
            result.losses += 1
            result.total_enemy_hp_on_loss += session.final_encounter.total_hp()
        else:
            result.unresolved += 1

        batch_log.neutral(f"=== SESSION {index}/{sessions} ===")
        batch_log.extend(session.log)
        batch_log.neutral(f"Session {index} Result: {session.combat_result or 'Unknown'}")

    result.log = batch_log.entries
    log_info(result.summary, {"unresolved": result.unresolved})
    return result
