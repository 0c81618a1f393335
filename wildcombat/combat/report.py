"""
Console report module for the simulator.

Prints combat logs, session summaries and batch statistics through the
rich console helpers.
"""

from typing import Iterable

from wildcombat.combat.batch import BatchResult
from wildcombat.combat.log import LogEntry
from wildcombat.combat.session import SessionResult
from wildcombat.core.utils import cprint, crule, make_bar
from wildcombat.entities.combatant import EnemyInstance, PartyMember


def print_log(entries: Iterable[LogEntry]) -> None:
    """Prints every log entry in the color of its category."""
    for entry in entries:
        cprint(entry.category.colorize(entry.message))


def member_status_line(member: PartyMember) -> str:
    bar = make_bar(member.hp, member.hit_points, color="green")
    return f"[bold blue]{member.name:<20}[/] {bar} {member.hp:>3}/{member.hit_points:<3}"


def enemy_status_line(enemy: EnemyInstance) -> str:
    bar = make_bar(enemy.hp, enemy.max_hp, color="red")
    return f"[bold red]{enemy.unique_name:<20}[/] {bar} {enemy.hp:>3}/{enemy.max_hp:<3}"


def print_session_summary(result: SessionResult) -> None:
    """Prints the final state of both sides and the session outcome."""
    crule("Session Report", style="bold blue")
    for member in result.final_party:
        cprint(member_status_line(member))
    for enemy in result.final_encounter:
        cprint(enemy_status_line(enemy))
    if result.outcome is not None:
        cprint(f"[{result.outcome.color}]{result.combat_result}[/]")
    elif result.timeout_occurred:
        cprint("[bold yellow]The session timed out before a side was defeated.[/]")
    else:
        cprint("[bold yellow]The session hit the round cap before a side was defeated.[/]")
    cprint("")


def print_batch_summary(result: BatchResult) -> None:
    """Prints the aggregated statistics of a batch."""
    crule("Batch Report", style="bold blue")
    total = result.total_sessions
    cprint(f"Wins:       {make_bar(result.wins, total, 20, 'green')} {result.wins}/{total}")
    cprint(f"Losses:     {make_bar(result.losses, total, 20, 'red')} {result.losses}/{total}")
    if result.unresolved:
        cprint(
            f"Unresolved: {make_bar(result.unresolved, total, 20, 'yellow')} "
            f"{result.unresolved}/{total}"
        )
    cprint(f"Average rounds:             {result.average_rounds:.1f}")
    cprint(f"Average party HP on a win:  {result.average_party_hp_on_win:.1f}")
    cprint(f"Average enemy HP on a loss: {result.average_enemy_hp_on_loss:.1f}")
    cprint(f"[bold]{result.summary}[/]")
    cprint("")
