"""
Main entry point for the Wild Combat simulator.

This script loads the bundled character sheets, enemy definitions and
encounter, then runs one narrated session followed by a batch of sessions
and prints their reports.
"""

import json
import logging
from pathlib import Path
from typing import Any

from wildcombat.combat.batch import simulate_many_sessions
from wildcombat.combat.report import (
    enemy_status_line,
    member_status_line,
    print_batch_summary,
    print_log,
    print_session_summary,
)
from wildcombat.combat.session import simulate_full_session
from wildcombat.core.config import CombatConfig
from wildcombat.core.constants import DamageModel
from wildcombat.core.logging import setup_logging
from wildcombat.core.utils import cprint, crule
from wildcombat.entities.builders import (
    build_party,
    encounter_stats,
    expand_encounter,
    party_stats,
)

# Get the path to the bundled data folder.
data_dir = Path(__file__).parent / "data"


def _load_json_file(filepath: Path, description: str) -> list[dict[str, Any]]:
    """Helper to load and validate JSON files"""
    try:
        cprint(f"  Loading {description}...", style="bold green")
        if not filepath.is_file():
            raise FileNotFoundError(f"File not found: {filepath}")
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"Expected list in {filepath}, got {type(data).__name__}")
        return data
    except (json.JSONDecodeError, FileNotFoundError, ValueError) as e:
        raise ValueError(f"File {filepath} raised an error: {e}")


def main() -> None:
    setup_logging(logging.INFO)

    crule("Wild Combat Simulator", style="bold green")

    crule("Initialize Data", style="bold green")
    sheets = _load_json_file(data_dir / "characters.json", "characters")
    definitions = {
        entry["id"]: entry
        for entry in _load_json_file(data_dir / "enemies.json", "enemies")
    }
    entries = _load_json_file(data_dir / "encounter.json", "encounter")

    party = build_party(sheets)
    encounter = expand_encounter(entries, definitions)

    for member in party:
        cprint(member_status_line(member))
    for enemy in encounter:
        cprint(enemy_status_line(enemy))
    p_stats = party_stats(party)
    e_stats = encounter_stats(encounter)
    cprint(
        f"Party: {p_stats.total_hit_points} HP, {p_stats.total_attack_score} attack dice, "
        f"{p_stats.total_defense_score} defense dice. "
        f"Encounter: {e_stats.enemy_count} enemies, {e_stats.total_hp} HP.\n"
    )

    config = CombatConfig(
        damage_model=DamageModel.ZERO_ONE_TWO,
        enemy_attacks_per_round=1,
        use_abilities=True,
    )

    crule(":crossed_swords:  Single Session", style="bold green")
    session = simulate_full_session(party, encounter, config=config)
    print_log(session.log)
    print_session_summary(session)

    crule(":crossed_swords:  Many Sessions", style="bold green")
    for model in DamageModel:
        cprint(f"[bold]{model.value}[/]: {model.description}")
        batch = simulate_many_sessions(
            party,
            encounter,
            sessions=100,
            config=config.model_copy(update={"damage_model": model}),
        )
        print_batch_summary(batch)


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        cprint("")
        crule(":crossed_swords:  Simulation Interrupted", style="bold red")
