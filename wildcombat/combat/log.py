"""
Combat log module for the simulator.

The combat log is the ordered, append-only narration of a round or
session. Each entry carries a category tag that is used for presentation
only.
"""

from typing import Iterable, Iterator

from pydantic import BaseModel, Field

from wildcombat.core.constants import LogCategory


class LogEntry(BaseModel):
    """A single line of combat narration."""

    message: str = Field(
        description="The narration text.",
    )
    category: LogCategory = Field(
        default=LogCategory.NEUTRAL,
        description="Presentation tag: player, enemy or neutral.",
    )

    def __str__(self) -> str:
        return self.message


class CombatLog:
    """Append-only sequence of log entries."""

    def __init__(self, entries: Iterable[LogEntry] = ()) -> None:
        self._entries: list[LogEntry] = list(entries)

    def add(self, message: str, category: LogCategory = LogCategory.NEUTRAL) -> LogEntry:
        entry = LogEntry(message=message, category=category)
        self._entries.append(entry)
        return entry

    def player(self, message: str) -> LogEntry:
        return self.add(message, LogCategory.PLAYER)

    def enemy(self, message: str) -> LogEntry:
        return self.add(message, LogCategory.ENEMY)

    def neutral(self, message: str) -> LogEntry:
        return self.add(message, LogCategory.NEUTRAL)

    def extend(self, entries: Iterable[LogEntry]) -> None:
        self._entries.extend(entries)

    @property
    def entries(self) -> list[LogEntry]:
        return list(self._entries)

    @property
    def messages(self) -> list[str]:
        return [entry.message for entry in self._entries]

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
