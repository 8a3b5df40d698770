"""Append-only record of the moves executed in the current match."""

from dataclasses import dataclass, field
from typing import Iterator

from src.core.shared_types import MoveCode, Player


@dataclass(frozen=True)
class LogEntry:
    player: Player
    piece_name: str
    code: MoveCode

    def __str__(self) -> str:
        return f"{self.player}-{self.piece_name}: {self.code}"


@dataclass
class MoveLog:
    _entries: list[LogEntry] = field(default_factory=list)

    def append(self, entry: LogEntry) -> None:
        self._entries.append(entry)

    @property
    def entries(self) -> tuple[LogEntry, ...]:
        return tuple(self._entries)

    def to_strings(self) -> list[str]:
        return [str(entry) for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self.entries)
