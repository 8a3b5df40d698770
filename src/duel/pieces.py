"""Defines the pieces: what goes into a cell, what goes into a roster, and which kind of piece it is."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from src.core.exceptions import UnknownPieceError
from src.core.shared_types import Player
from src.duel.square import Square

LABEL_SEPARATOR = "-"


class PieceKind(Enum):
    SHORT_RANGE = auto()
    LONG_RANGE_STRAIGHT = auto()
    LONG_RANGE_DIAGONAL = auto()

    @classmethod
    def from_name(cls, name: str) -> Optional[PieceKind]:
        """
        The kind is encoded in the name the client picked during setup:
        * "P..." -> short range (pawn)
        * "H...1" -> straight long range hero
        * "H..." (any other ending) -> diagonal long range hero

        Anything else has no kind (and will never be able to move).
        """
        if name.startswith("P"):
            return cls.SHORT_RANGE
        if name.startswith("H"):
            return (
                cls.LONG_RANGE_STRAIGHT if name.endswith("1") else cls.LONG_RANGE_DIAGONAL
            )
        return None


@dataclass(frozen=True)
class PieceTag:
    """Content of an occupied cell."""

    owner: Player
    name: str

    @classmethod
    def from_label(cls, label: str) -> PieceTag:
        """
        Wire label: "<owner>-<name>", ex. "A-P1".
        Only the first separator counts, so names may contain a dash themselves.
        """
        owner, separator, name = label.partition(LABEL_SEPARATOR)
        if not separator or owner not in Player.__members__:
            raise UnknownPieceError(f"Cannot interpret {label!r} as a piece label.")
        return cls(Player(owner), name)

    def to_label(self) -> str:
        return f"{self.owner}{LABEL_SEPARATOR}{self.name}"


@dataclass
class Piece:
    """Roster entry. Mirrors the location stored in the board's grid."""

    name: str
    row: int
    col: int

    @property
    def square(self) -> Square:
        return Square(self.row, self.col)

    @property
    def kind(self) -> Optional[PieceKind]:
        return PieceKind.from_name(self.name)

    def move_to(self, square: Square) -> None:
        self.row = square.row
        self.col = square.col
