"""
The Board holds the grid of cells and both players' rosters.

A piece's location is stored twice: as a PieceTag in the grid and as (row, col) in its roster entry.
Every mutation goes through the methods below so that the two never drift apart.
"""

from dataclasses import dataclass
from typing import Optional, Self

from src.core.exceptions import BoardInvariantError, OutOfBoundsError
from src.core.shared_types import Player
from src.duel.pieces import Piece, PieceTag
from src.duel.square import BOARD_DIMENSIONS, Square, all_squares


@dataclass
class Board:
    grid: dict[Square, Optional[PieceTag]]
    rosters: dict[Player, list[Piece]]

    @classmethod
    def empty(cls) -> Self:
        return cls(
            grid={square: None for square in all_squares()},
            rosters={player: [] for player in Player},
        )

    # --- CELLS ---
    def cell(self, square: Square) -> Optional[PieceTag]:
        self._assert_within_bounds(square)
        return self.grid[square]

    def set_cell(self, square: Square, tag: Optional[PieceTag]) -> None:
        """Raw write to the grid. Does NOT touch the rosters."""
        self._assert_within_bounds(square)
        self.grid[square] = tag

    def owner_at(self, square: Square) -> Optional[Player]:
        tag = self.cell(square)
        return tag.owner if tag else None

    def locate(self, tag: PieceTag) -> Optional[Square]:
        """Linear scan over the grid. 25 cells, no need for an index."""
        return next(
            (square for square, content in self.grid.items() if content == tag), None
        )

    # --- ROSTERS ---
    def roster(self, player: Player) -> list[Piece]:
        return self.rosters[player]

    def roster_size(self, player: Player) -> int:
        return len(self.rosters[player])

    def is_empty(self, player: Player) -> bool:
        return self.roster_size(player) == 0

    def find_piece(self, player: Player, name: str) -> Optional[Piece]:
        return next((piece for piece in self.rosters[player] if piece.name == name), None)

    def roster_entry_at(self, square: Square) -> Piece:
        """
        The roster entry mirroring the occupied cell.
        Raises BoardInvariantError if the cell content has no matching entry.
        """
        tag = self.cell(square)
        if tag is None:
            raise BoardInvariantError(f"No piece on {square}.")
        piece = self.find_piece(tag.owner, tag.name)
        if piece is None or piece.square != square:
            raise BoardInvariantError(
                f"Cell {square} holds {tag.to_label()!r}, but the roster of {tag.owner} does not place it there."
            )
        return piece

    # --- MUTATIONS ---
    def place_piece(self, player: Player, name: str, square: Square) -> Piece:
        """Put a new piece on the board and register it in the player's roster."""
        if self.cell(square) is not None:
            raise BoardInvariantError(f"Cannot place {name!r}: {square} is occupied.")
        piece = Piece(name, square.row, square.col)
        self.rosters[player].append(piece)
        self.grid[square] = PieceTag(player, name)
        return piece

    def relocate(self, origin: Square, destination: Square) -> None:
        """Move the piece on `origin` to the (empty) `destination` square."""
        piece = self.roster_entry_at(origin)
        if self.cell(destination) is not None:
            raise BoardInvariantError(
                f"Cannot move onto {destination}: square still occupied."
            )
        self.grid[destination] = self.grid[origin]
        self.grid[origin] = None
        piece.move_to(destination)

    def capture(self, square: Square) -> Optional[PieceTag]:
        """
        Remove the piece on the square from its owner's roster and clear the cell.

        ---
        An empty cell is a no-op (returns None).
        A cell without matching roster entry means grid and rosters drifted apart --> BoardInvariantError.
        """
        tag = self.cell(square)
        if tag is None:
            return None
        piece = self.roster_entry_at(square)
        self.rosters[tag.owner].remove(piece)
        self.grid[square] = None
        return tag

    # --- CONSISTENCY / SERIALIZATION ---
    def check_invariants(self) -> None:
        """Every roster entry sits on a cell holding its tag, and every occupied cell belongs to exactly one roster entry."""
        for player, pieces in self.rosters.items():
            for piece in pieces:
                if self.cell(piece.square) != PieceTag(player, piece.name):
                    raise BoardInvariantError(
                        f"Roster entry {player}-{piece.name} at {piece.square} not mirrored in the grid."
                    )
        occupied = [square for square, tag in self.grid.items() if tag is not None]
        roster_count = sum(len(pieces) for pieces in self.rosters.values())
        if len(occupied) != roster_count:
            raise BoardInvariantError(
                f"{len(occupied)} occupied cells but {roster_count} roster entries."
            )

    def to_cells(self) -> list[list[Optional[str]]]:
        """Grid as rows of wire labels ("A-P1") or None for empty cells."""
        return [
            [
                tag.to_label() if (tag := self.grid[Square(row, col)]) else None
                for col in range(BOARD_DIMENSIONS[1])
            ]
            for row in range(BOARD_DIMENSIONS[0])
        ]

    def _assert_within_bounds(self, square: Square) -> None:
        if not square.is_within_bounds():
            raise OutOfBoundsError(f"{square} is not on the board.")
