"""
The Match class is the entrypoint into the domain layer for the service layer.
It owns whose turn it is, walks through the phases (setup -> active -> ended), and delegates
the actual piece movement to the movement rules.

Every command is validated completely before the board gets touched: a rejected command leaves the match unchanged.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from src.core.exceptions import (
    GameStateError,
    InvalidSetupError,
    SetupConflictError,
    UnknownPieceError,
)
from src.core.models import GameModel, PieceModel
from src.core.shared_types import Phase, Player
from src.duel.board import Board
from src.duel.move_log import LogEntry, MoveLog
from src.duel.moves import apply_move, plan_move
from src.duel.pieces import PieceTag
from src.duel.square import BOARD_DIMENSIONS, Square

logger = logging.getLogger(__name__)


@dataclass
class MoveOutcome:
    """What happened during an accepted move. `winner` is only set if the move ended the match."""

    entry: LogEntry
    captured: list[PieceTag] = field(default_factory=list)
    winner: Optional[Player] = None


@dataclass
class Match:
    board: Board
    current_player: Player
    move_log: MoveLog
    winner: Optional[Player] = None

    @classmethod
    def new(cls) -> Self:
        """Empty board, nobody set up yet, player A goes first."""
        return cls(board=Board.empty(), current_player=Player.A, move_log=MoveLog())

    @property
    def phase(self) -> Phase:
        if self.winner is not None:
            return Phase.ENDED
        if any(self.board.is_empty(player) for player in Player):
            return Phase.SETUP
        return Phase.ACTIVE

    def to_model(self) -> GameModel:
        """Encode into a format the Service layer uses"""
        return GameModel(
            board=self.board.to_cells(),
            players={
                player.value: [
                    PieceModel(piece.name, piece.row, piece.col)
                    for piece in self.board.roster(player)
                ]
                for player in Player
            },
            current_player=self.current_player.value,
            phase=self.phase.value,
            move_history=self.move_log.to_strings(),
        )

    def setup(self, names: list[str]) -> Player:
        """
        Place the current player's pieces on their home row.
        -----

        1. the player must not have set up before
        2. piece i goes to column i of the home row, so at most 5 pieces with distinct names
        3. turn passes to the opponent, except once both players are done: then A starts.

        Returns the player that just completed setup.
        """
        player = self.current_player
        if self.phase == Phase.ENDED:
            raise GameStateError("Match already ended.")
        if not self.board.is_empty(player):
            raise SetupConflictError(f"Player {player} already placed their pieces.")
        self._validate_placements(names)

        for col, name in enumerate(names):
            self.board.place_piece(player, name, Square(player.home_row, col))

        self.current_player = player.opponent
        if not any(self.board.is_empty(p) for p in Player):
            self.current_player = Player.A

        logger.debug("Player %s placed %d piece(s): %s", player, len(names), names)
        return player

    def move(self, label: str, code: str) -> MoveOutcome:
        """
        Attempt a move for the current player
        -----

        1. only while the match is active
        2. the label must refer to a piece in the current player's roster ("A-P1" --> A's "P1")
        3. the movement rule of the piece decides legality and captures (nothing mutated if illegal)
        4. apply, log, and either end the match or pass the turn
        """
        if self.phase != Phase.ACTIVE:
            raise GameStateError(f"Cannot move during phase {self.phase}.")

        player = self.current_player
        tag = self._resolve_piece(player, label)
        origin = self._locate(tag)
        # raises on drift at the origin now; relocate would only notice after the captures are applied
        self.board.roster_entry_at(origin)

        planned = plan_move(tag, origin, code, self.board)
        captured = apply_move(planned, self.board)

        entry = LogEntry(player, tag.name, planned.code)
        self.move_log.append(entry)
        outcome = MoveOutcome(entry=entry, captured=captured)

        if any(self.board.is_empty(p) for p in Player):
            self.winner = Player.B if self.board.is_empty(Player.A) else Player.A
            outcome.winner = self.winner
            logger.info("Player %s wins after %d move(s)", self.winner, len(self.move_log))
            return outcome

        self.current_player = player.opponent
        return outcome

    def reset(self) -> None:
        """Throw away everything: fresh board, empty rosters, empty log, A to play."""
        fresh = Match.new()
        self.board = fresh.board
        self.current_player = fresh.current_player
        self.move_log = fresh.move_log
        self.winner = None

    # -- PRIVATE HELPERS ---
    def _resolve_piece(self, player: Player, label: str) -> PieceTag:
        """Only the current player's pieces can be referenced, even if the opponent's label is spelled out exactly."""
        tag = PieceTag.from_label(label)
        if tag.owner != player or self.board.find_piece(player, tag.name) is None:
            raise UnknownPieceError(f"{label!r} is not one of player {player}'s pieces.")
        return tag

    def _locate(self, tag: PieceTag) -> Square:
        square = self.board.locate(tag)
        if square is None:
            raise UnknownPieceError(f"{tag.to_label()!r} is not on the board.")
        return square

    @staticmethod
    def _validate_placements(names: list[str]) -> None:
        if len(names) > BOARD_DIMENSIONS[1]:
            raise InvalidSetupError(
                f"At most {BOARD_DIMENSIONS[1]} pieces fit on the home row, got {len(names)}."
            )
        if len(set(names)) != len(names):
            raise InvalidSetupError(f"Piece names must be unique, got {names}.")
