"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define how each piece kind resolves a move.

Resolving a move happens in two steps:
1. plan: figure out where the piece ends up and what it captures on the way. Raises IllegalMoveError, never mutates.
2. apply: perform the captures and relocate the piece.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol

from src.core.exceptions import IllegalMoveError
from src.core.shared_types import MoveCode, Player
from src.duel.pieces import PieceKind, PieceTag
from src.duel.square import Square, Vector


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def owner_at(self, square: Square) -> Optional[Player]: ...
    def roster_entry_at(self, square: Square) -> object: ...
    def capture(self, square: Square) -> Optional[PieceTag]: ...
    def relocate(self, origin: Square, destination: Square) -> None: ...


# Directions as seen by player A, who advances towards increasing rows.
# Player B advances towards decreasing rows: the row component gets mirrored.
DIRECTIONS: dict[MoveCode, Vector] = {
    MoveCode.L: (0, -1),
    MoveCode.R: (0, 1),
    MoveCode.F: (1, 0),
    MoveCode.B: (-1, 0),
    MoveCode.FL: (1, -1),
    MoveCode.FR: (1, 1),
    MoveCode.BL: (-1, -1),
    MoveCode.BR: (-1, 1),
}

STRAIGHT_CODES = frozenset({MoveCode.L, MoveCode.R, MoveCode.F, MoveCode.B})
DIAGONAL_CODES = frozenset({MoveCode.FL, MoveCode.FR, MoveCode.BL, MoveCode.BR})

LONG_RANGE_STEPS = 2


def direction_vector(code: MoveCode, player: Player) -> Vector:
    d_row, d_col = DIRECTIONS[code]
    return (d_row, d_col) if player == Player.A else (-d_row, d_col)


@dataclass
class PlannedMove:
    """Everything needed to execute an accepted move. Captures are listed in path order."""

    piece: PieceTag
    code: MoveCode
    origin: Square
    destination: Square
    captures: list[Square] = field(default_factory=list)


# --- MOVEMENT RULES ---
def path_scanning_move(
    piece: PieceTag,
    origin: Square,
    code: MoveCode,
    board: Board,
    steps: int,
) -> PlannedMove:
    """
    Walk `steps` squares along the direction of the move code.
    ---

    * every square on the path must be on the board (no partial moves)
    * a friendly piece on the final square rejects the move
    * every enemy piece on the path (passed through or landed on) gets captured, in path order
    * friendly pieces on intermediate squares are jumped over
    """
    vector = direction_vector(code, piece.owner)
    path = [origin.shifted(vector, step) for step in range(1, steps + 1)]
    if not all(square.is_within_bounds() for square in path):
        raise IllegalMoveError(f"{piece.to_label()} cannot move {code}: leaves the board.")

    destination = path[-1]
    if board.owner_at(destination) == piece.owner:
        raise IllegalMoveError(
            f"{piece.to_label()} cannot move {code}: {destination} holds a friendly piece."
        )

    opponent = piece.owner.opponent
    captures: list[Square] = []
    for square in path:
        if board.owner_at(square) == opponent:
            # raises if grid and roster disagree, before anything got mutated
            board.roster_entry_at(square)
            captures.append(square)
    return PlannedMove(piece, code, origin, destination, captures)


def plan_short_range_move(
    piece: PieceTag, origin: Square, code: MoveCode, board: Board
) -> PlannedMove:
    """Pawns move a single step in any of the eight directions and capture on the destination."""
    return path_scanning_move(piece, origin, code, board, steps=1)


def plan_long_range_straight_move(
    piece: PieceTag, origin: Square, code: MoveCode, board: Board
) -> PlannedMove:
    """Straight heroes move two steps horizontally or vertically, capturing along the way."""
    if code not in STRAIGHT_CODES:
        raise IllegalMoveError(f"{piece.to_label()} only moves straight, got {code}.")
    return path_scanning_move(piece, origin, code, board, steps=LONG_RANGE_STEPS)


def plan_long_range_diagonal_move(
    piece: PieceTag, origin: Square, code: MoveCode, board: Board
) -> PlannedMove:
    """Diagonal heroes move two steps diagonally, capturing along the way."""
    if code not in DIAGONAL_CODES:
        raise IllegalMoveError(f"{piece.to_label()} only moves diagonally, got {code}.")
    return path_scanning_move(piece, origin, code, board, steps=LONG_RANGE_STEPS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
PlanMoveFn = Callable[[PieceTag, Square, MoveCode, Board], PlannedMove]
MOVEMENT_RULES: dict[PieceKind, PlanMoveFn] = {
    PieceKind.SHORT_RANGE: plan_short_range_move,
    PieceKind.LONG_RANGE_STRAIGHT: plan_long_range_straight_move,
    PieceKind.LONG_RANGE_DIAGONAL: plan_long_range_diagonal_move,
}


def parse_move_code(code: str) -> MoveCode:
    if code not in MoveCode.__members__:
        raise IllegalMoveError(f"Unknown move code: {code!r}")
    return MoveCode(code)


def plan_move(piece: PieceTag, origin: Square, code: str, board: Board) -> PlannedMove:
    """Dispatch to the movement rule belonging to the kind of the piece."""
    move_code = parse_move_code(code)
    kind = PieceKind.from_name(piece.name)
    if kind is None:
        raise IllegalMoveError(f"{piece.to_label()} is not a piece that can move.")
    movement_rule = MOVEMENT_RULES[kind]
    return movement_rule(piece, origin, move_code, board)


def apply_move(move: PlannedMove, board: Board) -> list[PieceTag]:
    """Execute a planned move: captures first (in path order), then relocate the moving piece."""
    captured: list[PieceTag] = []
    for square in move.captures:
        tag = board.capture(square)
        if tag is not None:
            captured.append(tag)
    board.relocate(move.origin, move.destination)
    return captured
