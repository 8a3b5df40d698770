"""Unit tests for /src/duel/moves.py"""

from typing import Callable
from unittest.mock import Mock, patch

import pytest

from src.core.exceptions import BoardInvariantError, IllegalMoveError
from src.core.shared_types import MoveCode, Player
from src.duel.board import Board
from src.duel.moves import (
    DIRECTIONS,
    MOVEMENT_RULES,
    PlannedMove,
    apply_move,
    direction_vector,
    parse_move_code,
    plan_long_range_diagonal_move,
    plan_long_range_straight_move,
    plan_move,
    plan_short_range_move,
)
from src.duel.pieces import PieceKind, PieceTag
from src.duel.square import Square

BoardFactory = Callable[[dict[str, tuple[int, int]]], Board]

A_PAWN = PieceTag(Player.A, "P1")
B_PAWN = PieceTag(Player.B, "P1")
A_STRAIGHT = PieceTag(Player.A, "H1")
A_DIAGONAL = PieceTag(Player.A, "H2")
B_STRAIGHT = PieceTag(Player.B, "H1")


# -- DIRECTIONS ---
@pytest.mark.parametrize("code", list(MoveCode))
def test_player_a_uses_table_as_is(code: MoveCode) -> None:
    assert direction_vector(code, Player.A) == DIRECTIONS[code]


@pytest.mark.parametrize(
    "code, vector",
    [
        (MoveCode.L, (0, -1)),
        (MoveCode.R, (0, 1)),
        (MoveCode.F, (-1, 0)),
        (MoveCode.B, (1, 0)),
        (MoveCode.FL, (-1, -1)),
        (MoveCode.FR, (-1, 1)),
        (MoveCode.BL, (1, -1)),
        (MoveCode.BR, (1, 1)),
    ],
)
def test_player_b_row_axis_is_mirrored(code: MoveCode, vector: tuple[int, int]) -> None:
    """B advances towards row 0, so forward means decreasing row. Columns are not mirrored."""
    assert direction_vector(code, Player.B) == vector


@pytest.mark.parametrize("code", ["X", "f", "", "FF", "LR"])
def test_unknown_move_code(code: str) -> None:
    with pytest.raises(IllegalMoveError):
        _ = parse_move_code(code)


# -- SHORT RANGE ---
@pytest.mark.parametrize(
    "code, destination",
    [
        (MoveCode.F, Square(3, 2)),
        (MoveCode.B, Square(1, 2)),
        (MoveCode.L, Square(2, 1)),
        (MoveCode.R, Square(2, 3)),
        (MoveCode.FL, Square(3, 1)),
        (MoveCode.FR, Square(3, 3)),
        (MoveCode.BL, Square(1, 1)),
        (MoveCode.BR, Square(1, 3)),
    ],
)
def test_pawn_moves_a_single_step(
    board_with: BoardFactory, code: MoveCode, destination: Square
) -> None:
    board = board_with({"A-P1": (2, 2)})
    planned = plan_short_range_move(A_PAWN, Square(2, 2), code, board)
    assert planned.destination == destination
    assert planned.captures == []


def test_pawn_cannot_leave_the_board(board_with: BoardFactory) -> None:
    board = board_with({"A-P1": (4, 0)})
    with pytest.raises(IllegalMoveError):
        _ = plan_short_range_move(A_PAWN, Square(4, 0), MoveCode.F, board)
    with pytest.raises(IllegalMoveError):
        _ = plan_short_range_move(A_PAWN, Square(4, 0), MoveCode.L, board)


def test_pawn_cannot_move_onto_friendly_piece(board_with: BoardFactory) -> None:
    board = board_with({"A-P1": (1, 1), "A-P2": (2, 1)})
    with pytest.raises(IllegalMoveError):
        _ = plan_short_range_move(A_PAWN, Square(1, 1), MoveCode.F, board)


def test_pawn_captures_on_destination(board_with: BoardFactory) -> None:
    board = board_with({"A-P1": (1, 1), "B-P1": (2, 1)})
    planned = plan_short_range_move(A_PAWN, Square(1, 1), MoveCode.F, board)
    assert planned.destination == Square(2, 1)
    assert planned.captures == [Square(2, 1)]


def test_b_pawn_moves_forward_towards_row_zero(board_with: BoardFactory) -> None:
    board = board_with({"B-P1": (4, 2)})
    planned = plan_short_range_move(B_PAWN, Square(4, 2), MoveCode.F, board)
    assert planned.destination == Square(3, 2)


# -- LONG RANGE STRAIGHT ---
def test_straight_hero_moves_two_steps(board_with: BoardFactory) -> None:
    board = board_with({"A-H1": (0, 2)})
    planned = plan_long_range_straight_move(A_STRAIGHT, Square(0, 2), MoveCode.F, board)
    assert planned.destination == Square(2, 2)
    assert planned.captures == []


def test_straight_hero_captures_on_the_path(board_with: BoardFactory) -> None:
    """Enemy on the first step gets captured even though the hero does not land there"""
    board = board_with({"A-H1": (0, 2), "B-P1": (1, 2)})
    planned = plan_long_range_straight_move(A_STRAIGHT, Square(0, 2), MoveCode.F, board)
    assert planned.destination == Square(2, 2)
    assert planned.captures == [Square(1, 2)]


def test_straight_hero_captures_in_path_order(board_with: BoardFactory) -> None:
    board = board_with({"A-H1": (2, 0), "B-P1": (2, 1), "B-P2": (2, 2)})
    planned = plan_long_range_straight_move(A_STRAIGHT, Square(2, 0), MoveCode.R, board)
    assert planned.destination == Square(2, 2)
    assert planned.captures == [Square(2, 1), Square(2, 2)]


def test_straight_hero_jumps_over_friendly_piece(board_with: BoardFactory) -> None:
    board = board_with({"A-H1": (0, 2), "A-P1": (1, 2), "B-P1": (2, 2)})
    planned = plan_long_range_straight_move(A_STRAIGHT, Square(0, 2), MoveCode.F, board)
    assert planned.destination == Square(2, 2)
    assert planned.captures == [Square(2, 2)]


def test_straight_hero_rejected_when_path_leaves_board(board_with: BoardFactory) -> None:
    """Second step would be on row 5: the whole move is rejected, no partial move"""
    board = board_with({"A-H1": (3, 2), "B-P1": (4, 2)})
    with pytest.raises(IllegalMoveError):
        _ = plan_long_range_straight_move(A_STRAIGHT, Square(3, 2), MoveCode.F, board)


def test_straight_hero_rejected_on_friendly_destination(board_with: BoardFactory) -> None:
    board = board_with({"A-H1": (0, 2), "B-P1": (1, 2), "A-P1": (2, 2)})
    with pytest.raises(IllegalMoveError):
        _ = plan_long_range_straight_move(A_STRAIGHT, Square(0, 2), MoveCode.F, board)


@pytest.mark.parametrize("code", [MoveCode.FL, MoveCode.FR, MoveCode.BL, MoveCode.BR])
def test_straight_hero_cannot_move_diagonally(board_with: BoardFactory, code: MoveCode) -> None:
    board = board_with({"A-H1": (2, 2)})
    with pytest.raises(IllegalMoveError):
        _ = plan_long_range_straight_move(A_STRAIGHT, Square(2, 2), code, board)


def test_b_straight_hero_moves_towards_row_zero(board_with: BoardFactory) -> None:
    board = board_with({"B-H1": (4, 1), "A-P1": (3, 1)})
    planned = plan_long_range_straight_move(B_STRAIGHT, Square(4, 1), MoveCode.F, board)
    assert planned.destination == Square(2, 1)
    assert planned.captures == [Square(3, 1)]


# -- LONG RANGE DIAGONAL ---
def test_diagonal_hero_moves_two_steps(board_with: BoardFactory) -> None:
    board = board_with({"A-H2": (0, 0), "B-P1": (1, 1), "B-P2": (2, 2)})
    planned = plan_long_range_diagonal_move(A_DIAGONAL, Square(0, 0), MoveCode.FR, board)
    assert planned.destination == Square(2, 2)
    assert planned.captures == [Square(1, 1), Square(2, 2)]


@pytest.mark.parametrize("code", [MoveCode.F, MoveCode.B, MoveCode.L, MoveCode.R])
def test_diagonal_hero_cannot_move_straight(board_with: BoardFactory, code: MoveCode) -> None:
    board = board_with({"A-H2": (2, 2)})
    with pytest.raises(IllegalMoveError):
        _ = plan_long_range_diagonal_move(A_DIAGONAL, Square(2, 2), code, board)


def test_diagonal_hero_rejected_when_path_leaves_board(board_with: BoardFactory) -> None:
    board = board_with({"A-H2": (0, 1)})
    with pytest.raises(IllegalMoveError):
        _ = plan_long_range_diagonal_move(A_DIAGONAL, Square(0, 1), MoveCode.FL, board)


# -- DISPATCH ---
@pytest.mark.parametrize(
    "name, kind",
    [
        ("P1", PieceKind.SHORT_RANGE),
        ("H1", PieceKind.LONG_RANGE_STRAIGHT),
        ("H2", PieceKind.LONG_RANGE_DIAGONAL),
    ],
)
def test_plan_move_dispatches_on_kind(board_with: BoardFactory, name: str, kind: PieceKind) -> None:
    board = board_with({f"A-{name}": (2, 2)})
    tag = PieceTag(Player.A, name)
    expected = PlannedMove(tag, MoveCode.F, Square(2, 2), Square(3, 2))
    mock_rule = Mock(return_value=expected)
    with patch.dict(MOVEMENT_RULES, {kind: mock_rule}):
        planned = plan_move(tag, Square(2, 2), "F", board)
    mock_rule.assert_called_once_with(tag, Square(2, 2), MoveCode.F, board)
    assert planned is expected


def test_piece_without_kind_cannot_move(board_with: BoardFactory) -> None:
    board = board_with({"A-K1": (2, 2)})
    with pytest.raises(IllegalMoveError):
        _ = plan_move(PieceTag(Player.A, "K1"), Square(2, 2), "F", board)


def test_planning_detects_drift_before_mutating(board_with: BoardFactory) -> None:
    board = board_with({"A-H1": (0, 2)})
    board.set_cell(Square(1, 2), PieceTag(Player.B, "ghost"))
    with pytest.raises(BoardInvariantError):
        _ = plan_move(A_STRAIGHT, Square(0, 2), "F", board)
    assert board.cell(Square(0, 2)) == A_STRAIGHT


# -- APPLY ---
def test_apply_captures_then_relocates(board_with: BoardFactory) -> None:
    board = board_with({"A-H1": (0, 2), "B-P1": (1, 2), "B-P2": (2, 2), "B-P3": (4, 4)})
    planned = plan_move(A_STRAIGHT, Square(0, 2), "F", board)
    captured = apply_move(planned, board)

    assert captured == [PieceTag(Player.B, "P1"), PieceTag(Player.B, "P2")]
    assert board.cell(Square(0, 2)) is None
    assert board.cell(Square(1, 2)) is None
    assert board.cell(Square(2, 2)) == A_STRAIGHT
    assert [piece.name for piece in board.roster(Player.B)] == ["P3"]
    board.check_invariants()
