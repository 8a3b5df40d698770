"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.main import create_app
from src.core.shared_types import Player
from src.duel.board import Board
from src.duel.match import Match
from src.duel.pieces import PieceTag
from src.duel.square import Square
from src.services.duel_service import DuelService

# label -> (row, col)
Layout = dict[str, tuple[int, int]]


def build_board(layout: Layout) -> Board:
    """Place pieces by wire label, ex. {"A-P1": (1, 1), "B-H1": (2, 1)}. Rosters are filled in the order given."""
    board = Board.empty()
    for label, (row, col) in layout.items():
        tag = PieceTag.from_label(label)
        board.place_piece(tag.owner, tag.name, Square(row, col))
    return board


@pytest.fixture
def board_with() -> Callable[[Layout], Board]:
    """Call the inner function with the desired layout"""
    return build_board


@pytest.fixture
def active_match() -> Callable[..., Match]:
    """A match in the active phase, skipping setup. Pieces can be put anywhere."""

    def _create_match(layout: Layout, to_move: Player = Player.A) -> Match:
        match = Match.new()
        match.board = build_board(layout)
        match.current_player = to_move
        return match

    return _create_match


@pytest.fixture
def fresh_match() -> Match:
    return Match.new()


@pytest.fixture
def service(fresh_match: Match) -> DuelService:
    return DuelService(fresh_match)


@pytest.fixture
def app(service: DuelService) -> FastAPI:
    return create_app(service)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Used as context manager so that all websocket sessions share the same event loop."""
    with TestClient(app) as test_client:
        yield test_client
