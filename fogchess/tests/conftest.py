import random

import pytest
from fastapi.testclient import TestClient

from fogchess.board import Board
from fogchess.game_state import FogChessGame
from fogchess.server import app
from fogchess.table import Phase


@pytest.fixture
def test_client():
    # One portal for every socket, so broadcasts share an event loop
    with TestClient(app) as client:
        yield client


@pytest.fixture
def game() -> FogChessGame:
    return FogChessGame(rng=random.Random(1234))


@pytest.fixture
def arrange(game):
    """Put an active game into a hand-picked layout.

    ``pieces`` maps seat id -> (rank, Square); seats left out stay off the
    board. Every seat counts as joined.
    """

    def _arrange(pieces, turn: int = 0) -> FogChessGame:
        table = game.table
        table.board = Board()
        for seat in table.seats:
            seat.joined = True
            seat.position = None
        for seat_id, (rank, square) in pieces.items():
            seat = table.seat(seat_id)
            seat.rank = rank
            seat.position = square
            table.board.place(seat_id, square)
        table.phase = Phase.ACTIVE
        table.current_turn = turn
        return game

    return _arrange


@pytest.fixture
def started_game(game) -> FogChessGame:
    for seat_id in ("green", "blue", "red", "purple"):
        game.join(seat_id)
    return game

