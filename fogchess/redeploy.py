"""Putting pieces on the outer ring: initial queens and redeployment."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from loguru import logger

from fogchess.board import RING, SHADES, Square, SquareShade, squares_in
from fogchess.seats import Seat
from fogchess.vision import is_visible_from, visible_to_opponents

if TYPE_CHECKING:
    from fogchess.table import Table

PLACEMENT_ATTEMPTS = 300

# c8, h6, f1, a3: one queen per ring side, no two on a shared line
FALLBACK_QUEEN_SQUARES = (Square(0, 2), Square(2, 7), Square(7, 5), Square(5, 0))
FALLBACK_RING_SQUARE = Square(0, 0)

RING_SQUARES = squares_in(RING)


def relocate_to_ring(table: Table, seat: Seat, shade: SquareShade | None = None) -> Square:
    """Move the seat's piece to an empty ring square, preferring unseen ones.

    Candidates are empty ring squares (of ``shade`` when given) outside every
    active opponent's vision. When none are safe, any empty candidate will
    do; when there is no empty candidate at all, ``FALLBACK_RING_SQUARE``.
    """
    if seat.position is not None:
        table.board.clear_if(seat.position, seat.id)

    allowed = RING & ~table.board.occupied()
    if shade is not None:
        allowed &= SHADES[shade]

    watched = visible_to_opponents(table.board, table.active_opponents(seat))
    candidates = squares_in(allowed & ~watched)
    if not candidates:
        logger.debug("No unseen ring square for {}, ignoring opponent vision", seat.id)
        candidates = squares_in(allowed)

    if candidates:
        chosen = table.rng.choice(candidates)
    else:
        logger.warning("Ring exhausted for {}, using {}", seat.id, FALLBACK_RING_SQUARE.name)
        chosen = FALLBACK_RING_SQUARE

    seat.position = chosen
    table.board.place(seat.id, chosen)
    return chosen


def sample_queen_squares(
    rng: random.Random, attempts: int = PLACEMENT_ATTEMPTS, count: int = 4
) -> list[Square] | None:
    """Sample ``count`` ring squares no two of which share a line.

    Each attempt picks squares one at a time among those out of line with
    the picks so far and is thrown away when it runs out of options.
    """
    for _ in range(attempts):
        squares: list[Square] = []
        for _ in range(count):
            open_squares = [
                square
                for square in RING_SQUARES
                if not any(is_visible_from(placed, square) for placed in squares)
            ]
            if not open_squares:
                break
            squares.append(rng.choice(open_squares))
        if len(squares) == count:
            return squares
    return None


def place_initial_queens(table: Table, attempts: int = PLACEMENT_ATTEMPTS) -> list[Square]:
    squares = sample_queen_squares(table.rng, attempts, len(table.seats))
    if squares is None:
        logger.warning("Queen placement fell back to the fixed layout after {} attempts", attempts)
        squares = list(FALLBACK_QUEEN_SQUARES)

    for seat, square in zip(table.seats, squares):
        seat.position = square
        table.board.place(seat.id, square)
    return squares
