from enum import Enum
from typing import Iterator, NamedTuple

import chess

BOARD_SIZE = 8


class SquareShade(str, Enum):
    LIGHT = "light"
    DARK = "dark"

    @property
    def opposite(self) -> "SquareShade":
        return SquareShade.DARK if self is SquareShade.LIGHT else SquareShade.LIGHT


class Square(NamedTuple):
    """A board square. Row 0 is the eighth rank, col 0 is the a-file."""

    row: int
    col: int

    @property
    def chess_square(self) -> chess.Square:
        return chess.square(self.col, BOARD_SIZE - 1 - self.row)

    @classmethod
    def from_chess(cls, sq: chess.Square) -> "Square":
        return cls(BOARD_SIZE - 1 - chess.square_rank(sq), chess.square_file(sq))

    @property
    def name(self) -> str:
        return chess.square_name(self.chess_square)

    @property
    def shade(self) -> SquareShade:
        # (row + col) even is light, which is python-chess's light set too
        if chess.BB_SQUARES[self.chess_square] & chess.BB_LIGHT_SQUARES:
            return SquareShade.LIGHT
        return SquareShade.DARK

    def offset(self, d_row: int, d_col: int) -> "Square":
        return Square(self.row + d_row, self.col + d_col)


# ---- Square sets ----
RING = chess.SquareSet(
    chess.BB_RANK_1 | chess.BB_RANK_8 | chess.BB_FILE_A | chess.BB_FILE_H
)
SHADES = {
    SquareShade.LIGHT: chess.SquareSet(chess.BB_LIGHT_SQUARES),
    SquareShade.DARK: chess.SquareSet(chess.BB_DARK_SQUARES),
}


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def is_ring(square: Square) -> bool:
    return square.chess_square in RING


def squares_in(squares: chess.SquareSet) -> list[Square]:
    """Squares of a set in reading order (row by row, left to right)."""
    return sorted(Square.from_chess(sq) for sq in squares)


# ---- Grid ----
class Board:
    """8x8 grid where each square holds a seat id or None."""

    def __init__(self) -> None:
        self.grid: list[list[str | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]

    def occupant(self, square: Square) -> str | None:
        return self.grid[square.row][square.col]

    def is_empty(self, square: Square) -> bool:
        return self.occupant(square) is None

    def place(self, seat_id: str, square: Square) -> None:
        self.grid[square.row][square.col] = seat_id

    def clear(self, square: Square) -> None:
        self.grid[square.row][square.col] = None

    def clear_if(self, square: Square, seat_id: str) -> bool:
        """Clear ``square`` only when it still holds ``seat_id``."""
        if self.occupant(square) != seat_id:
            return False
        self.clear(square)
        return True

    def __iter__(self) -> Iterator[tuple[Square, str | None]]:
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                yield Square(row, col), self.grid[row][col]

    def occupied(self) -> chess.SquareSet:
        return chess.SquareSet(
            square.chess_square for square, occupant in self if occupant is not None
        )

    def squares_of(self, seat_id: str) -> list[Square]:
        return [square for square, occupant in self if occupant == seat_id]

    def to_rows(self) -> list[list[str | None]]:
        return [list(row) for row in self.grid]
