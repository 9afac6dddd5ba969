"""Vision and move generation.

Every result is a ``chess.SquareSet``; use ``Square.chess_square`` to test
membership and ``board.squares_in`` to get ``Square`` values back.
"""

import chess

from fogchess.board import Board, Square, in_bounds
from fogchess.seats import Rank, Seat

ORTHOGONAL = ((1, 0), (-1, 0), (0, 1), (0, -1))
DIAGONAL = ((1, 1), (1, -1), (-1, 1), (-1, -1))
KNIGHT_JUMPS = (
    (2, 1), (2, -1), (-2, 1), (-2, -1),
    (1, 2), (1, -2), (-1, 2), (-1, -2),
)

RAY_DIRECTIONS = {
    Rank.QUEEN: ORTHOGONAL + DIAGONAL,
    Rank.ROOK: ORTHOGONAL,
    Rank.BISHOP: DIAGONAL,
}


def _ray(board: Board, origin: Square, d_row: int, d_col: int) -> chess.SquareSet:
    squares = chess.SquareSet()
    square = origin.offset(d_row, d_col)
    while in_bounds(*square):
        squares.add(square.chess_square)
        if not board.is_empty(square):
            # The first occupied square ends the ray and is itself included
            break
        square = square.offset(d_row, d_col)
    return squares


def _steps(origin: Square, offsets) -> list[Square]:
    return [
        origin.offset(d_row, d_col)
        for d_row, d_col in offsets
        if in_bounds(origin.row + d_row, origin.col + d_col)
    ]


def _pawn_moves(board: Board, seat: Seat, origin: Square) -> chess.SquareSet:
    squares = chess.SquareSet()
    for square in _steps(origin, ORTHOGONAL):
        if board.is_empty(square):
            squares.add(square.chess_square)
    for square in _steps(origin, DIAGONAL):
        occupant = board.occupant(square)
        if occupant is not None and occupant != seat.id:
            squares.add(square.chess_square)
    return squares


def compute_squares(board: Board, seat: Seat, for_vision: bool) -> chess.SquareSet:
    """Squares the seat's piece sees (``for_vision``) or may move to.

    A seat without a position or rank yields an empty set.
    """
    origin = seat.position
    if origin is None or seat.rank is None:
        return chess.SquareSet()

    squares = chess.SquareSet()
    if seat.rank in RAY_DIRECTIONS:
        for d_row, d_col in RAY_DIRECTIONS[seat.rank]:
            squares |= _ray(board, origin, d_row, d_col)
    elif seat.rank is Rank.KNIGHT:
        for square in _steps(origin, KNIGHT_JUMPS):
            squares.add(square.chess_square)
    elif seat.rank is Rank.PAWN:
        if for_vision:
            for square in _steps(origin, ORTHOGONAL + DIAGONAL):
                squares.add(square.chess_square)
        else:
            squares = _pawn_moves(board, seat, origin)

    if for_vision:
        return squares
    return chess.SquareSet(
        sq for sq in squares if board.occupant(Square.from_chess(sq)) != seat.id
    )


def visible_squares(board: Board, seat: Seat) -> chess.SquareSet:
    if seat.position is None:
        return chess.SquareSet()
    squares = compute_squares(board, seat, for_vision=True)
    squares.add(seat.position.chess_square)
    return squares


def legal_moves(board: Board, seat: Seat) -> chess.SquareSet:
    return compute_squares(board, seat, for_vision=False)


def visible_to_opponents(board: Board, opponents: list[Seat]) -> chess.SquareSet:
    squares = chess.SquareSet()
    for opponent in opponents:
        squares |= visible_squares(board, opponent)
    return squares


def is_visible_from(origin: Square, target: Square) -> bool:
    """Whether a queen on ``origin`` would line up with ``target`` on an open board."""
    d_row = target.row - origin.row
    d_col = target.col - origin.col
    return d_row == 0 or d_col == 0 or abs(d_row) == abs(d_col)
