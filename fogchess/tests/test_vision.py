from fogchess.board import Board, Square, squares_in
from fogchess.seats import Rank, Seat
from fogchess.vision import (
    DIAGONAL,
    ORTHOGONAL,
    compute_squares,
    is_visible_from,
    legal_moves,
    visible_squares,
)


def put(board: Board, seat_id: str, rank: Rank, square: Square) -> Seat:
    board.place(seat_id, square)
    return Seat(id=seat_id, label=seat_id.title(), rank=rank, position=square)


def test_queen_on_open_board_sees_27_squares():
    board = Board()
    queen = put(board, "green", Rank.QUEEN, Square(3, 3))

    assert len(legal_moves(board, queen)) == 27
    assert len(visible_squares(board, queen)) == 28  # plus its own square


def test_ray_stops_on_first_occupied_square_inclusive():
    board = Board()
    rook = put(board, "green", Rank.ROOK, Square(0, 0))
    board.place("blue", Square(0, 3))
    board.place("red", Square(5, 0))

    moves = squares_in(legal_moves(board, rook))
    assert Square(0, 3) in moves
    assert Square(0, 4) not in moves
    assert Square(5, 0) in moves
    assert Square(6, 0) not in moves
    assert moves == [
        Square(0, 1), Square(0, 2), Square(0, 3),
        Square(1, 0), Square(2, 0), Square(3, 0), Square(4, 0), Square(5, 0),
    ]


def test_rays_never_jump_pieces():
    board = Board()
    queen = put(board, "green", Rank.QUEEN, Square(4, 4))
    for square in (Square(4, 6), Square(2, 2), Square(7, 4), Square(1, 7)):
        board.place("blue", square)
    reached = visible_squares(board, queen)

    for d_row, d_col in ORTHOGONAL + DIAGONAL:
        square = Square(4 + d_row, 4 + d_col)
        blocked = False
        while 0 <= square.row < 8 and 0 <= square.col < 8:
            assert (square.chess_square in reached) is not blocked
            if not board.is_empty(square):
                blocked = True
            square = square.offset(d_row, d_col)


def test_bishop_only_moves_diagonally():
    board = Board()
    bishop = put(board, "green", Rank.BISHOP, Square(7, 2))

    for square in squares_in(legal_moves(board, bishop)):
        assert abs(square.row - 7) == abs(square.col - 2)
    assert len(legal_moves(board, bishop)) == 7


def test_knight_jumps_regardless_of_occupancy():
    board = Board()
    knight = put(board, "green", Rank.KNIGHT, Square(0, 0))
    board.place("blue", Square(1, 2))
    board.place("red", Square(1, 1))

    assert squares_in(legal_moves(board, knight)) == [Square(1, 2), Square(2, 1)]
    assert squares_in(compute_squares(board, knight, for_vision=True)) == [
        Square(1, 2),
        Square(2, 1),
    ]

    center = put(board, "purple", Rank.KNIGHT, Square(4, 4))
    assert len(legal_moves(board, center)) == 8


def test_pawn_vision_is_all_eight_neighbours():
    board = Board()
    pawn = put(board, "green", Rank.PAWN, Square(3, 3))
    board.place("blue", Square(2, 3))
    board.place("red", Square(4, 4))

    vision = squares_in(compute_squares(board, pawn, for_vision=True))
    assert vision == [
        Square(2, 2), Square(2, 3), Square(2, 4),
        Square(3, 2), Square(3, 4),
        Square(4, 2), Square(4, 3), Square(4, 4),
    ]

    corner = put(board, "purple", Rank.PAWN, Square(7, 7))
    assert len(compute_squares(board, corner, for_vision=True)) == 3


def test_pawn_moves_straight_and_captures_diagonally():
    board = Board()
    pawn = put(board, "green", Rank.PAWN, Square(3, 3))
    board.place("blue", Square(2, 3))  # orthogonal, blocked
    board.place("red", Square(4, 4))  # diagonal, capturable

    moves = squares_in(legal_moves(board, pawn))
    assert moves == [Square(3, 2), Square(3, 4), Square(4, 3), Square(4, 4)]
    assert Square(2, 3) not in moves
    assert Square(2, 2) not in moves  # empty diagonal


def test_pawn_never_captures_itself_diagonally():
    board = Board()
    pawn = put(board, "green", Rank.PAWN, Square(3, 3))
    board.place("green", Square(4, 4))

    assert Square(4, 4).chess_square not in legal_moves(board, pawn)


def test_seat_without_position_or_rank_sees_nothing():
    board = Board()
    finished = Seat(id="green", label="Green", rank=Rank.PAWN, position=None)
    rankless = Seat(id="blue", label="Blue", rank=None, position=Square(3, 3))

    assert len(visible_squares(board, finished)) == 0
    assert len(legal_moves(board, finished)) == 0
    assert len(legal_moves(board, rankless)) == 0
    assert squares_in(visible_squares(board, rankless)) == [Square(3, 3)]


def test_is_visible_from_uses_queen_lines():
    assert is_visible_from(Square(0, 0), Square(0, 6))
    assert is_visible_from(Square(0, 0), Square(5, 0))
    assert is_visible_from(Square(0, 0), Square(7, 7))
    assert is_visible_from(Square(7, 0), Square(0, 7))
    assert not is_visible_from(Square(0, 2), Square(2, 7))
