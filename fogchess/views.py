"""Per-seat fog-of-war views of the engine snapshot."""

import chess

from fogchess.board import Square, squares_in
from fogchess.errors import UnknownSeat
from fogchess.game_state import FogChessGame


def _pairs(squares: chess.SquareSet) -> list[list[int]]:
    return [[square.row, square.col] for square in squares_in(squares)]


def seat_view(game: FogChessGame, seat_id: str | None) -> dict:
    """The snapshot as ``seat_id`` may see it.

    While the game runs, squares outside the seat's vision are blanked and
    ``legalMoves`` is only filled on the seat's own turn. In the lobby and
    after the game every piece is shown. Spectators (``None``) get the full
    snapshot.
    """
    payload = game.state_payload()
    payload["viewer"] = seat_id
    if seat_id is None:
        return payload

    table = game.table
    seat = table.seat(seat_id)
    if not table.active:
        payload["visible"] = []
        payload["legalMoves"] = []
        return payload

    visible = game.visible_squares(seat.id)
    for row, cells in enumerate(payload["board"]):
        for col in range(len(cells)):
            if Square(row, col).chess_square not in visible:
                cells[col] = None
    for player in payload["players"]:
        position = player["position"]
        if position and Square(position["row"], position["col"]).chess_square not in visible:
            player["position"] = None

    payload["visible"] = _pairs(visible)
    payload["legalMoves"] = (
        _pairs(game.legal_moves(seat.id)) if table.current_seat is seat else []
    )
    return payload


def view_or_none(game: FogChessGame, seat_id: str) -> dict | None:
    try:
        return seat_view(game, seat_id)
    except UnknownSeat:
        return None
