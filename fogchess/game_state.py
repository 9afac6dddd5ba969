import random

import chess
from loguru import logger

from fogchess.board import Square, in_bounds
from fogchess.capture import MoveOutcome, resolve_move
from fogchess.errors import DuplicateJoin, IllegalMove, MalformedRequest, RuleViolation, UnknownSeat
from fogchess.redeploy import PLACEMENT_ATTEMPTS, place_initial_queens
from fogchess.table import Phase, Table
from fogchess.vision import legal_moves, visible_squares


# Owns the authoritative four-seat game and applies every rule
class FogChessGame:
    def __init__(
        self,
        rng: random.Random | None = None,
        placement_attempts: int = PLACEMENT_ATTEMPTS,
    ) -> None:
        self.rng = rng or random.Random()
        self.placement_attempts = placement_attempts
        self.table = Table(rng=self.rng)
        self.last_outcome: MoveOutcome | None = None

    def reset(self) -> None:
        """Back to an empty lobby."""
        self.table = Table(rng=self.rng)
        self.last_outcome = None
        self.table.record("Game reset. Waiting for players to join.")

    # ---- Seats ----
    def join(self, seat_id: str) -> bool:
        """Claim a seat. Returns True if the seat was free and is now joined."""
        try:
            seat = self.table.seat(seat_id)
            if seat.joined:
                raise DuplicateJoin(seat.id)
        except RuleViolation as exc:
            logger.debug("Join rejected: {}", exc)
            return False

        seat.joined = True
        self.table.record(f"{seat.label} joined the lobby.")
        if self.table.phase is Phase.LOBBY and self.table.joined_count == len(self.table.seats):
            self.start()
        return True

    def disconnect(self, seat_id: str) -> bool:
        """Release a seat; a piece already on the board stays where it is."""
        try:
            seat = self.table.seat(seat_id)
        except RuleViolation as exc:
            logger.debug("Disconnect ignored: {}", exc)
            return False
        if not seat.joined:
            return False
        seat.joined = False
        self.table.record(f"{seat.label} disconnected.")
        return True

    def start(self) -> None:
        self.table.phase = Phase.ACTIVE
        place_initial_queens(self.table, self.placement_attempts)
        self.table.current_turn = 0
        self.table.record("All players joined. Queens deployed to the outer ring.")

    # ---- Turns ----
    def advance_turn(self) -> None:
        if not self.table.active:
            return
        seats = self.table.seats
        index = self.table.current_turn
        for _ in range(len(seats)):
            index = (index + 1) % len(seats)
            if not seats[index].finished:
                break
        self.table.current_turn = index

    def _validate_move(self, seat_id: str, row: object, col: object) -> Square:
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in (row, col)):
            raise MalformedRequest(f"Move target must be two integers, got {row!r}, {col!r}")
        if not in_bounds(row, col):
            raise IllegalMove(f"({row}, {col}) is off the board")
        if not self.table.active:
            raise IllegalMove("Game is not active")

        seat = self.table.seat(seat_id)
        if seat is not self.table.current_seat:
            raise IllegalMove(f"It is not {seat.label}'s turn")
        if seat.finished:
            raise IllegalMove(f"{seat.label} has already finished")

        target = Square(row, col)
        if target.chess_square not in legal_moves(self.table.board, seat):
            raise IllegalMove(f"{target.name} is not a legal destination for {seat.label}")
        return target

    def move(self, seat_id: str, row: int, col: int) -> bool:
        """
        Try to move the seat's piece to (row, col).
        Returns True if it was legal and applied, False otherwise.
        """
        try:
            target = self._validate_move(seat_id, row, col)
        except RuleViolation as exc:
            logger.debug("Move rejected: {}", exc)
            return False

        seat = self.table.seat(seat_id)
        self.last_outcome = resolve_move(self.table, seat, target)
        self.advance_turn()
        return True

    # ---- Queries ----
    def visible_squares(self, seat_id: str) -> chess.SquareSet:
        try:
            return visible_squares(self.table.board, self.table.seat(seat_id))
        except UnknownSeat:
            return chess.SquareSet()

    def legal_moves(self, seat_id: str) -> chess.SquareSet:
        try:
            return legal_moves(self.table.board, self.table.seat(seat_id))
        except UnknownSeat:
            return chess.SquareSet()

    def state_payload(self) -> dict:
        """Return the full, unredacted game state as a JSON-friendly dict."""
        table = self.table
        return {
            "type": "state",
            "phase": table.phase.value,
            "active": table.active,
            "players": [seat.to_payload() for seat in table.seats],
            "board": table.board.to_rows(),
            "joinedCount": table.joined_count,
            "currentTurn": table.current_turn,
            "currentPlayer": table.current_seat.id,
            "places": list(table.finish_order),
            "bishopCounts": table.bishops.to_payload(),
            "logs": [dict(event) for event in table.events],
        }
