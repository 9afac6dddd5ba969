import random
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from loguru import logger

from fogchess.bishops import BishopBalance
from fogchess.board import Board
from fogchess.errors import UnknownSeat
from fogchess.seats import Seat, new_seats


class Phase(str, Enum):
    LOBBY = "lobby"
    ACTIVE = "active"
    FINISHED = "finished"


@dataclass
class Table:
    """Everything the engine owns for one game.

    Every rule operation receives the table explicitly and mutates it in
    place; nothing else writes to it.
    """

    rng: random.Random = field(default_factory=random.Random)
    board: Board = field(default_factory=Board)
    seats: list[Seat] = field(default_factory=new_seats)
    bishops: BishopBalance = field(default_factory=BishopBalance)
    phase: Phase = Phase.LOBBY
    current_turn: int = 0
    finish_order: list[str] = field(default_factory=list)
    events: list[dict] = field(default_factory=list)

    @property
    def active(self) -> bool:
        return self.phase is Phase.ACTIVE

    @property
    def joined_count(self) -> int:
        return sum(1 for seat in self.seats if seat.joined)

    @property
    def current_seat(self) -> Seat:
        return self.seats[self.current_turn]

    def seat(self, seat_id: object) -> Seat:
        for seat in self.seats:
            if seat.id == seat_id:
                return seat
        raise UnknownSeat(seat_id)

    def active_opponents(self, seat: Seat) -> list[Seat]:
        """Other seats still in the game that stand somewhere on the board."""
        return [
            other
            for other in self.seats
            if other.id != seat.id and not other.finished and other.position
        ]

    def record(self, message: str) -> None:
        self.events.insert(
            0, {"message": message, "time": datetime.now(timezone.utc).isoformat()}
        )
        logger.info(message)
