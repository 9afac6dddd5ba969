from dataclasses import dataclass
from enum import Enum

from fogchess.board import Square, SquareShade


class Rank(str, Enum):
    QUEEN = "queen"
    ROOK = "rook"
    BISHOP = "bishop"
    KNIGHT = "knight"
    PAWN = "pawn"

    def demoted(self) -> "Rank":
        """One step down the ladder; a pawn stays a pawn."""
        order = list(Rank)
        index = order.index(self)
        return order[min(index + 1, len(order) - 1)]


# Canonical cyclic turn order
SEAT_COLORS = (
    ("green", "Green"),
    ("blue", "Blue"),
    ("red", "Red"),
    ("purple", "Purple"),
)
SEAT_IDS = tuple(seat_id for seat_id, _ in SEAT_COLORS)


@dataclass
class Seat:
    id: str
    label: str
    rank: Rank | None = Rank.QUEEN
    joined: bool = False
    position: Square | None = None
    finished_place: int | None = None
    bishop_color: SquareShade | None = None

    @property
    def finished(self) -> bool:
        return self.finished_place is not None

    def finish(self, place: int) -> None:
        """Take the seat off the board for good with a finishing place."""
        self.finished_place = place
        self.position = None
        self.bishop_color = None

    def to_payload(self) -> dict:
        return {
            "id": self.id,
            "label": self.label,
            "pieceType": self.rank.value if self.rank else None,
            "joined": self.joined,
            "position": (
                {"row": self.position.row, "col": self.position.col}
                if self.position
                else None
            ),
            "finishedPlace": self.finished_place,
            "bishopSquareColor": self.bishop_color.value if self.bishop_color else None,
        }


def new_seats() -> list[Seat]:
    return [Seat(id=seat_id, label=label) for seat_id, label in SEAT_COLORS]
