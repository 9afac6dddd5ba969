"""Light/dark balancing for bishops.

A seat that becomes a bishop commits to one square shade. At most two active
bishops share a shade, and a second bishop prefers the free shade while both
are below that cap.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from fogchess.board import SquareShade
from fogchess.redeploy import relocate_to_ring
from fogchess.seats import Rank, Seat

if TYPE_CHECKING:
    from fogchess.table import Table

MAX_BISHOPS_PER_SHADE = 2


@dataclass
class BishopBalance:
    light: int = 0
    dark: int = 0

    def count(self, shade: SquareShade) -> int:
        return getattr(self, shade.value)

    def increment(self, shade: SquareShade) -> None:
        setattr(self, shade.value, self.count(shade) + 1)

    def decrement(self, shade: SquareShade) -> None:
        setattr(self, shade.value, max(0, self.count(shade) - 1))

    @property
    def total(self) -> int:
        return self.light + self.dark

    def to_payload(self) -> dict:
        return {"light": self.light, "dark": self.dark}


def choose_bishop_color(table: Table, seat: Seat) -> SquareShade:
    current = seat.position.shade
    opposite = current.opposite

    if table.bishops.count(current) >= MAX_BISHOPS_PER_SHADE:
        return opposite
    if table.bishops.count(opposite) >= MAX_BISHOPS_PER_SHADE:
        return current
    for other in table.seats:
        if (
            other.id != seat.id
            and not other.finished
            and other.rank is Rank.BISHOP
            and other.bishop_color is current
        ):
            return opposite
    return current


def release_bishop_color(table: Table, seat: Seat) -> None:
    if seat.bishop_color is not None:
        table.bishops.decrement(seat.bishop_color)
        seat.bishop_color = None


def assign_bishop_color(table: Table, seat: Seat) -> SquareShade | None:
    """Commit a new bishop to a shade, moving it to a matching ring square."""
    if seat.position is None:
        return None

    chosen = choose_bishop_color(table, seat)
    if seat.position.shade is not chosen:
        relocate_to_ring(table, seat, shade=chosen)

    release_bishop_color(table, seat)
    seat.bishop_color = chosen
    table.bishops.increment(chosen)
    table.record(f"{seat.label} bishop announced on {chosen.value} squares.")
    return chosen
