from dataclasses import dataclass
from enum import Enum

from fogchess.bishops import assign_bishop_color, release_bishop_color
from fogchess.board import Square
from fogchess.redeploy import relocate_to_ring
from fogchess.seats import Rank, Seat
from fogchess.table import Phase, Table


class OutcomeKind(str, Enum):
    MOVED = "moved"
    DEMOTED = "demoted"
    ELIMINATED = "eliminated"


@dataclass(frozen=True)
class MoveOutcome:
    kind: OutcomeKind
    seat_id: str
    target: Square
    rank: Rank | None
    square: Square | None
    victim_id: str | None = None
    place: int | None = None


def _leave_origin(table: Table, seat: Seat) -> None:
    if seat.position is not None:
        table.board.clear_if(seat.position, seat.id)


def _relocate(table: Table, mover: Seat, target: Square) -> MoveOutcome:
    _leave_origin(table, mover)
    table.board.place(mover.id, target)
    mover.position = target
    table.record(f"{mover.label} moved.")
    return MoveOutcome(OutcomeKind.MOVED, mover.id, target, mover.rank, target)


def _pawn_capture(table: Table, mover: Seat, victim: Seat, target: Square) -> MoveOutcome:
    _leave_origin(table, mover)
    release_bishop_color(table, mover)
    place = len(table.finish_order) + 1
    mover.finish(place)
    table.finish_order.append(mover.id)
    table.record(
        f"{mover.label} pawn captured {victim.label} and claimed place {place}!"
    )
    if len(table.finish_order) == len(table.seats):
        table.phase = Phase.FINISHED
        table.record("All places taken. Game over.")
    return MoveOutcome(
        OutcomeKind.ELIMINATED, mover.id, target, mover.rank, None, victim.id, place
    )


def _demoting_capture(table: Table, mover: Seat, victim: Seat, target: Square) -> MoveOutcome:
    # The attacker takes the square; the victim keeps its rank and its
    # position record even though the board no longer shows it there.
    _leave_origin(table, mover)
    table.board.place(mover.id, target)
    mover.position = target

    previous = mover.rank
    mover.rank = previous.demoted()
    if previous is Rank.BISHOP and mover.rank is not Rank.BISHOP:
        release_bishop_color(table, mover)

    relocate_to_ring(table, mover)
    if mover.rank is Rank.BISHOP:
        assign_bishop_color(table, mover)

    table.record(
        f"{mover.label} captured {victim.label}, downgraded to "
        f"{mover.rank.value}, and redeployed to the outer ring."
    )
    return MoveOutcome(
        OutcomeKind.DEMOTED, mover.id, target, mover.rank, mover.position, victim.id
    )


def resolve_move(table: Table, mover: Seat, target: Square) -> MoveOutcome:
    """Apply an already validated move of ``mover`` to ``target``."""
    occupant = table.board.occupant(target)
    if occupant is None or occupant == mover.id:
        return _relocate(table, mover, target)

    victim = table.seat(occupant)
    if mover.rank is Rank.PAWN:
        return _pawn_capture(table, mover, victim, target)
    return _demoting_capture(table, mover, victim, target)
