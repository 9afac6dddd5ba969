class RuleViolation(Exception):
    """A request the engine refuses. Never escapes the public operations."""


class MalformedRequest(RuleViolation):
    pass


class UnknownSeat(RuleViolation):
    def __init__(self, seat_id: object):
        self.seat_id = seat_id
        super().__init__(f"Unknown seat {seat_id!r}")


class DuplicateJoin(RuleViolation):
    def __init__(self, seat_id: str):
        self.seat_id = seat_id
        super().__init__(f"Seat '{seat_id}' has already joined")


class IllegalMove(RuleViolation):
    pass
