from pydantic import BaseModel
from typing import Optional


class ProblemDetail(BaseModel):
    """RFC 7807 compliant error response."""

    type: str = "about:blank"
    title: str
    detail: Optional[str] = None
    status: int
    instance: Optional[str] = None
    code: str


class DomainException(Exception):
    """Base class for domain-specific exceptions."""

    def __init__(
        self,
        status_code: int,
        title: str,
        *,
        code: str,
        detail: str | None = None,
        type_: str = "about:blank",
    ) -> None:
        super().__init__(detail or title)
        self.status_code = status_code
        self.title = title
        self.detail = detail
        self.type = type_
        self.code = code


# Bad input: the caller can correct the request and try again.


class InvalidPinCount(DomainException, ValueError):
    def __init__(self, pins: object, max_pins: int) -> None:
        self.pins = pins
        super().__init__(
            status_code=400,
            title="Invalid pin count",
            detail=f"pins must be an integer between 0 and {max_pins}, got {pins!r}",
            code="invalid_pin_count",
        )


class ExceedsRemainingPins(DomainException, ValueError):
    def __init__(self, pins: int, remaining: int) -> None:
        self.pins = pins
        self.remaining = remaining
        super().__init__(
            status_code=400,
            title="Too many pins",
            detail=f"only {remaining} pins are standing, got {pins}",
            code="exceeds_remaining_pins",
        )


class InvalidPlayer(DomainException, ValueError):
    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=400,
            title="Invalid player",
            detail=detail,
            code="invalid_player",
        )


class InsufficientPlayers(DomainException, ValueError):
    def __init__(self, count: int, minimum: int) -> None:
        self.count = count
        self.minimum = minimum
        super().__init__(
            status_code=400,
            title="Not enough players",
            detail=f"need at least {minimum} players to start, got {count}",
            code="insufficient_players",
        )


# Illegal state: the request does not fit the current match state.


class FrameFinished(DomainException):
    def __init__(self) -> None:
        super().__init__(
            status_code=409,
            title="Frame finished",
            detail="frame is finished, cannot add more throws",
            code="frame_finished",
        )


class GameComplete(DomainException):
    def __init__(self, detail: str = "game is complete, cannot add more throws") -> None:
        super().__init__(
            status_code=409,
            title="Game complete",
            detail=detail,
            code="game_complete",
        )


class AlreadyStarted(DomainException):
    def __init__(self, detail: str = "match has already started") -> None:
        super().__init__(
            status_code=409,
            title="Match already started",
            detail=detail,
            code="match_already_started",
        )


class NotStarted(DomainException):
    def __init__(self) -> None:
        super().__init__(
            status_code=409,
            title="Match not started",
            detail="match has not started",
            code="match_not_started",
        )


class MatchNotFound(DomainException):
    def __init__(self, match_id: str) -> None:
        self.match_id = match_id
        super().__init__(
            status_code=404,
            title="Match not found",
            detail=f"match '{match_id}' not found",
            code="match_not_found",
        )
