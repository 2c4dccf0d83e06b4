"""A single 15-pin frame and its completion rules."""
from __future__ import annotations

import enum
import logging

from ..exceptions import ExceedsRemainingPins, FrameFinished, InvalidPinCount

logger = logging.getLogger(__name__)

MAX_PINS = 15
MAX_THROWS = 3
STRIKE_BONUS_THROWS = 3
SPARE_BONUS_THROWS = 2


class FrameState(str, enum.Enum):
    OPEN = "open"
    AWAITING_BONUS = "awaiting_bonus"
    DONE = "done"


def validate_pins(pins: object) -> int:
    """Return ``pins`` if it is an integer in ``[0, MAX_PINS]``."""

    # bool is a subclass of int; a True/False throw is a client bug
    if isinstance(pins, bool) or not isinstance(pins, int):
        raise InvalidPinCount(pins, MAX_PINS)
    if not 0 <= pins <= MAX_PINS:
        raise InvalidPinCount(pins, MAX_PINS)
    return pins


class Frame:
    """Throws recorded in one frame slot.

    A regular frame ends on a strike, once all 15 pins are down, or after
    three throws. The last frame instead moves to ``AWAITING_BONUS`` after a
    strike (three bonus throws owed) or a spare (two owed) and only ends once
    the owed throws are taken. Strike and spare are always derived from the
    throw list; the state only ever moves forward.
    """

    def __init__(self, last_frame: bool = False) -> None:
        self._throws: list[int] = []
        self._last_frame = last_frame
        self._state = FrameState.OPEN
        self._bonus_owed = 0

    def __repr__(self) -> str:
        return (
            f"Frame(throws={self._throws!r}, last_frame={self._last_frame}, "
            f"state={self._state.value})"
        )

    @property
    def last_frame(self) -> bool:
        return self._last_frame

    @property
    def throws(self) -> list[int]:
        return list(self._throws)

    @property
    def state(self) -> FrameState:
        return self._state

    @property
    def bonus_owed(self) -> int:
        return self._bonus_owed

    @property
    def is_strike(self) -> bool:
        return bool(self._throws) and self._throws[0] == MAX_PINS

    @property
    def is_spare(self) -> bool:
        return not self.is_strike and self._spare_length() is not None

    @property
    def is_completed(self) -> bool:
        return self._state is FrameState.DONE

    @property
    def owes_bonus(self) -> bool:
        return self._state is FrameState.AWAITING_BONUS

    @property
    def pins_knocked_down(self) -> int:
        return sum(self._throws)

    @property
    def remaining_pins(self) -> int:
        """Pins standing for the next throw.

        In the last frame the pins are reset every time the running count of
        the current set reaches 15, i.e. after a strike or after the throw
        that completes a spare.
        """

        if not self._last_frame:
            return MAX_PINS - self.pins_knocked_down
        standing = MAX_PINS
        for pins in self._throws:
            standing -= pins
            if standing == 0:
                standing = MAX_PINS
        return standing

    def add_throw(self, pins: int) -> None:
        if self._state is FrameState.DONE:
            raise FrameFinished()
        validate_pins(pins)
        remaining = self.remaining_pins
        if pins > remaining:
            raise ExceedsRemainingPins(pins, remaining)

        self._throws.append(pins)
        self._advance()
        if self._state is FrameState.DONE:
            logger.debug(
                "Frame completed: throws=%s total=%d last_frame=%s",
                self._throws,
                self.pins_knocked_down,
                self._last_frame,
            )

    def _spare_length(self) -> int | None:
        """Number of throws that made a spare, if the opening throws made one."""

        total = 0
        for count, pins in enumerate(self._throws[:MAX_THROWS], start=1):
            total += pins
            if total == MAX_PINS:
                return count if count > 1 else None
        return None

    def _advance(self) -> None:
        if self._state is FrameState.AWAITING_BONUS:
            # bonus pins never reopen the frame, strikes included
            self._bonus_owed -= 1
            if self._bonus_owed == 0:
                self._state = FrameState.DONE
            return

        if self.pins_knocked_down == MAX_PINS:
            if not self._last_frame:
                self._state = FrameState.DONE
            elif self.is_strike:
                self._state = FrameState.AWAITING_BONUS
                self._bonus_owed = STRIKE_BONUS_THROWS
            else:
                self._state = FrameState.AWAITING_BONUS
                self._bonus_owed = SPARE_BONUS_THROWS
        elif len(self._throws) == MAX_THROWS:
            self._state = FrameState.DONE
