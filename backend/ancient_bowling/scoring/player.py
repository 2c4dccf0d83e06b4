"""Frame sequence and scoring for one participant."""
from __future__ import annotations

from itertools import chain, islice
import logging

from ..exceptions import GameComplete
from .frame import (
    MAX_PINS,
    SPARE_BONUS_THROWS,
    STRIKE_BONUS_THROWS,
    Frame,
    validate_pins,
)

logger = logging.getLogger(__name__)

MAX_FRAMES = 5


class Player:
    def __init__(self, name: str) -> None:
        self.name = name
        self._frames: list[Frame] = [Frame()]

    def __repr__(self) -> str:
        return f"Player(name={self.name!r}, frames={len(self._frames)})"

    @property
    def frames(self) -> list[Frame]:
        return list(self._frames)

    @property
    def current_frame(self) -> Frame:
        return self._frames[-1]

    @property
    def current_frame_number(self) -> int:
        """1-based number of the frame the next throw goes to."""

        if self.current_frame.is_completed and len(self._frames) < MAX_FRAMES:
            return len(self._frames) + 1
        return len(self._frames)

    @property
    def remaining_pins(self) -> int:
        """Pins standing for this player's next throw, without opening a frame."""

        if self.is_game_complete():
            return 0
        if self.current_frame.is_completed:
            return MAX_PINS
        return self.current_frame.remaining_pins

    def ensure_fresh_frame(self) -> None:
        """Open the next frame once the current one is completed.

        The fifth frame is never followed by another one; bonus throws are
        recorded on it.
        """

        if self.current_frame.is_completed and len(self._frames) < MAX_FRAMES:
            last_frame = len(self._frames) == MAX_FRAMES - 1
            self._frames.append(Frame(last_frame=last_frame))

    def add_throw(self, pins: int) -> Frame:
        """Record a throw and return the frame that received it."""

        validate_pins(pins)
        self.ensure_fresh_frame()
        if self.is_game_complete():
            raise GameComplete(f"player '{self.name}' has finished all frames")
        frame = self.current_frame
        frame.add_throw(pins)
        return frame

    def calculate_score(self, through_frame: int | None = None) -> int:
        """Cumulative score of the first ``through_frame`` frames (all by default).

        Strikes earn the next three throws and spares the next two, collected
        across the following frames. Missing throws simply add nothing yet, so
        the value can be shown while the game is in progress. The last frame's
        bonus throws are part of its own pin count.
        """

        limit = len(self._frames) if through_frame is None else through_frame
        total = 0
        for index, frame in enumerate(self._frames[: max(limit, 0)]):
            total += frame.pins_knocked_down
            if frame.last_frame:
                continue
            if frame.is_strike:
                total += sum(self._next_throws(index, STRIKE_BONUS_THROWS))
            elif frame.is_spare:
                total += sum(self._next_throws(index, SPARE_BONUS_THROWS))
        return total

    def frame_scores(self) -> list[int]:
        return [
            self.calculate_score(number) for number in range(1, len(self._frames) + 1)
        ]

    def _next_throws(self, index: int, count: int) -> list[int]:
        following = chain.from_iterable(
            frame.throws for frame in self._frames[index + 1 :]
        )
        return list(islice(following, count))

    def is_game_complete(self) -> bool:
        return len(self._frames) == MAX_FRAMES and self._frames[-1].is_completed

    def needs_bonus_throws(self) -> bool:
        return len(self._frames) == MAX_FRAMES and self._frames[-1].owes_bonus
