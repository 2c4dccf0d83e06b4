"""Turn order, throw routing and the ranked scoreboard for one match."""
from __future__ import annotations

from collections.abc import Iterable, Sequence
import logging
from typing import NamedTuple

from ..exceptions import (
    AlreadyStarted,
    GameComplete,
    InsufficientPlayers,
    InvalidPlayer,
    NotStarted,
)
from .frame import Frame
from .player import Player

logger = logging.getLogger(__name__)

MIN_PLAYERS = 2


class ScoreboardEntry(NamedTuple):
    name: str
    score: int
    player: Player


class ThrowRecord(NamedTuple):
    player: str
    pins: int


class Match:
    """A multi-player game.

    Players join before :meth:`start`; afterwards the roster is frozen and
    throws are routed to the current player, who keeps the turn until their
    current frame is completed (last-frame bonus throws included).
    """

    def __init__(self) -> None:
        self._players: list[Player] = []
        self._current_index = 0
        self._started = False
        self._throw_log: list[ThrowRecord] = []

    @classmethod
    def replay(cls, names: Sequence[str], throws: Iterable[int]) -> "Match":
        """Build a started match from its players and recorded pin counts."""

        match = cls()
        for name in names:
            match.add_player(name)
        match.start()
        for pins in throws:
            match.add_throw(pins)
        return match

    @property
    def players(self) -> tuple[Player, ...]:
        return tuple(self._players)

    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def throw_log(self) -> list[ThrowRecord]:
        return list(self._throw_log)

    @property
    def current_player(self) -> Player | None:
        if not self._players:
            return None
        return self._players[self._current_index]

    @property
    def remaining_pins(self) -> int | None:
        player = self.current_player
        return None if player is None else player.remaining_pins

    def add_player(self, name: str) -> Player:
        if self._started:
            raise AlreadyStarted("cannot add players after the match has started")
        if not isinstance(name, str) or not name.strip():
            raise InvalidPlayer("player name must not be empty")
        name = name.strip()
        if any(player.name == name for player in self._players):
            raise InvalidPlayer(f"player '{name}' already exists")

        player = Player(name)
        self._players.append(player)
        logger.debug("Player %r joined (%d players)", name, len(self._players))
        return player

    def start(self) -> None:
        if self._started:
            raise AlreadyStarted()
        if len(self._players) < MIN_PLAYERS:
            raise InsufficientPlayers(len(self._players), MIN_PLAYERS)
        self._started = True
        logger.debug("Match started with %d players", len(self._players))

    def add_throw(self, pins: int) -> Frame:
        """Record a throw for the current player and return the frame it landed in."""

        if not self._started:
            raise NotStarted()
        if self.is_game_complete():
            raise GameComplete()

        player = self._players[self._current_index]
        frame = player.add_throw(pins)
        self._throw_log.append(ThrowRecord(player.name, pins))
        if frame.is_completed:
            self._rotate()
        return frame

    def _rotate(self) -> None:
        count = len(self._players)
        start = self._current_index
        for step in range(1, count + 1):
            candidate = (start + step) % count
            if not self._players[candidate].is_game_complete():
                self._current_index = candidate
                logger.debug(
                    "Turn passes to %r", self._players[candidate].name
                )
                return
        logger.debug("Match complete")

    def is_game_complete(self) -> bool:
        return bool(self._players) and all(
            player.is_game_complete() for player in self._players
        )

    def scoreboard(self) -> list[ScoreboardEntry]:
        entries = [
            ScoreboardEntry(player.name, player.calculate_score(), player)
            for player in self._players
        ]
        # sorted() is stable with reverse=True, ties keep join order
        return sorted(entries, key=lambda entry: entry.score, reverse=True)
