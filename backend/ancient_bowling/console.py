#!/usr/bin/env python3
"""Play a match of ancient bowling at the terminal."""

from __future__ import annotations

import argparse
from collections.abc import Callable, Sequence
import logging
from typing import Optional

from .exceptions import DomainException, InvalidPlayer
from .scoring import MAX_PINS, MIN_PLAYERS, Frame, Match, ScoreboardEntry

logger = logging.getLogger(__name__)

MAX_CONSOLE_PLAYERS = 10
RULE = "=" * 40


def _cleared_pins(frame: Frame, pins: int) -> bool:
    """Whether ``pins`` knocked down the last standing pins of a set."""

    if frame.last_frame:
        # the last frame resets to a full rack once a set is cleared
        return pins > 0 and frame.remaining_pins == MAX_PINS
    return frame.remaining_pins == 0


def _struck(frame: Frame, pins: int) -> bool:
    """Whether ``pins`` was a strike on a full rack opening a set."""

    if pins != MAX_PINS:
        return False
    if not frame.last_frame:
        return frame.is_strike and len(frame.throws) == 1
    in_set = 0
    standing = MAX_PINS
    for thrown in frame.throws[:-1]:
        standing -= thrown
        in_set += 1
        if standing == 0:
            standing = MAX_PINS
            in_set = 0
    return in_set == 0


class ConsoleGame:
    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        print_fn: Callable[[str], None] = print,
    ) -> None:
        self.match = Match()
        self._input = input_fn
        self._print = print_fn

    def run(self, names: Optional[Sequence[str]] = None) -> list[ScoreboardEntry]:
        self._print("Welcome to Ancient Bowling!")
        self._setup_players(names)
        self.match.start()
        self._play()
        return self._show_final_scores()

    def _setup_players(self, names: Optional[Sequence[str]]) -> None:
        if names:
            for name in names:
                self.match.add_player(name)
            return

        count = self._read_int(
            f"Enter the number of players (minimum {MIN_PLAYERS}): ",
            MIN_PLAYERS,
            MAX_CONSOLE_PLAYERS,
        )
        while len(self.match.players) < count:
            number = len(self.match.players) + 1
            name = self._input(f"Enter name for Player {number}: ")
            try:
                self.match.add_player(name)
            except InvalidPlayer as exc:
                self._print(f"Invalid name: {exc.detail}")

    def _play(self) -> None:
        while not self.match.is_game_complete():
            player = self.match.current_player
            remaining = player.remaining_pins
            self._print("\n" + RULE)
            self._print(
                f"Current Player: {player.name} (Frame {player.current_frame_number})"
            )
            self._print(f"Current Score: {player.calculate_score()}")
            pins = self._read_int(
                f"Enter number of pins knocked down (0 - {remaining}): ", 0, remaining
            )
            try:
                frame = self.match.add_throw(pins)
            except DomainException as exc:
                logger.debug("Rejected throw of %d pins: %s", pins, exc.code)
                self._print(f"Invalid throw: {exc.detail}")
                continue
            self._announce(pins, frame)

    def _announce(self, pins: int, frame: Frame) -> None:
        if _struck(frame, pins):
            self._print("STRIKE!")
        elif _cleared_pins(frame, pins):
            self._print("SPARE!")
        else:
            self._print(f"Knocked down {pins} pin{'' if pins == 1 else 's'}")

    def _show_final_scores(self) -> list[ScoreboardEntry]:
        scoreboard = self.match.scoreboard()
        self._print("\n" + RULE)
        self._print("Game Over! Final Scores:")
        self._print(RULE)
        for rank, entry in enumerate(scoreboard, start=1):
            self._print(f"{rank}. {entry.name}: {entry.score} points")
        return scoreboard

    def _read_int(self, prompt: str, low: int, high: int) -> int:
        while True:
            raw = self._input(prompt)
            try:
                value = int(raw.strip())
            except ValueError:
                self._print("Please enter a valid number")
                continue
            if low <= value <= high:
                return value
            self._print(f"Please enter a number between {low} and {high}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Play a match of 15-pin, five-frame ancient bowling."
    )
    parser.add_argument(
        "--players",
        nargs="+",
        metavar="NAME",
        help=(
            f"Player names in turn order (at least {MIN_PLAYERS}). "
            "Prompted for when omitted."
        ),
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log frame and turn transitions.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.players is not None and len(args.players) < MIN_PLAYERS:
        parser.error(f"--players needs at least {MIN_PLAYERS} names")

    game = ConsoleGame()
    try:
        game.run(args.players)
    except InvalidPlayer as exc:
        parser.error(exc.detail)
    except (EOFError, KeyboardInterrupt):
        print("\nGame aborted.")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
