"""Scoring engine for 15-pin, five-frame ancient bowling."""

from .frame import MAX_PINS, MAX_THROWS, Frame, FrameState
from .match import MIN_PLAYERS, Match, ScoreboardEntry, ThrowRecord
from .player import MAX_FRAMES, Player

__all__ = [
    "MAX_FRAMES",
    "MAX_PINS",
    "MAX_THROWS",
    "MIN_PLAYERS",
    "Frame",
    "FrameState",
    "Match",
    "Player",
    "ScoreboardEntry",
    "ThrowRecord",
]
