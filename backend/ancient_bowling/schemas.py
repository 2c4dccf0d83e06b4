from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PlayerIn(BaseModel):
    # emptiness and duplicates are checked by the match itself
    name: str = Field(..., max_length=50)

    model_config = ConfigDict(extra="forbid")


class ThrowIn(BaseModel):
    # JSON booleans are rejected rather than read as 0 or 1
    pins: int = Field(..., strict=True)

    model_config = ConfigDict(extra="forbid")


class MatchIdOut(BaseModel):
    """Schema returned after creating a match."""

    id: str


class FrameOut(BaseModel):
    number: int
    throws: List[int]
    strike: bool
    spare: bool
    completed: bool
    lastFrame: bool
    cumulativeScore: int


class PlayerOut(BaseModel):
    name: str
    score: int
    complete: bool
    needsBonusThrows: bool
    frames: List[FrameOut] = Field(default_factory=list)


class MatchOut(BaseModel):
    """Detailed match state returned by the API."""

    id: str
    started: bool
    complete: bool
    currentPlayer: Optional[str] = None
    currentFrame: Optional[int] = None
    remainingPins: Optional[int] = None
    players: List[PlayerOut] = Field(default_factory=list)


class MatchSummaryOut(BaseModel):
    """Lightweight representation of a match used in listings."""

    id: str
    started: bool
    complete: bool
    players: List[str] = Field(default_factory=list)


class ScoreboardEntryOut(BaseModel):
    rank: int
    name: str
    score: int
    frameScores: List[int] = Field(default_factory=list)
