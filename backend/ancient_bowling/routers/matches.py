# backend/ancient_bowling/routers/matches.py
import logging

from fastapi import APIRouter, Depends, Request, Response

from ..registry import MatchRegistry
from ..schemas import (
    FrameOut,
    MatchIdOut,
    MatchOut,
    MatchSummaryOut,
    PlayerIn,
    PlayerOut,
    ScoreboardEntryOut,
    ThrowIn,
)
from ..scoring import Match, Player

logger = logging.getLogger(__name__)

# Resource-only prefix; versioning is added in main.py
router = APIRouter(prefix="/matches", tags=["matches"])


def get_registry(request: Request) -> MatchRegistry:
    return request.app.state.registry


def _player_out(player: Player) -> PlayerOut:
    cumulative = player.frame_scores()
    frames = [
        FrameOut(
            number=number,
            throws=frame.throws,
            strike=frame.is_strike,
            spare=frame.is_spare,
            completed=frame.is_completed,
            lastFrame=frame.last_frame,
            cumulativeScore=cumulative[number - 1],
        )
        for number, frame in enumerate(player.frames, start=1)
    ]
    return PlayerOut(
        name=player.name,
        score=player.calculate_score(),
        complete=player.is_game_complete(),
        needsBonusThrows=player.needs_bonus_throws(),
        frames=frames,
    )


def _match_out(mid: str, match: Match) -> MatchOut:
    complete = match.is_game_complete()
    current = None if complete else match.current_player
    return MatchOut(
        id=mid,
        started=match.is_started,
        complete=complete,
        currentPlayer=current.name if current else None,
        currentFrame=current.current_frame_number if current else None,
        remainingPins=current.remaining_pins if current else None,
        players=[_player_out(p) for p in match.players],
    )


# GET /api/v0/matches
@router.get("", response_model=list[MatchSummaryOut])
async def list_matches(registry: MatchRegistry = Depends(get_registry)):
    return [
        MatchSummaryOut(
            id=mid,
            started=match.is_started,
            complete=match.is_game_complete(),
            players=[p.name for p in match.players],
        )
        for mid, match in await registry.items()
    ]


# POST /api/v0/matches
@router.post("", response_model=MatchIdOut, status_code=201)
async def create_match(registry: MatchRegistry = Depends(get_registry)):
    mid = await registry.create()
    return MatchIdOut(id=mid)


# GET /api/v0/matches/{mid}
@router.get("/{mid}", response_model=MatchOut)
async def get_match(mid: str, registry: MatchRegistry = Depends(get_registry)):
    async with registry.locked(mid) as match:
        return _match_out(mid, match)


# DELETE /api/v0/matches/{mid}
@router.delete("/{mid}", status_code=204)
async def delete_match(mid: str, registry: MatchRegistry = Depends(get_registry)):
    await registry.delete(mid)
    return Response(status_code=204)


# POST /api/v0/matches/{mid}/players
@router.post("/{mid}/players", response_model=MatchOut)
async def add_player(
    mid: str,
    body: PlayerIn,
    registry: MatchRegistry = Depends(get_registry),
):
    async with registry.locked(mid) as match:
        player = match.add_player(body.name)
        logger.info("Player %r joined match %s", player.name, mid)
        return _match_out(mid, match)


# POST /api/v0/matches/{mid}/start
@router.post("/{mid}/start", response_model=MatchOut)
async def start_match(mid: str, registry: MatchRegistry = Depends(get_registry)):
    async with registry.locked(mid) as match:
        match.start()
        logger.info("Match %s started with %d players", mid, len(match.players))
        return _match_out(mid, match)


# POST /api/v0/matches/{mid}/throws
@router.post("/{mid}/throws", response_model=MatchOut)
async def add_throw(
    mid: str,
    body: ThrowIn,
    registry: MatchRegistry = Depends(get_registry),
):
    async with registry.locked(mid) as match:
        match.add_throw(body.pins)
        if match.is_game_complete():
            logger.info("Match %s complete", mid)
        return _match_out(mid, match)


# GET /api/v0/matches/{mid}/scoreboard
@router.get("/{mid}/scoreboard", response_model=list[ScoreboardEntryOut])
async def scoreboard(mid: str, registry: MatchRegistry = Depends(get_registry)):
    async with registry.locked(mid) as match:
        return [
            ScoreboardEntryOut(
                rank=rank,
                name=entry.name,
                score=entry.score,
                frameScores=entry.player.frame_scores(),
            )
            for rank, entry in enumerate(match.scoreboard(), start=1)
        ]
