from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Optional

from cricphase.core import schemas
from cricphase.database import get_db
from cricphase.analytics.engine import PhaseAnalyticsEngine, PlayerNotFoundError
from cricphase.api.analysis import get_engine
from cricphase.services.delivery_store import SqlDeliveryStore

router = APIRouter()


@router.get("/", response_model=schemas.PlayerList)
async def read_players(
    search: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """
    List every batter in the delivery store
    """
    players = SqlDeliveryStore(db).list_players(search)
    return {"players": players, "count": len(players)}


@router.get("/{player}/stats", response_model=schemas.CareerStatsResponse)
async def read_player_stats(
    player: str,
    engine: PhaseAnalyticsEngine = Depends(get_engine)
):
    """
    Career batting summary over legal deliveries
    """
    try:
        return engine.career_stats(player)
    except PlayerNotFoundError:
        raise HTTPException(status_code=404, detail="Player not found")


@router.get("/{player}/debug", response_model=schemas.BallCounts)
async def read_player_ball_counts(
    player: str,
    engine: PhaseAnalyticsEngine = Depends(get_engine)
):
    """
    Raw ball and run counts, with and without wides/no-balls
    """
    return engine.ball_counts(player)
