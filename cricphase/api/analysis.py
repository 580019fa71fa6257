from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from cricphase.core import schemas
from cricphase.database import get_db
from cricphase.analytics.engine import PhaseAnalyticsEngine
from cricphase.services.delivery_store import SqlDeliveryStore

logger = logging.getLogger(__name__)

router = APIRouter()


def get_engine(db: Session = Depends(get_db)) -> PhaseAnalyticsEngine:
    return PhaseAnalyticsEngine(SqlDeliveryStore(db))


@router.post("/phase-performance", response_model=schemas.PhasePerformanceResponse)
async def analyze_phase_performance(
    request: schemas.PhasePerformanceRequest,
    engine: PhaseAnalyticsEngine = Depends(get_engine)
):
    """
    How a batter performs over the next overs, given they had already faced
    a number of balls by the over boundary
    """
    return engine.phase_performance(request.player, request.to_query())


@router.post("/dismissal-patterns", response_model=schemas.DismissalPatternResponse)
async def analyze_dismissal_patterns(
    request: schemas.DismissalPatternRequest,
    engine: PhaseAnalyticsEngine = Depends(get_engine)
):
    """
    Where and how a batter is dismissed once set
    """
    return engine.dismissal_patterns(request.player, request.min_balls_faced)


@router.post("/innings-progression", response_model=schemas.InningsProgressionResponse)
async def analyze_innings_progression(
    request: schemas.PhasePerformanceRequest,
    engine: PhaseAnalyticsEngine = Depends(get_engine)
):
    """
    Ball-by-ball run progression through the window for each qualifying innings
    """
    return engine.innings_progression(request.player, request.to_query())
