"""
SQLAlchemy-backed delivery source for the analytics engine
"""
from typing import List, Optional

from sqlalchemy.orm import Session

from cricphase.analytics.innings import Delivery
from cricphase.core import models


def to_delivery(row: models.Delivery) -> Delivery:
    return Delivery(
        match_id=str(row.match_id) if row.match_id is not None else None,
        innings_number=row.innings,
        over=row.over,
        ball_in_over=row.ball,
        is_legal_delivery=bool(row.valid_ball) if row.valid_ball is not None else True,
        runs_off_bat=row.runs_batter or 0,
        batter_dismissed=bool(row.striker_out),
        wicket_type=row.wicket_type,
        wicket_kind=row.wicket_kind,
        fielders=tuple(row.fielders) if row.fielders else None,
        batter=row.batter,
        bowler=row.bowler,
        extras=row.runs_extras or 0,
        batting_team=row.batting_team,
        bowling_team=row.bowling_team,
        venue=row.venue,
        season=row.season,
        date=row.date,
        record_id=row.id,
    )


class SqlDeliveryStore:
    def __init__(self, db: Session):
        self.db = db

    def fetch_deliveries(self, player: str) -> List[Delivery]:
        """All deliveries faced by the player, unfiltered"""
        rows = self.db.query(models.Delivery).filter(models.Delivery.batter == player).all()
        return [to_delivery(row) for row in rows]

    def list_players(self, search: Optional[str] = None) -> List[str]:
        """Distinct non-blank batter names, sorted"""
        query = self.db.query(models.Delivery.batter).distinct()
        if search:
            query = query.filter(models.Delivery.batter.ilike(f"%{search}%"))
        names = [name for (name,) in query.all() if name and name.strip()]
        return sorted(names)
