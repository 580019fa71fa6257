from sqlalchemy import Column, Integer, String, Boolean, JSON
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Delivery(Base):
    """One ball bowled to one batter, as loaded from ball-by-ball data"""
    __tablename__ = "deliveries"

    id = Column(Integer, primary_key=True, index=True)
    match_id = Column(String, index=True)
    innings = Column(Integer)
    over = Column("over_number", Integer)  # 0-based
    ball = Column(Integer)  # ball number within the over
    batter = Column(String, index=True)
    bowler = Column(String)
    valid_ball = Column(Boolean, default=True)  # False for wides/no-balls
    runs_batter = Column(Integer, default=0)
    runs_extras = Column(Integer, default=0)
    striker_out = Column(Boolean, default=False)
    wicket_type = Column(String)  # "caught", "bowled", "run out", ...
    wicket_kind = Column(String)  # fielding detail, e.g. "direct hit"
    fielders = Column(JSON)
    batting_team = Column(String)
    bowling_team = Column(String)
    venue = Column(String)
    season = Column(String)
    date = Column(String)  # ISO date, sorts lexically
