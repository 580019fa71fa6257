from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List, Dict, Union, Literal, Annotated


# Query schemas
class PhaseQuery(BaseModel):
    """
    The state an innings must reach before the analysis window, and the window itself.
    Immutable; invalid combinations fail on construction with the field named.
    """
    model_config = ConfigDict(frozen=True)

    balls_before: int = Field(..., ge=0, description="Legal balls faced before the over boundary")
    over_boundary: int = Field(..., ge=0, description="Over at which the window begins")
    window_overs: int = Field(..., ge=1, description="Width of the window in overs")
    min_balls_in_window: int = Field(..., ge=1, description="Legal balls required inside the window")

    @property
    def window_end(self) -> int:
        return self.over_boundary + self.window_overs


class PhasePerformanceRequest(PhaseQuery):
    player: str = Field(..., min_length=1)

    def to_query(self) -> PhaseQuery:
        return PhaseQuery(**self.model_dump(exclude={"player"}))


class DismissalPatternRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    player: str = Field(..., min_length=1)
    min_balls_faced: int = Field(0, ge=0)


# Phase performance schemas
class PhaseStatistics(BaseModel):
    average_runs: float
    strike_rate: Optional[float] = None  # None when no legal balls were faced
    dismissal_rate: float
    total_runs: int
    total_balls: int
    dismissal_count: int
    median_runs: float
    raw_runs: int  # includes runs off wides/no-balls inside the window
    runs_distribution: List[int] = []


class PhasePerformanceResponse(BaseModel):
    player: str
    query: PhaseQuery
    qualifying_innings: int
    analysis: Optional[PhaseStatistics] = None
    rejected_deliveries: int = 0
    message: Optional[str] = None


# Dismissal pattern schemas
class BowlerCredited(BaseModel):
    model_config = ConfigDict(frozen=True)

    credit: Literal["bowler"] = "bowler"
    bowler: Optional[str] = None


class FieldingCredited(BaseModel):
    """Dismissal not credited to the bowler, e.g. a run out"""
    model_config = ConfigDict(frozen=True)

    credit: Literal["fielding"] = "fielding"
    reason: str


DismissalCredit = Annotated[Union[BowlerCredited, FieldingCredited], Field(discriminator="credit")]


class MatchInfo(BaseModel):
    match_id: str
    innings_number: int
    batting_team: Optional[str] = None
    bowling_team: Optional[str] = None
    venue: Optional[str] = None
    season: Optional[str] = None
    date: Optional[str] = None

    @property
    def title(self) -> str:
        return f"{self.batting_team or 'Unknown'} vs {self.bowling_team or 'Unknown'}"


class DismissalRecord(BaseModel):
    over: int
    ball_in_over: int
    legal_ball_number: int
    phase: str
    wicket_type: Optional[str] = None
    wicket_kind: Optional[str] = None
    fielders: Optional[List[str]] = None
    credit: DismissalCredit
    match_info: MatchInfo


class DismissalPatternResponse(BaseModel):
    player: str
    min_balls_faced: int
    innings_considered: int
    not_out_innings: int
    total_dismissals: int
    bowler_credited: int
    fielding_credited: int
    phase_histogram: Dict[str, int]
    wicket_type_histogram: Dict[str, int]
    wicket_kind_histogram: Dict[str, int]
    dismissals: List[DismissalRecord] = []
    rejected_deliveries: int = 0
    message: Optional[str] = None


# Innings progression schemas
class ProgressionPoint(BaseModel):
    ball_number: int
    runs_this_ball: int
    cumulative_runs: int


class InningsProgression(BaseModel):
    match_info: MatchInfo
    title: str
    total_runs: int
    balls_faced: int
    strike_rate: Optional[float] = None
    innings_runs: int
    innings_balls: int
    dismissed_in_window: bool
    progression: List[ProgressionPoint] = []


class InningsProgressionResponse(BaseModel):
    player: str
    query: PhaseQuery
    qualifying_innings: int
    innings: List[InningsProgression] = []
    rejected_deliveries: int = 0
    message: Optional[str] = None


# Player schemas
class PlayerList(BaseModel):
    players: List[str]
    count: int


class CareerStats(BaseModel):
    total_runs: int
    total_balls: int
    strike_rate: Optional[float] = None
    average: float
    boundaries: int
    fours: int
    sixes: int
    dots: int
    dot_percentage: Optional[float] = None
    dismissals: int


class CareerStatsResponse(BaseModel):
    player: str
    stats: CareerStats


class BallCounts(BaseModel):
    player: str
    all_balls: int
    valid_balls: int
    total_runs: int
    valid_runs: int
