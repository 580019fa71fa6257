# tests/conftest.py
import pytest
from typing import Dict, List

from cricphase.analytics.innings import Delivery, InningsSequence, group_innings

CONTEXT = {
    "batter": "V Kohli",
    "batting_team": "Royal Challengers Bangalore",
    "bowling_team": "Mumbai Indians",
    "venue": "M Chinnaswamy Stadium",
    "season": "2019",
}


def ball(match_id, over, number, runs=0, legal=True, out=False, wicket_type=None,
         innings_number=1, **extra) -> Delivery:
    values = dict(CONTEXT)
    values.update(extra)
    return Delivery(
        match_id=match_id,
        innings_number=innings_number,
        over=over,
        ball_in_over=number,
        is_legal_delivery=legal,
        runs_off_bat=runs,
        batter_dismissed=out,
        wicket_type=wicket_type,
        **values
    )


def straight_innings(match_id, balls: int, start_over: int = 0, runs: int = 1,
                     out: bool = False, wicket_type=None, **extra) -> List[Delivery]:
    """`balls` legal deliveries, six per over from start_over; optionally out on the last"""
    deliveries = []
    for i in range(balls):
        last = i == balls - 1
        deliveries.append(ball(
            match_id, start_over + i // 6, i % 6 + 1, runs=runs,
            out=out and last, wicket_type=wicket_type if out and last else None, **extra
        ))
    return deliveries


def sequence(deliveries: List[Delivery]) -> InningsSequence:
    result = group_innings(deliveries)
    assert len(result.innings) == 1
    return result.innings[0]


class ListDeliverySource:
    """In-memory delivery source keyed by batter"""

    def __init__(self, deliveries: List[Delivery]):
        self.by_player: Dict[str, List[Delivery]] = {}
        for d in deliveries:
            self.by_player.setdefault(d.batter, []).append(d)
        self.calls = 0

    def fetch_deliveries(self, player: str) -> List[Delivery]:
        self.calls += 1
        return list(self.by_player.get(player, []))


@pytest.fixture
def window_innings() -> List[Delivery]:
    """
    Six legal balls before over 6, then a window over overs 6-7 of
    6 legal balls (4, 1, 0, 2, 6, 0-out) with a no-ball hit for 6 in over 6.
    """
    return [
        ball("m1", 4, 1, runs=1), ball("m1", 4, 2), ball("m1", 4, 3, runs=1),
        ball("m1", 4, 4), ball("m1", 4, 5, runs=1), ball("m1", 4, 6),
        ball("m1", 6, 1, runs=4),
        ball("m1", 6, 2, runs=6, legal=False),
        ball("m1", 6, 3, runs=1),
        ball("m1", 6, 4),
        ball("m1", 7, 1, runs=2),
        ball("m1", 7, 2, runs=6),
        ball("m1", 7, 3, out=True, wicket_type="caught", bowler="JJ Bumrah"),
    ]


@pytest.fixture
def career(window_innings) -> List[Delivery]:
    """Four innings for one batter, dated so progression order is checkable"""
    return (
        [ball(d.match_id, d.over, d.ball_in_over, d.runs_off_bat, d.is_legal_delivery,
              d.batter_dismissed, d.wicket_type, date="2019-04-01", bowler=d.bowler)
         for d in window_innings]
        + straight_innings("m2", 30, start_over=2, runs=2, date="2019-04-10")
        + straight_innings("m3", 14, start_over=5, runs=0, out=True,
                           wicket_type="bowled", date="2019-03-20")
        + straight_innings("m4", 4, start_over=0, runs=4, date="2019-05-01")
    )
