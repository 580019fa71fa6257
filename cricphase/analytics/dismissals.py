"""
Dismissal pattern analysis: where in the innings, and how, a batter gets out
once they have faced a minimum number of balls.
"""
import logging
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from cricphase.analytics.innings import Delivery, InningsSequence
from cricphase.core import config
from cricphase.core.schemas import (
    BowlerCredited,
    DismissalCredit,
    DismissalPatternResponse,
    DismissalRecord,
    FieldingCredited,
    MatchInfo,
)

logger = logging.getLogger(__name__)

# Dismissals the bowler does not get credit for (Laws of Cricket)
NON_BOWLER_DISMISSALS = {
    "run out": "run out",
    "retired hurt": "retired",
    "retired out": "retired",
    "retired not out": "retired",
    "obstructing the field": "obstruction",
    "timed out": "timed out",
    "handled the ball": "handled the ball",
}

UNKNOWN_WICKET_TYPE = "unknown"


@dataclass(frozen=True)
class Phase:
    name: str
    start: int
    end: Optional[int]  # exclusive; None is open-ended

    def contains(self, over: int) -> bool:
        return over >= self.start and (self.end is None or over < self.end)


class PhaseBuckets:
    """
    Contiguous over ranges covering an innings from over 0.
    Built from the overs where each new phase starts, so 50-over or
    10-over formats only need different boundaries.
    """

    def __init__(self, boundaries: Sequence[int], names: Sequence[str]):
        if len(names) != len(boundaries) + 1:
            raise ValueError(
                f"Need {len(boundaries) + 1} phase names for {len(boundaries)} boundaries, got {len(names)}"
            )
        if any(b <= 0 for b in boundaries) or list(boundaries) != sorted(set(boundaries)):
            raise ValueError(f"Phase boundaries must be positive and strictly increasing: {list(boundaries)}")

        starts = [0] + list(boundaries)
        ends = list(boundaries) + [None]
        self.phases = [Phase(name, start, end) for name, start, end in zip(names, starts, ends)]

    @classmethod
    def from_settings(cls) -> "PhaseBuckets":
        return cls(config.phase_boundaries(), config.phase_names())

    @property
    def names(self) -> List[str]:
        return [phase.name for phase in self.phases]

    def classify(self, over: int) -> str:
        for phase in self.phases:
            if phase.contains(over):
                return phase.name
        raise ValueError(f"Over {over} is outside every phase")


def classify_credit(delivery: Delivery) -> DismissalCredit:
    wicket_type = (delivery.wicket_type or "").strip().lower()
    if wicket_type in NON_BOWLER_DISMISSALS:
        return FieldingCredited(reason=NON_BOWLER_DISMISSALS[wicket_type])
    return BowlerCredited(bowler=delivery.bowler)


def match_info(innings: InningsSequence) -> MatchInfo:
    context = innings.context
    return MatchInfo(
        match_id=innings.key.match_id,
        innings_number=innings.key.innings_number,
        batting_team=context.batting_team,
        bowling_team=context.bowling_team,
        venue=context.venue,
        season=context.season,
        date=context.date,
    )


def legal_ball_number(innings: InningsSequence, dismissal: Delivery) -> int:
    """Legal balls faced up to and including the dismissal delivery"""
    count = 0
    for delivery in innings.deliveries:
        if delivery.is_legal_delivery:
            count += 1
        if delivery is dismissal:
            break
    return count


class DismissalPatternAnalyzer:
    def __init__(self, phase_buckets: Optional[PhaseBuckets] = None, sample_size: Optional[int] = None):
        self.phase_buckets = phase_buckets or PhaseBuckets.from_settings()
        self.sample_size = config.DISMISSAL_SAMPLE_SIZE if sample_size is None else sample_size

    def dismissal_record(self, innings: InningsSequence, dismissal: Delivery) -> DismissalRecord:
        return DismissalRecord(
            over=dismissal.over,
            ball_in_over=dismissal.ball_in_over,
            legal_ball_number=legal_ball_number(innings, dismissal),
            phase=self.phase_buckets.classify(dismissal.over),
            wicket_type=dismissal.wicket_type,
            wicket_kind=dismissal.wicket_kind,
            fielders=list(dismissal.fielders) if dismissal.fielders else None,
            credit=classify_credit(dismissal),
            match_info=match_info(innings),
        )

    def analyze(self, player: str, innings: List[InningsSequence], min_balls_faced: int) -> DismissalPatternResponse:
        """
        Innings with at least min_balls_faced legal balls are considered.
        Not-out innings count toward innings_considered but appear in no histogram.
        """
        if min_balls_faced < 0:
            raise ValueError("min_balls_faced must be >= 0")

        considered = 0
        records: List[DismissalRecord] = []
        for sequence in innings:
            if sequence.legal_balls < min_balls_faced:
                continue
            considered += 1
            dismissal = sequence.dismissal
            if dismissal is not None:
                records.append(self.dismissal_record(sequence, dismissal))

        phase_histogram: Dict[str, int] = {name: 0 for name in self.phase_buckets.names}
        wicket_types: Counter = Counter()
        wicket_kinds: Counter = Counter()
        for record in records:
            phase_histogram[record.phase] += 1
            wicket_types[record.wicket_type or UNKNOWN_WICKET_TYPE] += 1
            if record.wicket_kind:
                wicket_kinds[record.wicket_kind] += 1

        bowler_credited = sum(1 for r in records if isinstance(r.credit, BowlerCredited))
        logger.info(
            "Dismissal patterns for %s: %d innings considered, %d dismissals",
            player, considered, len(records)
        )

        return DismissalPatternResponse(
            player=player,
            min_balls_faced=min_balls_faced,
            innings_considered=considered,
            not_out_innings=considered - len(records),
            total_dismissals=len(records),
            bowler_credited=bowler_credited,
            fielding_credited=len(records) - bowler_credited,
            phase_histogram=phase_histogram,
            wicket_type_histogram=dict(sorted(wicket_types.items())),
            wicket_kind_histogram=dict(sorted(wicket_kinds.items())),
            dismissals=records[:self.sample_size],
            message=None if records else "No dismissals found after specified balls played",
        )
