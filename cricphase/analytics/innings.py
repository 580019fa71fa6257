"""
Innings reconstruction from flat delivery records.

Deliveries arrive for one batter in no particular order. They are grouped by
(match_id, innings_number) and ordered by (over, ball_in_over) so that every
analysis walks the same sequence.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Delivery:
    """One ball bowled to one batter"""
    match_id: Optional[str]
    innings_number: Optional[int]
    over: Optional[int]
    ball_in_over: Optional[int]
    is_legal_delivery: bool = True
    runs_off_bat: int = 0
    batter_dismissed: bool = False
    wicket_type: Optional[str] = None
    wicket_kind: Optional[str] = None
    fielders: Optional[Tuple[str, ...]] = None
    batter: Optional[str] = None
    bowler: Optional[str] = None
    extras: int = 0
    batting_team: Optional[str] = None
    bowling_team: Optional[str] = None
    venue: Optional[str] = None
    season: Optional[str] = None
    date: Optional[str] = None
    record_id: Optional[int] = None


@dataclass(frozen=True, order=True)
class InningsKey:
    match_id: str
    innings_number: int


@dataclass(frozen=True)
class InningsSequence:
    key: InningsKey
    deliveries: Tuple[Delivery, ...]

    @property
    def legal_balls(self) -> int:
        return sum(1 for d in self.deliveries if d.is_legal_delivery)

    @property
    def total_runs(self) -> int:
        return sum(d.runs_off_bat for d in self.deliveries)

    @property
    def dismissal(self) -> Optional[Delivery]:
        for d in self.deliveries:
            if d.batter_dismissed:
                return d
        return None

    @property
    def context(self) -> Delivery:
        """First delivery, carrying teams, venue, season and date"""
        return self.deliveries[0]


@dataclass(frozen=True)
class RejectedDelivery:
    delivery: Delivery
    reason: str


@dataclass
class GroupingResult:
    innings: List[InningsSequence] = field(default_factory=list)
    rejected: List[RejectedDelivery] = field(default_factory=list)


def rejection_reason(delivery: Delivery) -> Optional[str]:
    missing = [
        name for name in ("match_id", "innings_number", "over", "ball_in_over")
        if getattr(delivery, name) is None
    ]
    if missing:
        return f"missing {', '.join(missing)}"
    if delivery.over < 0 or delivery.ball_in_over < 0:
        return "negative over or ball_in_over"
    if delivery.runs_off_bat < 0:
        return "negative runs_off_bat"
    return None


def delivery_order(delivery: Delivery):
    # Wides and no-balls sort ahead of the legal ball sharing their number
    return (
        delivery.over,
        delivery.ball_in_over,
        delivery.is_legal_delivery,
        delivery.batter_dismissed,
        delivery.runs_off_bat,
        delivery.extras,
        delivery.wicket_type or "",
        delivery.record_id if delivery.record_id is not None else -1,
    )


def group_innings(deliveries: Iterable[Delivery]) -> GroupingResult:
    """
    Partition deliveries into per-innings sequences.
    Records that cannot be placed in order are returned in `rejected`
    instead of being dropped; other innings are unaffected.
    """
    result = GroupingResult()
    groups: Dict[InningsKey, List[Delivery]] = defaultdict(list)

    for delivery in deliveries:
        reason = rejection_reason(delivery)
        if reason:
            logger.warning(
                "Rejected delivery %s (match %s, innings %s): %s",
                delivery.record_id, delivery.match_id, delivery.innings_number, reason
            )
            result.rejected.append(RejectedDelivery(delivery=delivery, reason=reason))
            continue
        key = InningsKey(str(delivery.match_id), int(delivery.innings_number))
        groups[key].append(delivery)

    for key in sorted(groups):
        ordered = tuple(sorted(groups[key], key=delivery_order))
        result.innings.append(InningsSequence(key=key, deliveries=ordered))

    return result
