from dataclasses import dataclass
from typing import List, Optional, Tuple

from cricphase.analytics.innings import Delivery, InningsSequence
from cricphase.core.schemas import PhaseQuery


@dataclass(frozen=True)
class QualifyingInnings:
    """An innings that reached the query's pre-window state and batted on into the window"""
    innings: InningsSequence
    balls_before: int
    legal_in_window: int
    window: Tuple[Delivery, ...]  # first min_balls_in_window legal deliveries
    raw_window_runs: int  # window runs plus runs off illegal deliveries up to the cut
    dismissed_in_window: bool

    @property
    def window_runs(self) -> int:
        return sum(d.runs_off_bat for d in self.window)

    @property
    def window_balls(self) -> int:
        return len(self.window)


def resolve_phase_cut(innings: InningsSequence, query: PhaseQuery) -> Optional[QualifyingInnings]:
    """
    Single pass over an ordered innings. Deliveries fall before the window
    (over < over_boundary), inside it, or after it. Returns None when the
    innings does not qualify.
    """
    window_end = query.window_end
    balls_before = 0
    legal_in_window = 0
    window: List[Delivery] = []
    raw_runs = 0
    dismissed = False

    for delivery in innings.deliveries:
        if delivery.over < query.over_boundary:
            if delivery.is_legal_delivery:
                balls_before += 1
            continue
        if delivery.over >= window_end:
            break

        if delivery.is_legal_delivery:
            legal_in_window += 1
        if delivery.batter_dismissed:
            dismissed = True
        # Runs and balls stop at the cut; dismissals count across the whole window
        if len(window) >= query.min_balls_in_window:
            continue
        raw_runs += delivery.runs_off_bat
        if delivery.is_legal_delivery:
            window.append(delivery)

    if balls_before < query.balls_before or legal_in_window < query.min_balls_in_window:
        return None

    return QualifyingInnings(
        innings=innings,
        balls_before=balls_before,
        legal_in_window=legal_in_window,
        window=tuple(window),
        raw_window_runs=raw_runs,
        dismissed_in_window=dismissed,
    )


def qualifying_innings(innings: List[InningsSequence], query: PhaseQuery) -> List[QualifyingInnings]:
    resolved = (resolve_phase_cut(sequence, query) for sequence in innings)
    return [q for q in resolved if q is not None]
