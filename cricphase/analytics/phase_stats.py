import numpy as np
from typing import List, Optional

from cricphase.analytics.phase_cut import QualifyingInnings
from cricphase.core.schemas import PhaseStatistics


def rate(numerator: float, denominator: float) -> Optional[float]:
    """Percentage rounded to 2 places, None when the denominator is zero"""
    if not denominator:
        return None
    return round(numerator / denominator * 100, 2)


def aggregate_phase_statistics(qualifying: List[QualifyingInnings]) -> Optional[PhaseStatistics]:
    """
    Reduce qualifying window slices into summary metrics.
    average_runs is runs per qualifying innings inside the window, not a
    batting average. Returns None when no innings qualified.
    """
    if not qualifying:
        return None

    runs = np.array([q.window_runs for q in qualifying], dtype=int)
    total_balls = sum(q.window_balls for q in qualifying)
    dismissals = sum(1 for q in qualifying if q.dismissed_in_window)
    total_runs = int(runs.sum())

    return PhaseStatistics(
        average_runs=round(float(runs.mean()), 2),
        strike_rate=rate(total_runs, total_balls),
        dismissal_rate=rate(dismissals, len(qualifying)),
        total_runs=total_runs,
        total_balls=total_balls,
        dismissal_count=dismissals,
        median_runs=round(float(np.median(runs)), 2),
        raw_runs=sum(q.raw_window_runs for q in qualifying),
        runs_distribution=np.sort(runs).tolist(),
    )
