from typing import List

from cricphase.analytics.dismissals import match_info
from cricphase.analytics.phase_cut import QualifyingInnings, qualifying_innings
from cricphase.analytics.phase_stats import rate
from cricphase.analytics.innings import InningsSequence
from cricphase.core.schemas import InningsProgression, PhaseQuery, ProgressionPoint


def reconstruct_progression(qualifying: QualifyingInnings) -> InningsProgression:
    """
    Ball-by-ball runs over the window slice. ball_number counts the batter's
    legal balls from the start of the innings; cumulative_runs restarts at
    zero at the start of the window.
    """
    points: List[ProgressionPoint] = []
    cumulative = 0
    for offset, delivery in enumerate(qualifying.window, start=1):
        cumulative += delivery.runs_off_bat
        points.append(ProgressionPoint(
            ball_number=qualifying.balls_before + offset,
            runs_this_ball=delivery.runs_off_bat,
            cumulative_runs=cumulative,
        ))

    info = match_info(qualifying.innings)
    return InningsProgression(
        match_info=info,
        title=info.title,
        total_runs=cumulative,
        balls_faced=len(points),
        strike_rate=rate(cumulative, len(points)),
        innings_runs=qualifying.innings.total_runs,
        innings_balls=qualifying.innings.legal_balls,
        dismissed_in_window=qualifying.dismissed_in_window,
        progression=points,
    )


def progression_sort_key(progression: InningsProgression):
    info = progression.match_info
    return (info.date or "", info.match_id, info.innings_number)


def innings_progressions(innings: List[InningsSequence], query: PhaseQuery) -> List[InningsProgression]:
    """Progressions for every qualifying innings, most recent first"""
    progressions = [reconstruct_progression(q) for q in qualifying_innings(innings, query)]
    progressions.sort(key=progression_sort_key, reverse=True)
    return progressions
