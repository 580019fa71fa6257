"""
Phase analytics engine: the three innings-state analyses behind one facade.

The engine owns no connection state. It is handed something that can fetch a
player's deliveries, fetches once per query, and computes synchronously.
"""
import logging
from typing import List, Optional, Protocol

from cricphase.analytics.dismissals import DismissalPatternAnalyzer, PhaseBuckets
from cricphase.analytics.innings import Delivery, GroupingResult, group_innings
from cricphase.analytics.phase_cut import qualifying_innings
from cricphase.analytics.phase_stats import aggregate_phase_statistics, rate
from cricphase.analytics.progression import innings_progressions
from cricphase.core.schemas import (
    BallCounts,
    CareerStats,
    CareerStatsResponse,
    DismissalPatternResponse,
    InningsProgressionResponse,
    PhasePerformanceResponse,
    PhaseQuery,
)

logger = logging.getLogger(__name__)


class DeliverySource(Protocol):
    def fetch_deliveries(self, player: str) -> List[Delivery]:
        """Every delivery faced by the player as batter, in any order"""
        ...


class PlayerNotFoundError(LookupError):
    pass


class PhaseAnalyticsEngine:
    def __init__(self, source: DeliverySource, phase_buckets: Optional[PhaseBuckets] = None, sample_size: Optional[int] = None):
        self.source = source
        self.dismissal_analyzer = DismissalPatternAnalyzer(phase_buckets, sample_size)

    def load_innings(self, player: str) -> GroupingResult:
        deliveries = self.source.fetch_deliveries(player)
        grouped = group_innings(deliveries)
        logger.info(
            "Loaded %d deliveries for %s into %d innings (%d rejected)",
            len(deliveries), player, len(grouped.innings), len(grouped.rejected)
        )
        return grouped

    def phase_performance(self, player: str, query: PhaseQuery) -> PhasePerformanceResponse:
        grouped = self.load_innings(player)
        qualifying = qualifying_innings(grouped.innings, query)
        analysis = aggregate_phase_statistics(qualifying)
        logger.info("Phase performance for %s: %d qualifying innings", player, len(qualifying))

        return PhasePerformanceResponse(
            player=player,
            query=query,
            qualifying_innings=len(qualifying),
            analysis=analysis,
            rejected_deliveries=len(grouped.rejected),
            message=None if analysis else "No matching innings found",
        )

    def dismissal_patterns(self, player: str, min_balls_faced: int) -> DismissalPatternResponse:
        grouped = self.load_innings(player)
        response = self.dismissal_analyzer.analyze(player, grouped.innings, min_balls_faced)
        return response.model_copy(update={"rejected_deliveries": len(grouped.rejected)})

    def innings_progression(self, player: str, query: PhaseQuery) -> InningsProgressionResponse:
        grouped = self.load_innings(player)
        progressions = innings_progressions(grouped.innings, query)

        return InningsProgressionResponse(
            player=player,
            query=query,
            qualifying_innings=len(progressions),
            innings=progressions,
            rejected_deliveries=len(grouped.rejected),
            message=None if progressions else "No matching innings found",
        )

    def career_stats(self, player: str) -> CareerStatsResponse:
        """Whole-career batting summary; balls and runs over legal deliveries"""
        deliveries = self.source.fetch_deliveries(player)
        legal = [d for d in deliveries if d.is_legal_delivery]
        if not legal:
            raise PlayerNotFoundError(player)

        total_runs = sum(d.runs_off_bat for d in legal)
        fours = sum(1 for d in legal if d.runs_off_bat == 4)
        sixes = sum(1 for d in legal if d.runs_off_bat == 6)
        dots = sum(1 for d in legal if d.runs_off_bat == 0 and d.extras == 0)
        # Stumpings and run outs off a wide still end the innings
        dismissals = sum(1 for d in deliveries if d.batter_dismissed)

        stats = CareerStats(
            total_runs=total_runs,
            total_balls=len(legal),
            strike_rate=rate(total_runs, len(legal)),
            average=round(total_runs / max(dismissals, 1), 2),
            boundaries=fours + sixes,
            fours=fours,
            sixes=sixes,
            dots=dots,
            dot_percentage=rate(dots, len(legal)),
            dismissals=dismissals,
        )
        return CareerStatsResponse(player=player, stats=stats)

    def ball_counts(self, player: str) -> BallCounts:
        deliveries = self.source.fetch_deliveries(player)
        legal = [d for d in deliveries if d.is_legal_delivery]
        return BallCounts(
            player=player,
            all_balls=len(deliveries),
            valid_balls=len(legal),
            total_runs=sum(d.runs_off_bat for d in deliveries),
            valid_runs=sum(d.runs_off_bat for d in legal),
        )
