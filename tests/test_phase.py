# tests/test_phase.py
import pytest
from pydantic import ValidationError

from cricphase.analytics.innings import group_innings
from cricphase.analytics.phase_cut import qualifying_innings, resolve_phase_cut
from cricphase.analytics.phase_stats import aggregate_phase_statistics, rate
from cricphase.analytics.progression import innings_progressions, reconstruct_progression
from cricphase.core.schemas import PhaseQuery

from conftest import ball, sequence, straight_innings


def query(balls_before=5, over_boundary=6, window_overs=2, min_balls_in_window=5):
    return PhaseQuery(
        balls_before=balls_before,
        over_boundary=over_boundary,
        window_overs=window_overs,
        min_balls_in_window=min_balls_in_window,
    )


class TestPhaseQuery:
    @pytest.mark.parametrize("field, value", [
        ("balls_before", -1),
        ("over_boundary", -1),
        ("window_overs", 0),
        ("min_balls_in_window", 0),
    ])
    def test_invalid_values_name_the_field(self, field, value):
        params = dict(balls_before=0, over_boundary=0, window_overs=1, min_balls_in_window=1)
        params[field] = value
        with pytest.raises(ValidationError) as exc:
            PhaseQuery(**params)
        assert exc.value.errors()[0]["loc"] == (field,)

    def test_is_immutable(self):
        q = query()
        with pytest.raises(ValidationError):
            q.window_overs = 3

    def test_window_end(self):
        assert query(over_boundary=6, window_overs=4).window_end == 10


class TestResolvePhaseCut:
    def test_window_is_truncated_to_min_balls(self, window_innings):
        cut = resolve_phase_cut(sequence(window_innings), query())

        assert cut is not None
        assert cut.balls_before == 6
        assert cut.legal_in_window == 6
        assert [d.runs_off_bat for d in cut.window] == [4, 1, 0, 2, 6]
        assert all(d.is_legal_delivery for d in cut.window)
        assert cut.window_runs == 13
        assert cut.window_balls == 5
        # Dismissal is the sixth ball in the window: past the cut, still counted
        assert cut.dismissed_in_window is True

    def test_runs_off_illegal_deliveries_are_kept_separately(self, window_innings):
        cut = resolve_phase_cut(sequence(window_innings), query())
        assert cut.raw_window_runs == 19
        assert cut.window_runs == 13

    def test_dismissal_inside_slice(self, window_innings):
        cut = resolve_phase_cut(sequence(window_innings), query(min_balls_in_window=6))
        assert cut.dismissed_in_window is True
        assert cut.window_balls == 6

    def test_dismissal_past_the_cut_counts_for_the_window(self):
        deliveries = straight_innings("m1", 5, start_over=6, runs=1) + [
            ball("m1", 7, 1, out=True, wicket_type="caught"),
        ]
        q = query(balls_before=0, min_balls_in_window=2)
        cut = resolve_phase_cut(sequence(deliveries), q)

        assert cut.window_balls == 2
        assert cut.window_runs == 2
        assert cut.dismissed_in_window is True

        stats = aggregate_phase_statistics([cut])
        assert stats.dismissal_count == 1
        assert stats.dismissal_rate == 100.0
        assert stats.total_balls == 2

    def test_dismissal_after_the_window_is_not_counted(self):
        deliveries = straight_innings("m1", 6, start_over=6) + [
            ball("m1", 8, 1, out=True, wicket_type="bowled"),
        ]
        cut = resolve_phase_cut(sequence(deliveries), query(balls_before=0, min_balls_in_window=2))
        assert cut.dismissed_in_window is False

    def test_not_enough_balls_before_boundary(self, window_innings):
        assert resolve_phase_cut(sequence(window_innings), query(balls_before=7)) is None

    def test_not_enough_balls_in_window(self, window_innings):
        assert resolve_phase_cut(sequence(window_innings), query(min_balls_in_window=7)) is None

    def test_deliveries_after_window_are_ignored(self):
        deliveries = straight_innings("m1", 6, start_over=6) + straight_innings("m1", 6, start_over=8, runs=6)
        cut = resolve_phase_cut(sequence(deliveries), query(balls_before=0, min_balls_in_window=1))
        assert cut.legal_in_window == 6
        assert cut.window_runs == 1

    def test_boundary_at_first_over(self):
        deliveries = straight_innings("m1", 12, start_over=0, runs=1)
        cut = resolve_phase_cut(sequence(deliveries), query(balls_before=0, over_boundary=0, min_balls_in_window=3))
        assert cut.balls_before == 0
        assert cut.window_runs == 3

    def test_dismissed_mid_window_still_qualifies(self):
        deliveries = straight_innings("m1", 6, start_over=4) + straight_innings(
            "m1", 3, start_over=6, runs=2, out=True, wicket_type="lbw"
        )
        cut = resolve_phase_cut(sequence(deliveries), query(window_overs=4, min_balls_in_window=3))
        assert cut.window_runs == 6
        assert cut.dismissed_in_window is True

    def test_window_contains_exactly_legal_deliveries_in_over_range(self, career):
        q = query(balls_before=0, min_balls_in_window=1)
        for cut in qualifying_innings(group_innings(career).innings, q):
            assert all(q.over_boundary <= d.over < q.window_end for d in cut.window)
            assert all(d.is_legal_delivery for d in cut.window)
            assert cut.window_balls == min(cut.legal_in_window, q.min_balls_in_window)


class TestAggregatePhaseStatistics:
    def test_summary_metrics(self, career):
        stats = aggregate_phase_statistics(qualifying_innings(group_innings(career).innings, query()))

        assert stats.total_runs == 23
        assert stats.total_balls == 15
        assert stats.average_runs == 7.67
        assert stats.strike_rate == 153.33
        assert stats.dismissal_rate == 66.67
        assert stats.dismissal_count == 2
        assert stats.runs_distribution == [0, 10, 13]
        assert stats.median_runs == 10.0
        assert stats.raw_runs == 29

    def test_dismissal_rate(self, career):
        innings = group_innings(career).innings
        stats = aggregate_phase_statistics(qualifying_innings(innings, query(min_balls_in_window=6)))
        assert stats.dismissal_count == 2
        assert stats.dismissal_rate == 66.67

        stats = aggregate_phase_statistics(qualifying_innings(innings, query(min_balls_in_window=8)))
        assert stats.dismissal_rate == 100.0
        assert stats.average_runs == 0.0

    def test_no_qualifying_innings_is_no_data(self):
        assert aggregate_phase_statistics([]) is None

    def test_zero_denominator_is_undefined(self):
        assert rate(10, 0) is None
        assert rate(1, 3) == 33.33


class TestInningsProgression:
    def test_ball_numbers_continue_from_innings_start(self, window_innings):
        cut = resolve_phase_cut(sequence(window_innings), query())
        progression = reconstruct_progression(cut)

        assert [p.ball_number for p in progression.progression] == [7, 8, 9, 10, 11]
        assert [p.runs_this_ball for p in progression.progression] == [4, 1, 0, 2, 6]
        assert [p.cumulative_runs for p in progression.progression] == [4, 5, 5, 7, 13]
        assert progression.total_runs == 13
        assert progression.balls_faced == 5
        assert progression.strike_rate == 260.0
        assert progression.innings_runs == 22
        assert progression.innings_balls == 12
        assert progression.title == "Royal Challengers Bangalore vs Mumbai Indians"

    def test_sorted_most_recent_first(self, career):
        progressions = innings_progressions(group_innings(career).innings, query())
        assert [p.match_info.match_id for p in progressions] == ["m2", "m1", "m3"]

    def test_non_qualifying_innings_excluded(self, career):
        progressions = innings_progressions(group_innings(career).innings, query(min_balls_in_window=8))
        assert [p.match_info.match_id for p in progressions] == ["m3"]
        assert progressions[0].dismissed_in_window is True


class TestPhaseProperties:
    def test_progression_totals_match_aggregate(self, career):
        innings = group_innings(career).innings
        for q in [query(), query(min_balls_in_window=6), query(balls_before=0, min_balls_in_window=1)]:
            stats = aggregate_phase_statistics(qualifying_innings(innings, q))
            progressions = innings_progressions(innings, q)
            assert stats.total_runs == sum(
                p.runs_this_ball for prog in progressions for p in prog.progression
            )
            assert stats.total_balls == sum(prog.balls_faced for prog in progressions)

    def test_stricter_balls_before_never_adds_innings(self, career):
        innings = group_innings(career).innings
        counts = [
            len(qualifying_innings(innings, query(balls_before=b, min_balls_in_window=1)))
            for b in [0, 4, 5, 6, 7, 24, 25]
        ]
        assert counts == [3, 3, 3, 3, 1, 1, 0]
        assert counts == sorted(counts, reverse=True)

    def test_same_query_same_result(self, career):
        q = query()
        first = aggregate_phase_statistics(qualifying_innings(group_innings(career).innings, q))
        second = aggregate_phase_statistics(qualifying_innings(group_innings(career).innings, q))
        assert first == second

    def test_scenario_dismissed_in_window(self):
        # Six balls before the boundary, then 1,1,1,1 and out on the fifth window ball
        deliveries = [ball("m1", over, 1, runs=runs) for over, runs in enumerate([4, 1, 0, 6, 2, 1])]
        deliveries += [
            ball("m1", 6, 1, runs=1), ball("m1", 6, 2, runs=1), ball("m1", 6, 3, runs=1),
            ball("m1", 7, 1, runs=1), ball("m1", 7, 2, out=True, wicket_type="caught"),
        ]
        q = query(balls_before=0, min_balls_in_window=5)
        stats = aggregate_phase_statistics(qualifying_innings(group_innings(deliveries).innings, q))

        assert stats.total_runs == 4
        assert stats.dismissal_rate == 100.0
        assert stats.runs_distribution == [4]

    def test_scenario_nobody_reaches_balls_before(self, career):
        stats = aggregate_phase_statistics(
            qualifying_innings(group_innings(career).innings, query(balls_before=100))
        )
        assert stats is None
