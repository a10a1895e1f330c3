"""
Unit tests for personalization insights.

Tests cover:
- Hit/skip rate and effort averages over the insight window
- Fatigue scoring and recency weighting
- Per-muscle preference and per-exercise performance
- Time-of-day adherence
- Streak computation over the full history
"""
from datetime import timedelta

import pytest

from backend.core.personalization import (
    compute_insights,
    compute_streak_length,
    recency_weighted_average,
    round_hit_ratio,
    session_fatigue_score,
    summarize_session_performance,
    time_of_day_window,
)
from domain.models import SessionPerformanceSummary, TimeOfDayWindow
from tests.fakes import DEFAULT_NOW, make_round, make_session


@pytest.mark.unit
class TestRoundHitRatio:

    def test_ratio_of_actual_to_target(self):
        assert round_hit_ratio(make_round(target=10, actual_reps=5)) == 0.5

    def test_capped_at_one_and_a_half(self):
        assert round_hit_ratio(make_round(target=10, actual_reps=40)) == 1.5

    def test_unlogged_round_counts_as_on_target(self):
        assert round_hit_ratio(make_round(target=10)) == 1.0

    def test_hold_prefers_seconds(self):
        round_ = make_round(target=30, is_hold=True, actual_seconds=15, actual_reps=30)
        assert round_hit_ratio(round_) == 0.5

    def test_zero_target_uses_one_as_denominator(self):
        assert round_hit_ratio(make_round(target=0, actual_reps=1)) == 1.0


@pytest.mark.unit
class TestTimeOfDayWindow:

    @pytest.mark.parametrize("hour,window", [
        (5, TimeOfDayWindow.MORNING),
        (11, TimeOfDayWindow.MORNING),
        (12, TimeOfDayWindow.AFTERNOON),
        (16, TimeOfDayWindow.AFTERNOON),
        (17, TimeOfDayWindow.EVENING),
        (21, TimeOfDayWindow.EVENING),
        (22, TimeOfDayWindow.LATE_NIGHT),
        (0, TimeOfDayWindow.LATE_NIGHT),
        (4, TimeOfDayWindow.LATE_NIGHT),
    ])
    def test_buckets(self, hour, window):
        assert time_of_day_window(hour) == window


@pytest.mark.unit
class TestSessionFatigue:

    def test_on_target_session_has_no_fatigue(self):
        summary = SessionPerformanceSummary(average_hit_rate=1.0, skip_rate=0.0, effort_rating=3)
        assert session_fatigue_score(summary) == 0.0

    def test_components_add_up(self):
        summary = SessionPerformanceSummary(average_hit_rate=0.8, skip_rate=0.5, effort_rating=5)
        # 0.5 * 0.5 + (1 - 0.8) + (5 - 3) / 5
        assert session_fatigue_score(summary) == pytest.approx(0.85)

    def test_overperformance_does_not_go_negative(self):
        summary = SessionPerformanceSummary(average_hit_rate=1.5, skip_rate=0.0, effort_rating=1)
        assert session_fatigue_score(summary) == 0.0

    def test_summary_excludes_skipped_rounds_from_hit_rate(self):
        rounds = [
            make_round(1, target=10, actual_reps=5),
            make_round(2, target=10, skipped=True),
        ]
        summary = summarize_session_performance(rounds, effort_rating=4)
        assert summary.average_hit_rate == 0.5
        assert summary.skip_rate == 0.5
        assert summary.effort_rating == 4


@pytest.mark.unit
class TestRecencyWeightedAverage:

    def test_empty_is_zero(self):
        assert recency_weighted_average([]) == 0.0

    def test_most_recent_weighted_highest(self):
        assert recency_weighted_average([1.0, 0.0]) == pytest.approx(1.0 / 1.8)
        assert recency_weighted_average([0.0, 1.0]) == pytest.approx(0.8 / 1.8)


@pytest.mark.unit
class TestComputeInsights:

    def test_empty_history_defaults(self):
        insights = compute_insights([])
        assert insights.average_hit_rate == 1.0
        assert insights.skip_rate == 0.0
        assert insights.average_effort_rating is None
        assert insights.fatigue_trend == 0.0
        assert insights.streak_length == 0
        assert insights.time_of_day_adherence.preferred_window == TimeOfDayWindow.UNAVAILABLE
        assert insights.time_of_day_adherence.average_hour is None

    def test_rates_and_effort(self):
        sessions = [
            make_session(
                created_at=DEFAULT_NOW,
                rounds=[make_round(target=10, actual_reps=10), make_round(target=10, skipped=True)],
                effort_rating=4,
            ),
            make_session(
                created_at=DEFAULT_NOW - timedelta(days=1),
                rounds=[make_round(target=10, actual_reps=5), make_round(target=10, actual_reps=15)],
                effort_rating=2,
            ),
        ]
        insights = compute_insights(sessions)
        assert insights.average_hit_rate == pytest.approx(1.0)
        assert insights.skip_rate == 0.25
        assert insights.average_effort_rating == 3.0

    def test_window_limits_sessions(self):
        """Only the newest window_size sessions feed the windowed signals."""
        recent = make_session(created_at=DEFAULT_NOW, rounds=[make_round(target=10, actual_reps=10)])
        old = make_session(
            created_at=DEFAULT_NOW - timedelta(days=1),
            rounds=[make_round(target=10, skipped=True)],
        )
        insights = compute_insights([recent, old], window_size=1)
        assert insights.skip_rate == 0.0
        # The streak still sees the whole history
        assert insights.streak_length == 2

    def test_fatigue_trend_is_order_sensitive(self):
        tired = make_session(
            created_at=DEFAULT_NOW,
            rounds=[make_round(target=10, actual_reps=4), make_round(target=10, skipped=True)],
            effort_rating=5,
        )
        fresh = make_session(
            created_at=DEFAULT_NOW - timedelta(days=1),
            rounds=[make_round(target=10, actual_reps=10)],
            effort_rating=3,
        )
        tired_first = compute_insights([tired, fresh]).fatigue_trend
        fresh_first = compute_insights([fresh, tired]).fatigue_trend
        assert tired_first != fresh_first
        assert tired_first > fresh_first

    def test_muscle_preference_is_clamped(self):
        session = make_session(rounds=[
            make_round(exercise_name="Push-ups", muscle_group="chest", target=10, actual_reps=15),
            make_round(exercise_name="Air Squats", muscle_group="legs", target=10, actual_reps=2),
            make_round(exercise_name="Plank Hold", muscle_group="core", target=30, actual_seconds=30,
                       is_hold=True),
        ])
        preference = compute_insights([session]).exercise_preference
        assert preference == {"chest": 1.3, "legs": 0.8, "core": 1.0}

    def test_exercise_underperformance_flags(self):
        session = make_session(rounds=[
            make_round(exercise_name="Push-ups", target=10, actual_reps=8),
            make_round(exercise_name="Push-ups", target=10, actual_reps=10),
            make_round(exercise_name="Burpees", target=10, actual_reps=8),
            make_round(exercise_name="Burpees", target=10, actual_reps=10),
            make_round(exercise_name="Burpees", target=10, actual_reps=10),
            make_round(exercise_name="Lunges", target=10, actual_reps=10),
        ])
        performance = compute_insights([session]).exercise_performance

        # 1 of 2 samples below 0.9 -> more than 35%
        assert performance["Push-ups"].underperformed is True
        # 1 of 3 samples below 0.9, mean 0.93 -> fine
        assert performance["Burpees"].underperformed is False
        assert performance["Burpees"].samples == 3
        assert performance["Lunges"].completion_ratio == 1.0

    def test_low_mean_ratio_flags_underperformance(self):
        session = make_session(rounds=[make_round(target=10, actual_reps=8)])
        assert compute_insights([session]).exercise_performance["Push-ups"].underperformed

    def test_underperformance_rate(self):
        session = make_session(rounds=[
            make_round(exercise_name="Push-ups", target=10, actual_reps=5),
            make_round(exercise_name="Lunges", target=10, actual_reps=10),
        ])
        assert compute_insights([session]).underperformance_rate == 0.5

    def test_seconds_per_unit(self):
        session = make_session(rounds=[
            make_round(exercise_name="Push-ups", target=10, actual_reps=10, actual_seconds=30),
            make_round(exercise_name="Push-ups", target=10, actual_reps=20, actual_seconds=30),
            make_round(exercise_name="Lunges", target=10, actual_reps=10),
        ])
        performance = compute_insights([session]).exercise_performance
        assert performance["Push-ups"].average_seconds_per_unit == pytest.approx(2.0)
        assert performance["Lunges"].average_seconds_per_unit is None

    def test_time_of_day_adherence(self):
        day = DEFAULT_NOW.replace(hour=0, minute=0)
        sessions = [
            make_session(created_at=day.replace(hour=7)),
            make_session(created_at=day.replace(hour=18) - timedelta(days=1)),
            make_session(created_at=day.replace(hour=10) - timedelta(days=2)),
        ]
        adherence = compute_insights(sessions).time_of_day_adherence
        assert adherence.preferred_window == TimeOfDayWindow.MORNING
        assert adherence.consistency == pytest.approx(2 / 3)
        assert adherence.average_hour == 8.5


@pytest.mark.unit
class TestStreakLength:

    def test_gap_ends_streak(self):
        sessions = [
            make_session(created_at=DEFAULT_NOW - timedelta(days=offset))
            for offset in (0, 1, 2, 4)
        ]
        assert compute_streak_length(sessions) == 3

    def test_same_day_sessions_are_deduplicated(self):
        sessions = [
            make_session(created_at=DEFAULT_NOW),
            make_session(created_at=DEFAULT_NOW - timedelta(hours=2)),
            make_session(created_at=DEFAULT_NOW - timedelta(days=1)),
        ]
        assert compute_streak_length(sessions) == 2

    def test_incomplete_day_breaks_streak(self):
        sessions = [
            make_session(created_at=DEFAULT_NOW),
            make_session(created_at=DEFAULT_NOW - timedelta(days=1), completed=False),
            make_session(created_at=DEFAULT_NOW - timedelta(days=2)),
        ]
        assert compute_streak_length(sessions) == 1

    def test_newest_session_of_the_day_decides(self):
        sessions = [
            make_session(created_at=DEFAULT_NOW, completed=False),
            make_session(created_at=DEFAULT_NOW - timedelta(hours=3)),
            make_session(created_at=DEFAULT_NOW - timedelta(days=1)),
        ]
        assert compute_streak_length(sessions) == 0

    def test_earlier_incomplete_session_same_day_is_ignored(self):
        sessions = [
            make_session(created_at=DEFAULT_NOW),
            make_session(created_at=DEFAULT_NOW - timedelta(hours=3), completed=False),
            make_session(created_at=DEFAULT_NOW - timedelta(days=1)),
        ]
        assert compute_streak_length(sessions) == 2

    def test_most_recent_incomplete_gives_zero(self):
        assert compute_streak_length([make_session(completed=False)]) == 0

    def test_empty_history(self):
        assert compute_streak_length([]) == 0
