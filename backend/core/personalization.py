"""
Personalization insights.

Derives behavioral signals from a user's session history:
- Hit rate and skip rate over recent rounds
- Fatigue trend (recency-weighted per-session fatigue)
- Per-muscle-group preference and per-exercise performance
- Time-of-day adherence
- Streak of consecutive training days

Sessions are always supplied newest first.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence

from domain.models import (
    ExercisePerformance,
    PersonalizationInsights,
    SessionPerformanceSummary,
    TimeOfDayAdherence,
    TimeOfDayWindow,
    WorkoutRound,
    WorkoutSession,
)

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SIZE = 8
MAX_HIT_RATIO = 1.5
FATIGUE_DECAY = 0.8
UNDERPERFORM_RATIO = 0.9
UNDERPERFORM_SHARE = 0.35
PREFERENCE_MIN = 0.8
PREFERENCE_MAX = 1.3


def round_hit_ratio(round_: WorkoutRound) -> float:
    """Actual output divided by target, capped at 1.5."""
    return min(round_.actual_value / round_.effective_target, MAX_HIT_RATIO)


def time_of_day_window(hour: int) -> TimeOfDayWindow:
    """Bucket an hour of the day (0-23)."""
    if 5 <= hour < 12:
        return TimeOfDayWindow.MORNING
    if 12 <= hour < 17:
        return TimeOfDayWindow.AFTERNOON
    if 17 <= hour < 22:
        return TimeOfDayWindow.EVENING
    return TimeOfDayWindow.LATE_NIGHT


def summarize_session_performance(
    rounds: Sequence[WorkoutRound],
    effort_rating: Optional[int] = None,
) -> SessionPerformanceSummary:
    """
    Summarize a single session's rounds.

    Args:
        rounds: Logged rounds of the session
        effort_rating: Self-reported effort (1-5), if any

    Returns:
        SessionPerformanceSummary (hit rate defaults to 1.0 with no data)
    """
    ratios = [round_hit_ratio(r) for r in rounds if not r.skipped]
    skipped = sum(1 for r in rounds if r.skipped)
    return SessionPerformanceSummary(
        average_hit_rate=sum(ratios) / len(ratios) if ratios else 1.0,
        skip_rate=skipped / len(rounds) if rounds else 0.0,
        effort_rating=effort_rating,
    )


def session_fatigue_score(summary: SessionPerformanceSummary) -> float:
    """
    Fatigue score of one session.

    0.5 * skip rate, plus any shortfall below a 1.0 hit rate, plus
    (rating - 3) / 5 for ratings above 3.
    """
    rating = summary.effort_rating
    effort_component = (rating - 3) / 5 if rating is not None and rating > 3 else 0.0
    return max(
        0.0,
        0.5 * summary.skip_rate
        + max(0.0, 1.0 - summary.average_hit_rate)
        + effort_component,
    )


def recency_weighted_average(values: Sequence[float], decay: float = FATIGUE_DECAY) -> float:
    """Exponentially weighted average; values[0] is the most recent."""
    if not values:
        return 0.0
    weights = [decay ** i for i in range(len(values))]
    return sum(v * w for v, w in zip(values, weights)) / sum(weights)


def compute_streak_length(sessions: Sequence[WorkoutSession]) -> int:
    """
    Count consecutive calendar days ending at the newest session.

    Scans the full history newest first. Only the newest session of each
    calendar day is considered; an incomplete one, or a gap of more than one
    day, ends the streak.

    Args:
        sessions: Full session history, newest first

    Returns:
        Streak length in days
    """
    days: List[date] = []
    completed_by_day: Dict[date, bool] = {}
    for session in sessions:
        day = session.created_at.date()
        if day in completed_by_day:
            continue
        days.append(day)
        completed_by_day[day] = session.completed

    streak = 0
    last_day: Optional[date] = None
    for day in days:
        if not completed_by_day[day]:
            break
        if last_day is not None and (last_day - day).days != 1:
            break
        streak += 1
        last_day = day
    return streak


@dataclass
class _ExerciseBucket:
    ratio_sum: float = 0.0
    samples: int = 0
    underperform_count: int = 0
    seconds_total: float = 0.0
    units_total: float = 0.0

    def to_performance(self) -> ExercisePerformance:
        completion_ratio = self.ratio_sum / self.samples if self.samples else 1.0
        underperform_share = self.underperform_count / self.samples if self.samples else 0.0
        return ExercisePerformance(
            completion_ratio=completion_ratio,
            average_seconds_per_unit=(
                self.seconds_total / self.units_total if self.units_total > 0 else None
            ),
            underperformed=(
                underperform_share > UNDERPERFORM_SHARE
                or completion_ratio < UNDERPERFORM_RATIO
            ),
            samples=self.samples,
        )


def _time_of_day_adherence(sessions: Sequence[WorkoutSession]) -> TimeOfDayAdherence:
    if not sessions:
        return TimeOfDayAdherence()

    counts: Dict[TimeOfDayWindow, int] = defaultdict(int)
    hour_sums: Dict[TimeOfDayWindow, int] = defaultdict(int)
    for session in sessions:
        hour = session.created_at.hour
        window = time_of_day_window(hour)
        counts[window] += 1
        hour_sums[window] += hour

    # Ties resolve to the earliest window in the day's order
    order = [
        TimeOfDayWindow.MORNING,
        TimeOfDayWindow.AFTERNOON,
        TimeOfDayWindow.EVENING,
        TimeOfDayWindow.LATE_NIGHT,
    ]
    preferred = max(order, key=lambda w: counts[w])
    preferred_count = counts[preferred]
    return TimeOfDayAdherence(
        preferred_window=preferred,
        consistency=preferred_count / len(sessions),
        average_hour=round(hour_sums[preferred] / preferred_count, 1),
    )


def compute_insights(
    sessions: Sequence[WorkoutSession],
    window_size: int = DEFAULT_WINDOW_SIZE,
) -> PersonalizationInsights:
    """
    Compute personalization insights from session history.

    Only the most recent `window_size` sessions feed the windowed signals;
    the streak is computed over the full history.

    Args:
        sessions: Session history, newest first
        window_size: Number of recent sessions to analyze

    Returns:
        PersonalizationInsights
    """
    recent = list(sessions[:window_size])

    ratios: List[float] = []
    skipped_rounds = 0
    total_rounds = 0
    ratings: List[int] = []
    fatigue_scores: List[float] = []
    muscle_ratios: Dict[str, List[float]] = defaultdict(list)
    exercise_buckets: Dict[str, _ExerciseBucket] = defaultdict(_ExerciseBucket)

    for session in recent:
        if session.effort_rating is not None:
            ratings.append(session.effort_rating)

        for round_ in session.rounds:
            total_rounds += 1
            if round_.skipped:
                skipped_rounds += 1
                continue

            ratio = round_hit_ratio(round_)
            ratios.append(ratio)
            if round_.target_muscle_group:
                muscle_ratios[round_.target_muscle_group].append(ratio)

            bucket = exercise_buckets[round_.exercise_name]
            bucket.ratio_sum += ratio
            bucket.samples += 1
            if ratio < UNDERPERFORM_RATIO:
                bucket.underperform_count += 1
            if round_.actual_seconds is not None:
                if round_.is_hold:
                    units = round_.actual_value
                else:
                    units = (
                        round_.actual_reps
                        if round_.actual_reps is not None
                        else round_.effective_target
                    )
                if units > 0:
                    bucket.seconds_total += round_.actual_seconds
                    bucket.units_total += units

        summary = summarize_session_performance(session.rounds, session.effort_rating)
        fatigue_scores.append(session_fatigue_score(summary))

    exercise_preference = {
        muscle: min(max(sum(values) / len(values), PREFERENCE_MIN), PREFERENCE_MAX)
        for muscle, values in muscle_ratios.items()
    }

    insights = PersonalizationInsights(
        average_hit_rate=sum(ratios) / len(ratios) if ratios else 1.0,
        skip_rate=skipped_rounds / total_rounds if total_rounds else 0.0,
        average_effort_rating=sum(ratings) / len(ratings) if ratings else None,
        fatigue_trend=recency_weighted_average(fatigue_scores),
        exercise_preference=exercise_preference,
        exercise_performance={
            name: bucket.to_performance() for name, bucket in exercise_buckets.items()
        },
        time_of_day_adherence=_time_of_day_adherence(recent),
        streak_length=compute_streak_length(sessions),
    )
    logger.debug(
        f"Insights over {len(recent)} sessions: hit_rate={insights.average_hit_rate:.2f} "
        f"fatigue={insights.fatigue_trend:.2f} streak={insights.streak_length}"
    )
    return insights
