"""
Progression tracking for exercise targets.

After a session completes, every exercise it contained gets a new
progression row:
- Rounds are aggregated per exercise (last-seen target/actual/load)
- Overperformance (>= 5% over target reps/seconds, or >= 2% over target load)
  extends a streak; anything else resets it
- Three overperforming sessions in a row bump the target, at most twice per
  ISO week, and reset the streak
"""
import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Dict, Iterable, Optional, Sequence, Union

from domain.models import ExerciseProgression, ProgressionUpdate, WorkoutRound

logger = logging.getLogger(__name__)

OVERPERFORMANCE_RATIO = 1.05
OVERPERFORMANCE_LOAD_RATIO = 1.02
STREAK_FOR_BUMP = 3
MAX_WEEKLY_INCREMENTS = 2
TARGET_BUMP_FACTOR = 1.05
LOAD_BUMP = 2.5


def iso_week_number(when: Union[date, datetime, None] = None) -> int:
    """
    ISO-8601 week number (weeks start Monday; week 1 holds the first Thursday).

    Args:
        when: Date or datetime (defaults to now, UTC)
    """
    if when is None:
        when = datetime.now(timezone.utc)
    return when.isocalendar()[1]


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return int(math.floor(value + 0.5))


@dataclass
class ExerciseAggregate:
    """One exercise's rounds within a session, collapsed."""

    target: int
    actual: int
    target_load: Optional[float] = None
    actual_load: Optional[float] = None
    skipped: bool = False


def aggregate_rounds(rounds: Iterable[WorkoutRound]) -> Dict[str, ExerciseAggregate]:
    """
    Collapse session rounds per exercise name, in first-seen order.

    Non-skipped rounds overwrite target/actual with their own values (the
    last one wins); any skipped round marks the exercise as skipped.
    """
    aggregates: Dict[str, ExerciseAggregate] = {}
    for round_ in rounds:
        aggregate = aggregates.get(round_.exercise_name)
        if aggregate is None:
            aggregate = ExerciseAggregate(
                target=round_.target,
                actual=0,
                target_load=round_.target_load,
                actual_load=round_.actual_load,
            )
            aggregates[round_.exercise_name] = aggregate

        if round_.skipped:
            aggregate.skipped = True
            continue

        aggregate.target = round_.effective_target
        aggregate.actual = round_.actual_value
        if round_.target_load is not None:
            aggregate.target_load = round_.target_load
        if round_.actual_load is not None:
            aggregate.actual_load = round_.actual_load
    return aggregates


def is_overperformance(aggregate: ExerciseAggregate) -> bool:
    """True when a non-skipped exercise beat its rep/second or load target."""
    if aggregate.skipped:
        return False
    performance_ratio = aggregate.actual / max(aggregate.target, 1)
    if performance_ratio >= OVERPERFORMANCE_RATIO:
        return True
    if aggregate.actual_load and aggregate.target_load:
        load_ratio = aggregate.actual_load / max(aggregate.target_load, 1)
        return load_ratio >= OVERPERFORMANCE_LOAD_RATIO
    return False


def compute_progression_update(
    exercise_name: str,
    aggregate: ExerciseAggregate,
    existing: Optional[ExerciseProgression],
    *,
    now: datetime,
) -> ProgressionUpdate:
    """
    Compute the next progression row for one exercise.

    Args:
        exercise_name: Exercise name
        aggregate: This session's aggregate for the exercise
        existing: Stored row, if any
        now: Completion time (defines the current ISO week)

    Returns:
        ProgressionUpdate to upsert
    """
    week = iso_week_number(now)
    base_target = max(
        1, existing.next_target_reps if existing is not None else aggregate.target
    )
    base_load = (
        existing.next_target_load
        if existing is not None and existing.next_target_load is not None
        else aggregate.target_load
    )

    same_week = existing is not None and existing.week_of_year == week
    weekly_increments = existing.weekly_increments if same_week else 0
    if is_overperformance(aggregate):
        streak = (existing.overperformance_streak if existing is not None else 0) + 1
    else:
        streak = 0

    next_target = base_target
    next_load = base_load
    bumped = False
    if streak >= STREAK_FOR_BUMP and weekly_increments < MAX_WEEKLY_INCREMENTS:
        next_target = max(base_target + 1, round_half_up(base_target * TARGET_BUMP_FACTOR))
        if aggregate.actual_load:
            next_load = max(aggregate.actual_load, (base_load or 0.0) + LOAD_BUMP)
        weekly_increments += 1
        # A fresh streak is required before the next bump
        streak = 0
        bumped = True
        logger.info(
            f"Progression bump for '{exercise_name}': {base_target} -> {next_target}"
            + (f", load {base_load} -> {next_load}" if next_load != base_load else "")
        )

    return ProgressionUpdate(
        exercise_name=exercise_name,
        next_target_reps=next_target,
        next_target_load=next_load,
        overperformance_streak=streak,
        weekly_increments=weekly_increments,
        week_of_year=week,
        last_session_at=now,
        bumped=bumped,
    )


def build_progression_updates(
    session_rounds: Sequence[WorkoutRound],
    existing_rows: Iterable[ExerciseProgression],
    *,
    now: Optional[datetime] = None,
) -> Dict[str, ProgressionUpdate]:
    """
    Build progression upserts for every exercise in a completed session.

    Exercises absent from the session are left untouched.

    Args:
        session_rounds: Logged rounds of the completed session
        existing_rows: The user's stored progression rows
        now: Completion time (defaults to now, UTC)

    Returns:
        Exercise name -> ProgressionUpdate, in session order
    """
    if now is None:
        now = datetime.now(timezone.utc)
    rows_by_name = {row.exercise_name: row for row in existing_rows}

    updates: Dict[str, ProgressionUpdate] = {}
    for exercise_name, aggregate in aggregate_rounds(session_rounds).items():
        updates[exercise_name] = compute_progression_update(
            exercise_name,
            aggregate,
            rows_by_name.get(exercise_name),
            now=now,
        )
    return updates
