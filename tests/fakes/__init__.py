"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of the engine's ports
for fast, isolated testing. No database or external dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeSessionRepository, make_session

    repo = FakeSessionRepository()
    repo.seed("user1", [make_session(created_at=now)])
"""
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from domain.models import (
    DifficultyTier,
    ExerciseProgression,
    Framework,
    Profile,
    WorkoutRound,
    WorkoutSession,
)

# Import all fake implementations
from tests.fakes.profile_repository import FakeProfileRepository
from tests.fakes.session_repository import FakeSessionRepository
from tests.fakes.progression_repository import FakeProgressionRepository
from tests.fakes.random_source import FakeRandomSource


# =============================================================================
# Factory Functions
# =============================================================================

DEFAULT_NOW = datetime(2024, 3, 6, 18, 30, tzinfo=timezone.utc)


def make_round(
    minute_index: int = 1,
    exercise_name: str = "Push-ups",
    *,
    target: int = 10,
    muscle_group: Optional[str] = "chest",
    **overrides,
) -> WorkoutRound:
    """Create a logged round; actual values come from overrides."""
    return WorkoutRound(
        minute_index=minute_index,
        exercise_name=exercise_name,
        target=target,
        target_muscle_group=muscle_group,
        **overrides,
    )


def make_session(
    *,
    created_at: datetime = DEFAULT_NOW,
    rounds: Optional[Sequence[WorkoutRound]] = None,
    effort_rating: Optional[int] = None,
    completed: bool = True,
    framework: Framework = Framework.EMOM,
) -> WorkoutSession:
    """
    Create a session record.

    Rounds are renumbered 1..N so callers only describe their content.
    Defaults to a single on-target Push-ups round.
    """
    rounds = list(rounds) if rounds is not None else [make_round()]
    numbered = tuple(
        r.model_copy(update={"minute_index": i}) for i, r in enumerate(rounds, start=1)
    )
    data = {
        "created_at": created_at,
        "framework": framework,
        "difficulty_tag": DifficultyTier.INTERMEDIATE,
        "duration_minutes": len(numbered),
        "focus_label": "fat_loss",
        "rounds": numbered,
        "completed": completed,
    }
    if effort_rating is not None:
        data["effort_rating"] = effort_rating
    return WorkoutSession(**data)


def make_progression(
    exercise_name: str = "Push-ups",
    *,
    next_target_reps: int = 10,
    last_session_at: datetime = DEFAULT_NOW,
    **overrides,
) -> ExerciseProgression:
    """Create a stored progression row dated in last_session_at's ISO week."""
    data = {
        "exercise_name": exercise_name,
        "next_target_reps": next_target_reps,
        "week_of_year": last_session_at.isocalendar()[1],
        "last_session_at": last_session_at,
    }
    data.update(overrides)
    return ExerciseProgression(**data)


def create_profile_repo(
    *,
    user_id: str = "test_user",
    skill_score: int = 50,
    equipment: Sequence[str] = ("bodyweight",),
    primary_goal: str = "fat_loss",
    secondary_goals: Optional[List[str]] = None,
) -> FakeProfileRepository:
    """
    Create a FakeProfileRepository holding one onboarded profile.

    Returns:
        Pre-populated FakeProfileRepository
    """
    repo = FakeProfileRepository()
    repo.seed([
        Profile(
            user_id=user_id,
            skill_score=skill_score,
            equipment={"items": list(equipment)},
            primary_goal=primary_goal,
            secondary_goals=list(secondary_goals or []),
        )
    ])
    return repo


def create_session_repo(
    *,
    user_id: str = "test_user",
    num_sessions: int = 0,
    start: datetime = DEFAULT_NOW,
    effort_rating: Optional[int] = 3,
) -> FakeSessionRepository:
    """
    Create a FakeSessionRepository with one on-target session per day.

    The newest session is at `start`; each older one is a day earlier.

    Returns:
        Pre-populated FakeSessionRepository
    """
    repo = FakeSessionRepository()
    repo.seed(user_id, [
        make_session(created_at=start - timedelta(days=i), effort_rating=effort_rating)
        for i in range(num_sessions)
    ])
    return repo


__all__ = [
    # Fakes
    "FakeProfileRepository",
    "FakeSessionRepository",
    "FakeProgressionRepository",
    "FakeRandomSource",
    # Factories
    "DEFAULT_NOW",
    "make_round",
    "make_session",
    "make_progression",
    "create_profile_repo",
    "create_session_repo",
]
