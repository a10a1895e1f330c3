"""
Personalization insight result structs.

These are derived, immutable signals computed from a user's session history.
"""

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class TimeOfDayWindow(str, Enum):
    """Time-of-day buckets used for adherence tracking."""

    MORNING = "morning"  # 05:00-11:59
    AFTERNOON = "afternoon"  # 12:00-16:59
    EVENING = "evening"  # 17:00-21:59
    LATE_NIGHT = "late-night"  # 22:00-04:59
    UNAVAILABLE = "unavailable"


class TimeOfDayAdherence(BaseModel):
    """When the user usually trains, and how consistently."""

    model_config = ConfigDict(frozen=True)

    preferred_window: TimeOfDayWindow = TimeOfDayWindow.UNAVAILABLE
    consistency: float = Field(default=0.0, ge=0.0, le=1.0)
    average_hour: Optional[float] = None


class ExercisePerformance(BaseModel):
    """Performance signals for one exercise across the insight window."""

    model_config = ConfigDict(frozen=True)

    completion_ratio: float
    average_seconds_per_unit: Optional[float] = None
    underperformed: bool = False
    samples: int = 0


class PersonalizationInsights(BaseModel):
    """Behavioral signals derived from recent session history."""

    model_config = ConfigDict(frozen=True)

    average_hit_rate: float = 1.0
    skip_rate: float = 0.0
    average_effort_rating: Optional[float] = None
    fatigue_trend: float = 0.0
    exercise_preference: Dict[str, float] = Field(
        default_factory=dict, description="Muscle group -> clamped hit ratio"
    )
    exercise_performance: Dict[str, ExercisePerformance] = Field(default_factory=dict)
    time_of_day_adherence: TimeOfDayAdherence = Field(default_factory=TimeOfDayAdherence)
    streak_length: int = 0

    @property
    def underperformance_rate(self) -> float:
        """Fraction of tracked exercises flagged as underperformed."""
        if not self.exercise_performance:
            return 0.0
        flagged = sum(1 for perf in self.exercise_performance.values() if perf.underperformed)
        return flagged / len(self.exercise_performance)


class SessionPerformanceSummary(BaseModel):
    """Hit rate, skip rate and effort rating for a single session."""

    model_config = ConfigDict(frozen=True)

    average_hit_rate: float = 1.0
    skip_rate: float = 0.0
    effort_rating: Optional[int] = None
