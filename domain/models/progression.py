"""
Per-exercise progression models.

One ExerciseProgression row exists per user per exercise. It is upserted
after every session that contains the exercise.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ExerciseProgression(BaseModel):
    """Stored progressive-overload state for one exercise."""

    exercise_name: str = Field(..., min_length=1)
    next_target_reps: int = Field(..., ge=1, description="Next target reps/seconds")
    next_target_load: Optional[float] = Field(default=None, description="Next target load")
    overperformance_streak: int = Field(default=0, ge=0)
    weekly_increments: int = Field(default=0, ge=0, le=2)
    week_of_year: int = Field(..., ge=1, le=53, description="ISO week of last update")
    last_session_at: datetime


class ProgressionUpdate(BaseModel):
    """Upsert record emitted by the progression tracker for one exercise."""

    model_config = ConfigDict(frozen=True)

    exercise_name: str
    next_target_reps: int
    next_target_load: Optional[float] = None
    overperformance_streak: int
    weekly_increments: int
    week_of_year: int
    last_session_at: datetime
    bumped: bool = Field(default=False, description="Targets were raised this session")

    def to_progression(self) -> ExerciseProgression:
        """Convert the update into the row stored by the progression store."""
        return ExerciseProgression(
            **self.model_dump(exclude={"bumped"}),
        )
