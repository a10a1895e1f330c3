"""
Workout domain models: generated workouts, session history and rounds.

A round is one timed slot (one minute for EMOM) of a workout. Generated
workouts and logged sessions share the same round model; a logged round
simply has its actual values filled in.

Examples:
    >>> round_ = WorkoutRound(minute_index=1, exercise_name="Push-ups", target=10)
    >>> round_.actual_value
    10
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from domain.models.exercise import DifficultyTier


class Framework(str, Enum):
    """Workout structures, from most intense to most recovery-friendly."""

    TABATA = "tabata"
    EMOM = "emom"
    AMRAP = "amrap"
    CIRCUIT = "circuit"


class WorkoutRound(BaseModel):
    """One interval slot of a workout, stored by value."""

    model_config = ConfigDict(frozen=True)

    minute_index: int = Field(..., ge=1, description="1-based minute/interval index")
    exercise_name: str = Field(..., min_length=1, description="Exercise name (by value)")
    target_muscle_group: Optional[str] = Field(
        default=None, description="Muscle group of the exercise at generation time"
    )
    difficulty: Optional[DifficultyTier] = Field(
        default=None, description="Exercise difficulty at generation time"
    )
    target: int = Field(..., ge=0, description="Target reps, or seconds for holds")
    actual_reps: Optional[int] = Field(default=None, description="Reps logged post-hoc")
    actual_seconds: Optional[int] = Field(
        default=None, description="Seconds logged post-hoc"
    )
    skipped: bool = Field(default=False, description="Round was skipped")
    is_hold: bool = Field(default=False, description="Target is a duration in seconds")
    target_load: Optional[float] = Field(default=None, description="Prescribed load")
    actual_load: Optional[float] = Field(default=None, description="Load used")

    @property
    def effective_target(self) -> int:
        """Target used as a ratio denominator (never zero)."""
        return self.target or 1

    @property
    def actual_value(self) -> int:
        """
        Logged output, falling back to the target when nothing was logged.

        Holds prefer seconds over reps; rep rounds prefer reps over seconds.
        """
        if self.is_hold:
            primary, secondary = self.actual_seconds, self.actual_reps
        else:
            primary, secondary = self.actual_reps, self.actual_seconds
        if primary is not None:
            return primary
        if secondary is not None:
            return secondary
        return self.effective_target


def _check_round_sequence(rounds: Sequence[WorkoutRound], duration_minutes: int) -> None:
    if len(rounds) != duration_minutes:
        raise ValueError(
            f"Round count {len(rounds)} does not match duration {duration_minutes}"
        )
    indices = [r.minute_index for r in rounds]
    if indices != list(range(1, duration_minutes + 1)):
        raise ValueError("Minute indices must be the contiguous sequence 1..N")


class GeneratedWorkout(BaseModel):
    """A procedurally generated workout, ready to be performed."""

    model_config = ConfigDict(frozen=True)

    duration_minutes: int = Field(..., ge=0)
    difficulty_tag: DifficultyTier
    focus_label: str = Field(default="", description="Display/grouping label")
    framework: Framework = Field(default=Framework.EMOM)
    rounds: Tuple[WorkoutRound, ...] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def validate_rounds(self) -> "GeneratedWorkout":
        _check_round_sequence(self.rounds, self.duration_minutes)
        return self

    def to_session(
        self,
        *,
        created_at: datetime,
        rounds: Optional[Sequence[WorkoutRound]] = None,
        effort_rating: Optional[int] = None,
        completed: bool = True,
    ) -> "WorkoutSession":
        """
        Build the history record for this workout once it has been performed.

        Args:
            created_at: When the session took place
            rounds: Logged rounds (defaults to the generated rounds)
            effort_rating: Self-reported effort 1-5
            completed: Whether the user finished the workout
        """
        data = {
            "created_at": created_at,
            "framework": self.framework,
            "difficulty_tag": self.difficulty_tag,
            "duration_minutes": self.duration_minutes,
            "focus_label": self.focus_label,
            "rounds": tuple(rounds) if rounds is not None else self.rounds,
            "completed": completed,
        }
        if effort_rating is not None:
            data["effort_rating"] = effort_rating
        return WorkoutSession(**data)


class WorkoutSession(BaseModel):
    """An append-only history record of a performed workout."""

    model_config = ConfigDict(frozen=True)

    created_at: datetime = Field(..., description="When the session was created")
    framework: Framework = Field(default=Framework.EMOM)
    difficulty_tag: DifficultyTier = Field(default=DifficultyTier.BEGINNER)
    duration_minutes: int = Field(..., ge=0)
    focus_label: str = Field(default="")
    rounds: Tuple[WorkoutRound, ...] = Field(default_factory=tuple)
    effort_rating: Optional[int] = Field(
        default=None, ge=1, le=5, description="Self-reported effort (1 easy - 5 hard)"
    )
    completed: bool = Field(default=False)

    @model_validator(mode="after")
    def validate_rounds(self) -> "WorkoutSession":
        _check_round_sequence(self.rounds, self.duration_minutes)
        return self
