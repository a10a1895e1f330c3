"""
Domain models for the workout engine.

This package contains pure domain models that are independent of
infrastructure concerns (storage, transport, UI).

These models represent the core business concepts:
- Exercise: A static catalog entry with per-tier targets
- EquipmentSet: The non-empty set of equipment a user has
- Profile: Skill score, equipment and goals of a user
- WorkoutSession / WorkoutRound: Append-only session history
- GeneratedWorkout: A freshly generated interval workout
- ExerciseProgression: Per-exercise progressive overload state
- PersonalizationInsights: Signals derived from session history

Usage:
    >>> from domain.models import WorkoutSession, WorkoutRound

    >>> # Serialize to JSON (absent optional fields stay absent)
    >>> json_str = session.model_dump_json(exclude_unset=True)

    >>> # Deserialize from JSON
    >>> session = WorkoutSession.model_validate_json(json_str)
"""

from domain.models.equipment import (
    EQUIPMENT_LABELS,
    HEAVY_EQUIPMENT,
    EquipmentId,
    EquipmentRichness,
    EquipmentSet,
    equipment_label,
)
from domain.models.exercise import DifficultyTier, Exercise
from domain.models.insights import (
    ExercisePerformance,
    PersonalizationInsights,
    SessionPerformanceSummary,
    TimeOfDayAdherence,
    TimeOfDayWindow,
)
from domain.models.profile import Profile, build_goal_weights
from domain.models.progression import ExerciseProgression, ProgressionUpdate
from domain.models.workout import (
    Framework,
    GeneratedWorkout,
    WorkoutRound,
    WorkoutSession,
)

__all__ = [
    # Equipment
    "EQUIPMENT_LABELS",
    "HEAVY_EQUIPMENT",
    "EquipmentId",
    "EquipmentRichness",
    "EquipmentSet",
    "equipment_label",
    # Catalog
    "DifficultyTier",
    "Exercise",
    # Profile
    "Profile",
    "build_goal_weights",
    # Sessions
    "Framework",
    "GeneratedWorkout",
    "WorkoutRound",
    "WorkoutSession",
    # Progression
    "ExerciseProgression",
    "ProgressionUpdate",
    # Insights
    "ExercisePerformance",
    "PersonalizationInsights",
    "SessionPerformanceSummary",
    "TimeOfDayAdherence",
    "TimeOfDayWindow",
]
