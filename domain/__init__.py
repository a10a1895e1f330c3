"""
Domain layer for the workout engine.

This package contains pure domain models that are independent of
infrastructure concerns (storage, transport, UI).
"""

from domain.models import (
    Exercise,
    EquipmentSet,
    GeneratedWorkout,
    Profile,
    WorkoutRound,
    WorkoutSession,
)

__all__ = [
    "Exercise",
    "EquipmentSet",
    "GeneratedWorkout",
    "Profile",
    "WorkoutRound",
    "WorkoutSession",
]
