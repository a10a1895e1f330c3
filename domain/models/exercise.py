"""
Exercise catalog value object.

Catalog exercises are static reference data: loaded once, never mutated.

Examples:
    >>> exercise = Exercise(
    ...     name="Push-ups",
    ...     muscle_group="chest",
    ...     difficulty="beginner",
    ...     equipment=["bodyweight"],
    ...     targets={"beginner": 10, "intermediate": 20, "advanced": 30},
    ... )
    >>> exercise.target_for(DifficultyTier.INTERMEDIATE)
    20
"""

from enum import Enum
from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from domain.models.equipment import EquipmentId


class DifficultyTier(str, Enum):
    """Difficulty classification shared by users and exercises."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class Exercise(BaseModel):
    """
    A catalog exercise.

    `targets` holds the per-tier prescription: reps, or hold seconds when
    `is_hold` is set.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Unique exercise name")
    muscle_group: str = Field(..., min_length=1, description="Primary muscle group")
    difficulty: DifficultyTier = Field(..., description="Exercise difficulty tier")
    equipment: Tuple[str, ...] = Field(
        default=(EquipmentId.BODYWEIGHT.value,),
        description="Required equipment; all items must be available",
    )
    targets: Dict[DifficultyTier, int] = Field(
        ..., description="Target reps (or hold seconds) per user tier"
    )
    is_hold: bool = Field(
        default=False, description="True if the target is a duration in seconds"
    )

    @field_validator("equipment", mode="before")
    @classmethod
    def normalize_equipment(cls, v):
        """Default to bodyweight when no equipment is listed."""
        if not v:
            return (EquipmentId.BODYWEIGHT.value,)
        return tuple(item.value if isinstance(item, Enum) else str(item) for item in v)

    @model_validator(mode="after")
    def validate_targets(self) -> "Exercise":
        """Every tier needs a positive target."""
        missing = [tier.value for tier in DifficultyTier if tier not in self.targets]
        if missing:
            raise ValueError(
                f"Exercise '{self.name}' is missing targets for: {', '.join(missing)}"
            )
        for tier, value in self.targets.items():
            if value <= 0:
                raise ValueError(
                    f"Exercise '{self.name}' has non-positive {tier.value} target"
                )
        return self

    @property
    def is_bodyweight_only(self) -> bool:
        return set(self.equipment) == {EquipmentId.BODYWEIGHT.value}

    def target_for(self, tier: DifficultyTier) -> int:
        """Get the prescription for a user tier."""
        return self.targets[DifficultyTier(tier)]
