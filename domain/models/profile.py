"""
User profile model.

Created at onboarding; mutated on goal change and (skill score only) after
each completed session.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from domain.models.equipment import EquipmentSet

MAX_SECONDARY_GOALS = 2
PRIMARY_GOAL_WEIGHT = 0.6
SECONDARY_GOALS_SHARE = 0.4


def build_goal_weights(
    primary_goal: str,
    secondary_goals: Optional[List[str]] = None,
) -> Dict[str, float]:
    """
    Calculate goal weights from a primary and secondary goals.

    The primary goal gets 60%, the secondary goals share 40% evenly. With no
    secondary goals the primary goal carries the full weight.

    Args:
        primary_goal: Primary goal id
        secondary_goals: Up to two secondary goal ids

    Returns:
        Map of goal id to weight, summing to 1.0
    """
    secondaries = [g for g in dict.fromkeys(secondary_goals or []) if g != primary_goal]
    if len(secondaries) > MAX_SECONDARY_GOALS:
        raise ValueError(
            f"At most {MAX_SECONDARY_GOALS} secondary goals are allowed, got {len(secondaries)}"
        )
    if not secondaries:
        return {primary_goal: 1.0}

    weights = {primary_goal: PRIMARY_GOAL_WEIGHT}
    share = SECONDARY_GOALS_SHARE / len(secondaries)
    for goal_id in secondaries:
        weights[goal_id] = share
    return weights


class Profile(BaseModel):
    """A user's training profile."""

    user_id: str = Field(..., min_length=1)
    fitness_level: str = Field(default="", description="Free-text tier label")
    equipment: EquipmentSet = Field(default_factory=EquipmentSet)
    skill_score: int = Field(default=50, description="Skill score, clamped to 0-100")
    primary_goal: str = Field(..., min_length=1)
    secondary_goals: List[str] = Field(default_factory=list)
    goal_weights: Dict[str, float] = Field(
        default_factory=dict, description="Derived from primary/secondary goals"
    )

    @field_validator("skill_score", mode="before")
    @classmethod
    def clamp_skill_score(cls, v) -> int:
        return max(0, min(100, int(v)))

    @model_validator(mode="after")
    def derive_goal_weights(self) -> "Profile":
        """Normalize secondary goals and (re)derive the weight map."""
        secondaries = [
            g for g in dict.fromkeys(self.secondary_goals) if g != self.primary_goal
        ]
        weights = build_goal_weights(self.primary_goal, secondaries)
        self.secondary_goals = secondaries
        self.goal_weights = weights
        return self

    def with_goals(self, primary_goal: str, secondary_goals: Optional[List[str]] = None) -> "Profile":
        """Return a copy of the profile with new goals and re-derived weights."""
        data = self.model_dump()
        data.update(primary_goal=primary_goal, secondary_goals=list(secondary_goals or []))
        return Profile.model_validate(data)

    def with_skill_score(self, skill_score: int) -> "Profile":
        data = self.model_dump()
        data["skill_score"] = skill_score
        return Profile.model_validate(data)
