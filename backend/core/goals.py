"""
Training goal configuration.

Each goal carries the metadata the generator and framework sampler use:
framework bias, intensity bias, preferred durations, rest multiplier and
exercise-type bias. Goals live in a registry so the set of goal ids can be
extended without code changes; goal-weight maps may legitimately reference
ids that the registry does not know, and those ids are ignored.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from domain.models import Framework


@dataclass(frozen=True)
class ExerciseBias:
    """0-1 preference for each exercise type."""

    compound_lifts: float = 0.0
    cardio: float = 0.0
    plyometric: float = 0.0
    mobility: float = 0.0


@dataclass(frozen=True)
class GoalConfig:
    """Configuration for one training goal."""

    id: str
    label: str
    subtitle: str = ""
    ai_tags: Tuple[str, ...] = ()
    framework_bias: Mapping[Framework, float] = field(default_factory=dict)
    intensity_bias: str = "moderate"  # low, moderate, high
    preferred_durations_minutes: Tuple[int, int] = (10, 30)
    rest_multiplier: float = 1.0
    exercise_bias: ExerciseBias = field(default_factory=ExerciseBias)

    def __post_init__(self):
        object.__setattr__(self, "framework_bias", MappingProxyType(dict(self.framework_bias)))


DEFAULT_GOALS: Tuple[GoalConfig, ...] = (
    GoalConfig(
        id="fat_loss",
        label="Fat Loss",
        subtitle="Burn calories and lean out",
        ai_tags=("fat loss", "calorie burn", "intervals", "conditioning", "metabolic"),
        framework_bias={
            Framework.TABATA: 0.35,
            Framework.EMOM: 0.25,
            Framework.AMRAP: 0.15,
            Framework.CIRCUIT: 0.25,
        },
        intensity_bias="moderate",
        preferred_durations_minutes=(12, 25),
        rest_multiplier=0.85,
        exercise_bias=ExerciseBias(compound_lifts=0.5, cardio=0.8, plyometric=0.6, mobility=0.2),
    ),
    GoalConfig(
        id="muscle_gain",
        label="Muscle Gain",
        subtitle="Hypertrophy-focused strength work",
        ai_tags=("hypertrophy", "time under tension", "moderate rest", "muscle building"),
        framework_bias={
            Framework.TABATA: 0.1,
            Framework.EMOM: 0.4,
            Framework.AMRAP: 0.15,
            Framework.CIRCUIT: 0.35,
        },
        intensity_bias="moderate",
        preferred_durations_minutes=(20, 30),
        rest_multiplier=1.2,
        exercise_bias=ExerciseBias(compound_lifts=0.9, cardio=0.2, plyometric=0.3, mobility=0.2),
    ),
    GoalConfig(
        id="strength_power",
        label="Strength & Power",
        subtitle="Build strength, explosiveness, and muscle",
        ai_tags=("strength", "power", "compound lifts", "longer rest", "explosive"),
        framework_bias={
            Framework.TABATA: 0.1,
            Framework.EMOM: 0.4,
            Framework.AMRAP: 0.2,
            Framework.CIRCUIT: 0.3,
        },
        intensity_bias="moderate",
        preferred_durations_minutes=(10, 25),
        rest_multiplier=1.3,
        exercise_bias=ExerciseBias(compound_lifts=0.9, cardio=0.2, plyometric=0.6, mobility=0.2),
    ),
)

# Legacy goalFocus values -> goal ids. Targets are not guaranteed to be
# registered goals.
LEGACY_GOAL_MAP: Dict[str, str] = {
    "cardio": "cardio_endurance",
    "strength": "strength_power",
    "metcon": "metabolic_conditioning",
}


class GoalRegistry:
    """Lookup table of goal configurations, keyed by goal id."""

    def __init__(self, goals: Iterable[GoalConfig] = ()):
        self._goals: Dict[str, GoalConfig] = {}
        for goal in goals:
            self.register(goal)

    def register(self, goal: GoalConfig) -> None:
        """Add or replace a goal configuration."""
        self._goals[goal.id] = goal

    def get(self, goal_id: Optional[str]) -> Optional[GoalConfig]:
        if not goal_id:
            return None
        return self._goals.get(goal_id)

    def ids(self) -> List[str]:
        return list(self._goals)

    def __contains__(self, goal_id: object) -> bool:
        return goal_id in self._goals


DEFAULT_GOAL_REGISTRY = GoalRegistry(DEFAULT_GOALS)


def goal_tags(goal_id: Optional[str], registry: GoalRegistry = DEFAULT_GOAL_REGISTRY) -> List[str]:
    """Get the descriptive tags for a goal (empty for unknown goals)."""
    config = registry.get(goal_id)
    return list(config.ai_tags) if config else []


def goal_label(goal_id: Optional[str], registry: GoalRegistry = DEFAULT_GOAL_REGISTRY) -> str:
    """Get the display label for a goal, falling back to the id."""
    config = registry.get(goal_id)
    if config:
        return config.label
    return goal_id or ""


def combined_exercise_bias(
    goal_weights: Mapping[str, float],
    registry: GoalRegistry = DEFAULT_GOAL_REGISTRY,
) -> ExerciseBias:
    """
    Blend the exercise bias of each goal by its weight.

    Goals missing from the registry, or with zero weight, contribute nothing.
    """
    compound = cardio = plyometric = mobility = 0.0
    for goal_id, weight in goal_weights.items():
        config = registry.get(goal_id)
        if config is None or weight <= 0:
            continue
        compound += config.exercise_bias.compound_lifts * weight
        cardio += config.exercise_bias.cardio * weight
        plyometric += config.exercise_bias.plyometric * weight
        mobility += config.exercise_bias.mobility * weight
    return ExerciseBias(
        compound_lifts=compound,
        cardio=cardio,
        plyometric=plyometric,
        mobility=mobility,
    )


def combined_rest_multiplier(
    goal_weights: Mapping[str, float],
    registry: GoalRegistry = DEFAULT_GOAL_REGISTRY,
) -> float:
    """Blend rest multipliers by goal weight; 1.0 when no known goal applies."""
    multiplier = 0.0
    for goal_id, weight in goal_weights.items():
        config = registry.get(goal_id)
        if config is not None and weight > 0:
            multiplier += config.rest_multiplier * weight
    return multiplier or 1.0


def migrate_legacy_goal(legacy_goal_focus: Optional[str]) -> Optional[str]:
    """Convert an old goalFocus value to a goal id (None if unmapped)."""
    if not legacy_goal_focus:
        return None
    return LEGACY_GOAL_MAP.get(legacy_goal_focus)
