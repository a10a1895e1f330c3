"""
Workout generator.

Procedurally assembles a timed interval workout from the exercise catalog:
- Difficulty tier from the user's skill score
- Duration drawn from a tier-specific range (longer with full equipment)
- Eligibility by equipment and tier policy
- One round per minute, avoiding immediate repeats

All randomness comes from the injected RandomSource.
"""
import logging
from typing import Iterable, List, Optional, Tuple, Union

from application.exceptions import CatalogIntegrityError
from application.ports import RandomSource
from backend.core.catalog import ExerciseCatalog
from backend.core.equipment import resolve_equipment
from domain.models import (
    DifficultyTier,
    EquipmentId,
    EquipmentRichness,
    EquipmentSet,
    Exercise,
    Framework,
    GeneratedWorkout,
    WorkoutRound,
)

logger = logging.getLogger(__name__)

BEGINNER_MAX_SCORE = 35
INTERMEDIATE_MAX_SCORE = 70

# Inclusive duration ranges per tier, and the extra minutes a "full" set earns
DURATION_RANGES = {
    DifficultyTier.BEGINNER: (8, 12),
    DifficultyTier.INTERMEDIATE: (12, 20),
    DifficultyTier.ADVANCED: (20, 30),
}
FULL_EQUIPMENT_BONUS = {
    DifficultyTier.BEGINNER: 0,
    DifficultyTier.INTERMEDIATE: 2,
    DifficultyTier.ADVANCED: 3,
}

# Chance that a beginner keeps a given intermediate exercise
BEGINNER_INTERMEDIATE_KEEP = 0.3


def difficulty_for_skill_score(skill_score: int) -> DifficultyTier:
    """Map a skill score to a tier: <=35 beginner, <=70 intermediate, else advanced."""
    if skill_score <= BEGINNER_MAX_SCORE:
        return DifficultyTier.BEGINNER
    if skill_score <= INTERMEDIATE_MAX_SCORE:
        return DifficultyTier.INTERMEDIATE
    return DifficultyTier.ADVANCED


def draw_duration(
    tier: DifficultyTier,
    richness: EquipmentRichness,
    rng: RandomSource,
) -> int:
    """
    Draw a workout duration in minutes.

    Args:
        tier: User difficulty tier
        richness: Equipment richness
        rng: Random source

    Returns:
        Duration within the tier range, plus the full-equipment bonus
    """
    low, high = DURATION_RANGES[tier]
    span = high - low + 1
    duration = low + min(int(rng.random() * span), span - 1)
    if richness == EquipmentRichness.FULL:
        duration += FULL_EQUIPMENT_BONUS[tier]
    return duration


class WorkoutGenerator:
    """
    Generates EMOM-style interval workouts from a catalog.

    The catalog is injected and never mutated, so one generator (or one
    catalog) can be shared between invocations.
    """

    def __init__(self, catalog: ExerciseCatalog, rng: RandomSource):
        """
        Initialize the generator.

        Args:
            catalog: Validated exercise catalog
            rng: Random source for duration and exercise draws
        """
        self._catalog = catalog
        self._rng = rng

    def eligible_exercises(
        self,
        tier: DifficultyTier,
        equipment: EquipmentSet,
    ) -> Tuple[List[Exercise], List[Exercise]]:
        """
        Filter the catalog for a tier and equipment set.

        Beginners never get advanced exercises, and keep each intermediate
        exercise with probability 0.3. The draw is repeated on every call.

        Returns:
            (eligible, policy_eligible) where policy_eligible is the list
            before the stochastic beginner filter
        """
        # Bodyweight needs no equipment, so it is always available
        available = EquipmentSet(items=equipment.items | {EquipmentId.BODYWEIGHT.value})
        policy_eligible = [
            ex for ex in self._catalog
            if available.contains_all(ex.equipment)
            and not (
                tier == DifficultyTier.BEGINNER
                and ex.difficulty == DifficultyTier.ADVANCED
            )
        ]

        eligible = []
        for ex in policy_eligible:
            if (
                tier == DifficultyTier.BEGINNER
                and ex.difficulty == DifficultyTier.INTERMEDIATE
                and self._rng.random() > BEGINNER_INTERMEDIATE_KEEP
            ):
                continue
            eligible.append(ex)
        return eligible, policy_eligible

    def generate(
        self,
        skill_score: int,
        equipment: Union[EquipmentSet, Iterable[str]],
        goal_focus: str,
        framework: Optional[Framework] = None,
    ) -> GeneratedWorkout:
        """
        Generate a workout.

        Args:
            skill_score: User skill score (0-100)
            equipment: Resolved equipment set (raw selections are resolved too)
            goal_focus: Focus label, copied verbatim onto the workout
            framework: Workout structure (defaults to emom)

        Returns:
            GeneratedWorkout with one round per minute

        Raises:
            CatalogIntegrityError: If no exercise at all is eligible
        """
        resolved = resolve_equipment(equipment)
        tier = difficulty_for_skill_score(skill_score)
        duration = draw_duration(tier, resolved.richness, self._rng)

        eligible, policy_eligible = self.eligible_exercises(tier, resolved.equipment)
        if not eligible:
            if not policy_eligible:
                raise CatalogIntegrityError(
                    f"No eligible exercise for tier '{tier.value}' and equipment "
                    f"{resolved.equipment.sorted_items()}"
                )
            logger.warning(
                f"Stochastic filter left no exercises for tier '{tier.value}'; "
                f"falling back to '{policy_eligible[0].name}'"
            )
            eligible = [policy_eligible[0]]

        logger.debug(
            f"{len(eligible)} eligible exercises for tier={tier.value} "
            f"richness={resolved.richness.value}"
        )

        rounds: List[WorkoutRound] = []
        previous: Optional[str] = None
        for minute in range(1, duration + 1):
            candidates = [ex for ex in eligible if ex.name != previous] or eligible
            exercise = self._rng.choice(candidates)
            rounds.append(WorkoutRound(
                minute_index=minute,
                exercise_name=exercise.name,
                target_muscle_group=exercise.muscle_group,
                difficulty=exercise.difficulty,
                target=exercise.target_for(tier),
                is_hold=exercise.is_hold,
            ))
            previous = exercise.name

        workout = GeneratedWorkout(
            duration_minutes=duration,
            difficulty_tag=tier,
            focus_label=goal_focus,
            framework=framework or Framework.EMOM,
            rounds=tuple(rounds),
        )
        logger.info(
            f"Generated {workout.framework.value} workout: {duration} min, "
            f"tier={tier.value}, focus='{goal_focus}'"
        )
        return workout
