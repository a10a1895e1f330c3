"""
Workout engine service.

Orchestrates the engine's control flow over the storage ports:

    onboarding      -> create_profile
    goal change     -> update_goals
    "give me a workout"
                    -> resolve equipment -> insights -> goal-weighted framework
                       -> personalized framework -> generate -> progression targets
    session logged  -> append history -> progression upserts -> skill score

Dependencies are injected via the constructor for testability.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from application.exceptions import ProfileNotFoundError
from application.ports import (
    ProfileRepository,
    ProgressionRepository,
    RandomSource,
    SessionRepository,
)
from backend.core.catalog import ExerciseCatalog
from backend.core.equipment import resolve_equipment
from backend.core.framework_selector import pick_framework_weighted, select_framework
from backend.core.goals import DEFAULT_GOAL_REGISTRY, GoalRegistry
from backend.core.personalization import compute_insights, summarize_session_performance
from backend.core.progression_service import build_progression_updates
from backend.core.skill_score import update_skill_score
from backend.core.workout_generator import WorkoutGenerator
from backend.settings import Settings
from domain.models import (
    ExerciseProgression,
    Framework,
    GeneratedWorkout,
    PersonalizationInsights,
    Profile,
    ProgressionUpdate,
    SessionPerformanceSummary,
    WorkoutSession,
)

logger = logging.getLogger(__name__)


@dataclass
class SessionCompletionResult:
    """Result of logging a completed session."""

    summary: SessionPerformanceSummary
    updates: Dict[str, ProgressionUpdate] = field(default_factory=dict)
    skill_score: int = 0

    @property
    def bumped_exercises(self) -> List[str]:
        """Exercises whose targets were raised by this session."""
        return [name for name, update in self.updates.items() if update.bumped]


class WorkoutEngineService:
    """
    Adaptive workout engine.

    Usage:
        >>> engine = WorkoutEngineService(
        ...     profile_repo=profiles,
        ...     session_repo=sessions,
        ...     progression_repo=progressions,
        ...     catalog=get_catalog(),
        ...     rng=SeededRandomSource(7),
        ...     settings=get_settings(),
        ... )
        >>> engine.create_profile("user-1", equipment=["Dumbbells"], primary_goal="fat_loss")
        >>> workout = engine.generate_workout("user-1")
    """

    def __init__(
        self,
        profile_repo: ProfileRepository,
        session_repo: SessionRepository,
        progression_repo: ProgressionRepository,
        catalog: ExerciseCatalog,
        rng: RandomSource,
        settings: Settings,
        goal_registry: GoalRegistry = DEFAULT_GOAL_REGISTRY,
    ) -> None:
        """
        Initialize the engine with its collaborators.

        Args:
            profile_repo: Profile store
            session_repo: Append-only session history store
            progression_repo: Per-exercise progression store
            catalog: Validated exercise catalog
            rng: Random source shared by framework draws and generation
            settings: Engine settings (insights window, default skill score)
            goal_registry: Goal configurations
        """
        self._profiles = profile_repo
        self._sessions = session_repo
        self._progressions = progression_repo
        self._rng = rng
        self._settings = settings
        self._goals = goal_registry
        self._generator = WorkoutGenerator(catalog, rng)

    # -------------------------------------------------------------------------
    # Profile
    # -------------------------------------------------------------------------
    def create_profile(
        self,
        user_id: str,
        *,
        primary_goal: str,
        fitness_level: str = "",
        equipment: Optional[Iterable[str]] = None,
        secondary_goals: Optional[List[str]] = None,
    ) -> Profile:
        """
        Onboard a user.

        Raw equipment selections are resolved (legacy labels migrated,
        bodyweight fallback) before the profile is stored.

        Raises:
            pydantic.ValidationError: If the goals are invalid
        """
        resolved = resolve_equipment(equipment)
        profile = Profile(
            user_id=user_id,
            fitness_level=fitness_level,
            equipment=resolved.equipment,
            skill_score=self._settings.default_skill_score,
            primary_goal=primary_goal,
            secondary_goals=list(secondary_goals or []),
        )
        logger.info(
            f"Created profile for {user_id}: goal={primary_goal}, "
            f"equipment={resolved.richness.value}"
        )
        return self._profiles.save(profile)

    def get_profile(self, user_id: str) -> Profile:
        profile = self._profiles.get(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)
        return profile

    def update_goals(
        self,
        user_id: str,
        primary_goal: str,
        secondary_goals: Optional[List[str]] = None,
    ) -> Profile:
        """Change a user's goals; goal weights are recomputed."""
        profile = self.get_profile(user_id).with_goals(primary_goal, secondary_goals)
        logger.info(f"Updated goals for {user_id}: {profile.goal_weights}")
        return self._profiles.save(profile)

    def update_equipment(self, user_id: str, equipment: Optional[Iterable[str]]) -> Profile:
        """Replace a user's equipment with a freshly resolved set."""
        profile = self.get_profile(user_id)
        updated = profile.model_copy(update={"equipment": resolve_equipment(equipment).equipment})
        return self._profiles.save(updated)

    # -------------------------------------------------------------------------
    # Insights
    # -------------------------------------------------------------------------
    def get_insights(self, user_id: str) -> PersonalizationInsights:
        """
        Compute personalization insights over a user's stored history.

        The full history is read because the streak is not windowed.
        """
        self.get_profile(user_id)
        sessions = self._sessions.list_recent(user_id)
        return compute_insights(sessions, window_size=self._settings.insights_window_size)

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------
    def _base_framework(self, profile: Profile) -> Framework:
        if not any(goal_id in self._goals for goal_id in profile.goal_weights):
            return self._settings.default_framework
        return pick_framework_weighted(profile.goal_weights, self._rng, self._goals)

    def generate_workout(
        self,
        user_id: str,
        framework: Optional[Framework] = None,
    ) -> GeneratedWorkout:
        """
        Generate the next workout for a user.

        Args:
            user_id: User ID
            framework: Fixed base framework; drawn from the goal bias when None.
                Personalization still applies on top of it.

        Returns:
            GeneratedWorkout with stored progression targets applied

        Raises:
            ProfileNotFoundError: If the user has not onboarded
        """
        profile = self.get_profile(user_id)
        resolved = resolve_equipment(profile.equipment)
        insights = self.get_insights(user_id)

        base = Framework(framework) if framework is not None else self._base_framework(profile)
        chosen = select_framework(base, insights)

        workout = self._generator.generate(
            profile.skill_score,
            resolved.equipment,
            profile.primary_goal,
            framework=chosen,
        )
        return self._apply_progression_targets(
            workout, self._progressions.list_for_user(user_id)
        )

    @staticmethod
    def _apply_progression_targets(
        workout: GeneratedWorkout,
        rows: Iterable[ExerciseProgression],
    ) -> GeneratedWorkout:
        rows_by_name = {row.exercise_name: row for row in rows}
        if not rows_by_name:
            return workout

        rounds = []
        for round_ in workout.rounds:
            row = rows_by_name.get(round_.exercise_name)
            if row is None:
                rounds.append(round_)
                continue
            update = {"target": row.next_target_reps}
            if row.next_target_load is not None:
                update["target_load"] = row.next_target_load
            rounds.append(round_.model_copy(update=update))
        return workout.model_copy(update={"rounds": tuple(rounds)})

    # -------------------------------------------------------------------------
    # Completion
    # -------------------------------------------------------------------------
    def complete_session(
        self,
        user_id: str,
        session: WorkoutSession,
        *,
        now: Optional[datetime] = None,
    ) -> SessionCompletionResult:
        """
        Log a performed session.

        Appends the session to history, upserts a progression row for every
        exercise it contained and, when an effort rating was given, updates
        the skill score.

        Args:
            user_id: Owner of the session
            session: The performed session
            now: Completion time (defaults to now, UTC). Its ISO week is the
                one the weekly increment cap counts against, even for a
                session logged after the fact.

        Raises:
            ProfileNotFoundError: If the user has not onboarded
        """
        profile = self.get_profile(user_id)
        self._sessions.append(user_id, session)

        updates = build_progression_updates(
            session.rounds,
            self._progressions.list_for_user(user_id),
            now=now,
        )
        for update in updates.values():
            self._progressions.upsert(user_id, update.to_progression())

        skill_score = profile.skill_score
        if session.effort_rating is not None:
            skill_score = update_skill_score(profile.skill_score, session.effort_rating)
            if skill_score != profile.skill_score:
                self._profiles.save(profile.with_skill_score(skill_score))

        summary = summarize_session_performance(session.rounds, session.effort_rating)
        result = SessionCompletionResult(summary=summary, updates=updates, skill_score=skill_score)
        logger.info(
            f"Session logged for {user_id}: hit_rate={summary.average_hit_rate:.2f}, "
            f"skip_rate={summary.skip_rate:.2f}, skill_score={skill_score}, "
            f"bumped={result.bumped_exercises}"
        )
        return result

    # -------------------------------------------------------------------------
    # Account
    # -------------------------------------------------------------------------
    def delete_account(self, user_id: str) -> bool:
        """
        Delete everything stored for a user.

        Returns:
            True if a profile existed
        """
        progressions = self._progressions.delete_all(user_id)
        sessions = self._sessions.delete_all(user_id)
        deleted = self._profiles.delete(user_id)
        logger.info(
            f"Deleted account {user_id}: {sessions} sessions, {progressions} progression rows"
        )
        return deleted
