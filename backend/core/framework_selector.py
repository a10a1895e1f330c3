"""
Framework selection.

Two steps decide a workout's structure:
1. A goal-weighted random draw over the four frameworks
   (pick_framework_weighted / pick_framework_for_goal).
2. A deterministic personalization pass that reacts to fatigue,
   underperformance, streaks and time-of-day consistency (select_framework).
"""
import logging
from typing import Dict, Mapping, Optional, Sequence

from application.ports import RandomSource
from backend.core.goals import DEFAULT_GOAL_REGISTRY, GoalRegistry
from domain.models import Framework, PersonalizationInsights

logger = logging.getLogger(__name__)

DEFAULT_FRAMEWORK = Framework.EMOM

# Draw order for weighted sampling
FRAMEWORK_ORDER: Sequence[Framework] = (
    Framework.TABATA,
    Framework.EMOM,
    Framework.AMRAP,
    Framework.CIRCUIT,
)

HIGH_FATIGUE = 0.75
MODERATE_FATIGUE = 0.55
FRESH_FATIGUE = 0.4
HIGH_UNDERPERFORMANCE = 0.35
UPGRADE_STREAK = 5
HIGH_CONSISTENCY = 0.6
LOW_CONSISTENCY = 0.35


def select_framework(
    base_framework: Framework,
    insights: Optional[PersonalizationInsights] = None,
) -> Framework:
    """
    Adjust a base framework using personalization insights.

    Precedence:
    1. High fatigue or widespread underperformance -> circuit
    2. Moderate fatigue and tabata -> emom
    3. Unchanged so far, long streak, fresh and consistent -> emom upgrades to tabata
    4. Low time-of-day consistency and tabata -> amrap

    Args:
        base_framework: Framework chosen from goal bias
        insights: Personalization insights, if available

    Returns:
        Framework to generate
    """
    base_framework = Framework(base_framework)
    if insights is None:
        return base_framework

    fatigue = insights.fatigue_trend
    consistency = insights.time_of_day_adherence.consistency
    framework = base_framework

    if fatigue > HIGH_FATIGUE or insights.underperformance_rate > HIGH_UNDERPERFORMANCE:
        framework = Framework.CIRCUIT
    elif fatigue > MODERATE_FATIGUE and base_framework == Framework.TABATA:
        framework = Framework.EMOM
    elif (
        framework == base_framework
        and insights.streak_length >= UPGRADE_STREAK
        and fatigue < FRESH_FATIGUE
        and consistency > HIGH_CONSISTENCY
        and base_framework == Framework.EMOM
    ):
        framework = Framework.TABATA
    elif consistency < LOW_CONSISTENCY and framework == Framework.TABATA:
        framework = Framework.AMRAP

    if framework != base_framework:
        logger.debug(
            f"Framework personalized {base_framework.value} -> {framework.value} "
            f"(fatigue={fatigue:.2f}, consistency={consistency:.2f}, "
            f"streak={insights.streak_length})"
        )
    return framework


def _draw(weights: Mapping[Framework, float], rng: RandomSource) -> Framework:
    total = sum(weights.get(f, 0.0) for f in FRAMEWORK_ORDER)
    if total <= 0:
        return DEFAULT_FRAMEWORK

    # Renormalize so the draw covers the whole probability mass
    roll = rng.random() * total
    cumulative = 0.0
    for framework in FRAMEWORK_ORDER:
        weight = weights.get(framework, 0.0)
        if weight <= 0:
            continue
        cumulative += weight
        if roll < cumulative:
            return framework
    return next(f for f in reversed(FRAMEWORK_ORDER) if weights.get(f, 0.0) > 0)


def pick_framework_weighted(
    goal_weights: Mapping[str, float],
    rng: RandomSource,
    registry: GoalRegistry = DEFAULT_GOAL_REGISTRY,
) -> Framework:
    """
    Weighted random framework draw over the combined goal bias.

    Each known goal's framework bias vector is scaled by the goal's weight
    and summed; the result is renormalized before drawing. Falls back to
    emom when no known goal carries weight.

    Args:
        goal_weights: Goal id -> weight (e.g. Profile.goal_weights)
        rng: Random source
        registry: Goal configurations

    Returns:
        Sampled framework
    """
    combined: Dict[Framework, float] = {f: 0.0 for f in FRAMEWORK_ORDER}
    for goal_id, weight in goal_weights.items():
        config = registry.get(goal_id)
        if config is None or weight <= 0:
            continue
        for framework, bias in config.framework_bias.items():
            combined[Framework(framework)] += bias * weight
    return _draw(combined, rng)


def pick_framework_for_goal(
    goal_id: Optional[str],
    rng: RandomSource,
    registry: GoalRegistry = DEFAULT_GOAL_REGISTRY,
) -> Framework:
    """Weighted framework draw for a single goal; emom for unknown goals."""
    config = registry.get(goal_id)
    if config is None:
        return DEFAULT_FRAMEWORK
    return _draw(config.framework_bias, rng)
