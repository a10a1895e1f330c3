"""
Skill score updates from self-reported effort.

A session that felt easy raises the score, one that felt hard lowers it.
The score always stays within 0-100.
"""

MIN_SKILL_SCORE = 0
MAX_SKILL_SCORE = 100


def clamp_skill_score(score: int) -> int:
    return max(MIN_SKILL_SCORE, min(MAX_SKILL_SCORE, score))


def update_skill_score(current: int, rating: int) -> int:
    """
    Adjust a skill score from an effort rating.

    Args:
        current: Current skill score
        rating: Effort rating (1 = very easy ... 5 = very hard)

    Returns:
        New score: +3 for ratings <= 2, +1 for 3, -3 for >= 4, clamped to 0-100
    """
    if rating <= 2:
        delta = 3  # Too easy
    elif rating == 3:
        delta = 1  # Just right
    else:
        delta = -3  # Too hard
    return clamp_skill_score(current + delta)
