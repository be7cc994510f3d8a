"""XP reward rules."""
from kosaquest.domain.common.errors import CatalogIntegrityError

# Perfect runs earn an extra 20% of the story's XP.
PERFECT_SCORE_BONUS_NUMERATOR = 1
PERFECT_SCORE_BONUS_DENOMINATOR = 5


def score_ratio(total_score: int, max_score: int) -> float:
    """total/max, or 0.0 for a story without questions."""
    if max_score <= 0:
        return 0.0
    return total_score / max_score


def is_perfect(total_score: int, max_score: int) -> bool:
    return max_score > 0 and total_score == max_score


def compute_xp(total_score: int, max_score: int, story_total_xp: int) -> int:
    """XP earned for one submission.

    ``floor(story_total_xp * total/max)`` plus ``floor(story_total_xp * 0.2)``
    on a perfect score. Integer arithmetic keeps the floor exact.
    """
    if story_total_xp < 0:
        raise CatalogIntegrityError(f"Story total XP is negative ({story_total_xp})")
    if max_score <= 0:
        return 0
    if not 0 <= total_score <= max_score:
        raise CatalogIntegrityError(f"Score {total_score} outside 0..{max_score}")

    xp = story_total_xp * total_score // max_score
    if is_perfect(total_score, max_score):
        xp += story_total_xp * PERFECT_SCORE_BONUS_NUMERATOR // PERFECT_SCORE_BONUS_DENOMINATOR
    return xp


def percentage_points(total_score: int, max_score: int) -> int:
    """Score as a whole percent, rounded half up."""
    if max_score <= 0:
        return 0
    return (200 * total_score + max_score) // (2 * max_score)
