"""Badge catalog: the fixed set of badge types and their XP thresholds."""
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class BadgeType(str, Enum):
    """Badge type enum."""
    PROVERB_APPRENTICE = "proverb_apprentice"
    STORY_MASTER = "story_master"
    QUIZ_CHAMPION = "quiz_champion"
    LANGUAGE_EXPLORER = "language_explorer"


@dataclass(frozen=True)
class BadgeDefinition:
    """Catalog entry for one badge type."""
    type: BadgeType
    name: str
    description: str
    xp_required: int
    image_url: str


BADGE_CATALOG: Mapping[BadgeType, BadgeDefinition] = MappingProxyType({
    definition.type: definition
    for definition in (
        BadgeDefinition(
            type=BadgeType.PROVERB_APPRENTICE,
            name="Proverb Apprentice",
            description="Completed your first story and earned your first XP",
            xp_required=1,
            image_url="https://example.com/badges/proverb-apprentice.png",
        ),
        BadgeDefinition(
            type=BadgeType.STORY_MASTER,
            name="Story Master",
            description="Completed 10 stories with excellence",
            xp_required=500,
            image_url="https://example.com/badges/story-master.png",
        ),
        BadgeDefinition(
            type=BadgeType.QUIZ_CHAMPION,
            name="Quiz Champion",
            description="Achieved perfect scores on 5 quizzes",
            xp_required=250,
            image_url="https://example.com/badges/quiz-champion.png",
        ),
        BadgeDefinition(
            type=BadgeType.LANGUAGE_EXPLORER,
            name="Language Explorer",
            description="Explored stories in multiple languages",
            xp_required=1000,
            image_url="https://example.com/badges/language-explorer.png",
        ),
    )
})


def lookup_badge(badge_type: str) -> Optional[BadgeDefinition]:
    """Catalog entry for a raw badge type string, or None if unknown."""
    try:
        return BADGE_CATALOG[BadgeType(badge_type)]
    except ValueError:
        return None
