"""Database models."""
from kosaquest.infra.db.models.user import UserModel
from kosaquest.infra.db.models.story import StoryModel
from kosaquest.infra.db.models.progress import UserProgressModel, XPCreditModel
from kosaquest.infra.db.models.badge import NFTBadgeModel

__all__ = [
    "UserModel",
    "StoryModel",
    "UserProgressModel",
    "XPCreditModel",
    "NFTBadgeModel",
]
