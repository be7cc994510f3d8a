"""Domain error types."""
from typing import Optional


class DomainError(Exception):
    """Base domain error."""
    pass


class NotFoundError(DomainError):
    """Resource not found."""
    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} with id {identifier} not found")


class ValidationError(DomainError):
    """Validation error."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class BadRequestError(DomainError):
    """Request is well formed but violates a business rule."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class AuthorizationError(DomainError):
    """Authorization error."""
    def __init__(self, message: str = "Not authorized"):
        self.message = message
        super().__init__(message)


class ConflictError(DomainError):
    """Resource conflict error."""
    def __init__(self, message: str, existing: Optional[dict] = None):
        self.message = message
        self.existing = existing
        super().__init__(message)


class DependencyError(DomainError):
    """An external collaborator failed or timed out."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class CatalogIntegrityError(DomainError):
    """Catalog data breaks an invariant the core relies on (e.g. non-positive points)."""
    pass


class EmailAlreadyRegisteredError(ConflictError):
    """A user with this email already exists."""
    def __init__(self, email: str):
        self.email = email
        super().__init__("User with this email already exists")


class DuplicateCompletionError(ConflictError):
    """The user already has a completion record for this story."""
    def __init__(self, user_id: str, story_id: str):
        self.user_id = user_id
        self.story_id = story_id
        super().__init__("You have already completed this story")


class InvalidBadgeTypeError(BadRequestError):
    """Badge type is not part of the badge catalog."""
    def __init__(self, badge_type: str):
        self.badge_type = badge_type
        super().__init__("Invalid badge type")


class InsufficientXPError(BadRequestError):
    """User XP is below the badge threshold."""
    def __init__(self, required: int, current: int):
        self.required = required
        self.current = current
        super().__init__(f"Insufficient XP. Required: {required}, Current: {current}")


class AlreadyMintedError(ConflictError):
    """The user already holds a badge of this type."""
    def __init__(self, badge_type: str, badge_link: Optional[str] = None, tx_hash: Optional[str] = None):
        self.badge_type = badge_type
        super().__init__(
            "Badge already minted for this user",
            existing={"badge_link": badge_link, "tx_hash": tx_hash},
        )


class MintingFailedError(DependencyError):
    """The minting collaborator failed; no badge was recorded."""
    def __init__(self, badge_type: str, reason: str):
        self.badge_type = badge_type
        self.reason = reason
        super().__init__("Badge minting failed, please try again later")
