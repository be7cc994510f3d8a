"""Minting collaborator contract."""
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class MintReceipt:
    """Reference to an externally minted asset."""
    link: str
    tx_reference: str


class MintingError(Exception):
    """Raised by a minter when the asset could not be created."""
    pass


class BadgeMinter(Protocol):
    """Creates the collectible behind a badge.

    Implementations must not retry internally; the caller decides.
    """

    async def mint(self, recipient: str, badge_type: str, metadata: dict) -> MintReceipt:
        """Mint a badge asset for ``recipient`` and return its reference."""
        ...
