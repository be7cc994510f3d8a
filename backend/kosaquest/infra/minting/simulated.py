"""Simulated badge minter.

Issues a random transaction hash and a marketplace-style link without
touching a chain. Used in development and wherever no gateway is configured.
"""
import logging
import secrets

from kosaquest.domain.badges.minter import MintReceipt

logger = logging.getLogger(__name__)


class SimulatedBadgeMinter:
    """Minter that fabricates a receipt locally."""

    def __init__(self, link_base_url: str):
        self.link_base_url = link_base_url.rstrip("/")

    async def mint(self, recipient: str, badge_type: str, metadata: dict) -> MintReceipt:
        tx_hash = "0x" + secrets.token_hex(32)
        link = f"{self.link_base_url}/{badge_type}-{recipient}"
        logger.info("Simulated mint of %s for %s: %s", badge_type, recipient, tx_hash)
        return MintReceipt(link=link, tx_reference=tx_hash)
