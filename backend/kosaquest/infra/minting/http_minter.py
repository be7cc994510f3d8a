"""Mint gateway client."""
import httpx
import logging
from typing import Optional

from kosaquest.domain.badges.minter import MintReceipt, MintingError

logger = logging.getLogger(__name__)


class HttpBadgeMinter:
    """Mints badges through an HTTP gateway.

    The gateway takes ``POST {base_url}/mint`` with
    ``{"recipient", "badge_type", "metadata"}`` and answers with
    ``{"link", "tx_hash"}``. No retries here; the badge service decides.
    """

    def __init__(
        self,
        base_url: str,
        api_token: Optional[str] = None,
        timeout: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not base_url:
            raise ValueError("Mint gateway URL is not configured")
        self.base_url = base_url.rstrip("/")
        self.api_token = api_token
        self.timeout = timeout
        self._transport = transport

    async def mint(self, recipient: str, badge_type: str, metadata: dict) -> MintReceipt:
        url = f"{self.base_url}/mint"
        headers = {"Authorization": f"Bearer {self.api_token}"} if self.api_token else {}
        payload = {"recipient": recipient, "badge_type": badge_type, "metadata": metadata}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(url, headers=headers, json=payload)
                response.raise_for_status()
                result = response.json()
        except httpx.ConnectError as e:
            logger.error("Mint gateway unreachable at %s (%s)", url, e)
            raise MintingError(f"gateway unreachable: {e}") from e
        except httpx.HTTPError as e:
            logger.error("Mint request for %s (%s) failed: %s", recipient, badge_type, e)
            raise MintingError(str(e)) from e
        except ValueError as e:
            raise MintingError("gateway returned invalid JSON") from e

        link = result.get("link") if isinstance(result, dict) else None
        tx_hash = result.get("tx_hash") if isinstance(result, dict) else None
        if not link or not tx_hash:
            raise MintingError("gateway response missing link or tx_hash")
        return MintReceipt(link=link, tx_reference=tx_hash)
