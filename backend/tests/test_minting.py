"""Tests for badge minter backends."""
import json
from types import SimpleNamespace

import httpx
import pytest

from kosaquest.domain.badges.minter import MintingError
from kosaquest.infra.minting import build_minter, HttpBadgeMinter, SimulatedBadgeMinter


class TestSimulatedMinter:
    async def test_receipt_shape(self):
        receipt = await SimulatedBadgeMinter("https://opensea.io/assets/kosa-quest/").mint(
            "user-1", "story_master", {}
        )
        assert receipt.link == "https://opensea.io/assets/kosa-quest/story_master-user-1"
        assert receipt.tx_reference.startswith("0x")
        assert len(receipt.tx_reference) == 66

    async def test_tx_hashes_differ(self):
        minter = SimulatedBadgeMinter("https://example.com")
        a = await minter.mint("u", "proverb_apprentice", {})
        b = await minter.mint("u", "proverb_apprentice", {})
        assert a.tx_reference != b.tx_reference


class TestHttpMinter:
    async def test_successful_mint(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("authorization")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"link": "https://chain.test/nft/7", "tx_hash": "0xabc"})

        minter = HttpBadgeMinter(
            "https://mint.test/",
            api_token="tok",
            transport=httpx.MockTransport(handler),
        )
        receipt = await minter.mint("user-1", "quiz_champion", {"name": "Quiz Champion"})

        assert receipt.link == "https://chain.test/nft/7"
        assert receipt.tx_reference == "0xabc"
        assert seen["url"] == "https://mint.test/mint"
        assert seen["auth"] == "Bearer tok"
        assert seen["body"] == {
            "recipient": "user-1",
            "badge_type": "quiz_champion",
            "metadata": {"name": "Quiz Champion"},
        }

    async def test_gateway_error_raises_minting_error(self):
        minter = HttpBadgeMinter(
            "https://mint.test",
            transport=httpx.MockTransport(lambda request: httpx.Response(503, json={"detail": "busy"})),
        )
        with pytest.raises(MintingError):
            await minter.mint("user-1", "quiz_champion", {})

    async def test_connection_error_raises_minting_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        minter = HttpBadgeMinter("https://mint.test", transport=httpx.MockTransport(handler))
        with pytest.raises(MintingError):
            await minter.mint("user-1", "quiz_champion", {})

    async def test_incomplete_response_raises_minting_error(self):
        minter = HttpBadgeMinter(
            "https://mint.test",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"link": "x"})),
        )
        with pytest.raises(MintingError):
            await minter.mint("user-1", "quiz_champion", {})

    def test_requires_url(self):
        with pytest.raises(ValueError):
            HttpBadgeMinter("")


class TestBuildMinter:
    def _settings(self, backend: str, url: str = "") -> SimpleNamespace:
        return SimpleNamespace(
            badge_minter_backend=backend,
            badge_minter_url=url,
            badge_minter_token="",
            badge_mint_timeout_s=5.0,
            badge_link_base_url="https://opensea.io/assets/kosa-quest",
        )

    def test_simulated(self):
        assert isinstance(build_minter(self._settings("simulated")), SimulatedBadgeMinter)

    def test_http(self):
        minter = build_minter(self._settings("http", "https://mint.test"))
        assert isinstance(minter, HttpBadgeMinter)
        assert minter.timeout == 5.0

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            build_minter(self._settings("ledger"))
