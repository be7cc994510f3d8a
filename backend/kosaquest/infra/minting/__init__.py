"""Badge minter backends."""
from kosaquest.domain.badges.minter import BadgeMinter
from kosaquest.infra.minting.http_minter import HttpBadgeMinter
from kosaquest.infra.minting.simulated import SimulatedBadgeMinter


def build_minter(settings) -> BadgeMinter:
    """Select the minter backend named by ``badge_minter_backend``."""
    backend = (settings.badge_minter_backend or "simulated").strip().lower()
    if backend == "simulated":
        return SimulatedBadgeMinter(settings.badge_link_base_url)
    if backend == "http":
        return HttpBadgeMinter(
            base_url=settings.badge_minter_url,
            api_token=settings.badge_minter_token or None,
            timeout=settings.badge_mint_timeout_s,
        )
    raise ValueError(f"Unknown badge minter backend: {backend!r}")


__all__ = ["build_minter", "HttpBadgeMinter", "SimulatedBadgeMinter"]
