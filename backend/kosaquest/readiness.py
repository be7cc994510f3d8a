"""Readiness checks: config, packages, database, optional mint gateway."""
import asyncio
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine

logger = logging.getLogger(__name__)

# Result: (passed: bool, message: str)
CheckResult = tuple[bool, str]
ChecksDict = dict[str, CheckResult]


def check_config() -> CheckResult:
    """Load settings and read the values every request depends on."""
    try:
        from kosaquest.settings import get_settings
        s = get_settings()
        _ = s.app_name
        _ = s.database_url
        if not s.secret_key:
            return False, "secret_key is empty"
        if s.badge_minter_backend not in ("simulated", "http"):
            return False, f"unknown badge_minter_backend {s.badge_minter_backend!r}"
        return True, "ok"
    except Exception as e:
        return False, str(e)


def check_packages() -> CheckResult:
    """Import critical modules: uvicorn, sqlalchemy, jwt, passlib, kosaquest.main."""
    missing = []
    try:
        import uvicorn  # noqa: F401
    except ImportError:
        missing.append("uvicorn")
    try:
        import sqlalchemy  # noqa: F401
    except ImportError:
        missing.append("sqlalchemy")
    try:
        import jwt  # noqa: F401
    except ImportError:
        missing.append("PyJWT")
    try:
        import passlib  # noqa: F401
    except ImportError:
        missing.append("passlib")
    try:
        import kosaquest.main  # noqa: F401
    except ImportError as e:
        missing.append(f"kosaquest.main ({e})")
    if missing:
        return False, f"missing: {', '.join(missing)}"
    return True, "ok"


async def _check_database_async(database_url: str) -> CheckResult:
    """Run a trivial query against the database."""
    try:
        engine = create_async_engine(database_url, pool_pre_ping=True)
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        await engine.dispose()
        return True, "ok"
    except Exception as e:
        return False, str(e)


def check_database() -> CheckResult:
    """Check database connectivity using settings.database_url."""
    try:
        from kosaquest.settings import get_settings
        url = get_settings().database_url
        return asyncio.run(_check_database_async(url))
    except Exception as e:
        return False, str(e)


def check_minter() -> CheckResult:
    """If the http minter is configured, GET its health endpoint; else skip."""
    try:
        from kosaquest.settings import get_settings
        s = get_settings()
        if s.badge_minter_backend != "http":
            return True, "skipped (simulated minter)"
        url = (s.badge_minter_url or "").strip().rstrip("/")
        if not url:
            return False, "badge_minter_url is not set"
        import httpx
        r = httpx.get(f"{url}/health", timeout=5.0)
        if r.status_code == 200:
            return True, "ok"
        return False, f"status {r.status_code}"
    except Exception as e:
        return False, str(e)


def run_all_checks() -> ChecksDict:
    """Run all readiness checks (sync). Returns dict of check_name -> (passed, message)."""
    return {
        "config": check_config(),
        "packages": check_packages(),
        "database": check_database(),
        "minter": check_minter(),
    }


async def run_all_checks_async() -> ChecksDict:
    """Run all readiness checks from async context (e.g. GET /ready) without a nested event loop."""
    from kosaquest.settings import get_settings
    db_result = await _check_database_async(get_settings().database_url)
    return {
        "config": check_config(),
        "packages": check_packages(),
        "database": db_result,
        "minter": await asyncio.to_thread(check_minter),
    }


def is_ready(checks: ChecksDict | None = None) -> tuple[bool, dict[str, str]]:
    """
    True if all required checks pass. The minter check is informational.
    Returns (ready: bool, checks_summary: dict of name -> "ok" | "skipped ..." | error message).
    """
    if checks is None:
        checks = run_all_checks()
    required = {"config", "packages", "database"}
    summary: dict[str, str] = {}
    for name, (passed, msg) in checks.items():
        summary[name] = msg
    all_required = all(checks[n][0] for n in required if n in checks)
    return all_required, summary
