"""
Liveness check.

Runs one trivial round trip (`SELECT 1`) on its own connection under a fixed
time budget and reports the outcome. It never raises: every failure is folded
into the returned status.

| Round trip outcome       | database status |
| ------------------------ | --------------- |
| returns 1                | healthy         |
| returns something else   | unhealthy       |
| exceeds the time budget  | unhealthy       |
| raises                   | error           |
"""
import asyncio
import logging
import time
from datetime import datetime, timezone

from ..database.session import Database
from ..schemas.health import DependencyHealth, HealthStatus
from ..utils.metadata import format_uptime

logger = logging.getLogger(__name__)


async def check_database(database: Database, *, timeout: float) -> DependencyHealth:
    start = time.perf_counter()

    def elapsed_ms() -> int:
        return int((time.perf_counter() - start) * 1000)

    try:
        value = await asyncio.wait_for(database.ping(), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("health.database.timeout", extra={"timeout_s": timeout})
        return DependencyHealth(
            status="unhealthy",
            response_time_ms=elapsed_ms(),
            error=f"Database check timed out after {timeout}s",
        )
    except Exception as exc:
        # reported, not raised: the probe itself must always answer
        logger.exception("health.database.error")
        return DependencyHealth(status="error", response_time_ms=elapsed_ms(), error=str(exc))

    if value != 1:
        logger.warning("health.database.unexpected_result", extra={"result": value})
        return DependencyHealth(
            status="unhealthy",
            response_time_ms=elapsed_ms(),
            error="Database check returned an unexpected result",
        )

    return DependencyHealth(status="healthy", response_time_ms=elapsed_ms())


async def check_health(
    database: Database,
    *,
    timeout: float = 2.0,
    version: str = "unknown",
    started_at: float | None = None,
) -> HealthStatus:
    """
    Args:
        database: handle whose pool is probed.
        timeout: seconds allowed for the database round trip.
        version: service version to report.
        started_at: `time.monotonic()` value at application start, for uptime.
    """
    services = {"database": await check_database(database, timeout=timeout)}
    overall = "healthy" if all(s.status == "healthy" for s in services.values()) else "unhealthy"

    uptime = format_uptime(time.monotonic() - started_at) if started_at is not None else "unknown"

    return HealthStatus(
        status=overall,
        timestamp=datetime.now(timezone.utc),
        version=version,
        uptime=uptime,
        services=services,
    )


__all__ = ["check_database", "check_health"]
