"""
Core pytest configuration for the whole test suite.

Only the essentials live here: logging setup, test settings, and a fresh
database per test. Domain fixtures (repositories, services, sample data, HTTP
client) live in `tests/test_fixtures/` and are re-exported at the bottom so
every test module can use them without imports.

Storage:
  - `TEST_DATABASE_URL` (e.g. a throwaway PostgreSQL database in CI) when set;
  - otherwise a per-test SQLite file under pytest's tmp_path, via aiosqlite.
Tables are created before and dropped after each test, so tests never share rows.
"""

# -------------------------------
# Standard library imports
# -------------------------------
import os
import logging
from typing import AsyncGenerator
from urllib.parse import urlparse

# -------------------------------
# Early logging tuning
# -------------------------------
# Silence noisy third-party loggers before they are imported and configured.
NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest
from pytest import FixtureRequest

from warehouse_catalog.config import Settings, load_settings
from warehouse_catalog.core.logging import setup_logging
from warehouse_catalog.database import Database

logger = logging.getLogger(__name__)


def safe_log_db_url(db_url: str) -> str:
    """Database URL without credentials, for logging."""
    parsed = urlparse(db_url)
    if parsed.hostname is None:
        return f"{parsed.scheme}://{parsed.path}"
    return f"{parsed.scheme}://{parsed.hostname}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


def get_test_database_url(tmp_path) -> str:
    """
    Priority:
      1. TEST_DATABASE_URL environment variable (CI/CD override)
      2. SQLite file in the test's tmp directory
    """
    if test_url := os.getenv("TEST_DATABASE_URL"):
        return test_url
    return f"sqlite+aiosqlite:///{tmp_path / 'test_catalog.db'}"


# ------------------------------------------------------------------------------------------------
# LOGGING
# ------------------------------------------------------------------------------------------------

@pytest.fixture(scope="session", autouse=True)
def configure_logging(request: FixtureRequest):
    """
    Install the application's logging configuration once for the session.

    dictConfig may remove pytest's capture handler from the root logger, so it is
    re-attached when the logging plugin exposes one.
    """
    setup_logging(load_settings(ENV="testing", LOG_FORMAT="text", LOG_TO_STDOUT=True))

    caplog_plugin = request.config.pluginmanager.getplugin("logging-plugin")
    handler = getattr(caplog_plugin, "caplog_handler", None)
    if handler is not None:
        logging.getLogger().addHandler(handler)

    yield


# ------------------------------------------------------------------------------------------------
# SETTINGS / DATABASE
# ------------------------------------------------------------------------------------------------

@pytest.fixture
def test_database_url(tmp_path) -> str:
    url = get_test_database_url(tmp_path)
    logger.debug("Using test DB: %s", safe_log_db_url(url))
    return url


@pytest.fixture
def test_settings(test_database_url: str) -> Settings:
    return load_settings(
        ENV="testing",
        TESTING=True,
        DATABASE_URL_OVERRIDE=test_database_url,
        DEFAULT_ACTOR_ID=1,
        HEALTH_CHECK_TIMEOUT_SECONDS=2.0,
        LOG_FORMAT="text",
        LOG_TO_STDOUT=True,
    )


@pytest.fixture
async def database(test_settings: Settings) -> AsyncGenerator[Database, None]:
    """
    A `Database` with an empty schema.

    Tables are dropped first as well, so a shared TEST_DATABASE_URL starts clean
    even after an interrupted run.
    """
    db = Database.from_settings(test_settings)
    await db.drop_all()
    await db.create_all()
    try:
        yield db
    finally:
        await db.drop_all()
        await db.dispose()


# Domain fixtures, registered globally
from .test_fixtures.repository_fixtures import (  # noqa: E402,F401
    warehouse_repository,
    item_repository,
    sample_warehouse_data,
    sample_item_data,
    create_warehouse,
    created_warehouse,
    multiple_warehouses,
    create_item,
    created_item,
)
from .test_fixtures.service_fixtures import (  # noqa: E402,F401
    warehouse_service,
    item_service,
)
from .test_fixtures.api_fixtures import (  # noqa: E402,F401
    app,
    client,
)
