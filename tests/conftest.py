"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state: every
database is in memory, config and settings live under ``tmp_path``, time
comes from a controllable clock and ticks from a manual scheduler.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import pytest
import pytest_asyncio

from worklog_cli.adapters.sqlite import (
    SqliteProjectRepository,
    SqliteSessionRepository,
    SqliteTaskRepository,
    connect_in_memory,
)
from worklog_cli.models import ProjectCreate, TaskCreate
from worklog_cli.models.focus import FocusSettingsStore
from worklog_cli.services.app_context import build_app_context
from worklog_cli.services.config_service import ConfigService
from worklog_cli.services.timer_engine import TimerEngine
from worklog_cli.utils.scheduler import ManualScheduler


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 15, 9, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True, scope="session")
def isolated_log_dir(tmp_path_factory):
    """Keep the rotating log file out of the real user log dir."""
    log_dir = tmp_path_factory.mktemp("logs")
    with patch("worklog_cli.utils.logger.user_log_dir", return_value=str(log_dir)):
        yield log_dir


@pytest.fixture()
def tmp_config(tmp_path):
    """A real ConfigService whose files live in *tmp_path*."""
    from worklog_cli.services.config_service import get_config_service

    get_config_service.cache_clear()
    with patch("worklog_cli.services.config_service.user_config_dir", return_value=str(tmp_path)):
        with patch("worklog_cli.services.config_service.user_data_dir", return_value=str(tmp_path)):
            yield ConfigService()
    get_config_service.cache_clear()


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


@pytest.fixture()
def connection():
    conn = connect_in_memory()
    yield conn
    conn.close()


@pytest.fixture()
def session_repo(connection):
    return SqliteSessionRepository(connection=connection)


@pytest.fixture()
def task_repo(connection):
    return SqliteTaskRepository(connection=connection)


@pytest.fixture()
def project_repo(connection):
    return SqliteProjectRepository(connection=connection)


@pytest_asyncio.fixture()
async def project(project_repo):
    return await project_repo.add(ProjectCreate(name="Website", hourly_rate=2000))


@pytest_asyncio.fixture()
async def task(task_repo, project):
    return await task_repo.add(TaskCreate(project_id=project.id, name="Landing page"))


@pytest_asyncio.fixture()
async def other_task(task_repo, project):
    return await task_repo.add(TaskCreate(project_id=project.id, name="Contact form"))


# ---------------------------------------------------------------------------
# Engines
# ---------------------------------------------------------------------------


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def timer(session_repo, task_repo, scheduler, clock):
    return TimerEngine(session_repo, task_repo, scheduler, clock=clock)


@pytest.fixture()
def settings_store(tmp_path):
    return FocusSettingsStore(tmp_path / "settings")


@pytest.fixture()
def app_context(tmp_config, connection, scheduler, clock, settings_store):
    """Fully wired AppContext on the in-memory database."""
    return build_app_context(
        config_service=tmp_config,
        scheduler=scheduler,
        clock=clock,
        connection=connection,
        focus_settings_store=settings_store,
    )
