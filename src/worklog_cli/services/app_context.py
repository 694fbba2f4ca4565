"""Composition root.

Builds one store set and one instance of each engine and service, wired
together. Commands get everything they need from ``get_app_context()``;
nothing below this module reaches for globals.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from functools import lru_cache

from worklog_cli.adapters.sqlite import (
    SqliteProjectRepository,
    SqliteSessionRepository,
    SqliteTaskRepository,
    get_connection,
)
from worklog_cli.models.config_models import AppConfig
from worklog_cli.models.focus import FocusSettingsStore
from worklog_cli.repositories import ProjectRepository, SessionRepository, TaskRepository
from worklog_cli.services.backup_service import BackupService
from worklog_cli.services.config_service import ConfigService, get_config_service
from worklog_cli.services.focus_coordinator import FocusCoordinator
from worklog_cli.services.focus_engine import FocusCycleEngine
from worklog_cli.services.project_service import ProjectService
from worklog_cli.services.report_service import ReportService
from worklog_cli.services.session_service import SessionService
from worklog_cli.services.task_service import TaskService
from worklog_cli.services.timer_engine import TimerEngine
from worklog_cli.utils.logger import get_logger
from worklog_cli.utils.scheduler import AsyncioScheduler, Scheduler
from worklog_cli.utils.time_format import Clock, utc_now


@dataclass
class AppContext:
    """Everything a command needs, built once per process."""

    config_service: ConfigService
    session_repository: SessionRepository
    task_repository: TaskRepository
    project_repository: ProjectRepository
    timer: TimerEngine
    focus: FocusCycleEngine
    coordinator: FocusCoordinator
    projects: ProjectService
    tasks: TaskService
    sessions: SessionService
    reports: ReportService
    backup: BackupService

    @property
    def config(self) -> AppConfig:
        return self.config_service.config


def build_app_context(
    config_service: ConfigService | None = None,
    scheduler: Scheduler | None = None,
    clock: Clock = utc_now,
    connection: sqlite3.Connection | None = None,
    focus_settings_store: FocusSettingsStore | None = None,
) -> AppContext:
    """Wire repositories, engines and services together.

    Args:
        config_service: Defaults to the cached process-wide service
        scheduler: Tick source for both engines; asyncio-backed by default
        clock: Wall clock for the timer engine and manual entries
        connection: Use this database instead of the configured path
        focus_settings_store: Where focus settings are persisted
    """
    config_service = config_service or get_config_service()
    get_logger(config_service.config.logging.level)

    if connection is None:
        connection = get_connection(config_service.db_path)
    scheduler = scheduler or AsyncioScheduler()

    session_repository = SqliteSessionRepository(connection=connection)
    task_repository = SqliteTaskRepository(connection=connection)
    project_repository = SqliteProjectRepository(connection=connection)

    timer = TimerEngine(session_repository, task_repository, scheduler, clock=clock)
    focus = FocusCycleEngine(
        focus_settings_store or FocusSettingsStore(config_service.config_dir), scheduler
    )
    coordinator = FocusCoordinator(timer, focus)

    return AppContext(
        config_service=config_service,
        session_repository=session_repository,
        task_repository=task_repository,
        project_repository=project_repository,
        timer=timer,
        focus=focus,
        coordinator=coordinator,
        projects=ProjectService(project_repository, task_repository, session_repository),
        tasks=TaskService(task_repository, project_repository, session_repository),
        sessions=SessionService(session_repository, task_repository, clock=clock),
        reports=ReportService(project_repository, task_repository, session_repository),
        backup=BackupService(project_repository, task_repository, session_repository),
    )


@lru_cache(maxsize=1)
def get_app_context() -> AppContext:
    """Get the cached application context for this process."""
    return build_app_context()
