"""Fixtures for command tests.

Commands run their own event loop through ``command_wrapper``, so command
tests are plain sync tests and seed the database with ``asyncio.run``.
"""

from __future__ import annotations

import asyncio
from contextlib import ExitStack
from unittest.mock import patch

import pytest

from worklog_cli.models import ProjectCreate, TaskCreate


@pytest.fixture()
def seeded(app_context):
    """One project with a rate and one task in it; returns (project, task)."""

    async def _seed():
        project = await app_context.project_repository.add(
            ProjectCreate(name="Website", hourly_rate=2000)
        )
        task = await app_context.task_repository.add(
            TaskCreate(project_id=project.id, name="Landing page")
        )
        return project, task

    return asyncio.run(_seed())


COMMAND_MODULES = ["data", "focus", "log", "projects", "report", "tasks", "timer"]


@pytest.fixture()
def cli_context(app_context):
    """Point every command module at the test AppContext."""
    with ExitStack() as stack:
        for module in COMMAND_MODULES:
            stack.enter_context(
                patch(
                    f"worklog_cli.commands.{module}.get_app_context",
                    return_value=app_context,
                )
            )
        yield app_context
