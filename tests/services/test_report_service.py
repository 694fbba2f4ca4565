"""Tests for ReportService totals and costs."""

from __future__ import annotations

import pytest

from worklog_cli.models import ProjectCreate, TaskCreate
from worklog_cli.services.report_service import ReportService

pytestmark = pytest.mark.asyncio


@pytest.fixture()
def reports(project_repo, task_repo, session_repo):
    return ReportService(project_repo, task_repo, session_repo)


async def test_task_total_sums_closed_sessions(reports, task, session_repo):
    await session_repo.add_manual_session(task.id, 1800)
    await session_repo.add_manual_session(task.id, 900)

    assert await reports.task_total(task.id) == 2700


async def test_running_session_is_not_counted(reports, timer, task, session_repo, clock):
    await session_repo.add_manual_session(task.id, 600)
    await timer.start(task.id)
    clock.advance(300)

    assert await reports.task_total(task.id) == 600

    await timer.stop()

    assert await reports.task_total(task.id) == 900


async def test_project_totals_with_cost(reports, project, task, other_task, session_repo):
    await session_repo.add_manual_session(task.id, 3600)
    await session_repo.add_manual_session(other_task.id, 1800)

    [total] = await reports.project_totals()

    assert total.project_id == project.id
    assert total.seconds == 5400
    assert total.cost == 3000
    assert {t.task_name: t.cost for t in total.tasks} == {
        "Landing page": 2000,
        "Contact form": 1000,
    }


async def test_trashed_task_left_out(reports, task, other_task, session_repo, task_repo):
    await session_repo.add_manual_session(task.id, 3600)
    await session_repo.add_manual_session(other_task.id, 3600)
    await task_repo.soft_delete(other_task.id)

    [total] = await reports.project_totals()

    assert total.seconds == 3600
    assert [t.task_id for t in total.tasks] == [task.id]


async def test_single_project_filter(reports, project, project_repo, task_repo):
    other = await project_repo.add(ProjectCreate(name="Internal"))
    await task_repo.add(TaskCreate(project_id=other.id, name="Planning"))

    totals = await reports.project_totals(project_id=other.id)

    assert [t.project_name for t in totals] == ["Internal"]
    assert totals[0].cost == 0
    assert totals[0].tasks[0].seconds == 0
