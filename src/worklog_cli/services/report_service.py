"""Report service - tracked time and cost per task and project."""

from __future__ import annotations

from pydantic import BaseModel

from worklog_cli.repositories import ProjectRepository, SessionRepository, TaskRepository
from worklog_cli.utils.calculations import calculate_cost


class TaskTotal(BaseModel):
    task_id: str
    task_name: str
    completed: bool
    seconds: int
    cost: int


class ProjectTotal(BaseModel):
    project_id: str
    project_name: str
    hourly_rate: float
    seconds: int
    cost: int
    tasks: list[TaskTotal]


class ReportService:
    """Aggregates closed session durations.

    Only closed sessions count; a running timer is added once it stops.
    Tasks in the trash are left out.
    """

    def __init__(
        self,
        project_repository: ProjectRepository,
        task_repository: TaskRepository,
        session_repository: SessionRepository,
    ):
        self.project_repository = project_repository
        self.task_repository = task_repository
        self.session_repository = session_repository

    async def task_total(self, task_id: str) -> int:
        return await self.session_repository.total_seconds_by_task(task_id)

    async def project_totals(self, project_id: str | None = None) -> list[ProjectTotal]:
        """Totals for every live project, or just *project_id*."""
        projects = await self.project_repository.list_all()
        if project_id is not None:
            projects = [p for p in projects if p.id == project_id]

        report = []
        for project in projects:
            tasks = await self.task_repository.list_all(project_id=project.id)
            task_totals = []
            for task in tasks:
                seconds = await self.session_repository.total_seconds_by_task(task.id)
                task_totals.append(
                    TaskTotal(
                        task_id=task.id,
                        task_name=task.name,
                        completed=task.completed,
                        seconds=seconds,
                        cost=calculate_cost(seconds, project.hourly_rate),
                    )
                )

            seconds = await self.session_repository.total_seconds_by_tasks(
                [task.id for task in tasks]
            )
            report.append(
                ProjectTotal(
                    project_id=project.id,
                    project_name=project.name,
                    hourly_rate=project.hourly_rate,
                    seconds=seconds,
                    cost=calculate_cost(seconds, project.hourly_rate),
                    tasks=task_totals,
                )
            )
        return report
