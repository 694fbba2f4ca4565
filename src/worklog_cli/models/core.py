"""Core data models: projects, tasks and time sessions."""

from datetime import datetime

from pydantic import BaseModel, Field

DEFAULT_PROJECT_COLOR = "#6366F1"


class Project(BaseModel):
    """Project model.

    Attributes:
        id: Unique identifier for the project
        name: Project name
        hourly_rate: Rate used to price tracked time (currency units per hour)
        color: Hex color code for display
        created_at: Creation timestamp
        deleted_at: Soft-delete tombstone; set while the project is in the trash
    """

    id: str
    name: str
    hourly_rate: float = Field(default=0, ge=0)
    color: str = DEFAULT_PROJECT_COLOR
    created_at: datetime
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


class ProjectCreate(BaseModel):
    """Model for creating a new project."""

    name: str = Field(min_length=1)
    hourly_rate: float = Field(default=0, ge=0)
    color: str = DEFAULT_PROJECT_COLOR


class ProjectUpdate(BaseModel):
    """Model for updating a project. Only provided fields are changed."""

    name: str | None = Field(default=None, min_length=1)
    hourly_rate: float | None = Field(default=None, ge=0)
    color: str | None = None


class Task(BaseModel):
    """Task model.

    Attributes:
        id: Unique identifier for the task
        project_id: Owning project
        name: Task name
        completed: Completion status
        is_restored: Set when the task was re-created by a backup import
        created_at: Creation timestamp
        deleted_at: Soft-delete tombstone
    """

    id: str
    project_id: str
    name: str
    completed: bool = False
    is_restored: bool = False
    created_at: datetime
    deleted_at: datetime | None = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


class TaskCreate(BaseModel):
    """Model for creating a new task."""

    project_id: str
    name: str = Field(min_length=1)
    is_restored: bool = False


class TimeSession(BaseModel):
    """One contiguous start-to-stop interval of work on a task.

    ``end_time`` is None while the session is open. ``duration_seconds`` is
    fixed when the session is closed and never recomputed afterwards.
    """

    id: str
    task_id: str
    start_time: datetime
    end_time: datetime | None = None
    duration_seconds: int = Field(default=0, ge=0)

    @property
    def is_open(self) -> bool:
        return self.end_time is None
