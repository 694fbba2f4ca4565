"""Database schema definitions for the local SQLite store.

Timestamps are stored as ISO 8601 strings in UTC.
"""

from __future__ import annotations

CREATE_PROJECTS_TABLE = """
CREATE TABLE IF NOT EXISTS projects (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    hourly_rate REAL NOT NULL DEFAULT 0,
    color TEXT NOT NULL DEFAULT '#6366F1',
    created_at DATETIME NOT NULL,
    deleted_at DATETIME
)
"""

CREATE_TASKS_TABLE = """
CREATE TABLE IF NOT EXISTS tasks (
    id TEXT PRIMARY KEY,
    project_id TEXT NOT NULL,
    name TEXT NOT NULL,
    completed BOOLEAN NOT NULL DEFAULT 0,
    is_restored BOOLEAN NOT NULL DEFAULT 0,
    created_at DATETIME NOT NULL,
    deleted_at DATETIME,
    FOREIGN KEY (project_id) REFERENCES projects(id) ON DELETE CASCADE
)
"""

# end_time NULL marks the open (running) session
CREATE_TIME_SESSIONS_TABLE = """
CREATE TABLE IF NOT EXISTS time_sessions (
    id TEXT PRIMARY KEY,
    task_id TEXT NOT NULL,
    start_time DATETIME NOT NULL,
    end_time DATETIME,
    duration_seconds INTEGER NOT NULL DEFAULT 0,
    FOREIGN KEY (task_id) REFERENCES tasks(id) ON DELETE CASCADE
)
"""

CREATE_PROJECT_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_projects_name ON projects(name)",
    "CREATE INDEX IF NOT EXISTS idx_projects_deleted ON projects(deleted_at)",
]

CREATE_TASK_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_project ON tasks(project_id)",
    "CREATE INDEX IF NOT EXISTS idx_tasks_completed ON tasks(completed, deleted_at)",
]

CREATE_TIME_SESSION_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_time_sessions_task ON time_sessions(task_id)",
    "CREATE INDEX IF NOT EXISTS idx_time_sessions_start ON time_sessions(start_time)",
    # Every open row indexes to the same key, so a second open session is rejected
    "CREATE UNIQUE INDEX IF NOT EXISTS idx_time_sessions_single_open "
    "ON time_sessions((end_time IS NULL)) WHERE end_time IS NULL",
]

ALL_TABLES = [
    CREATE_PROJECTS_TABLE,
    CREATE_TASKS_TABLE,
    CREATE_TIME_SESSIONS_TABLE,
]

ALL_INDEXES = (
    CREATE_PROJECT_INDEXES + CREATE_TASK_INDEXES + CREATE_TIME_SESSION_INDEXES
)
