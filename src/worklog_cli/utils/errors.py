"""Application errors carrying a process exit code."""

from worklog_cli.utils.exit_codes import (
    ERROR_CONFLICT,
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
)


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


class NotFoundError(AppError):
    def __init__(self, message: str):
        super().__init__(message, ERROR_NOT_FOUND)


class ConflictError(AppError):
    """The operation clashes with current state, e.g. a timer already running."""

    def __init__(self, message: str):
        super().__init__(message, ERROR_CONFLICT)


class InvalidArgumentError(AppError):
    def __init__(self, message: str):
        super().__init__(message, ERROR_INVALID_ARGS)
