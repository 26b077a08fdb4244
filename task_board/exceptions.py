"""Custom exceptions for Task Board with proper HTTP status codes."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error responses."""

    # Generic errors
    TASK_BOARD_ERROR = "TASK_BOARD_ERROR"

    # Rendering errors
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"
    TEMPLATE_RENDER_ERROR = "TEMPLATE_RENDER_ERROR"

    # Task store errors
    TASK_STORE_ERROR = "TASK_STORE_ERROR"
    TASK_NOT_FOUND = "TASK_NOT_FOUND"

    # Configuration errors
    CONFIG_ERROR = "CONFIG_ERROR"


class TaskBoardException(Exception):
    """Base exception for Task Board errors with HTTP status code support.

    All custom exceptions should inherit from this class so the error
    handlers can render a consistent HTML error page.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.TASK_BOARD_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        """Initialize Task Board exception.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            status_code: HTTP status code (default 500)
            details: Additional error context/details (logged, never rendered)
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class TemplateNotFoundException(TaskBoardException):
    """Requested template has no source under the template namespace."""

    def __init__(self, template_name: str, details: dict[str, Any] | None = None):
        super().__init__(
            f"Template not found: {template_name}",
            code=ErrorCode.TEMPLATE_NOT_FOUND,
            status_code=500,
            details={"template_name": template_name, **(details or {})},
        )
        self.template_name = template_name


class TemplateRenderException(TaskBoardException):
    """Template exists but could not be evaluated."""

    def __init__(self, message: str, template_name: str, details: dict[str, Any] | None = None):
        super().__init__(
            message,
            code=ErrorCode.TEMPLATE_RENDER_ERROR,
            status_code=500,
            details={"template_name": template_name, **(details or {})},
        )
        self.template_name = template_name


class TaskStoreException(TaskBoardException):
    """Task store errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.TASK_STORE_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)


class TaskNotFoundException(TaskStoreException):
    """No task exists with the requested id."""

    def __init__(self, task_id: int, details: dict[str, Any] | None = None):
        super().__init__(
            f"Task {task_id} not found",
            code=ErrorCode.TASK_NOT_FOUND,
            status_code=404,
            details={"task_id": task_id, **(details or {})},
        )
        self.task_id = task_id


class ConfigurationException(TaskBoardException):
    """Configuration errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_ERROR,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, status_code, details)
