"""Task Board models"""

from task_board.models.base_models import DetailedHealthResponse, HealthResponse
from task_board.models.session import SessionIdentity, SessionResolution
from task_board.models.task import Task

__all__ = [
    "DetailedHealthResponse",
    "HealthResponse",
    "SessionIdentity",
    "SessionResolution",
    "Task",
]
