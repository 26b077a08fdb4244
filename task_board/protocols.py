"""Protocol definitions for dependency injection."""

from typing import Protocol

from task_board.models.task import Task


class TaskStoreProtocol(Protocol):
    """Protocol for task persistence.

    The rendering layer only consumes the returned Task models as template
    context values, so any storage technology can sit behind this interface.
    Implementations raise TaskNotFoundException for unknown ids.
    """

    async def initialize(self) -> None: ...

    async def cleanup(self) -> None: ...

    async def list_tasks(self) -> list[Task]:
        """Return all tasks, oldest first."""
        ...

    async def get_task(self, task_id: int) -> Task: ...

    async def create_task(self, title: str) -> Task: ...

    async def update_task(
        self,
        task_id: int,
        title: str | None = None,
        completed: bool | None = None,
    ) -> Task:
        """Apply the given changes and return the updated task."""
        ...

    async def toggle_task(self, task_id: int) -> Task:
        """Flip the completed flag atomically and return the updated task."""
        ...

    async def delete_task(self, task_id: int) -> Task:
        """Remove the task and return it as it was before deletion."""
        ...
