"""In-memory task store.

Stands in for the persistence collaborator. Tasks live for the lifetime of
the process and are shared by every session.
"""

import asyncio
from datetime import UTC, datetime

from task_board.exceptions import TaskNotFoundException
from task_board.logging_config import get_logger, log_with_context
from task_board.models.task import Task
from task_board.state_managers import StateManager

logger = get_logger(__name__)


class InMemoryTaskStore(StateManager):
    """Task store backed by a dict, guarded by an asyncio.Lock."""

    def __init__(self):
        """Initialize an empty store."""
        self._tasks: dict[int, Task] = {}
        self._next_id: int = 1
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Nothing to connect to; tasks live in process memory."""
        log_with_context(
            logger,
            "info",
            "In-memory task store ready",
            event_type="task_store_ready",
        )

    async def cleanup(self) -> None:
        """Drop all tasks."""
        async with self._lock:
            self._tasks.clear()
            self._next_id = 1

    async def list_tasks(self) -> list[Task]:
        async with self._lock:
            return sorted(self._tasks.values(), key=lambda task: task.id)

    async def get_task(self, task_id: int) -> Task:
        async with self._lock:
            return self._get(task_id)

    async def create_task(self, title: str) -> Task:
        async with self._lock:
            task = self._insert(title)
        log_with_context(
            logger,
            "info",
            "Task created",
            task_id=task.id,
            event_type="task_created",
        )
        return task

    async def update_task(
        self,
        task_id: int,
        title: str | None = None,
        completed: bool | None = None,
    ) -> Task:
        changes: dict[str, object] = {}
        if title is not None:
            changes["title"] = title.strip()
        if completed is not None:
            changes["completed"] = completed

        async with self._lock:
            task = self._get(task_id).model_copy(update=changes)
            self._tasks[task_id] = task

        log_with_context(
            logger,
            "info",
            "Task updated",
            task_id=task_id,
            fields=sorted(changes),
            event_type="task_updated",
        )
        return task

    async def toggle_task(self, task_id: int) -> Task:
        # Read and write under a single lock acquisition
        async with self._lock:
            current = self._get(task_id)
            task = current.model_copy(update={"completed": not current.completed})
            self._tasks[task_id] = task
        log_with_context(
            logger,
            "info",
            "Task toggled",
            task_id=task_id,
            completed=task.completed,
            event_type="task_updated",
        )
        return task

    async def delete_task(self, task_id: int) -> Task:
        async with self._lock:
            task = self._get(task_id)
            del self._tasks[task_id]
        log_with_context(
            logger,
            "info",
            "Task deleted",
            task_id=task_id,
            event_type="task_deleted",
        )
        return task

    def _get(self, task_id: int) -> Task:
        # Caller holds the lock
        task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFoundException(task_id)
        return task

    def _insert(self, title: str) -> Task:
        # Caller holds the lock
        task = Task(id=self._next_id, title=title.strip(), created_at=datetime.now(UTC))
        self._tasks[task.id] = task
        self._next_id += 1
        return task
