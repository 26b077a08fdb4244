"""Task pages and fragments.

Every route works without JavaScript. htmx requests (HX-Request: true) get
fragments back; standard form posts get a 303 redirect to /tasks so a reload
or back-navigation never re-submits the mutation.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from pydantic import AfterValidator

from task_board.core.rate_limit import MUTATION_RATE_LIMIT, limiter, rate_limit_disabled
from task_board.dependencies import get_page_context, get_task_store
from task_board.protocols import TaskStoreProtocol
from task_board.views.page_context import PageContext

router = APIRouter()

TASKS_URL = "/tasks"
TASKS_CHANGED_EVENT = "tasks-changed"


def _require_title(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Title must not be blank")
    return value


TaskTitle = Annotated[str, Form(min_length=1), AfterValidator(_require_title)]


async def _list_fragment(
    page: PageContext,
    task_store: TaskStoreProtocol,
    status_message: str,
) -> HTMLResponse:
    """Updated task list plus an out-of-band status message for the live region."""
    tasks = await task_store.list_tasks()
    return page.respond(
        "tasks/_list",
        {"tasks": tasks, "status_message": status_message},
        trigger=TASKS_CHANGED_EVENT,
    )


@router.get("/tasks", response_class=HTMLResponse)
async def list_tasks(
    page: PageContext = Depends(get_page_context),
    task_store: TaskStoreProtocol = Depends(get_task_store),
):
    """Task list: full page, or just the list for htmx."""
    tasks = await task_store.list_tasks()
    return page.negotiate("tasks/index", "tasks/_list", {"tasks": tasks})


@router.post("/tasks", response_class=HTMLResponse)
@limiter.limit(MUTATION_RATE_LIMIT, exempt_when=rate_limit_disabled)
async def create_task(
    request: Request,
    title: TaskTitle,
    page: PageContext = Depends(get_page_context),
    task_store: TaskStoreProtocol = Depends(get_task_store),
):
    """Add a task."""
    task = await task_store.create_task(title)
    if page.is_htmx:
        return await _list_fragment(page, task_store, f'Task "{task.title}" added.')
    return page.redirect(TASKS_URL)


# Registered before /tasks/{task_id} so "summary" is not parsed as an id
@router.get("/tasks/summary", response_class=HTMLResponse)
async def task_summary(
    page: PageContext = Depends(get_page_context),
    task_store: TaskStoreProtocol = Depends(get_task_store),
):
    """Open/done counts; htmx refreshes it whenever tasks-changed fires."""
    tasks = await task_store.list_tasks()
    return page.negotiate("tasks/index", "tasks/_summary", {"tasks": tasks})


@router.get("/tasks/{task_id}", response_class=HTMLResponse)
async def show_task(
    task_id: int,
    page: PageContext = Depends(get_page_context),
    task_store: TaskStoreProtocol = Depends(get_task_store),
):
    """Single task. The htmx edit form's cancel button swaps this fragment back in."""
    task = await task_store.get_task(task_id)
    return page.negotiate("tasks/show", "tasks/_item", {"task": task})


@router.get("/tasks/{task_id}/edit", response_class=HTMLResponse)
async def edit_task_form(
    task_id: int,
    page: PageContext = Depends(get_page_context),
    task_store: TaskStoreProtocol = Depends(get_task_store),
):
    """Edit form: inline fragment for htmx, standalone page otherwise."""
    task = await task_store.get_task(task_id)
    return page.negotiate("tasks/edit", "tasks/_edit", {"task": task})


@router.post("/tasks/{task_id}/edit", response_class=HTMLResponse)
@limiter.limit(MUTATION_RATE_LIMIT, exempt_when=rate_limit_disabled)
async def update_task(
    request: Request,
    task_id: int,
    title: TaskTitle,
    page: PageContext = Depends(get_page_context),
    task_store: TaskStoreProtocol = Depends(get_task_store),
):
    """Rename a task."""
    task = await task_store.update_task(task_id, title=title)
    if page.is_htmx:
        return page.respond("tasks/_item", {"task": task})
    return page.redirect(TASKS_URL)


@router.post("/tasks/{task_id}/toggle", response_class=HTMLResponse)
@limiter.limit(MUTATION_RATE_LIMIT, exempt_when=rate_limit_disabled)
async def toggle_task(
    request: Request,
    task_id: int,
    page: PageContext = Depends(get_page_context),
    task_store: TaskStoreProtocol = Depends(get_task_store),
):
    """Flip a task between open and done."""
    task = await task_store.toggle_task(task_id)
    if page.is_htmx:
        return page.respond("tasks/_item", {"task": task}, trigger=TASKS_CHANGED_EVENT)
    return page.redirect(TASKS_URL)


@router.post("/tasks/{task_id}/delete", response_class=HTMLResponse)
@limiter.limit(MUTATION_RATE_LIMIT, exempt_when=rate_limit_disabled)
async def delete_task(
    request: Request,
    task_id: int,
    page: PageContext = Depends(get_page_context),
    task_store: TaskStoreProtocol = Depends(get_task_store),
):
    """Remove a task."""
    task = await task_store.delete_task(task_id)
    if page.is_htmx:
        return await _list_fragment(page, task_store, f'Task "{task.title}" deleted.')
    return page.redirect(TASKS_URL)
