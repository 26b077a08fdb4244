"""Pydantic models for tasks."""

from datetime import datetime

from pydantic import BaseModel, Field


class Task(BaseModel):
    """A single task as handed to templates."""

    id: int = Field(..., ge=1)
    title: str
    completed: bool = False
    created_at: datetime
