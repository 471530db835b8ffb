"""Pydantic schemas for task request/response validation."""

from pydantic import BaseModel, ConfigDict
from datetime import datetime

from quickstart_todo.models.task import TaskStatus


class TaskCreate(BaseModel):
    title: str


class TaskEdit(BaseModel):
    """Body of an update: both mutable fields are always sent."""

    status: TaskStatus
    title: str


class TaskUpdate(TaskEdit):
    id: int


class TaskResponse(BaseModel):
    id: int
    created_at: datetime
    status: TaskStatus
    title: str

    model_config = ConfigDict(from_attributes=True)
