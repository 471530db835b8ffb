"""Task model"""

import enum

from sqlalchemy import Column, Integer, String, DateTime, text
from sqlalchemy.sql import func
from quickstart_todo.core.database import Base


class TaskStatus(str, enum.Enum):
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETE = "COMPLETE"


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    status = Column(
        String(255),
        nullable=False,
        default=TaskStatus.IN_PROGRESS.value,
        server_default=text(f"'{TaskStatus.IN_PROGRESS.value}'"),
    )
    title = Column(String(1024), nullable=False)
