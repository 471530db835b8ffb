"""Task service

All reads and writes of the ``tasks`` table go through these functions.
They expect the table to exist (``ensure_schema`` runs at startup) and let
SQLAlchemy errors propagate to the caller untouched.
"""

import logging
from typing import List, Union

from sqlalchemy.engine import Connection, Engine
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from quickstart_todo.core.database import Base
from quickstart_todo.models.task import Task, TaskStatus
from quickstart_todo.schemas.task import TaskUpdate

logger = logging.getLogger(__name__)

LIST_LIMIT = 100


def ensure_schema(bind: Union[Engine, Connection]) -> None:
    """CREATE TABLE IF NOT EXISTS; safe to call any number of times."""
    Base.metadata.create_all(bind=bind, tables=[Task.__table__], checkfirst=True)


def add_task(db: Session, title: str) -> Task:
    new_task = Task(
        created_at=func.now(),
        status=TaskStatus.IN_PROGRESS.value,
        title=title,
    )
    db.add(new_task)
    db.commit()
    db.refresh(new_task)
    logger.info(f"Task created id={new_task.id}")
    return new_task


def list_tasks(db: Session, limit: int = LIST_LIMIT) -> List[Task]:
    # Newest first; ties on created_at come back in store order
    return db.query(Task).order_by(Task.created_at.desc()).limit(limit).all()


def update_task(db: Session, task: TaskUpdate) -> bool:
    """Overwrite status and title of ``task.id``.

    Returns False when no row has that id; this is not an error.
    """
    matched = db.query(Task).filter(Task.id == task.id).update(
        {Task.status: TaskStatus(task.status).value, Task.title: task.title},
        synchronize_session=False,
    )
    db.commit()

    if not matched:
        logger.debug(f"Update skipped, no task id={task.id}")
        return False
    logger.info(f"Task updated id={task.id} status={TaskStatus(task.status).value}")
    return True


def delete_task(db: Session, task_id: int) -> bool:
    matched = db.query(Task).filter(Task.id == task_id).delete(synchronize_session=False)
    db.commit()

    if not matched:
        logger.debug(f"Delete skipped, no task id={task_id}")
        return False
    logger.info(f"Task deleted id={task_id}")
    return True
