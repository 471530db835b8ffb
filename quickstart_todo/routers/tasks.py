from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List

from quickstart_todo.core.database import get_db
from quickstart_todo.schemas.task import TaskCreate, TaskEdit, TaskResponse, TaskUpdate
from quickstart_todo.services import task_service

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=List[TaskResponse])
def list_tasks(db: Session = Depends(get_db)):
    return task_service.list_tasks(db)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(task_data: TaskCreate, db: Session = Depends(get_db)):
    return task_service.add_task(db, task_data.title)


@router.put("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_task(task_id: int, task_data: TaskEdit, db: Session = Depends(get_db)):
    # Unknown ids are a silent no-op, same answer as a real update
    task_service.update_task(db, TaskUpdate(id=task_id, **task_data.model_dump()))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: int, db: Session = Depends(get_db)):
    task_service.delete_task(db, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
