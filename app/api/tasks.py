import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.core.errors import StoreError, TaskNotFound
from app.crud import task as crud_task
from app.schemas.task import Task, TaskIn

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks")

# только цифры; 18 знаков влезают в BIGINT
TASK_ID_PATTERN = r"^[0-9]+$"
TASK_ID_MAX_DIGITS = 18


def task_id_path(
    task_id: str = Path(..., pattern=TASK_ID_PATTERN, max_length=TASK_ID_MAX_DIGITS),
) -> int:
    return int(task_id)


@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED)
def create_task(task_in: TaskIn, db: Session = Depends(get_db)):
    try:
        task = crud_task.create_task(db, task_in)
    except StoreError:
        logger.exception("Error creating task")
        raise HTTPException(status_code=500, detail="Error creating task")
    logger.info("Created task id=%s", task.id)
    return task


@router.get("", response_model=List[Task])
def read_tasks(db: Session = Depends(get_db)):
    try:
        return crud_task.get_tasks(db)
    except StoreError:
        logger.exception("Error listing tasks")
        raise HTTPException(status_code=500, detail="Server error")


@router.get("/{task_id}", response_model=Task)
def read_task(task_id: int = Depends(task_id_path), db: Session = Depends(get_db)):
    try:
        return crud_task.get_task(db, task_id)
    except TaskNotFound:
        raise HTTPException(status_code=404, detail="Task not found")
    except StoreError:
        logger.exception("Error reading task id=%s", task_id)
        raise HTTPException(status_code=500, detail="Server error")


@router.put("/{task_id}", response_model=Task)
def update_task(
    task_in: TaskIn,
    task_id: int = Depends(task_id_path),
    db: Session = Depends(get_db),
):
    try:
        task = crud_task.update_task(db, task_id, task_in)
    except TaskNotFound:
        raise HTTPException(status_code=404, detail="Task not found")
    except StoreError:
        logger.exception("Error updating task id=%s", task_id)
        raise HTTPException(status_code=500, detail="Error updating task")
    logger.info("Updated task id=%s", task_id)
    return task


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: int = Depends(task_id_path), db: Session = Depends(get_db)):
    try:
        crud_task.delete_task(db, task_id)
    except StoreError:
        logger.exception("Error deleting task id=%s", task_id)
        raise HTTPException(status_code=500, detail="Error deleting task")
    logger.info("Deleted task id=%s", task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
