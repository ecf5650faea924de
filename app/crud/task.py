from functools import wraps
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import StoreError, TaskNotFound
from app.core.timeutils import as_utc, utcnow
from app.db.models.task import Task
from app.db.session import DEADLINE_KEY, translate_error
from app.schemas.task import TaskIn


def store_operation(func):
    """Откатывает сессию и переводит ошибки SQLAlchemy в StoreError."""

    @wraps(func)
    def wrapper(db: Session, *args, **kwargs):
        try:
            return func(db, *args, **kwargs)
        except StoreError:
            db.rollback()
            raise
        except SQLAlchemyError as exc:
            db.rollback()
            raise translate_error(exc, db.info.get(DEADLINE_KEY)) from exc

    return wrapper


@store_operation
def create_task(db: Session, task_in: TaskIn) -> Task:
    now = utcnow()
    db_task = Task(**task_in.model_dump(), created_at=now, updated_at=now)
    db.add(db_task)
    db.commit()
    return db_task


@store_operation
def get_tasks(db: Session) -> List[Task]:
    # порядок вставки, чтобы список был детерминированным
    return list(db.scalars(select(Task).order_by(Task.id)))


@store_operation
def get_task(db: Session, task_id: int) -> Task:
    db_task = db.get(Task, task_id)
    if db_task is None:
        raise TaskNotFound(task_id)
    return db_task


@store_operation
def update_task(db: Session, task_id: int, task_in: TaskIn) -> Task:
    db_task = db.get(Task, task_id)
    if db_task is None:
        raise TaskNotFound(task_id)

    db_task.title = task_in.title
    db_task.description = task_in.description
    db_task.due_date = task_in.due_date
    # updated_at не может оказаться раньше created_at, даже если часы ушли назад
    db_task.updated_at = max(utcnow(), as_utc(db_task.created_at))
    db.commit()
    return db_task


@store_operation
def delete_task(db: Session, task_id: int) -> None:
    # отсутствие строки не ошибка
    db.execute(delete(Task).where(Task.id == task_id))
    db.commit()
