from app.db.base import Base
from app.db.models.task import Task

__all__ = ["Base", "Task"]
