# app/db/__init__.py
# Этот файл гарантирует, что все модели импортированы при первом импорте app.db

from app.db.base import Base
from app.db.models.task import Task

# Экспортируем Base и модели наружу
__all__ = ["Base", "Task"]
