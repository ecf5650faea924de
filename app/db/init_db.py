# app/db/init_db.py
import logging

from sqlalchemy.exc import SQLAlchemyError

from app.core.deadline import Deadline
from app.db.base import Base
from app.db.session import Database, translate_error
import app.db.models  # noqa: F401  регистрирует модели в Base.metadata

logger = logging.getLogger(__name__)


def init_db(database: Database, timeout: float = 5.0) -> None:
    """
    Проверяет, что БД отвечает, и создаёт таблицу tasks, если её нет.

    Всё укладывается в один дедлайн. Любая ошибка пробрасывается наверх:
    без схемы сервер запускаться не должен.
    """
    deadline = Deadline(timeout)
    database.ping(deadline)

    try:
        with database.connect(deadline) as conn:
            Base.metadata.create_all(bind=conn, checkfirst=True)
            conn.commit()
    except SQLAlchemyError as exc:
        raise translate_error(exc, deadline) from exc

    logger.info("Schema ready: %s", ", ".join(sorted(Base.metadata.tables)))
