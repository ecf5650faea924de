# app/db/session.py
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.deadline import Deadline
from app.core.errors import DeadlineExceeded, StoreError

logger = logging.getLogger(__name__)

DEADLINE_KEY = "deadline"
# как часто (в инструкциях VM) SQLite дёргает progress handler
SQLITE_PROGRESS_STEPS = 1000


def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    deadline = conn.info.get(DEADLINE_KEY)
    if deadline is None:
        return
    deadline.check()
    if conn.dialect.name == "postgresql":
        # сервер сам прервёт запрос, когда истечёт остаток времени
        remaining_ms = max(1, int(deadline.remaining() * 1000))
        cursor.execute(f"SET statement_timeout = {remaining_ms}")


class Database:
    """
    Обёртка над Engine: соединения и сессии, привязанные к дедлайну.

    Хэндлеры и хранилище работают только через неё, поэтому в тестах
    её легко подменить.
    """

    def __init__(self, url: str):
        self.url = url
        self.engine = self._create_engine(url)
        event.listen(self.engine, "before_cursor_execute", _before_cursor_execute)
        self._session_factory = sessionmaker(autoflush=False, expire_on_commit=False)

    @staticmethod
    def _create_engine(url: str) -> Engine:
        if url.startswith("sqlite"):
            kwargs = {"connect_args": {"check_same_thread": False}}
            if url in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool
            return create_engine(url, **kwargs)
        return create_engine(url, pool_pre_ping=True)

    @contextmanager
    def connect(self, deadline: Deadline) -> Iterator[Connection]:
        """Соединение из пула; каждый запрос через него ограничен дедлайном."""
        deadline.check()
        try:
            conn = self.engine.connect()
        except SQLAlchemyError as exc:
            raise translate_error(exc, deadline) from exc

        conn.info[DEADLINE_KEY] = deadline
        driver_conn = conn.connection.driver_connection
        armed = self._arm_sqlite(conn, driver_conn, deadline)
        try:
            yield conn
        finally:
            if armed:
                driver_conn.set_progress_handler(None, 0)
            conn.info.pop(DEADLINE_KEY, None)
            conn.close()

    @contextmanager
    def session(self, deadline: Deadline) -> Iterator[Session]:
        with self.connect(deadline) as conn:
            db = self._session_factory(bind=conn)
            db.info[DEADLINE_KEY] = deadline
            try:
                yield db
            finally:
                db.close()

    def ping(self, deadline: Deadline) -> None:
        try:
            with self.connect(deadline) as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            raise translate_error(exc, deadline) from exc

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Database connections closed")

    @staticmethod
    def _arm_sqlite(conn: Connection, driver_conn, deadline: Deadline) -> bool:
        if conn.dialect.name != "sqlite":
            return False
        # ненулевой ответ прерывает текущий запрос с OperationalError("interrupted")
        driver_conn.set_progress_handler(lambda: int(deadline.expired), SQLITE_PROGRESS_STEPS)
        return True


def translate_error(exc: Exception, deadline: Deadline | None) -> StoreError:
    """Переводит ошибку SQLAlchemy в StoreError; после дедлайна это DeadlineExceeded."""
    if deadline is not None and deadline.expired:
        return DeadlineExceeded(f"deadline of {deadline.timeout}s exceeded: {exc}")
    return StoreError(str(exc))

