import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import health, tasks
from app.core.config import Settings, settings as default_settings
from app.core.errors import StoreError
from app.db.init_db import init_db
from app.db.session import Database

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Authorization", "Content-Type"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    database: Database = app.state.database
    try:
        init_db(database, timeout=app.state.settings.SCHEMA_TIMEOUT)
    except Exception:
        # без таблицы обслуживать запросы нельзя
        logger.exception("Failed to initialize database schema")
        raise
    yield
    # сервер уже не принимает запросы, закрываем пул
    database.close()


def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    settings = settings or default_settings
    database = database or Database(settings.DATABASE_URL)

    app = FastAPI(title="Task API", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=CORS_METHODS,
        allow_headers=CORS_HEADERS,
    )

    # Ошибки разбора JSON и кривой id в пути отдаём как 400, а не 422
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        in_path = any(tuple(err.get("loc", ()))[:1] == ("path",) for err in exc.errors())
        detail = "Invalid task ID" if in_path else "Invalid request payload"
        return JSONResponse(status_code=400, content={"detail": detail})

    # на случай, если БД отвалилась ещё до хэндлера (например, в get_db)
    @app.exception_handler(StoreError)
    async def store_exception_handler(request: Request, exc: StoreError):
        logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=500, content={"detail": "Server error"})

    app.include_router(tasks.router, tags=["tasks"])
    app.include_router(health.router, tags=["health"])

    return app


app = create_app()
