# app/server.py
import logging
import sys
from typing import Optional

import uvicorn

from app.core.config import Settings, settings as default_settings
from app.core.logging_setup import setup_logging
from app.main import create_app

logger = logging.getLogger(__name__)


def main(settings: Optional[Settings] = None) -> int:
    """
    Поднимает HTTP-сервер и блокируется до SIGINT/SIGTERM.

    Uvicorn перестаёт принимать соединения и ждёт текущие запросы
    не дольше SHUTDOWN_TIMEOUT секунд; пул БД закрывается в lifespan уже после этого.
    """
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    app = create_app(settings)
    config = uvicorn.Config(
        app,
        host=settings.HOST,
        port=settings.PORT,
        lifespan="on",
        log_config=None,
        timeout_graceful_shutdown=settings.SHUTDOWN_TIMEOUT,
    )
    server = uvicorn.Server(config)

    logger.info("Server starting on %s:%s", settings.HOST, settings.PORT)
    server.run()

    if not server.started:
        # lifespan упал: БД недоступна или схема не создалась
        logger.error("Server failed to start")
        return 1

    logger.info("Server exiting")
    return 0


if __name__ == "__main__":
    sys.exit(main())
