import logging

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_database, get_deadline
from app.core.deadline import Deadline
from app.core.errors import StoreError
from app.db.session import Database

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
def health(
    database: Database = Depends(get_database),
    deadline: Deadline = Depends(get_deadline),
):
    try:
        database.ping(deadline)
    except StoreError:
        logger.warning("Health check failed", exc_info=True)
        raise HTTPException(status_code=503, detail="Database unavailable")
    return {"status": "ok"}
