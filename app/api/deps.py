# app/api/deps.py
from typing import Iterator

from fastapi import Request
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.deadline import Deadline
from app.db.session import Database


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_deadline(request: Request) -> Deadline:
    # свой дедлайн на каждый запрос
    return Deadline(request.app.state.settings.REQUEST_TIMEOUT)


def get_db(request: Request) -> Iterator[Session]:
    database = get_database(request)
    with database.session(get_deadline(request)) as db:
        yield db
