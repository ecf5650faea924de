# app/core/deadline.py
import time
from typing import Callable

from app.core.errors import DeadlineExceeded


class Deadline:
    """
    Момент, после которого операция считается проваленной.

    Создаётся вызывающим (по одному на запрос и на создание схемы)
    и передаётся в каждый вызов БД, выполняемый от его имени.
    """

    def __init__(self, timeout: float, clock: Callable[[], float] = time.monotonic):
        self.timeout = timeout
        self._clock = clock
        self._expires_at = clock() + timeout

    def remaining(self) -> float:
        return max(0.0, self._expires_at - self._clock())

    @property
    def expired(self) -> bool:
        return self._clock() >= self._expires_at

    def check(self) -> None:
        if self.expired:
            raise DeadlineExceeded(f"deadline of {self.timeout}s exceeded")

    def __repr__(self) -> str:
        return f"Deadline(timeout={self.timeout}, remaining={self.remaining():.3f})"
