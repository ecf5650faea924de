from pydantic import BaseModel, field_serializer, field_validator
from typing import Optional
from datetime import datetime

from app.core.timeutils import as_utc, to_rfc3339

class TaskIn(BaseModel):
    # тело POST и PUT одинаковое
    title: str
    description: str
    due_date: Optional[datetime] = None

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

class Task(TaskIn):
    id: int
    created_at: datetime
    updated_at: datetime

    @field_serializer("due_date", "created_at", "updated_at")
    def serialize_timestamp(self, value: Optional[datetime]) -> Optional[str]:
        return to_rfc3339(value)

    class Config:
        from_attributes = True
