from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from models.task import TaskStatus


class _TaskFields(BaseModel):
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    created_by_user_id: Optional[UUID] = None
    team_id: Optional[UUID] = None
    due_date: Optional[datetime] = None

    @field_validator("team_id")
    @classmethod
    def nil_team_means_no_team(cls, value: Optional[UUID]) -> Optional[UUID]:
        if value is not None and value.int == 0:
            return None
        return value

    @field_validator("due_date")
    @classmethod
    def store_naive_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value


class TaskCreate(_TaskFields):
    """created_by_user_id defaults to the requesting user."""
    title: str = Field(..., min_length=1)
    assigned_to_user_id: UUID

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be empty")
        return value


class TaskUpdate(_TaskFields):
    """
    Either a status-only change (every other field omitted or unchanged)
    or a full replacement of the task.
    """
    title: str = ""
    assigned_to_user_id: Optional[UUID] = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: str) -> str:
        return value.strip()


class TaskResponse(BaseModel):
    id: UUID
    title: str
    description: str
    status: TaskStatus
    assigned_to_user_id: UUID
    created_by_user_id: UUID
    team_id: Optional[UUID] = None
    due_date: Optional[datetime] = None
