from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class TeamWrite(BaseModel):
    """Payload for both create and full update."""
    name: str = Field(..., min_length=1)
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be empty")
        return value


class TeamResponse(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
