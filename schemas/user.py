from typing import Annotated, Optional
from uuid import UUID

from pydantic import AfterValidator, BaseModel, Field

from models.user import Role


def normalize_email(value: str) -> str:
    value = value.strip().lower()
    if not value:
        raise ValueError("email must not be empty")
    return value


Email = Annotated[str, AfterValidator(normalize_email)]


class UserCreate(BaseModel):
    full_name: str = ""
    email: Email
    role: Role = Role.EMPLOYEE
    password: str = Field(..., min_length=1)


class UserUpdate(BaseModel):
    """Full replacement of the mutable profile fields. Omitted password keeps the current one."""
    full_name: str = ""
    email: Email
    role: Role = Role.EMPLOYEE
    password: Optional[str] = None


class UserResponse(BaseModel):
    id: UUID
    full_name: str
    email: str
    role: Role
