import enum
import uuid

from sqlalchemy import Column, Enum, String, Uuid

from db.base import Base


class Role(str, enum.Enum):
    ADMIN = "Admin"
    MANAGE = "Manage"
    EMPLOYEE = "Employee"


class User(Base):
    """User account - identity, role and credential hash."""
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    full_name = Column(String(200), nullable=False, default="")
    # Stored trimmed and lower-cased; lookups normalize the same way
    email = Column(String(320), nullable=False, unique=True, index=True)
    role = Column(
        Enum(Role, name="user_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=Role.EMPLOYEE,
    )
    password_hash = Column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "full_name": self.full_name,
            "email": self.email,
            "role": self.role,
        }
