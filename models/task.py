"""
SQLAlchemy model for tasks.
"""
import enum
import uuid

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import backref, relationship

from db.base import Base
from models.team import Team


class TaskStatus(str, enum.Enum):
    TODO = "Todo"
    IN_PROGRESS = "InProgress"
    DONE = "Done"


class Task(Base):
    """
    Model for tasks assigned to users.

    Users referenced as assignee or creator cannot be deleted while the task
    exists; deleting the team deletes the task.
    """
    __tablename__ = "tasks"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(300), nullable=False)
    description = Column(Text, nullable=False, default="")
    status = Column(
        Enum(TaskStatus, name="task_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=TaskStatus.TODO,
    )
    assigned_to_user_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
    )
    created_by_user_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
    )
    team_id = Column(
        Uuid,
        ForeignKey("teams.id", ondelete="CASCADE"),
        nullable=True,
        comment="NULL means the task belongs to no team"
    )
    due_date = Column(DateTime, nullable=True)

    team = relationship(Team, backref=backref("tasks", cascade="all, delete"))

    __table_args__ = (
        Index("ix_tasks_status", "status"),
        Index("ix_tasks_assigned_to", "assigned_to_user_id"),
        Index("ix_tasks_team", "team_id"),
        Index("ix_tasks_due_date", "due_date"),
    )

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, title={self.title}, status={self.status})>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status,
            "assigned_to_user_id": self.assigned_to_user_id,
            "created_by_user_id": self.created_by_user_id,
            "team_id": self.team_id,
            "due_date": self.due_date,
        }
