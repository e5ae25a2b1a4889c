"""
Task management.

Admin and Manage create and fully edit tasks; an Employee may only change
the status of a task assigned to them; only Admin deletes.

An update payload is classified before authorization:

* status-only - every field other than `status` is omitted or equal to the
  stored value. Only the status is written, and only when it is sent.
* full - anything else. All fields are overwritten, omitted ones with their
  defaults, except an omitted creator which keeps the stored one.
"""
import uuid
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.errors import InvalidRequest, NotFound
from app.logger import get_logger, log_operation
from auth.permissions import Operation, authorize
from db.session import commit
from models.task import Task, TaskStatus
from models.team import Team
from models.user import User
from schemas.task import TaskCreate, TaskUpdate

logger = get_logger(__name__)

# Fields compared against the stored task to detect a status-only update
_NON_STATUS_FIELDS = (
    "title",
    "description",
    "assigned_to_user_id",
    "created_by_user_id",
    "team_id",
    "due_date",
)


@dataclass(frozen=True)
class TaskFilter:
    """Independent, combinable equality filters for listing tasks."""
    status: Optional[TaskStatus] = None
    assigned_to_user_id: Optional[uuid.UUID] = None
    team_id: Optional[uuid.UUID] = None
    due_date: Optional[date] = None


def is_status_only(task: Task, payload: TaskUpdate) -> bool:
    for field in _NON_STATUS_FIELDS:
        if field in payload.model_fields_set and getattr(payload, field) != getattr(task, field):
            return False
    return True


class TaskManager:
    def __init__(self, db: Session):
        self.db = db

    def list(self, current_user: Optional[User], filters: Optional[TaskFilter] = None) -> List[Task]:
        authorize(current_user, Operation.READ)
        filters = filters or TaskFilter()
        query = select(Task)

        if filters.status is not None:
            query = query.where(Task.status == filters.status)
        if filters.assigned_to_user_id is not None:
            query = query.where(Task.assigned_to_user_id == filters.assigned_to_user_id)
        if filters.team_id is not None:
            query = query.where(Task.team_id == filters.team_id)
        if filters.due_date is not None:
            # Same calendar day, whatever the time of day
            day_start = datetime.combine(filters.due_date, time.min)
            query = query.where(
                Task.due_date >= day_start,
                Task.due_date < day_start + timedelta(days=1),
            )

        query = query.order_by(Task.due_date.is_(None), Task.due_date, Task.title)
        return list(self.db.execute(query).scalars())

    def get_by_id(self, task_id: uuid.UUID, current_user: Optional[User]) -> Task:
        authorize(current_user, Operation.READ)
        return self._load(task_id)

    @log_operation("tasks.create")
    def create(self, payload: TaskCreate, current_user: Optional[User]) -> Task:
        current = authorize(current_user, Operation.CREATE_TASK)
        created_by = payload.created_by_user_id or current.id
        self._check_references(payload.assigned_to_user_id, created_by, payload.team_id)

        task = Task(
            id=uuid.uuid4(),
            title=payload.title,
            description=payload.description,
            status=payload.status,
            assigned_to_user_id=payload.assigned_to_user_id,
            created_by_user_id=created_by,
            team_id=payload.team_id,
            due_date=payload.due_date,
        )
        self.db.add(task)
        commit(self.db)
        self.db.refresh(task)
        logger.info(f"Created task {task.id} assigned to {task.assigned_to_user_id}")
        return task

    @log_operation("tasks.update")
    def update(self, task_id: uuid.UUID, payload: TaskUpdate, current_user: Optional[User]) -> Task:
        # Ownership is part of the decision, so the task is loaded first
        authorize(current_user, Operation.READ)
        task = self._load(task_id)

        if is_status_only(task, payload):
            authorize(
                current_user,
                Operation.UPDATE_TASK_STATUS,
                is_assignee=task.assigned_to_user_id == current_user.id,
            )
            if "status" in payload.model_fields_set:
                task.status = payload.status
        else:
            authorize(current_user, Operation.UPDATE_TASK)
            self._apply_full_update(task, payload)

        commit(self.db)
        return task

    @log_operation("tasks.delete")
    def delete(self, task_id: uuid.UUID, current_user: Optional[User]) -> None:
        authorize(current_user, Operation.DELETE_TASK)
        task = self._load(task_id)
        self.db.delete(task)
        commit(self.db)

    def _apply_full_update(self, task: Task, payload: TaskUpdate) -> None:
        if not payload.title:
            raise InvalidRequest("title must not be empty")
        if payload.assigned_to_user_id is None:
            raise InvalidRequest("assigned_to_user_id is required")
        created_by = payload.created_by_user_id or task.created_by_user_id
        self._check_references(payload.assigned_to_user_id, created_by, payload.team_id)

        task.title = payload.title
        task.description = payload.description
        task.status = payload.status
        task.assigned_to_user_id = payload.assigned_to_user_id
        task.created_by_user_id = created_by
        task.team_id = payload.team_id
        task.due_date = payload.due_date

    def _check_references(
        self,
        assigned_to_user_id: uuid.UUID,
        created_by_user_id: uuid.UUID,
        team_id: Optional[uuid.UUID],
    ) -> None:
        if self.db.get(User, assigned_to_user_id) is None:
            raise InvalidRequest(f"Assigned user {assigned_to_user_id} does not exist")
        if self.db.get(User, created_by_user_id) is None:
            raise InvalidRequest(f"Creating user {created_by_user_id} does not exist")
        if team_id is not None and self.db.get(Team, team_id) is None:
            raise InvalidRequest(f"Team {team_id} does not exist")

    def _load(self, task_id: uuid.UUID) -> Task:
        task = self.db.get(Task, task_id)
        if task is None:
            raise NotFound("Task not found")
        return task
