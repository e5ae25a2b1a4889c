from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from api.deps import get_current_user
from app.tasks import TaskFilter, TaskManager
from db.session import get_db
from models.task import TaskStatus
from models.user import User
from schemas.task import TaskCreate, TaskResponse, TaskUpdate

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


@router.get("", response_model=List[TaskResponse])
def list_tasks(
    status_filter: Optional[TaskStatus] = Query(None, alias="status"),
    assigned_to_user_id: Optional[UUID] = None,
    team_id: Optional[UUID] = None,
    due_date: Optional[date] = Query(None, description="Calendar day (YYYY-MM-DD), time of day ignored"),
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
):
    """List tasks, optionally filtered by status, assignee, team and due date."""
    filters = TaskFilter(
        status=status_filter,
        assigned_to_user_id=assigned_to_user_id,
        team_id=team_id,
        due_date=due_date,
    )
    tasks = TaskManager(db).list(current_user, filters)
    return [TaskResponse(**t.to_dict()) for t in tasks]


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: UUID,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
):
    task = TaskManager(db).get_by_id(task_id, current_user)
    return TaskResponse(**task.to_dict())


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: TaskCreate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
):
    """Create a task (Admin or Manage). The creator defaults to the caller."""
    task = TaskManager(db).create(payload, current_user)
    response.headers["Location"] = str(request.url_for("get_task", task_id=str(task.id)))
    return TaskResponse(**task.to_dict())


@router.put("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_task(
    task_id: UUID,
    payload: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
):
    """
    Update a task.

    Admin and Manage may replace every field. An Employee may only send a
    status change for a task assigned to them; any other changed field is 403.
    """
    TaskManager(db).update(task_id, payload, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: UUID,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
):
    TaskManager(db).delete(task_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
