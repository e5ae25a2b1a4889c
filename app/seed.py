"""
Bootstrap data: the demo accounts ensured at startup and an optional sample
team with tasks for local development.
"""
import uuid
from datetime import date, datetime, time, timedelta
from typing import Dict, List, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.logger import get_logger
from auth.security import hash_password
from models.task import Task, TaskStatus
from models.team import Team
from models.user import Role, User

logger = get_logger(__name__)

# (email, full name, role, password) - demo credentials, change in production
DEFAULT_SEED_USERS: List[Tuple[str, str, Role, str]] = [
    ("admin@demo.com", "Admin", Role.ADMIN, "Admin123!"),
    ("manager@demo.com", "Manager", Role.MANAGE, "Manager123!"),
    ("employee@demo.com", "Employee", Role.EMPLOYEE, "Employee123!"),
]

SAMPLE_TEAM = ("Platform", "Backend services and infrastructure")

SAMPLE_TASKS = [
    ("Write API documentation", "Document the task endpoints", TaskStatus.TODO, 2),
    ("Review database schema", "Check indexes on the tasks table", TaskStatus.IN_PROGRESS, 4),
    ("Set up CI alerts", "Notify the team on failed deployments", TaskStatus.DONE, 6),
]


def ensure_seed_users(db: Session) -> Dict[Role, User]:
    """
    Make sure every demo account exists with its role and a password hash.

    Existing accounts keep their password unless the hash is missing; a role
    that drifted is reset. Safe to run on every startup.
    """
    seeded: Dict[Role, User] = {}
    for email, full_name, role, password in DEFAULT_SEED_USERS:
        existing = db.execute(
            select(User).where(func.lower(User.email) == email.lower())
        ).scalar_one_or_none()

        if existing is None:
            existing = User(
                id=uuid.uuid4(),
                full_name=full_name,
                email=email,
                role=role,
                password_hash=hash_password(password),
            )
            db.add(existing)
            logger.info(f"Seeded {role.value} account {email}")
        else:
            if not existing.password_hash:
                existing.password_hash = hash_password(password)
            if existing.role != role:
                existing.role = role
        seeded[role] = existing

    db.commit()
    return seeded


def seed_sample_data(db: Session) -> Dict[str, int]:
    """Seed demo users plus one team with a few tasks. Returns table counts."""
    users = ensure_seed_users(db)
    manager = users[Role.MANAGE]
    employee = users[Role.EMPLOYEE]

    name, description = SAMPLE_TEAM
    team = db.execute(select(Team).where(Team.name == name)).scalar_one_or_none()
    if team is None:
        team = Team(id=uuid.uuid4(), name=name, description=description)
        db.add(team)

        today = datetime.combine(date.today(), time.min)
        for title, task_description, status, due_in_days in SAMPLE_TASKS:
            db.add(Task(
                id=uuid.uuid4(),
                title=title,
                description=task_description,
                status=status,
                assigned_to_user_id=employee.id,
                created_by_user_id=manager.id,
                team=team,
                due_date=today + timedelta(days=due_in_days, hours=17),
            ))
        db.commit()

    return {
        "users": db.scalar(select(func.count()).select_from(User)),
        "teams": db.scalar(select(func.count()).select_from(Team)),
        "tasks": db.scalar(select(func.count()).select_from(Task)),
    }
