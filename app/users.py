"""
User management: CRUD over the credential store, Admin-only writes.
"""
import uuid
from typing import List, Optional

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from app.errors import Conflict, InvalidRequest, NotFound
from app.logger import get_logger, log_operation
from auth.permissions import Operation, authorize
from auth.security import hash_password
from db.session import commit
from models.task import Task
from models.user import User
from schemas.user import UserCreate, UserUpdate

logger = get_logger(__name__)


class UserManager:
    def __init__(self, db: Session):
        self.db = db

    def list(self, current_user: Optional[User]) -> List[User]:
        authorize(current_user, Operation.READ)
        return list(self.db.execute(select(User).order_by(User.email)).scalars())

    def get_by_id(self, user_id: uuid.UUID, current_user: Optional[User]) -> User:
        authorize(current_user, Operation.READ)
        return self._load(user_id)

    @log_operation("users.create")
    def create(self, payload: UserCreate, current_user: Optional[User]) -> User:
        authorize(current_user, Operation.CREATE_USER)
        self._ensure_email_free(payload.email)

        user = User(
            id=uuid.uuid4(),
            full_name=payload.full_name,
            email=payload.email,
            role=payload.role,
            password_hash=hash_password(payload.password),
        )
        self.db.add(user)
        commit(self.db)
        self.db.refresh(user)
        logger.info(f"Created user {user.id} ({user.role.value})")
        return user

    @log_operation("users.update")
    def update(self, user_id: uuid.UUID, payload: UserUpdate, current_user: Optional[User]) -> User:
        authorize(current_user, Operation.UPDATE_USER)
        user = self._load(user_id)
        self._ensure_email_free(payload.email, exclude_id=user.id)

        user.full_name = payload.full_name
        user.email = payload.email
        user.role = payload.role
        if payload.password is not None:
            if not payload.password:
                raise InvalidRequest("password must not be empty")
            user.password_hash = hash_password(payload.password)

        commit(self.db)
        return user

    @log_operation("users.delete")
    def delete(self, user_id: uuid.UUID, current_user: Optional[User]) -> None:
        authorize(current_user, Operation.DELETE_USER)
        user = self._load(user_id)

        referenced = self.db.execute(
            select(Task.id).where(
                or_(Task.assigned_to_user_id == user.id, Task.created_by_user_id == user.id)
            ).limit(1)
        ).first()
        if referenced is not None:
            raise Conflict("User is referenced by existing tasks")

        self.db.delete(user)
        commit(self.db)

    def _load(self, user_id: uuid.UUID) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFound("User not found")
        return user

    def _ensure_email_free(self, email: str, exclude_id: Optional[uuid.UUID] = None) -> None:
        query = select(User.id).where(User.email == email)
        if exclude_id is not None:
            query = query.where(User.id != exclude_id)
        if self.db.execute(query).first() is not None:
            raise Conflict("Email is already registered")
