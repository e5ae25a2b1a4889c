"""
Team management. Only Admin writes; deleting a team deletes its tasks.
"""
import uuid
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.errors import NotFound
from app.logger import get_logger, log_operation
from auth.permissions import Operation, authorize
from db.session import commit
from models.task import Task
from models.team import Team
from models.user import User
from schemas.team import TeamWrite

logger = get_logger(__name__)


class TeamManager:
    def __init__(self, db: Session):
        self.db = db

    def list(self, current_user: Optional[User]) -> List[Team]:
        authorize(current_user, Operation.READ)
        return list(self.db.execute(select(Team).order_by(Team.name)).scalars())

    def get_by_id(self, team_id: uuid.UUID, current_user: Optional[User]) -> Team:
        authorize(current_user, Operation.READ)
        return self._load(team_id)

    @log_operation("teams.create")
    def create(self, payload: TeamWrite, current_user: Optional[User]) -> Team:
        authorize(current_user, Operation.CREATE_TEAM)
        team = Team(id=uuid.uuid4(), name=payload.name, description=payload.description)
        self.db.add(team)
        commit(self.db)
        self.db.refresh(team)
        return team

    @log_operation("teams.update")
    def update(self, team_id: uuid.UUID, payload: TeamWrite, current_user: Optional[User]) -> Team:
        authorize(current_user, Operation.UPDATE_TEAM)
        team = self._load(team_id)
        team.name = payload.name
        team.description = payload.description
        commit(self.db)
        return team

    @log_operation("teams.delete")
    def delete(self, team_id: uuid.UUID, current_user: Optional[User]) -> None:
        authorize(current_user, Operation.DELETE_TEAM)
        team = self._load(team_id)
        task_count = self.db.scalar(
            select(func.count()).select_from(Task).where(Task.team_id == team.id)
        )
        self.db.delete(team)
        commit(self.db)
        if task_count:
            logger.info(f"Deleted team {team_id} and {task_count} task(s)")

    def _load(self, team_id: uuid.UUID) -> Team:
        team = self.db.get(Team, team_id)
        if team is None:
            raise NotFound("Team not found")
        return team
