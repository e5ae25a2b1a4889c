from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from api.deps import get_current_user
from app.teams import TeamManager
from db.session import get_db
from models.user import User
from schemas.team import TeamResponse, TeamWrite

router = APIRouter(prefix="/api/teams", tags=["Teams"])


@router.get("", response_model=List[TeamResponse])
def list_teams(
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
):
    teams = TeamManager(db).list(current_user)
    return [TeamResponse(**t.to_dict()) for t in teams]


@router.get("/{team_id}", response_model=TeamResponse)
def get_team(
    team_id: UUID,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
):
    team = TeamManager(db).get_by_id(team_id, current_user)
    return TeamResponse(**team.to_dict())


@router.post("", response_model=TeamResponse, status_code=status.HTTP_201_CREATED)
def create_team(
    payload: TeamWrite,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
):
    team = TeamManager(db).create(payload, current_user)
    response.headers["Location"] = str(request.url_for("get_team", team_id=str(team.id)))
    return TeamResponse(**team.to_dict())


@router.put("/{team_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_team(
    team_id: UUID,
    payload: TeamWrite,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
):
    TeamManager(db).update(team_id, payload, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{team_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_team(
    team_id: UUID,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
):
    """Delete a team together with all of its tasks."""
    TeamManager(db).delete(team_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
