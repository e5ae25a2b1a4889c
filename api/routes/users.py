from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from api.deps import get_current_user
from app.users import UserManager
from db.session import get_db
from models.user import User
from schemas.user import UserCreate, UserResponse, UserUpdate

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=List[UserResponse])
def list_users(
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
):
    users = UserManager(db).list(current_user)
    return [UserResponse(**u.to_dict()) for u in users]


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
):
    user = UserManager(db).get_by_id(user_id, current_user)
    return UserResponse(**user.to_dict())


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
):
    """Create a user (Admin only). The password is stored as a bcrypt hash."""
    user = UserManager(db).create(payload, current_user)
    response.headers["Location"] = str(request.url_for("get_user", user_id=str(user.id)))
    return UserResponse(**user.to_dict())


@router.put("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_user(
    user_id: UUID,
    payload: UserUpdate,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
):
    """Replace name, email and role (Admin only); omitted fields are reset."""
    UserManager(db).update(user_id, payload, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_current_user),
):
    """Delete a user (Admin only). Users still referenced by tasks are kept (409)."""
    UserManager(db).delete(user_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
