from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.deps import get_current_user, get_token_issuer
from auth.authenticator import Authenticator
from auth.jwt_handler import TokenIssuer
from auth.permissions import Operation, authorize
from db.session import get_db
from models.user import User
from schemas.auth import LoginRequest, Token
from schemas.user import UserResponse

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", response_model=Token)
def login(
    request: LoginRequest,
    db: Session = Depends(get_db),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
):
    """Exchange email and password for a bearer token."""
    token = Authenticator(db, token_issuer).login(request.email, request.password)
    return Token(token=token)


@router.get("/me", response_model=UserResponse)
def get_me(current_user: Optional[User] = Depends(get_current_user)):
    """The user identified by the bearer token (or X-User-Id fallback)."""
    user = authorize(current_user, Operation.READ)
    return UserResponse(**user.to_dict())
