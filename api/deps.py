"""
FastAPI dependencies shared by the routers.
"""
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.errors import Unauthorized
from auth.identity import IdentityResolver, PresentedIdentity
from auth.jwt_handler import TokenConfig, TokenIssuer
from auth.oauth2 import bearer_scheme, identity_header_scheme
from db.session import get_db
from models.user import User


def get_token_issuer(settings: Settings = Depends(get_settings)) -> TokenIssuer:
    return TokenIssuer(TokenConfig.from_settings(settings))


def get_identity_resolver(
    settings: Settings = Depends(get_settings),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> IdentityResolver:
    return IdentityResolver.default(token_issuer, allow_identity_header=settings.allow_identity_header)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    user_id_header: Optional[str] = Depends(identity_header_scheme),
    resolver: IdentityResolver = Depends(get_identity_resolver),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """
    The user making the request, or None when nothing identifies one.
    Whether None is acceptable is up to the permission check.
    """
    if credentials is None and request.headers.get("Authorization"):
        # Present but not "Bearer <token>"; never fall back to X-User-Id
        raise Unauthorized()
    presented = PresentedIdentity(
        bearer_token=credentials.credentials if credentials else None,
        user_id_header=user_id_header,
    )
    return resolver.resolve(presented, db)
