"""
Resolution of the "current user" of a request.

Two strategies are tried in order:

1. `BearerTokenResolver` - the `Authorization: Bearer <jwt>` header, verified
   by the TokenIssuer. This is the authentication mechanism.
2. `IdentityHeaderResolver` - a raw `X-User-Id` header, kept for clients that
   cannot attach a token yet. Nothing proves the caller owns that id, so it is
   a trust-boundary concession and NOT a security control. Disable it with
   ALLOW_IDENTITY_HEADER=false wherever the API is reachable by untrusted
   clients.

An Authorization header that is presented but does not carry a valid bearer
token fails the request; it never falls through to the header.
"""
import uuid
from dataclasses import dataclass
from typing import Optional, Sequence

from sqlalchemy.orm import Session

from app.errors import Unauthorized
from app.logger import get_logger
from auth.jwt_handler import TokenIssuer
from models.user import User

logger = get_logger(__name__)


@dataclass(frozen=True)
class PresentedIdentity:
    """What the HTTP layer extracted from the request headers."""
    bearer_token: Optional[str] = None
    user_id_header: Optional[str] = None


def _parse_uuid(value: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(value.strip())
    except (ValueError, AttributeError):
        return None


class BearerTokenResolver:
    def __init__(self, token_issuer: TokenIssuer):
        self.token_issuer = token_issuer

    def resolve(self, presented: PresentedIdentity, db: Session) -> Optional[User]:
        if not presented.bearer_token:
            return None

        claims = self.token_issuer.verify(presented.bearer_token)
        user_id = _parse_uuid(claims.get("sub", ""))
        if user_id is None:
            raise Unauthorized()

        user = db.get(User, user_id)
        if user is None:
            logger.info(f"Token subject {user_id} no longer exists")
            raise Unauthorized()
        return user


class IdentityHeaderResolver:
    def resolve(self, presented: PresentedIdentity, db: Session) -> Optional[User]:
        if not presented.user_id_header:
            return None

        user_id = _parse_uuid(presented.user_id_header)
        if user_id is None:
            return None

        user = db.get(User, user_id)
        if user is not None:
            logger.debug(f"Resolved user {user_id} from X-User-Id header")
        return user


class IdentityResolver:
    """Try each strategy in order; the first one that yields a user wins."""

    def __init__(self, resolvers: Sequence):
        self.resolvers = list(resolvers)

    @classmethod
    def default(cls, token_issuer: TokenIssuer, allow_identity_header: bool = True) -> "IdentityResolver":
        resolvers = [BearerTokenResolver(token_issuer)]
        if allow_identity_header:
            resolvers.append(IdentityHeaderResolver())
        return cls(resolvers)

    def resolve(self, presented: PresentedIdentity, db: Session) -> Optional[User]:
        for resolver in self.resolvers:
            user = resolver.resolve(presented, db)
            if user is not None:
                return user
        return None
