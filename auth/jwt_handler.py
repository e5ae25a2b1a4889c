from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import JWTError, jwt

from app.config import Settings
from app.errors import Unauthorized
from app.logger import get_logger
from models.user import User

logger = get_logger(__name__)

ALGORITHM = "HS256"


@dataclass(frozen=True)
class TokenConfig:
    secret_key: str
    issuer: str
    audience: str
    expires_minutes: int

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenConfig":
        return cls(
            secret_key=settings.jwt_key,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            expires_minutes=settings.jwt_expires_minutes,
        )


class TokenIssuer:
    """
    Issues and verifies stateless HS256 bearer tokens.

    Tokens carry the user's id (`sub`), `email` and `role`. There is no
    revocation list: a token is valid until `exp`.
    """

    def __init__(self, config: TokenConfig):
        self.config = config

    def issue(self, user: User) -> str:
        issued_at = datetime.now(timezone.utc).replace(microsecond=0)
        expire = issued_at + timedelta(minutes=self.config.expires_minutes)
        payload = {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role.value,
            "iss": self.config.issuer,
            "aud": self.config.audience,
            "iat": issued_at,
            "exp": expire,
        }
        return jwt.encode(payload, self.config.secret_key, algorithm=ALGORITHM)

    def verify(self, token: str) -> Dict[str, Any]:
        """Return the claims of a valid token, raise Unauthorized otherwise."""
        try:
            return jwt.decode(
                token,
                self.config.secret_key,
                algorithms=[ALGORITHM],
                audience=self.config.audience,
                issuer=self.config.issuer,
            )
        except JWTError as e:
            logger.debug(f"Rejected bearer token: {e}")
            raise Unauthorized()
