from typing import Callable, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.errors import InvalidRequest, Unauthorized
from app.logger import get_logger
from auth.jwt_handler import TokenIssuer
from auth.security import verify_password
from models.user import User

logger = get_logger(__name__)


class Authenticator:
    """
    Email/password login.

    Unknown email and wrong password raise the same Unauthorized so a caller
    cannot probe which accounts exist.
    """

    def __init__(
        self,
        db: Session,
        token_issuer: TokenIssuer,
        password_verifier: Callable[[str, str], bool] = verify_password,
    ):
        self.db = db
        self.token_issuer = token_issuer
        self.password_verifier = password_verifier

    def find_user(self, email: str) -> Optional[User]:
        normalized = email.strip().lower()
        return self.db.execute(
            select(User).where(func.lower(User.email) == normalized)
        ).scalar_one_or_none()

    def login(self, email: Optional[str], password: Optional[str]) -> str:
        if not email or not email.strip() or not password or not password.strip():
            raise InvalidRequest("Email and password required")

        user = self.find_user(email)
        # Unknown accounts are checked against an empty hash so both failures
        # cost the same.
        password_hash = (user.password_hash if user is not None else None) or ""
        if not self.password_verifier(password, password_hash) or user is None:
            logger.info("Login failed")
            raise Unauthorized()

        logger.info(f"User {user.id} logged in ({user.role.value})")
        return self.token_issuer.issue(user)
