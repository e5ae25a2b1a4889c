from passlib.context import CryptContext

from app.config import settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """
    Return False for a missing or unparseable hash instead of raising.

    A missing hash still pays for one bcrypt round trip, so callers cannot
    tell "no such account" from "wrong password" by timing.
    """
    if not password_hash:
        pwd_context.dummy_verify()
        return False
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        pwd_context.dummy_verify()
        return False
