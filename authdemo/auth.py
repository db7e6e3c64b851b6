import logging
import secrets
import string
from functools import lru_cache
from typing import Optional

import bcrypt
from sqlmodel import Session, select

from .config import SESSION_KEY_LENGTH
from .models import User

logger = logging.getLogger("authdemo.auth")

SESSION_KEY_ALPHABET = string.ascii_letters + string.digits


def _password_bytes(password: str) -> bytes:
    # Bcrypt has a 72-byte limit on the password bytes
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > 72:
        password_bytes = password_bytes[:72]
    return password_bytes


def hash_password(password: str) -> str:
    """Hash a password using bcrypt with the library's default cost."""
    hashed = bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt())
    # Return as string for database storage
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash.

    Raises ValueError if the stored hash is not a valid bcrypt hash.
    """
    return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode("utf-8"))


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password(secrets.token_urlsafe(16))


def generate_session_key(length: int = SESSION_KEY_LENGTH) -> str:
    """Generate a random alphanumeric session key."""
    return "".join(secrets.choice(SESSION_KEY_ALPHABET) for _ in range(length))


def authenticate_user(db: Session, username: str, password: str) -> Optional[User]:
    """Authenticate a user by username and password.

    An unknown user and a wrong password give the same result.
    """
    statement = select(User).where(User.username == username)
    user = db.exec(statement).first()

    if not user:
        # Pay the same hashing cost as a real check
        verify_password(password, _dummy_hash())
        logger.info("Login failed for %r: no such user", username)
        return None

    try:
        verified = verify_password(password, user.password)
    except ValueError as e:
        logger.error("Verify failed for %r: %s", username, e)
        return None

    if not verified:
        logger.info("Login failed for %r: bad password", username)
        return None

    return user


def validate_signup(username: str, realname: str, password: str) -> Optional[str]:
    """Check a signup form, returning the first problem found (or None)."""
    if len(username) < 2:
        return "Username must be at least two characters"
    if not realname:
        return "A real name (or pseudonym) must be given"
    if len(password) < 3:
        return "Please use a better password"
    return None


def create_user(db: Session, username: str, realname: str, password: str) -> User:
    """Create a new user.

    The insert is the last step, so nothing is left behind if it fails.
    """
    user = User(
        username=username,
        realname=realname,
        password=hash_password(password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Created user %r", username)
    return user
