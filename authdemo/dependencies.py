import logging
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from .auth import authenticate_user, generate_session_key
from .config import SESSION_COOKIE_NAME
from .database import get_session
from .models.session import Session as UserSession
from .models.user import User

logger = logging.getLogger("authdemo.session")


class SessionContext:
    """Per-request session state handed to every page handler.

    Holds the request's database session and, when the client presented a
    valid cookie, the matching session row id and its user.
    """

    def __init__(self, db: Session, id: Optional[int] = None, user: Optional[User] = None):
        self.db = db
        self.id = id
        self.user = user

    @classmethod
    def from_key(cls, db: Session, session_key: Optional[str]) -> "SessionContext":
        """Load the session matching `session_key`.

        A missing key or one without a matching row gives an anonymous
        context; the database handle is kept either way.
        """
        if not session_key:
            return cls(db)

        statement = (
            select(UserSession.id, User)
            .join(User, User.id == UserSession.user_id)
            .where(UserSession.cookie == session_key)
        )
        row = db.exec(statement).first()
        if row is None:
            logger.debug("No session for the presented key")
            return cls(db)

        session_id, user = row
        logger.debug("Got session #%s for %r", session_id, user)
        return cls(db, id=session_id, user=user)

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def authenticate(self, username: str, password: str) -> Optional[str]:
        """Log in, returning a new session key (or None on failure)."""
        user = authenticate_user(self.db, username, password)
        if user is None:
            return None
        logger.debug("User %r authenticated", user)

        secret = generate_session_key()
        user_session = UserSession(user_id=user.id, cookie=secret)
        try:
            self.db.add(user_session)
            self.db.commit()
            self.db.refresh(user_session)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Failed to create session for %r: %s", username, e)
            return None

        self.id = user_session.id
        self.user = user
        return secret

    def clear(self) -> None:
        """Forget the logged-in user and delete this session's row.

        The database handle is kept. A failed delete is logged only.
        """
        if self.id is not None:
            try:
                user_session = self.db.get(UserSession, self.id)
                if user_session:
                    self.db.delete(user_session)
                    self.db.commit()
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error("Failed to delete session %s: %s", self.id, e)
        self.id = None
        self.user = None


def get_session_context(
    request: Request,
    db: Session = Depends(get_session)
) -> SessionContext:
    """Attach a session context derived from the session cookie."""
    return SessionContext.from_key(db, request.cookies.get(SESSION_COOKIE_NAME))
