from .user import User
from .session import Session

__all__ = [
    "User",
    "Session",
]
