from typing import Optional
from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """A login identity. `password` holds the bcrypt hash, never plain text."""
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True, max_length=100)
    realname: str = Field(max_length=200)
    password: str = Field(max_length=255)

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, username={self.username!r})"
