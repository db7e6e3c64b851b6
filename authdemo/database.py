from sqlmodel import SQLModel, Session, create_engine
from .config import get_database_url

DATABASE_URL = get_database_url()

# SQLite needs to be shared across the threadpool FastAPI runs handlers on
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    DATABASE_URL,
    echo=False,
    connect_args=connect_args,
    pool_pre_ping=True,
)


def create_db_and_tables():
    """Create all database tables."""
    # Make sure the table classes are registered on the metadata
    from . import models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session():
    """Dependency for getting database sessions."""
    with Session(engine) as session:
        yield session
