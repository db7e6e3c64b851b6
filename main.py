import logging

from fastapi import FastAPI
from contextlib import asynccontextmanager

from authdemo.config import LOG_LEVEL
from authdemo.database import create_db_and_tables
from authdemo.errors import register_error_handlers
from authdemo.routers import auth, pages, static

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup: Create database tables
    create_db_and_tables()
    yield


# Initialize FastAPI app
app = FastAPI(
    title="Auth example",
    description="Session based login and signup backed by a database",
    version="1.0.0",
    lifespan=lifespan
)

# Include routers
app.include_router(static.router)
app.include_router(auth.router)
app.include_router(pages.router)

register_error_handlers(app)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="127.0.0.1", port=3030)
