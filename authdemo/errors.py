import logging
from http import HTTPStatus

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.templating import Jinja2Templates
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import TEMPLATES_DIR

logger = logging.getLogger("authdemo.errors")
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


class AppError(Exception):
    """An error that is shown to the client as a canned HTML page."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Something went wrong."


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "The resource you requested could not be located."


class InternalError(AppError):
    pass


def render_error(request: Request, error: AppError):
    """Render the error page for an AppError."""
    return templates.TemplateResponse(
        "error.html",
        {
            "request": request,
            "status_code": error.status_code,
            "reason": HTTPStatus(error.status_code).phrase,
            "message": error.message,
        },
        status_code=error.status_code,
    )


async def app_error_handler(request: Request, exc: AppError):
    return render_error(request, exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Map routing failures onto the two error pages."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        logger.info("Got a 404 for %s", request.url.path)
        return render_error(request, NotFound())
    logger.warning("Got error %s for %s %s", exc.status_code, request.method, request.url.path)
    return render_error(request, InternalError())


async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning("Rejected request to %s: %s", request.url.path, exc.errors())
    return render_error(request, InternalError())


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return render_error(request, InternalError())


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return render_error(request, InternalError())


def register_error_handlers(app) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
