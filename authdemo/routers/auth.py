import logging

from fastapi import APIRouter, Depends, Request, Form, status
from fastapi.responses import RedirectResponse, HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..auth import create_user, validate_signup
from ..config import SESSION_COOKIE_NAME, TEMPLATES_DIR
from ..dependencies import SessionContext, get_session_context

logger = logging.getLogger("authdemo.web")

router = APIRouter(tags=["auth"])
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def _redirect_home() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)


@router.get("/login", response_class=HTMLResponse)
def get_login(
    request: Request,
    session: SessionContext = Depends(get_session_context)
):
    """Login page."""
    return templates.TemplateResponse("login.html", {
        "request": request,
        "session": session,
        "message": None,
    })


@router.post("/login")
def post_login(
    request: Request,
    user: str = Form(""),
    password: str = Form(""),
    session: SessionContext = Depends(get_session_context)
):
    """Verify a login attempt.

    Correct credentials get a session cookie and a redirect to the home
    page; anything else shows the login form again with a message.
    """
    session_key = session.authenticate(user, password)

    if not session_key:
        return templates.TemplateResponse("login.html", {
            "request": request,
            "session": session,
            "message": "Authentication failed",
        })

    response = _redirect_home()
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=session_key,
        httponly=True,
        samesite="strict"
    )
    return response


@router.post("/logout")
def logout(
    session: SessionContext = Depends(get_session_context)
):
    """Handle user logout."""
    session.clear()

    response = _redirect_home()
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        httponly=True,
        samesite="strict"
    )
    return response


@router.get("/signup", response_class=HTMLResponse)
def get_signup(
    request: Request,
    session: SessionContext = Depends(get_session_context)
):
    """Signup page."""
    return templates.TemplateResponse("signup.html", {
        "request": request,
        "session": session,
        "message": None,
    })


@router.post("/signup")
def post_signup(
    request: Request,
    user: str = Form(""),
    realname: str = Form(""),
    password: str = Form(""),
    session: SessionContext = Depends(get_session_context)
):
    """Handle a submitted signup form."""
    message = validate_signup(user, realname, password)

    if not message:
        try:
            create_user(session.db, user, realname, password)
        except ValueError as e:
            logger.error("Hash failed for %r: %s", user, e)
            message = "Hash failed"
        except IntegrityError:
            session.db.rollback()
            logger.info("Signup for taken username %r", user)
            message = "That username is already taken"
        except SQLAlchemyError as e:
            session.db.rollback()
            logger.error("Failed to create user %r: %s", user, e)
            message = "Could not create the user, please try again"

    if message:
        return templates.TemplateResponse("signup.html", {
            "request": request,
            "session": session,
            "message": message,
        })

    return _redirect_home()
