import logging

from fastapi import APIRouter, Request, Depends
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ..config import TEMPLATES_DIR
from ..dependencies import SessionContext, get_session_context

logger = logging.getLogger("authdemo.web")

router = APIRouter(tags=["pages"])
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


@router.get("/", response_class=HTMLResponse)
def home(
    request: Request,
    session: SessionContext = Depends(get_session_context)
):
    """Home page; just render a template with some arguments."""
    logger.info("Visiting home page as %r", session.user)
    return templates.TemplateResponse("page.html", {
        "request": request,
        "session": session,
        "paras": [("first", 3), ("second", 7)],
    })
