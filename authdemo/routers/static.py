import logging
import mimetypes
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime

from fastapi import APIRouter
from fastapi.responses import FileResponse

from ..config import STATIC_DIR, STATIC_MAX_AGE
from ..errors import NotFound

logger = logging.getLogger("authdemo.web")

router = APIRouter(tags=["static"])


def _bundled_files():
    """Index the files shipped in the static directory by name."""
    files = {}
    for path in sorted(STATIC_DIR.iterdir()):
        if not path.is_file():
            continue
        mime, _ = mimetypes.guess_type(path.name)
        files[path.name] = (path, mime or "application/octet-stream")
    return files


STATIC_FILES = _bundled_files()


@router.get("/static/{name}")
async def static_file(name: str):
    """Serve a bundled static file with a far expires header, or a 404."""
    entry = STATIC_FILES.get(name)
    if entry is None:
        logger.info("Static file %s not found", name)
        raise NotFound()

    path, mime = entry
    expires = datetime.now(timezone.utc) + timedelta(seconds=STATIC_MAX_AGE)
    return FileResponse(
        path,
        media_type=mime,
        headers={
            "Cache-Control": f"public, max-age={STATIC_MAX_AGE}",
            "Expires": format_datetime(expires, usegmt=True),
        },
    )
