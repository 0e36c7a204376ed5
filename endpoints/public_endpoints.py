from __future__ import annotations

import logging
import re
from http import HTTPStatus
from importlib import metadata
from pathlib import Path

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.responses import FileResponse, JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from settings import Settings

router = APIRouter(tags=["public"])
logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = "hoodie-store"
DEVELOPMENT_VERSION = "development"

HTML_ACCEPT_RE = re.compile(r"text/html")


class HoodieStatus(BaseModel):
    hoodie: bool = True
    name: str
    version: str


def resolve_version() -> str:
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return DEVELOPMENT_VERSION


def _settings(request: Request) -> Settings:
    return request.app.state.settings


def _data_file(request: Request, filename: str) -> FileResponse:
    path = _settings(request).data_dir / filename
    if not path.is_file():
        raise HTTPException(status_code=404, detail="Not Found")
    return FileResponse(path, media_type="application/javascript")


@router.get("/hoodie")
async def hoodie_status(request: Request) -> HoodieStatus:
    return HoodieStatus(name=_settings(request).name, version=request.app.state.version)


@router.get("/hoodie/client.js")
async def hoodie_client(request: Request) -> FileResponse:
    return _data_file(request, "client.js")


@router.get("/hoodie/client.min.js")
async def hoodie_client_min(request: Request) -> FileResponse:
    return _data_file(request, "client.min.js")


def _error_body(status_code: int, detail: object) -> dict[str, object]:
    try:
        error = HTTPStatus(status_code).phrase
    except ValueError:
        error = "Unknown"
    return {
        "statusCode": status_code,
        "error": error,
        "message": detail if detail is not None else error,
    }


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """
    Serve the app whenever an html page is requested and no other document is available.
    Everything else gets a JSON error body.
    """
    # TODO: do not serve the app when request.url.path starts with /hoodie/
    if exc.status_code == 404 and HTML_ACCEPT_RE.search(request.headers.get("accept", "")):
        index = _settings(request).public_dir / "index.html"
        if index.is_file():
            logger.debug("PUBLIC 404: serving %s for %s", index, request.url.path)
            return FileResponse(index, media_type="text/html")
        logger.warning("PUBLIC 404: no app to serve, %s is missing", index)

    return JSONResponse(
        _error_body(exc.status_code, exc.detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


def install_public(app: FastAPI, public_dir: Path) -> None:
    """
    Register the error handler and mount the public directory.
    Must run after every other route is registered: the mount at "/" matches everything.
    """
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    if not public_dir.is_dir():
        logger.warning("PUBLIC: %s does not exist, not serving static files", public_dir)
        return
    app.mount("/", StaticFiles(directory=public_dir, html=True), name="public")
