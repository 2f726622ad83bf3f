"""Dockerflow Endpoints."""

import logging
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as package_version

from fastapi import APIRouter, HTTPException
from fastapi.responses import RedirectResponse, Response
from pydantic import BaseModel

router = APIRouter()
logger = logging.getLogger(__name__)


class Version(BaseModel):
    """Version of the running service."""

    name: str = "iconfinder"
    version: str


@router.get("/", include_in_schema=False)
async def redirect_home_to_docs():
    """Redirects home endpoint to the interactive documentation provided by FastAPI."""
    return RedirectResponse(url="/docs")


@router.get("/__version__", tags=["__version__"], summary="Dockerflow: __version__")
async def version() -> Version:
    """Dockerflow: Query the version of the installed iconfinder distribution."""
    try:
        return Version(version=package_version("iconfinder"))
    except PackageNotFoundError:
        logger.error("The iconfinder distribution is not installed")
        raise HTTPException(status_code=500, detail="Version is not available")


@router.get("/__heartbeat__", tags=["__heartbeat__"], summary="Dockerflow: __heartbeat__")
async def heartbeat() -> Response:
    """Dockerflow: Query service heartbeat. Answers with an empty body."""
    return Response(content="")


@router.get(
    "/__lbheartbeat__", tags=["__lbheartbeat__"], summary="Dockerflow: __lbheartbeat__"
)
async def lbheartbeat() -> Response:
    """Dockerflow: Load balancer heartbeat. Answers with an empty body."""
    return Response(content="")
