# (c) Copyright Datacraft, 2026
"""Version endpoint."""
from fastapi import APIRouter
from pydantic import BaseModel

from sarah.core.version import __version__

router = APIRouter(tags=["version"])


class Version(BaseModel):
	version: str


@router.get("/version")
def get_version() -> Version:
	return Version(version=__version__)
