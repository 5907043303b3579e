from __future__ import annotations

from fastapi import APIRouter

from movie_api import __version__


router = APIRouter(tags=["version"])


@router.get("/api/version")
async def version() -> dict[str, str]:
    return {"version": __version__}
