from __future__ import annotations

import time

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from movie_api.db.session import get_db
from movie_api.models.movie import Movie


MOVIES_DB_CHECK = "MOVIES.DB"


async def _check_database(db: AsyncSession) -> dict[str, object]:
    started = time.perf_counter()
    try:
        # Fails if the schema has not been migrated.
        await db.execute(select(Movie.id).limit(1))
        value, description = "Healthy", None
    except Exception as exc:
        value, description = "Unhealthy", type(exc).__name__
    return {
        "key": MOVIES_DB_CHECK,
        "value": value,
        "description": description,
        "duration": round(time.perf_counter() - started, 6),
    }


def build_health_router(endpoint: str) -> APIRouter:
    router = APIRouter(tags=["health"])

    @router.get("/healthz")
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    @router.get(endpoint)
    async def health(db: AsyncSession = Depends(get_db)) -> JSONResponse:
        details = [await _check_database(db)]
        healthy = all(d["value"] == "Healthy" for d in details)
        return JSONResponse(
            status_code=200 if healthy else 503,
            content={"status": "Healthy" if healthy else "Unhealthy", "details": details},
        )

    return router
