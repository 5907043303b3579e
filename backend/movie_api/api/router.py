from __future__ import annotations

from fastapi import APIRouter

from movie_api.api.health import build_health_router
from movie_api.api.movies import router as movies_router
from movie_api.api.movies import sample_router
from movie_api.api.version import router as version_router


def build_api_router(health_endpoint: str) -> APIRouter:
    api_router = APIRouter()
    api_router.include_router(build_health_router(health_endpoint))
    api_router.include_router(version_router)
    api_router.include_router(movies_router)
    api_router.include_router(sample_router)
    return api_router
