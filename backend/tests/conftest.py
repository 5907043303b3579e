from __future__ import annotations

import asyncio
from collections.abc import Iterator
from pathlib import Path
import sys

import pytest
from fastapi.testclient import TestClient


# Ensure `import movie_api.*` works when pytest chooses an import mode that
# doesn't automatically add the backend root to sys.path.
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))


CORRELATION_HEADER = "CorrelationId"


@pytest.fixture()
def client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    # Isolated sqlite DB per test.
    db_path = tmp_path / "test.db"
    monkeypatch.setenv("MOVIE_API_DB_URL", f"sqlite+aiosqlite:///{db_path.as_posix()}")
    monkeypatch.setenv("MOVIE_API_CORRELATION_HEADER", CORRELATION_HEADER)

    # Clear settings cache and reset DB engine/sessionmaker.
    from movie_api.core.settings import get_settings

    get_settings.cache_clear()

    from movie_api.db import session as db_session

    db_session._engine = None  # noqa: SLF001
    db_session._sessionmaker = None  # noqa: SLF001

    # Import models so Base.metadata is fully populated.
    import movie_api.models  # noqa: F401

    from movie_api.db.base import Base

    async def _init_schema() -> None:
        engine = db_session.get_engine()
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        # The engine is bound to this event loop; TestClient runs its own.
        await db_session.dispose_engine()

    asyncio.run(_init_schema())

    from movie_api.main import create_app

    app = create_app()
    # One portal for the whole test so pooled connections stay on one loop.
    with TestClient(app) as test_client:
        yield test_client
