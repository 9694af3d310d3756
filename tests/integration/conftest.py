import asyncio
import os
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, TypeVar

import pytest

from video_tracker.config.settings import Settings
from video_tracker.database import connection
from video_tracker.database.connection import close_pool, get_connection, init_pool

T = TypeVar("T")

SCHEMA_PATH = Path(connection.__file__).with_name("schema.sql")


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "video_tracker_test")
    return Settings(recorder_timeout_seconds=5)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture
def run_with_pool(test_settings: Settings) -> Callable[[Callable[[], Awaitable[T]]], T]:
    """Run an async body against a freshly opened pool with the schema applied.

    The async pool is bound to the event loop that opened it, so each call
    opens and closes its own pool inside a single asyncio.run().
    """

    async def _run(body: Callable[[], Awaitable[Any]]) -> Any:
        try:
            await init_pool(test_settings)
        except Exception as e:
            pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env vars.")
        try:
            async with get_connection() as conn:
                await conn.execute(SCHEMA_PATH.read_text())
                await conn.commit()
            return await body()
        finally:
            await close_pool()

    return lambda body: asyncio.run(_run(body))
