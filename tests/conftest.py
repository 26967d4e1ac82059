import os
import tempfile
from pathlib import Path

# Must be set before app.core.db builds its engine
_DB_PATH = Path(tempfile.gettempdir()) / "item_locations_test.db"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_PATH}"

import httpx
import pytest
from asgi_lifespan import LifespanManager
from sqlalchemy import event

from app.main import app
from app.core.db import Base, SessionLocal, engine
from app.models import models  # noqa: F401


@event.listens_for(engine.sync_engine, "connect")
def _sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
async def db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    async with SessionLocal() as session:
        yield session
    await engine.dispose()


@pytest.fixture
async def client(db):
    async with LifespanManager(app):
        async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
