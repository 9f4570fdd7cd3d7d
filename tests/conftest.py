import asyncio
import os
import tempfile

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

# Point the application engine at a throwaway file before fair_verifier is imported
_fd, _app_db = tempfile.mkstemp(suffix=".sqlite3")
os.close(_fd)
os.environ["DB_BACKEND"] = "sqlite"
os.environ["SQLITE_PATH"] = _app_db
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "admin-password"

from fair_verifier.db import create_tables  # noqa: E402


class FakePubSub:
    def __init__(self, messages):
        self.messages = list(messages)
        self.subscribed = []
        self.closed = False

    async def subscribe(self, channel):
        self.subscribed.append(channel)

    async def unsubscribe(self, channel):
        self.subscribed.remove(channel)

    async def get_message(self, ignore_subscribe_messages=False, timeout=None):
        if self.messages:
            return self.messages.pop(0)
        return None

    async def close(self):
        self.closed = True


class FakeRedis:
    """Stands in for redis.asyncio.Redis: publish feeds the single pub/sub handle."""

    def __init__(self, messages=()):
        self.handle = FakePubSub(messages)
        self.published = []

    def pubsub(self):
        return self.handle

    async def publish(self, channel, data):
        self.published.append((channel, data))
        self.handle.messages.append({"type": "message", "channel": channel, "data": data})
        return 1


@pytest.fixture
def run_db(tmp_path):
    """Run `scenario(Session)` against a fresh database in its own event loop."""

    def run(scenario, create=True):
        async def runner():
            engine = create_async_engine(
                f"sqlite+aiosqlite:///{tmp_path / 'store.sqlite3'}", poolclass=NullPool
            )
            if create:
                await create_tables(engine)
            Session = async_sessionmaker(autocommit=False, class_=AsyncSession, bind=engine)
            try:
                return await scenario(Session)
            finally:
                await engine.dispose()

        return asyncio.run(runner())

    return run


@pytest.fixture
def fake_redis():
    return FakeRedis()


def pytest_sessionfinish(session, exitstatus):
    if os.path.exists(_app_db):
        os.unlink(_app_db)
