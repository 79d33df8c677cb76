import itertools
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import List, Optional

import pytest
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from apps import create_app
from apps.core.window import is_current, is_expired
from apps.dependencies.auth import get_current_user
from apps.services.status_service import StatusLookupService
from apps.services.store import CURRENT, EXPIRED, StatusNotFound, TortoiseStatusStore
from apps.utils.redis_ import get_redis_client

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)

_ids = itertools.count(1)


@dataclass
class StatusRecord:
    device_types: List[str] = field(default_factory=lambda: ["*"])
    device_sem_version: str = "*"
    app_sem_version: str = "*"
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    is_activated: bool = True
    type: str = "notice"
    title: str = "maintenance"
    contents: Optional[str] = None
    url: Optional[str] = None
    id: int = field(default_factory=lambda: next(_ids))
    created_at: datetime = NOW - timedelta(days=1)
    updated_at: datetime = NOW - timedelta(days=1)


class MemoryStatusStore:
    """与 TortoiseStatusStore 接口一致的内存实现"""

    def __init__(self, records=()):
        self.records = {record.id: record for record in records}

    def _filter(self, window, is_activated, now):
        now = now or NOW
        for record in self.records.values():
            if window == CURRENT and not is_current(record, now):
                continue
            if window == EXPIRED and not is_expired(record, now):
                continue
            if is_activated is not None and record.is_activated != is_activated:
                continue
            yield record

    async def find(self, window=None, is_activated=None, now=None, order_by=(), skip=0, limit=None):
        records = list(self._filter(window, is_activated, now))
        end = None if limit is None else skip + limit
        return records[skip:end]

    async def count(self, window=None, is_activated=None, now=None):
        return len(list(self._filter(window, is_activated, now)))

    async def insert(self, fields):
        record = StatusRecord(**fields, created_at=NOW, updated_at=NOW)
        self.records[record.id] = record
        return record

    async def update_by_id(self, status_id, set_fields, unset_fields=()):
        if status_id not in self.records:
            raise StatusNotFound(status_id)
        record = self.records[status_id]
        for key, value in set_fields.items():
            setattr(record, key, value)
        for key in unset_fields:
            setattr(record, key, None)
        return record

    async def delete_by_id(self, status_id):
        if self.records.pop(status_id, None) is None:
            raise StatusNotFound(status_id)


class FakeRedis:
    def __init__(self):
        self.data = {}

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value, ex=None):
        self.data[key] = value

    async def delete(self, key):
        self.data.pop(key, None)


@pytest.fixture
def make_status():
    return StatusRecord


@pytest.fixture
def memory_store():
    return MemoryStatusStore()


@pytest.fixture
async def db():
    await Tortoise.init(
        db_url="sqlite://:memory:",
        modules={"models": ["apps.models.status", "apps.models.user"]},
        use_tz=True,
        timezone="UTC",
    )
    await Tortoise.generate_schemas()
    yield
    await Tortoise.close_connections()


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def app(db, fake_redis):
    application = create_app()
    application.state.status_service = StatusLookupService(TortoiseStatusStore())
    application.dependency_overrides[get_redis_client] = lambda: fake_redis
    return application


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def admin_client(app):
    app.dependency_overrides[get_current_user] = lambda: SimpleNamespace(id=1, username="admin")
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
