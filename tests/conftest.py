import itertools
from datetime import datetime, timedelta, timezone

import pytest

from extensions.object_storage import ObjectStorage
from services.test_case_store import TestCaseStore
from utils.exceptions import StorageError, StoreError


def _serialize(values):
    out = dict(values)
    if isinstance(out.get("updated_at"), datetime):
        out["updated_at"] = out["updated_at"].isoformat()
    return out


class FakeRepository:
    """内存版远端用例表，可按动作注入失败"""

    def __init__(self, rows=None):
        self.rows = {row["id"]: dict(row) for row in rows or []}
        self.fail = set()
        self.calls = []
        self.on_call = None

    def _enter(self, action):
        self.calls.append(action)
        if self.on_call:
            self.on_call(action)
        if action in self.fail:
            raise StoreError(f"{action} 失败: boom")

    def list_all(self):
        self._enter("list")
        return [dict(self.rows[key]) for key in sorted(self.rows)]

    def insert(self, rows):
        self._enter("insert")
        inserted = []
        for row in rows:
            data = _serialize(row)
            self.rows[data["id"]] = data
            inserted.append(dict(data))
        return inserted

    def update(self, partial, match):
        self._enter("update")
        count = 0
        for row in self.rows.values():
            if all(row.get(k) == v for k, v in match.items()):
                row.update(_serialize(partial))
                count += 1
        return count

    def update_all(self, partial):
        self._enter("update_all")
        for row in self.rows.values():
            row.update(_serialize(partial))
        return len(self.rows)

    def delete(self, match):
        self._enter("delete")
        doomed = [k for k, row in self.rows.items() if all(row.get(f) == v for f, v in match.items())]
        for key in doomed:
            del self.rows[key]
        return len(doomed)


class FakeStorage(ObjectStorage):
    """内存版对象存储"""

    def __init__(self):
        self.objects = {}
        self.removed = []
        self.fail = set()

    def upload(self, bucket, key, data, content_type=None):
        if "upload" in self.fail:
            raise StorageError("上传失败: boom")
        self.objects[(bucket, key)] = data

    def get_public_url(self, bucket, key):
        return f"https://cdn.test/{bucket}/{key}"

    def remove(self, bucket, keys):
        if "remove" in self.fail:
            raise StorageError("删除失败: boom")
        for key in keys:
            self.objects.pop((bucket, key), None)
            self.removed.append(key)


class FakeClock:
    """每次调用前进一秒，保证截图 key 唯一"""

    def __init__(self, start=datetime(2025, 1, 1, tzinfo=timezone.utc)):
        self._ticks = itertools.count()
        self.start = start

    def __call__(self):
        return self.start + timedelta(seconds=next(self._ticks))


@pytest.fixture
def fake_repository():
    return FakeRepository()


@pytest.fixture
def fake_storage():
    return FakeStorage()


@pytest.fixture
def make_store(fake_repository, fake_storage):
    counter = itertools.count(1)

    def _create(rows=None):
        if rows is not None:
            fake_repository.rows = {row["id"]: dict(row) for row in rows}
        return TestCaseStore(
            fake_repository,
            fake_storage,
            bucket="screenshots",
            clock=FakeClock(),
            id_factory=lambda: f"user-{next(counter):04d}",
        )
    return _create


@pytest.fixture
def loaded_store(make_store):
    """已加载默认用例的存储"""
    store = make_store()
    store.load()
    return store


@pytest.fixture
def app_context(tmp_path):
    """提供测试用的 Flask 应用上下文（内存数据库 + 本地截图目录）。"""
    from app import create_app
    from extensions.database import db

    app = create_app("testing", {
        "ATTACHMENT_STORAGE_DIR": str(tmp_path / "storage"),
        "LOG_DIR": str(tmp_path / "logs"),
    })
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app_context):
    return app_context.test_client()


def make_row(id, category="Cat", title="Title", ios="untested", android="untested", **extra):
    row = {
        "id": id,
        "category": category,
        "title": title,
        "status": "untested",
        "ios_status": ios,
        "android_status": android,
        "notes": "",
        "screenshots": [],
        "created_by": "seed",
    }
    row.update(extra)
    return row


@pytest.fixture
def row_factory():
    return make_row
