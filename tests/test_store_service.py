from __future__ import annotations

import json
import logging
import sys
import threading
from pathlib import Path

import pytest

# Garante que o pacote todo_api seja importável durante os testes locais
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from todo_api.domain.records import Task, User  # noqa: E402
from todo_api.domain.store import Store  # noqa: E402
from todo_api.repositories import json_storage  # noqa: E402
from todo_api.repositories.json_storage import StorageEncodeError, StorageIOError  # noqa: E402
from todo_api.services.store_service import (  # noqa: E402
    RecordNotFoundError,
    StoreService,
    TaskNotFoundError,
    UserNotFoundError,
    load_or_empty,
)


@pytest.fixture()
def data_file(tmp_path):
    return tmp_path / "data.json"


@pytest.fixture()
def svc(data_file):
    return StoreService.from_file(data_file)


def test_load_or_empty_missing_file(data_file, caplog):
    with caplog.at_level(logging.INFO):
        store = load_or_empty(data_file)
    assert store == Store()
    assert "starting with an empty store" in caplog.text


def test_load_or_empty_broken_file_logs_warning(data_file, caplog):
    data_file.write_text("garbage", encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        store = load_or_empty(data_file)
    assert store.is_empty()
    assert any(r.levelno == logging.WARNING for r in caplog.records)


def test_load_or_empty_reads_existing_file(data_file):
    existing = Store()
    existing.users.add(User(id=1, username="u", password="p"))
    json_storage.save(existing, data_file)
    assert load_or_empty(data_file) == existing


def test_mutations_persist_immediately(svc, data_file):
    svc.add_task(Task(id=1, name="buy milk", completed=False))
    assert json_storage.load(data_file).tasks.get(1) == Task(id=1, name="buy milk", completed=False)

    svc.update_user(User(id=3, username="bob", password="pw"))
    assert json_storage.load(data_file).users.get(3).username == "bob"

    svc.delete_task(1)
    assert json_storage.load(data_file).tasks.get(1) is None


def test_reads_do_not_write_the_file(svc, data_file):
    svc.list_tasks()
    svc.list_users()
    with pytest.raises(TaskNotFoundError):
        svc.get_task(1)
    assert not data_file.exists()


def test_delete_absent_id_still_persists(svc, data_file):
    svc.delete_user(99)
    assert json.loads(data_file.read_text(encoding="utf-8")) == {"tasks": {}, "users": {}}


def test_not_found_errors_carry_id(svc):
    with pytest.raises(UserNotFoundError) as excinfo:
        svc.get_user(5)
    assert isinstance(excinfo.value, RecordNotFoundError)
    assert excinfo.value.record_id == 5
    assert "user 5" in str(excinfo.value)


def test_restart_keeps_state(data_file):
    first = StoreService.from_file(data_file)
    first.add_task(Task(id=1, name="buy milk", completed=False))
    second = StoreService.from_file(data_file)
    assert second.get_task(1) == Task(id=1, name="buy milk", completed=False)


def test_failed_save_raises_and_keeps_memory(tmp_path):
    # a directory in place of the data file makes every write fail
    svc = StoreService(Store(), tmp_path)
    with pytest.raises(StorageIOError):
        svc.add_task(Task(id=1, name="x", completed=False))
    assert svc.get_task(1).name == "x"


def test_service_without_data_file_is_memory_only():
    svc = StoreService()
    svc.add_user(User(id=1, username="u", password="p"))
    assert [u.id for u in svc.list_users()] == [1]


def test_concurrent_mutations_are_all_persisted(svc, data_file):
    barrier = threading.Barrier(2)

    def add(task_id):
        barrier.wait()
        svc.add_task(Task(id=task_id, name=f"t{task_id}", completed=False))

    threads = [threading.Thread(target=add, args=(i,)) for i in (1, 2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)

    assert {t.id for t in svc.list_tasks()} == {1, 2}
    assert {t.id for t in json_storage.load(data_file).tasks.list()} == {1, 2}


def test_many_concurrent_writers(svc, data_file):
    def work(i):
        svc.add_task(Task(id=i, name="t", completed=False))
        svc.add_user(User(id=i, username=f"u{i}", password="p"))

    threads = [threading.Thread(target=work, args=(i,)) for i in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)

    persisted = json_storage.load(data_file)
    assert len(persisted.tasks) == 20
    assert len(persisted.users) == 20


def test_reads_wait_for_the_lock(svc):
    done = threading.Event()

    def reader():
        svc.list_tasks()
        done.set()

    with svc._lock:
        t = threading.Thread(target=reader)
        t.start()
        assert not done.wait(0.1)
    t.join(timeout=5)
    assert done.is_set()


def test_unencodable_new_record_is_rolled_back(svc, data_file):
    svc.add_task(Task(id=1, name="buy milk", completed=False))
    before = data_file.read_bytes()

    with pytest.raises(StorageEncodeError):
        svc.add_task(Task(id=2, name="\ud800", completed=False))

    with pytest.raises(TaskNotFoundError):
        svc.get_task(2)
    assert data_file.read_bytes() == before
    # the next write is not blocked by the rejected record
    svc.add_task(Task(id=3, name="ok", completed=True))
    assert {t.id for t in json_storage.load(data_file).tasks.list()} == {1, 3}


def test_unencodable_update_restores_previous_record(svc, data_file):
    original = User(id=7, username="a", password="p")
    svc.add_user(original)

    with pytest.raises(StorageEncodeError):
        svc.update_user(User(id=7, username="b", password="\udfff"))

    assert svc.get_user(7) == original
    assert json_storage.load(data_file).users.get(7) == original


def test_load_or_empty_file_without_records(data_file, caplog):
    json_storage.save(Store(), data_file)
    with caplog.at_level(logging.INFO):
        store = load_or_empty(data_file)
    assert store.is_empty()
    assert "holds no records" in caplog.text
