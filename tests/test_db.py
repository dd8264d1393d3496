# tests/test_db.py
from datetime import date

import pytest

import db
from db import StoreError


def _member(store, name="Ann", role="Developer"):
    return store.insert_rows("members", [{"name": name, "role": role}])[0]


def test_insert_returns_stored_rows(store):
    row = _member(store)
    assert set(row) == {"id", "name", "role", "created_at"}
    assert row["id"] and row["created_at"] is not None
    assert store.list_rows("members") == [row]


def test_task_defaults_and_deadline_parsing(store):
    m = _member(store)
    t = store.insert_rows("tasks", [{"title": "Fix bug", "assignee": m["id"], "deadline": "2025-01-01"}])[0]
    assert t["status"] == "todo"
    assert t["deadline"] == date(2025, 1, 1)


def test_invalid_status_is_rejected(store):
    m = _member(store)
    with pytest.raises(StoreError):
        store.insert_rows("tasks", [{"title": "X", "assignee": m["id"], "deadline": date(2025, 1, 1), "status": "done"}])
    t = store.insert_rows("tasks", [{"title": "Y", "assignee": m["id"], "deadline": date(2025, 1, 1)}])[0]
    with pytest.raises(StoreError):
        store.update_row("tasks", t["id"], {"status": "done"})


def test_assignee_must_exist(store):
    with pytest.raises(StoreError):
        store.insert_rows("tasks", [{"title": "X", "assignee": "nobody", "deadline": date(2025, 1, 1)}])


def test_update_task_status(store):
    m = _member(store)
    t = store.insert_rows("tasks", [{"title": "Fix bug", "assignee": m["id"], "deadline": date(2025, 1, 1)}])[0]
    store.update_row("tasks", t["id"], {"status": "completed"})
    (after,) = store.list_rows("tasks")
    assert after["status"] == "completed"
    assert after["title"] == "Fix bug"


def test_update_unknown_id_is_a_no_op(store):
    store.update_row("tasks", "missing", {"status": "completed"})
    assert store.list_rows("tasks") == []


def test_delete_member_cascades_to_tasks(store):
    ann = _member(store, "Ann")
    bo = _member(store, "Bo", "Designer")
    store.insert_rows("tasks", [
        {"title": "A", "assignee": ann["id"], "deadline": date(2025, 1, 1)},
        {"title": "B", "assignee": bo["id"], "deadline": date(2025, 1, 1)},
    ])
    store.delete_row("members", ann["id"])
    assert [m["name"] for m in store.list_rows("members")] == ["Bo"]
    assert [t["title"] for t in store.list_rows("tasks")] == ["B"]


@pytest.mark.parametrize("call", [
    lambda s: s.delete_row("tasks", "t1"),
    lambda s: s.update_row("members", "m1", {"name": "X"}),
])
def test_policies_block_operations(store, call):
    with pytest.raises(StoreError, match="not permitted"):
        call(store)


def test_requires_session(store, auth):
    auth.sign_out()
    with pytest.raises(StoreError, match="not authenticated"):
        store.list_rows("members")


def test_store_without_auth_is_rejected(engine):
    with pytest.raises(StoreError, match="not authenticated"):
        db.TableStore(None, bind=engine).list_rows("tasks")


def test_unknown_collection_and_column(store):
    with pytest.raises(StoreError, match="Unknown collection"):
        store.list_rows("projects")
    with pytest.raises(StoreError, match="Unknown column"):
        store.insert_rows("members", [{"name": "Ann", "role": "Developer", "email": "a@x.com"}])


def test_identifier_cannot_be_patched(store):
    with pytest.raises(StoreError):
        store.update_row("tasks", "t1", {"id": "t2"})


def test_get_setting_prefers_environment_over_default(monkeypatch):
    monkeypatch.setenv("TRAWORK_TEST_SETTING", "from-env")
    assert db.get_setting("TRAWORK_TEST_SETTING", "default") == "from-env"
    monkeypatch.delenv("TRAWORK_TEST_SETTING")
    assert db.get_setting("TRAWORK_TEST_SETTING", "default") == "default"


def test_member_role_must_be_a_known_label(store):
    with pytest.raises(StoreError):
        store.insert_rows("members", [{"name": "Eve", "role": "Wizard"}])
    assert store.list_rows("members") == []


def test_created_at_is_set_on_insert(store):
    row = _member(store)
    assert row["created_at"] is not None
