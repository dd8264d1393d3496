# tests/fakes.py
from __future__ import annotations

import uuid
from datetime import timedelta

from auth import Session
from db import StoreError
from utils.dates import utcnow


def make_session(user_id: int = 1, email: str = "ann@example.com") -> Session:
    return Session(user_id=user_id, email=email, access_token="token",
                   expires_at=utcnow() + timedelta(hours=1))


class FakeStore:
    """
    In-memory stand-in for db.TableStore.

    - Records every call in ``calls``
    - Raises StoreError for any collection/op pair listed in ``fail``
    """

    def __init__(self, members=None, tasks=None):
        self.rows = {"members": list(members or []), "tasks": list(tasks or [])}
        self.calls: list[tuple] = []
        self.fail: set[tuple[str, str]] = set()

    def _check(self, collection, op):
        self.calls.append((op, collection))
        if (collection, op) in self.fail:
            raise StoreError(f"{op} on {collection} failed")

    def list_rows(self, collection):
        self._check(collection, "select")
        return [dict(r) for r in self.rows[collection]]

    def insert_rows(self, collection, rows):
        self._check(collection, "insert")
        out = []
        for r in rows:
            row = dict(r, id=str(uuid.uuid4()), created_at=utcnow())
            self.rows[collection].append(row)
            out.append(dict(row))
        return out

    def update_row(self, collection, row_id, patch):
        self._check(collection, "update")
        for r in self.rows[collection]:
            if r["id"] == row_id:
                r.update(patch)

    def delete_row(self, collection, row_id):
        self._check(collection, "delete")
        self.rows[collection] = [r for r in self.rows[collection] if r["id"] != row_id]
        if collection == "members":
            self.rows["tasks"] = [t for t in self.rows["tasks"] if t.get("assignee") != row_id]

    def writes(self):
        return [c for c in self.calls if c[0] != "select"]
