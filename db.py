# db.py

#============================================================#
#                          Trawork                           #
#============================================================#
# Purpose     : Trawork is a small team task tracker with    #
#               members, tasks, status charts and a project  #
#               health label (SQLite/Supabase powered)       #
#                                                            #
# Change Log  :                                              #
#  - V1.0.0 : Initial release.                               #
#============================================================#


from __future__ import annotations

import logging
import os
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import create_engine, delete, event, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, select

from models import Member, Task, User  # noqa: F401  (User registers the auth table)
from utils.dates import parse_date

logger = logging.getLogger(__name__)


# ---- Settings ----
def get_setting(name: str, default: Optional[str] = None) -> Optional[str]:
    """st.secrets first, then the environment, then ``default``."""
    try:
        import streamlit as st
        value = st.secrets.get(name)
    except Exception:
        value = None
    return value or os.getenv(name) or default


# ---- Engine / Session ----
def make_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        kwargs: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        eng = create_engine(url, future=True, **kwargs)

        # SQLite only honours ON DELETE CASCADE with this pragma on every connection
        @event.listens_for(eng, "connect")
        def _enable_foreign_keys(dbapi_conn, _record):
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys=ON")
            cur.close()

        return eng
    return create_engine(url, pool_pre_ping=True, future=True)


DATABASE_URL = get_setting("DATABASE_URL", "sqlite:///trawork.db")
engine = make_engine(DATABASE_URL)


def init_db(bind: Optional[Engine] = None) -> None:
    SQLModel.metadata.create_all(bind or engine)


# ---- Collections & row-level policies ----
COLLECTIONS = {
    "members": Member,
    "tasks": Task,
}

POLICIES = {
    "members": {"select", "insert", "delete"},
    "tasks": {"select", "insert", "update"},
}


class StoreError(Exception):
    """A store request failed; the message says which one."""


def _columns(model) -> List[str]:
    return list(model.__table__.columns.keys())


def _to_row(obj) -> Dict[str, Any]:
    """Return plain dicts to avoid detached lazy loads."""
    return {c: getattr(obj, c) for c in _columns(type(obj))}


def _clean_values(model, values: Dict[str, Any]) -> Dict[str, Any]:
    cols = set(_columns(model))
    unknown = set(values) - cols
    if unknown:
        raise StoreError(f"Unknown column(s) for {model.__tablename__}: {', '.join(sorted(unknown))}")
    out = {k: v for k, v in values.items() if not (k in ("id", "created_at") and v is None)}
    if "deadline" in out and out["deadline"] is not None:
        d = parse_date(out["deadline"])
        if d is None:
            raise StoreError(f"Invalid deadline: {out['deadline']!r}")
        out["deadline"] = d
    return out


class TableStore:
    """
    Select/insert/update/delete against the ``members`` and ``tasks`` collections.

    Every call needs a live session from ``auth`` and must be allowed by
    ``POLICIES``. All failures surface as ``StoreError``.
    """

    def __init__(self, auth=None, bind: Optional[Engine] = None):
        self._auth = auth
        self._engine = bind or engine

    def _authorize(self, collection: str, op: str):
        model = COLLECTIONS.get(collection)
        if model is None:
            raise StoreError(f"Unknown collection: {collection}")
        if self._auth is None or self._auth.get_session() is None:
            raise StoreError("not authenticated")
        if op not in POLICIES[collection]:
            raise StoreError(f"{op} is not permitted on {collection}")
        return model

    def list_rows(self, collection: str) -> List[Dict[str, Any]]:
        model = self._authorize(collection, "select")
        try:
            with Session(self._engine) as s:
                rows = s.exec(select(model).order_by(model.created_at, model.id)).all()
                out = [_to_row(r) for r in rows]
        except SQLAlchemyError as e:
            raise StoreError(f"select on {collection} failed: {e}") from e
        logger.debug("select %s -> %d row(s)", collection, len(out))
        return out

    def insert_rows(self, collection: str, rows: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        model = self._authorize(collection, "insert")
        objs = [model(**_clean_values(model, dict(r))) for r in rows]
        try:
            with Session(self._engine, expire_on_commit=False) as s:
                s.add_all(objs)
                s.commit()
                for o in objs:
                    s.refresh(o)
                out = [_to_row(o) for o in objs]
        except SQLAlchemyError as e:
            raise StoreError(f"insert into {collection} failed: {e}") from e
        logger.info("insert %s -> %d row(s)", collection, len(out))
        return out

    def update_row(self, collection: str, row_id: str, patch: Dict[str, Any]) -> None:
        model = self._authorize(collection, "update")
        if "id" in patch:
            raise StoreError("Row identifiers cannot be changed")
        values = _clean_values(model, dict(patch))
        if not values:
            return
        try:
            with self._engine.begin() as conn:
                result = conn.execute(update(model).where(model.id == row_id).values(**values))
        except SQLAlchemyError as e:
            raise StoreError(f"update on {collection} failed: {e}") from e
        logger.info("update %s id=%s -> %d row(s)", collection, row_id, result.rowcount)

    def delete_row(self, collection: str, row_id: str) -> None:
        model = self._authorize(collection, "delete")
        try:
            with self._engine.begin() as conn:
                result = conn.execute(delete(model).where(model.id == row_id))
        except SQLAlchemyError as e:
            raise StoreError(f"delete on {collection} failed: {e}") from e
        logger.info("delete %s id=%s -> %d row(s)", collection, row_id, result.rowcount)
