# controller.py
"""
Client-side state for Trawork.

``AppState`` mirrors the ``members`` and ``tasks`` collections plus the
session, the two input drafts and queued notices. Every handler takes the
state and a store, issues at most one store request, reconciles local state
from the response and returns the state. Nothing is changed optimistically:
on failure the collections are left as they were and an error notice is
queued.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Union

from db import StoreError
from models import MEMBER_ROLES, TASK_STATUSES
from utils.dates import parse_date

logger = logging.getLogger(__name__)


@dataclass
class MemberDraft:
    name: str = ""
    role: str = ""


@dataclass
class TaskDraft:
    title: str = ""
    assignee: str = ""
    deadline: Optional[Union[date, str]] = None


@dataclass
class Notice:
    kind: str  # success | error
    message: str


@dataclass
class AppState:
    session: Any = None
    members: List[Dict[str, Any]] = field(default_factory=list)
    tasks: List[Dict[str, Any]] = field(default_factory=list)
    member_draft: MemberDraft = field(default_factory=MemberDraft)
    task_draft: TaskDraft = field(default_factory=TaskDraft)
    notices: List[Notice] = field(default_factory=list)

    @property
    def authenticated(self) -> bool:
        return self.session is not None


def _ok(state: AppState, message: str) -> None:
    state.notices.append(Notice("success", message))


def _fail(state: AppState, message: str, err: Optional[Exception] = None) -> None:
    if err is not None:
        logger.warning("%s: %s", message, err)
    state.notices.append(Notice("error", message))


def _text(value) -> str:
    return "" if value is None else str(value).strip()


def drain_notices(state: AppState) -> List[Notice]:
    out, state.notices = state.notices, []
    return out


# ---- session phases ----
def apply_session(state: AppState, store, session) -> AppState:
    """Move between the unauthenticated and authenticated phases."""
    previous = state.session
    state.session = session
    if session is None:
        if previous is not None:
            state.members = []
            state.tasks = []
            state.member_draft = MemberDraft()
            state.task_draft = TaskDraft()
        return state
    if previous is None or previous.user_id != session.user_id:
        fetch_members(state, store)
        fetch_tasks(state, store)
    return state


# ---- reads ----
def fetch_members(state: AppState, store) -> AppState:
    try:
        state.members = list(store.list_rows("members"))
    except StoreError as e:
        _fail(state, "Failed to fetch members", e)
    return state


def fetch_tasks(state: AppState, store) -> AppState:
    try:
        state.tasks = list(store.list_rows("tasks"))
    except StoreError as e:
        _fail(state, "Failed to fetch tasks", e)
    return state


def refresh(state: AppState, store) -> AppState:
    fetch_members(state, store)
    return fetch_tasks(state, store)


# ---- members ----
def add_member(state: AppState, store, name: str, role: str) -> AppState:
    name, role = _text(name), _text(role)
    if not name or not role:
        _fail(state, "Please fill in all member details")
        return state
    if role not in MEMBER_ROLES:
        _fail(state, "Please select a valid role")
        return state
    try:
        inserted = store.insert_rows("members", [{"name": name, "role": role}])
    except StoreError as e:
        _fail(state, "Failed to add member", e)
        return state
    state.members = state.members + list(inserted)
    state.member_draft = MemberDraft()
    _ok(state, "Member added successfully!")
    return state


def delete_member(state: AppState, store, member_id: str) -> AppState:
    try:
        store.delete_row("members", member_id)
    except StoreError as e:
        _fail(state, "Failed to remove member", e)
        return state
    state.members = [m for m in state.members if m.get("id") != member_id]
    # the store cascades the delete to the member's tasks
    state.tasks = [t for t in state.tasks if t.get("assignee") != member_id]
    _ok(state, "Member removed successfully!")
    return state


# ---- tasks ----
def add_task(state: AppState, store, title: str, assignee: str, deadline,
             status: Optional[str] = None) -> AppState:
    """``status`` is accepted and ignored: new tasks always start as todo."""
    title, assignee = _text(title), _text(assignee)
    if not title or not assignee or deadline in (None, ""):
        _fail(state, "Please fill in all task details")
        return state
    due = parse_date(deadline)
    if due is None:
        _fail(state, "Please enter a valid deadline")
        return state
    row = {"title": title, "assignee": assignee, "deadline": due, "status": "todo"}
    try:
        inserted = store.insert_rows("tasks", [row])
    except StoreError as e:
        _fail(state, "Failed to add task", e)
        return state
    state.tasks = state.tasks + list(inserted)
    state.task_draft = TaskDraft()
    _ok(state, "Task added successfully!")
    return state


def update_task_status(state: AppState, store, task_id: str, new_status: str) -> AppState:
    if new_status not in TASK_STATUSES:
        _fail(state, "Invalid task status")
        return state
    try:
        store.update_row("tasks", task_id, {"status": new_status})
    except StoreError as e:
        _fail(state, "Failed to update task status", e)
        return state
    state.tasks = [dict(t, status=new_status) if t.get("id") == task_id else t for t in state.tasks]
    _ok(state, "Task status updated!")
    return state


# ---- drafts ----
def set_member_draft(state: AppState, **fields) -> AppState:
    for k, v in fields.items():
        if not hasattr(state.member_draft, k):
            raise AttributeError(f"MemberDraft has no field {k!r}")
        setattr(state.member_draft, k, v)
    return state


def set_task_draft(state: AppState, **fields) -> AppState:
    for k, v in fields.items():
        if not hasattr(state.task_draft, k):
            raise AttributeError(f"TaskDraft has no field {k!r}")
        setattr(state.task_draft, k, v)
    return state


def submit_member_draft(state: AppState, store) -> AppState:
    d = state.member_draft
    return add_member(state, store, d.name, d.role)


def submit_task_draft(state: AppState, store) -> AppState:
    d = state.task_draft
    return add_task(state, store, d.title, d.assignee, d.deadline)
