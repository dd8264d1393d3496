# models/task.py
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, String, ForeignKey, CheckConstraint
from typing import Optional
from datetime import date, datetime
import uuid

from utils.dates import utcnow

TASK_STATUSES = ("todo", "in_progress", "completed")

class Task(SQLModel, table=True):
    __tablename__ = "tasks"
    __table_args__ = (
        CheckConstraint("status IN ('todo','in_progress','completed')", name="ck_task_status"),
        {"extend_existing": True},
    )

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    title: str = Field(nullable=False)
    # assignee -> members.id, removed together with its member
    assignee: Optional[str] = Field(
        default=None,
        sa_column=Column(String, ForeignKey("members.id", ondelete="CASCADE"), nullable=True, index=True),
    )
    status: str = Field(default="todo", nullable=False)
    deadline: date = Field(nullable=False)
    created_at: Optional[datetime] = Field(default_factory=utcnow)
