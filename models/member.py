# models/member.py
from sqlmodel import SQLModel, Field
from sqlalchemy import CheckConstraint
from typing import Optional
from datetime import datetime
import uuid

from utils.dates import utcnow

MEMBER_ROLES = (
    "Project Manager",
    "Developer",
    "Designer",
    "QA Engineer",
    "Business Analyst",
)

class Member(SQLModel, table=True):
    __tablename__ = "members"
    __table_args__ = (
        CheckConstraint(
            "role IN (" + ",".join(f"'{r}'" for r in MEMBER_ROLES) + ")",
            name="ck_member_role",
        ),
        {"extend_existing": True},
    )

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    name: str = Field(nullable=False)
    role: str = Field(nullable=False)
    created_at: Optional[datetime] = Field(default_factory=utcnow)
