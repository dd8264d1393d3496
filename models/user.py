# models/user.py
from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime

from utils.dates import utcnow

class User(SQLModel, table=True):
    __tablename__ = "users"
    __table_args__ = {"extend_existing": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    password_hash: str
    created_at: Optional[datetime] = Field(default_factory=utcnow)
