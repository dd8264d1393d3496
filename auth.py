# auth.py
from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session as DbSession, select

import db
from models.user import User
from utils.dates import utcnow

logger = logging.getLogger(__name__)

_PBKDF2_ROUNDS = 120_000
MIN_PASSWORD_LENGTH = 6

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"


class AuthError(Exception):
    pass


@dataclass(frozen=True)
class Session:
    user_id: int
    email: str
    access_token: str
    expires_at: datetime

    def expired(self, now: Optional[datetime] = None) -> bool:
        return (now or utcnow()) >= self.expires_at


class Subscription:
    def __init__(self, listeners: List[Callable], callback: Callable):
        self._listeners = listeners
        self._callback = callback

    def unsubscribe(self) -> None:
        if self._callback in self._listeners:
            self._listeners.remove(self._callback)


def hash_password(password: str, salt: Optional[str] = None) -> str:
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), _PBKDF2_ROUNDS)
    return f"pbkdf2_sha256${_PBKDF2_ROUNDS}${salt}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    try:
        _, rounds, salt, expected = stored.split("$")
    except ValueError:
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), int(rounds))
    return hmac.compare_digest(digest.hex(), expected)


def _norm_email(email: str) -> str:
    return (email or "").strip().lower()


class AuthClient:
    """
    Email/password sessions backed by the ``users`` table.

    Listeners registered with ``on_session_change`` are called as
    ``callback(event, session)`` on sign-in, sign-out and expiry
    (``session`` is ``None`` for the last two).
    """

    def __init__(self, bind: Optional[Engine] = None, ttl_minutes: Optional[int] = None,
                 clock: Callable[[], datetime] = utcnow):
        self._engine = bind or db.engine
        if ttl_minutes is None:
            ttl_minutes = int(db.get_setting("SESSION_TTL_MINUTES", "60"))
        self._ttl = timedelta(minutes=ttl_minutes)
        self._clock = clock
        self._session: Optional[Session] = None
        self._listeners: List[Callable] = []

    # ---- session access ----
    def get_session(self) -> Optional[Session]:
        if self._session is not None and self._session.expired(self._clock()):
            logger.info("session for %s expired", self._session.email)
            self._set_session(SIGNED_OUT, None)
        return self._session

    def on_session_change(self, callback: Callable) -> Subscription:
        self._listeners.append(callback)
        return Subscription(self._listeners, callback)

    def _set_session(self, event: str, session: Optional[Session]) -> None:
        self._session = session
        for cb in list(self._listeners):
            cb(event, session)

    def _start_session(self, user: User) -> Session:
        session = Session(
            user_id=user.id,
            email=user.email,
            access_token=secrets.token_urlsafe(32),
            expires_at=self._clock() + self._ttl,
        )
        logger.info("signed in %s", user.email)
        self._set_session(SIGNED_IN, session)
        return session

    # ---- sign in / out ----
    def sign_up(self, email: str, password: str) -> Session:
        email = _norm_email(email)
        if not email or not password:
            raise AuthError("Email and password are required")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AuthError(f"Password should be at least {MIN_PASSWORD_LENGTH} characters")
        try:
            with DbSession(self._engine, expire_on_commit=False) as s:
                if s.exec(select(User).where(User.email == email)).first():
                    raise AuthError("User already registered")
                user = User(email=email, password_hash=hash_password(password))
                s.add(user)
                s.commit()
                s.refresh(user)
        except SQLAlchemyError as e:
            raise AuthError(f"Sign up failed: {e}") from e
        return self._start_session(user)

    def sign_in_with_password(self, email: str, password: str) -> Session:
        email = _norm_email(email)
        try:
            with DbSession(self._engine, expire_on_commit=False) as s:
                user = s.exec(select(User).where(User.email == email)).first()
        except SQLAlchemyError as e:
            raise AuthError(f"Sign in failed: {e}") from e
        if user is None or not verify_password(password or "", user.password_hash):
            logger.warning("failed sign-in for %s", email)
            raise AuthError("Invalid login credentials")
        return self._start_session(user)

    def sign_out(self) -> None:
        if self._session is not None:
            logger.info("signed out %s", self._session.email)
        self._set_session(SIGNED_OUT, None)
