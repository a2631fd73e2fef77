# portfolio_api/security.py
from __future__ import annotations

import datetime as dt
import hmac
from typing import Any, Dict, Optional, Protocol

import jwt  # PyJWT
from passlib.context import CryptContext
from pydantic import BaseModel

from portfolio_api import config

_pwd = CryptContext(schemes=["bcrypt"], deprecated="auto")


class Principal(BaseModel):
    """Authenticated identity carried by a bearer token."""
    id: str
    name: str
    role: str


def hash_password(plain: str) -> str:
    return _pwd.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    return _pwd.verify(plain, hashed)


# ---------- Credential check (pluggable) ----------
class CredentialVerifier(Protocol):
    def authenticate(self, username: str, password: str) -> Optional[Principal]: ...


class EnvCredentialVerifier:
    """Single admin account configured through the environment."""

    def __init__(
        self,
        username: str = config.ADMIN_USERNAME,
        password: Optional[str] = config.ADMIN_PASSWORD,
        password_hash: Optional[str] = config.ADMIN_PASSWORD_HASH,
        display_name: str = config.ADMIN_NAME,
    ):
        self.username = username
        self.password = password
        self.password_hash = password_hash
        self.display_name = display_name

    def _password_ok(self, password: str) -> bool:
        if self.password_hash:
            return verify_password(password, self.password_hash)
        if self.password is None:
            return False
        return hmac.compare_digest(password.encode("utf-8"), self.password.encode("utf-8"))

    def authenticate(self, username: str, password: str) -> Optional[Principal]:
        user_ok = hmac.compare_digest(username.encode("utf-8"), self.username.encode("utf-8"))
        # Always check the password so both failure paths cost the same
        password_ok = self._password_ok(password)
        if not (user_ok and password_ok):
            return None
        return Principal(id="1", name=self.display_name, role="admin")


# ---------- Token creation ----------
def _now_utc() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def create_access_token(principal: Principal, hours: Optional[int] = None, secret: Optional[str] = None) -> str:
    now = _now_utc()
    expire_hours = hours if hours is not None else config.JWT_EXPIRE_HOURS
    payload: Dict[str, Any] = {
        "sub": principal.id,
        "name": principal.name,
        "role": principal.role,
        "iat": int(now.timestamp()),
        "exp": int((now + dt.timedelta(hours=expire_hours)).timestamp()),
    }
    return jwt.encode(payload, secret or config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


# ---------- Token decoding / validation ----------
class InvalidToken(Exception):
    pass


def decode_access_token(token: str) -> Principal:
    """Validate signature and expiry and rebuild the principal.
    Raises InvalidToken whatever the cause."""
    try:
        claims = jwt.decode(
            token,
            config.JWT_SECRET,
            algorithms=[config.JWT_ALGORITHM],
            options={"require": ["sub", "exp", "iat"]},
        )
    except jwt.PyJWTError as exc:
        raise InvalidToken(str(exc)) from exc

    sub, name, role = claims.get("sub"), claims.get("name"), claims.get("role")
    if not all(isinstance(v, str) and v for v in (sub, name, role)):
        raise InvalidToken("incomplete claims")
    return Principal(id=sub, name=name, role=role)
