from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from werkzeug.security import check_password_hash

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.constants import TOKEN_TTL_HOURS
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ValidationError
from .model import Principal, User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    principal: Principal
    user: User


class AuthService:
    """Use case: authenticate a teacher/admin (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str, *, now: Optional[datetime] = None) -> LoginResult:
        try:
            username = require_non_empty(username, "Username")
            require_non_empty(password, "Password")
        except ValidationError:
            raise ValidationError("Username and password required") from None

        user = self._users.get_by_username(username)
        if not user:
            logger.warning("Login failed - unknown username: %s", username)
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder or corrupted hashes in seeded rows
            ok = False

        if not ok:
            logger.warning("Login failed - bad password for username: %s", username)
            raise AuthenticationError("Invalid credentials")

        self._users.touch_last_login(user.user_id, at=now or now_local())
        logger.info("Login successful - username: %s, role: %s", user.username, user.role.value)
        return LoginResult(
            principal=Principal(user_id=user.user_id, username=user.username, role=user.role),
            user=user,
        )


class TokenService:
    """Issues and verifies HS256 bearer tokens carrying a Principal."""

    algorithm = "HS256"

    def __init__(self, secret: str, *, ttl: timedelta = timedelta(hours=TOKEN_TTL_HOURS)):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._ttl = ttl

    def issue(self, principal: Principal, *, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "userId": principal.user_id,
            "username": principal.username,
            "role": principal.role.value,
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def decode(self, token: str) -> Principal:
        try:
            data = jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired") from None
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token") from None

        try:
            return Principal(
                user_id=int(data["userId"]),
                username=str(data["username"]),
                role=Role(data["role"]),
            )
        except (KeyError, TypeError, ValueError):
            raise AuthenticationError("Invalid token") from None
