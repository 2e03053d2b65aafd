from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a teacher or admin account.

    Note: Plain data object (no DB access code). Only ``last_login`` changes
    after provisioning.
    """

    user_id: int
    username: str
    password_hash: str
    role: Role
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    last_login: Optional[datetime] = None


@dataclass(frozen=True)
class Principal:
    """Authenticated identity attached to a request."""

    user_id: int
    username: str
    role: Role
