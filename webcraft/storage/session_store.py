"""Local credential records and the active user session.

This is a stand-in for a real auth backend: passwords are kept as typed and
nothing expires. The rest of the package only reads `current_user()`.
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel
from pydantic import ValidationError as RecordValidationError

from webcraft.storage.artifact_store import write_json_atomic
from webcraft.utils.logger import logger

USERS_FILENAME = "webcraft-users.json"
ACTIVE_USER_FILENAME = "webcraft-user.json"


class User(BaseModel):
    id: str
    name: str
    email: str


class UserRecord(User):
    password: str

    def public(self) -> User:
        return User(id=self.id, name=self.name, email=self.email)


class SessionStore:
    """Interface of the session collaborator."""

    def current_user(self) -> Optional[User]:  # pragma: no cover - interface
        raise NotImplementedError

    def display_name(self) -> Optional[str]:
        user = self.current_user()
        return user.name if user else None


class StaticSessionStore(SessionStore):
    """Fixed session, for embedding the pipeline without a login flow."""

    def __init__(self, user: Optional[User] = None) -> None:
        self._user = user

    def current_user(self) -> Optional[User]:
        return self._user


class JsonSessionStore(SessionStore):
    """Users and the active session kept as two JSON files in one directory."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)
        self.users_path = self.directory / USERS_FILENAME
        self.active_path = self.directory / ACTIVE_USER_FILENAME

    def _read_json(self, path: Path) -> object:
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as fp:
                return json.load(fp)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable {}: {}", path.name, exc)
            return None

    def _users(self) -> List[UserRecord]:
        raw = self._read_json(self.users_path)
        if not isinstance(raw, list):
            return []
        try:
            return [UserRecord.model_validate(record) for record in raw]
        except RecordValidationError:
            logger.warning("Ignoring malformed {}", self.users_path.name)
            return []

    def _activate(self, user: User) -> User:
        write_json_atomic(self.active_path, user.model_dump())
        return user

    def current_user(self) -> Optional[User]:
        raw = self._read_json(self.active_path)
        if raw is None:
            return None
        try:
            return User.model_validate(raw)
        except RecordValidationError:
            logger.warning("Ignoring malformed {}", self.active_path.name)
            return None

    def signup(self, name: str, email: str, password: str) -> Optional[User]:
        """Create an account and log it in. Returns None if the email is taken."""
        users = self._users()
        if any(user.email == email for user in users):
            return None
        record = UserRecord(id=str(time.time_ns() // 1_000_000), name=name, email=email, password=password)
        users.append(record)
        write_json_atomic(self.users_path, [user.model_dump() for user in users])
        logger.info("Registered user {}", record.id)
        return self._activate(record.public())

    def login(self, email: str, password: str) -> Optional[User]:
        for user in self._users():
            if user.email == email and user.password == password:
                return self._activate(user.public())
        return None

    def logout(self) -> None:
        self.active_path.unlink(missing_ok=True)


__all__ = [
    "User",
    "UserRecord",
    "SessionStore",
    "StaticSessionStore",
    "JsonSessionStore",
    "USERS_FILENAME",
    "ACTIVE_USER_FILENAME",
]
