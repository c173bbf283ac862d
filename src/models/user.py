# models/user.py
#
# Copyright (c) 2025-2026 Cindy's World LLC and contributors
# Licensed under the MIT License. See LICENSE.md for details.
#
"""
User accounts stored in the Users and Access tables.
"""

import logging
from datetime import datetime

from passlib.context import CryptContext

from db import Database, FetchMode, ParamType

logger = logging.getLogger(__name__)

# argon2 also verifies hashes produced by PHP's password_hash(PASSWORD_ARGON2ID)
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

_SELECT_USER = """
    SELECT `Users`.Username, `Users`.Email, `Users`.Date_Registration, `Access`.Rank_Level
    FROM `Users`
    INNER JOIN `Access` ON `Users`.ID_User = `Access`.ID_User
    WHERE `Users`.ID_User = :id_user
"""


def hash_password(password: str) -> str:
    """Hash a password using argon2."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash. Unknown hash formats never match."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        return False


def _parse_date(value) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


class User:
    """A user loaded by id. Check `initialized` before using the fields."""

    def __init__(self, db: Database, user_id: int):
        self._db = db
        self.id = user_id
        self.username: str | None = None
        self.email: str | None = None
        self.access_level: int | None = None
        self.date_registered: datetime | None = None
        self.initialized = False

        if user_id > 0:
            self._load()

    def _load(self) -> None:
        row = self._db.read_one(_SELECT_USER, {":id_user": (self.id, ParamType.INTEGER)})
        if not row:
            return
        self.username = row["Username"]
        self.email = row["Email"]
        self.access_level = row["Rank_Level"]
        self.date_registered = _parse_date(row["Date_Registration"])
        self.initialized = True

    def set_username(self, new_username: str) -> bool:
        query = "UPDATE `Users` SET Username = :username WHERE ID_User = :id_user"
        args = {
            ":username": (new_username, ParamType.STRING),
            ":id_user": (self.id, ParamType.INTEGER),
        }
        if self._db.update(query, args):
            self.username = new_username
            return True
        return False

    def set_email(self, new_email: str) -> bool:
        query = "UPDATE `Users` SET Email = :email WHERE ID_User = :id_user"
        args = {
            ":email": (new_email, ParamType.STRING),
            ":id_user": (self.id, ParamType.INTEGER),
        }
        if self._db.update(query, args):
            self.email = new_email
            return True
        return False

    def set_password(self, old_password: str, new_password: str) -> bool:
        """
        Replace the password after checking the current one.

        A wrong old password is a normal negative result: False, nothing logged.
        """
        row = self._db.read_one(
            "SELECT Password FROM `Users` WHERE ID_User = :id_user",
            {":id_user": (self.id, ParamType.INTEGER)},
            FetchMode.NUM,
        )
        if not row or not verify_password(old_password, row[0]):
            return False

        return self._db.update(
            "UPDATE `Users` SET Password = :password WHERE ID_User = :id_user",
            {
                ":password": (hash_password(new_password), ParamType.STRING),
                ":id_user": (self.id, ParamType.INTEGER),
            },
        )

    def get_date_registered(self, fmt: str = "%d/%m/%Y") -> str | None:
        if self.date_registered is None:
            return None
        return self.date_registered.strftime(fmt)

    def to_dict(self) -> dict:
        """Public fields, for JSON responses."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "access_level": self.access_level,
            "date_registered": self.date_registered.isoformat() if self.date_registered else None,
        }


def create_user(db: Database, username: str, email: str, password: str, rank_level: int = 1) -> User | None:
    """Insert a user and its access row. Returns the loaded User, or None on failure."""
    user_id = db.create(
        "INSERT INTO `Users` (Username, Email, Password) VALUES (:username, :email, :password)",
        {
            ":username": (username, ParamType.STRING),
            ":email": (email, ParamType.STRING),
            ":password": (hash_password(password), ParamType.STRING),
        },
        want_insert_id=True,
    )
    if user_id is False:
        logger.warning(f"Failed to create user {username!r}")
        return None

    if not db.create(
        "INSERT INTO `Access` (ID_User, Rank_Level) VALUES (:id_user, :rank_level)",
        {
            ":id_user": (user_id, ParamType.INTEGER),
            ":rank_level": (rank_level, ParamType.INTEGER),
        },
    ):
        logger.warning(f"Failed to create access row for user {user_id}")
        return None

    return User(db, user_id)
