"""User accounts kept in a CSV file."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]

HEADER = "name,password,phone,backupPassword"


def _data_lines(path: PathLike, header_lines: int) -> Iterator[str]:
    with open(path, encoding="utf-8") as handle:
        for number, raw in enumerate(handle):
            if number < header_lines:
                continue
            line = raw.strip()
            if line:
                yield line


@dataclass
class User:
    """An account: name, password, phone number and a backup password."""

    username: str = ""
    password: str = ""
    phone: str = ""
    backup_password: str = ""

    def to_csv_row(self) -> str:
        return ",".join([self.username, self.password, self.phone, self.backup_password])


def load_users(path: PathLike) -> list[User]:
    """Read users from a CSV file with one header line.

    Lines with fewer than four fields are skipped.
    """
    users = []
    for line in _data_lines(path, header_lines=1):
        fields = line.split(",")
        if len(fields) < 4:
            continue
        users.append(User(*(field.strip() for field in fields[:4])))
    return users


def _existing_users(path: PathLike) -> list[User]:
    """Users in the store, or none if the file does not exist yet."""
    try:
        return load_users(path)
    except FileNotFoundError:
        return []


def save_users(users: list[User], path: PathLike) -> None:
    """Write users to a CSV file, header first."""
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(HEADER + "\n")
        for user in users:
            handle.write(user.to_csv_row() + "\n")


def validate_user(username: str, password: str, path: PathLike) -> bool:
    """Whether the store holds a user with this name and password."""
    return any(
        user.username == username and user.password == password
        for user in _existing_users(path)
    )


def find_user(username: str, path: PathLike) -> User | None:
    """The first user with this name, or None."""
    return next((user for user in _existing_users(path) if user.username == username), None)


def username_exists(username: str, path: PathLike) -> bool:
    """Whether a user with this name is in the store."""
    return find_user(username, path) is not None


def register_user(user: User, path: PathLike) -> None:
    """Add a new user to the store, creating the file if needed.

    Raises ValueError if the name is already taken.
    """
    users = _existing_users(path)
    if any(existing.username == user.username for existing in users):
        raise ValueError(f"username already exists: {user.username}")
    users.append(user)
    save_users(users, path)