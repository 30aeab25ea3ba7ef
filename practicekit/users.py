"""Users kept in memory and read from an XML file, behind a small service."""

from __future__ import annotations

import argparse
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

DEFAULT_PATH = "users.xml"

_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")


@dataclass(frozen=True)
class User:
    """A user."""

    id: str = ""
    name: str = ""
    email: str = ""


class _UserRepository(Protocol):
    def save(self, user: User) -> None: ...

    def find_all(self) -> list[User]: ...


def _own_text(element: ET.Element) -> str:
    return (element.text or "") + "".join(child.tail or "" for child in element)


def _user_from(element: ET.Element) -> User:
    fields = {"ID": "", "Name": "", "Email": ""}
    for child in element:
        tag = child.tag.rpartition("}")[2]
        if tag in fields:
            fields[tag] = _own_text(child)
    return User(fields["ID"], fields["Name"], fields["Email"])


def _load_users(path: str | Path) -> list[User]:
    """Read a stream of top-level user elements, stopping at the first bad one."""
    text = Path(path).read_bytes().decode("utf-8", "replace")
    text = _DECLARATION.sub("", text, count=1)
    parser = ET.XMLPullParser(events=("start", "end"))
    for chunk in ("<users>", text, "</users>"):
        parser.feed(chunk)
    users: list[User] = []
    depth = 0
    try:
        for event, element in parser.read_events():
            if event == "start":
                depth += 1
                continue
            depth -= 1
            if depth == 1:
                users.append(_user_from(element))
    except ET.ParseError:
        pass
    return users


class FileUserRepository:
    """Users saved in memory plus those stored in an XML file."""

    def __init__(self, file_path: str | Path) -> None:
        self.file_path = file_path
        self._saved: list[User] = []

    def save(self, user: User) -> None:
        """Keep ``user`` in memory."""
        self._saved.append(user)

    def find_all(self) -> list[User]:
        """Return the saved users followed by those read from the file."""
        return [*self._saved, *_load_users(self.file_path)]


class UserService:
    """Adds and lists users through a repository."""

    def __init__(self, repository: _UserRepository) -> None:
        self.repository = repository

    def add_user(self, user: User) -> None:
        """Save ``user``."""
        self.repository.save(user)

    def list_users(self) -> list[User]:
        """Return all users."""
        return self.repository.find_all()


def main(argv: list[str] | None = None) -> int:
    """Add a sample user and print every user."""
    parser = argparse.ArgumentParser(description="Add a user and list all users.")
    parser.add_argument("path", nargs="?", default=DEFAULT_PATH)
    args = parser.parse_args(argv)

    service = UserService(FileUserRepository(args.path))
    service.add_user(User(id="1", name="John Doe", email="john.doe@example.com"))
    try:
        users = service.list_users()
    except OSError as exc:
        print("Error loading users:", exc)
        users = []
    for user in users:
        print(f"User: {{ID:{user.id} Name:{user.name} Email:{user.email}}}")
    return 0