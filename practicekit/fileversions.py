"""Keeping numbered versions of files in memory, safe for use from many threads."""

from __future__ import annotations

import threading
import time
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class Version:
    """One stored version of a file."""

    id: int
    data: bytes
    timestamp: int
    user_id: str = ""
    description: str = ""


VersionFactory = Callable[[int, bytes, int, str, str], Version]


class VersionNotFoundError(LookupError):
    """Raised when a file has no versions, or not the one asked for."""

    def __init__(self, file_name: str, version_id: int | None = None) -> None:
        if version_id is None:
            message = f"no versions found for file: {file_name}"
        else:
            message = f"version not found for file: {file_name}, id: {version_id}"
        super().__init__(message)
        self.file_name = file_name
        self.version_id = version_id


class FileVersionManager:
    """Stores the versions of each file, numbered from 1 in the order added."""

    def __init__(self, version_factory: VersionFactory = Version) -> None:
        self._versions: dict[str, list[Version]] = {}
        self._factory = version_factory
        self._lock = threading.Lock()

    def add_version(
        self,
        file_name: str,
        data: bytes,
        user_id: str = "",
        description: str = "",
    ) -> Version:
        """Store a new version of ``file_name`` and return it."""
        with self._lock:
            versions = self._versions.setdefault(file_name, [])
            version = self._factory(
                len(versions) + 1, bytes(data), int(time.time()), user_id, description
            )
            versions.append(version)
            return version

    def get_version(self, file_name: str, version_id: int) -> Version:
        """Return the version of ``file_name`` with the given id."""
        with self._lock:
            for version in self._versions.get(file_name, ()):
                if version.id == version_id:
                    return version
        raise VersionNotFoundError(file_name, version_id)

    def list_versions(self, file_name: str) -> list[Version]:
        """Return a copy of all versions of ``file_name``, oldest first."""
        with self._lock:
            versions = self._versions.get(file_name)
            if versions is None:
                raise VersionNotFoundError(file_name)
            return list(versions)


_instance: FileVersionManager | None = None
_instance_lock = threading.Lock()


def get_instance() -> FileVersionManager:
    """Return the process-wide shared manager, creating it on first use."""
    global _instance
    with _instance_lock:
        if _instance is None:
            _instance = FileVersionManager()
        return _instance


class VersionLabels:
    """Keeps plain version labels per file, looked up by 1-based position."""

    def __init__(self) -> None:
        self._labels: defaultdict[str, list[str]] = defaultdict(list)
        self._lock = threading.Lock()

    def add(self, file_name: str, label: str) -> None:
        """Append ``label`` to the labels of ``file_name``."""
        with self._lock:
            self._labels[file_name].append(label)

    def get(self, file_name: str, number: int) -> str | None:
        """Return the label at 1-based ``number``, or None if there is none."""
        with self._lock:
            labels = self._labels.get(file_name, [])
            if 1 <= number <= len(labels):
                return labels[number - 1]
            return None

    def list(self, file_name: str) -> list[str]:
        """Return a copy of the labels of ``file_name``; empty if unknown."""
        with self._lock:
            return list(self._labels.get(file_name, []))