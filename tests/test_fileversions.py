import time
import uuid
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import pytest

from practicekit.fileversions import (
    FileVersionManager,
    Version,
    VersionLabels,
    VersionNotFoundError,
    get_instance,
)


@pytest.fixture
def manager():
    return FileVersionManager()


def test_add_get_and_list(manager):
    manager.add_version("testfile.txt", b"Version 1 data")
    manager.add_version("testfile.txt", b"Version 2 data")

    assert manager.get_version("testfile.txt", 1).data == b"Version 1 data"
    assert manager.get_version("testfile.txt", 2).data == b"Version 2 data"

    versions = manager.list_versions("testfile.txt")
    assert len(versions) == 2
    assert versions[0].data == b"Version 1 data"
    assert versions[1].data == b"Version 2 data"


def test_ids_count_per_file(manager):
    manager.add_version("a.txt", b"a1")
    manager.add_version("b.txt", b"b1")
    second = manager.add_version("a.txt", b"a2")
    assert second.id == 2
    assert [v.id for v in manager.list_versions("b.txt")] == [1]


def test_metadata_is_kept(manager):
    before = int(time.time())
    manager.add_version("testfile.txt", b"Version 1 data", "user123", "Initial version")
    after = int(time.time())
    version = manager.get_version("testfile.txt", 1)
    assert version.user_id == "user123"
    assert version.description == "Initial version"
    assert before <= version.timestamp <= after


def test_missing_version_raises(manager):
    manager.add_version("testfile.txt", b"x")
    with pytest.raises(VersionNotFoundError, match="version not found for file: testfile.txt, id: 5"):
        manager.get_version("testfile.txt", 5)


def test_unknown_file_get_raises(manager):
    with pytest.raises(VersionNotFoundError):
        manager.get_version("nothing.txt", 1)


def test_list_unknown_file_raises(manager):
    with pytest.raises(VersionNotFoundError, match="no versions found for file: nothing.txt"):
        manager.list_versions("nothing.txt")


def test_list_returns_copy(manager):
    manager.add_version("f.txt", b"one")
    listed = manager.list_versions("f.txt")
    listed.clear()
    assert len(manager.list_versions("f.txt")) == 1


def test_data_is_copied_from_mutable_input(manager):
    buffer = bytearray(b"abc")
    manager.add_version("f.txt", buffer)
    buffer[0] = ord("z")
    assert manager.get_version("f.txt", 1).data == b"abc"


def test_custom_factory_is_used():
    @dataclass(frozen=True)
    class TextVersion(Version):
        kind: str = "text"

    manager = FileVersionManager(TextVersion)
    created = manager.add_version("t.txt", b"Version 1 data", "user123", "Initial version")
    assert isinstance(created, TextVersion)
    assert created.kind == "text"
    assert manager.get_version("t.txt", 1).description == "Initial version"


def test_get_instance_is_shared():
    name = f"shared-{uuid.uuid4()}.txt"
    get_instance().add_version(name, b"data")
    assert get_instance() is get_instance()
    assert get_instance().get_version(name, 1).data == b"data"


def test_concurrent_writes(manager):
    workers, per_worker = 100, 10

    def write(i):
        for j in range(per_worker):
            manager.add_version("testfile.txt", f"Version {i}-{j}".encode())

    with ThreadPoolExecutor(max_workers=16) as pool:
        list(pool.map(write, range(workers)))

    versions = manager.list_versions("testfile.txt")
    assert len(versions) == workers * per_worker
    assert [v.id for v in versions] == list(range(1, workers * per_worker + 1))

    def read(i):
        return [manager.get_version("testfile.txt", i * per_worker + j + 1).id
                for j in range(per_worker)]

    with ThreadPoolExecutor(max_workers=16) as pool:
        ids = [vid for chunk in pool.map(read, range(workers)) for vid in chunk]
    assert sorted(ids) == list(range(1, workers * per_worker + 1))


def test_concurrent_reads_and_writes(manager):
    manager.add_version("concurrencytest.txt", b"Initial data")

    def reader(_):
        return [manager.get_version("concurrencytest.txt", 1).data for _ in range(10)]

    def writer(i):
        for j in range(5):
            manager.add_version("concurrencytest.txt", f"New version {i}-{j}".encode())
        return []

    with ThreadPoolExecutor(max_workers=6) as pool:
        reads = list(pool.map(reader, range(4)))
        list(pool.map(writer, range(2)))

    assert all(data == b"Initial data" for chunk in reads for data in chunk)
    assert len(manager.list_versions("concurrencytest.txt")) == 11


def test_many_versions(manager):
    for i in range(10000):
        manager.add_version("big.txt", f"Version {i}".encode())
    versions = manager.list_versions("big.txt")
    assert len(versions) == 10000
    assert versions[-1].data == b"Version 9999"


def test_labels_list():
    labels = VersionLabels()
    labels.add("file1.txt", "1.0")
    labels.add("file1.txt", "1.1")
    labels.add("file2.txt", "2.0")
    assert labels.list("file1.txt") == ["1.0", "1.1"]
    assert labels.list("file2.txt") == ["2.0"]
    assert labels.list("file3.txt") == []


def test_labels_get():
    labels = VersionLabels()
    for label in ("1.0", "1.1", "1.2"):
        labels.add("example.txt", label)
    assert labels.get("example.txt", 2) == "1.1"
    assert labels.get("example.txt", 0) is None
    assert labels.get("example.txt", 4) is None
    assert labels.get("report.pdf", 1) is None


def test_labels_list_is_copy():
    labels = VersionLabels()
    labels.add("a", "1.0")
    labels.list("a").append("x")
    assert labels.list("a") == ["1.0"]