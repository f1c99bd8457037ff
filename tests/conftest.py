import itertools
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pytest

from aiignore.core import cache as cache_module
from aiignore.core.settings import IgnoreSettings
from aiignore.core.utils.fs import Fingerprint

_inodes = itertools.count(1000)


@dataclass
class FakeFile:
    content: str = ""
    mtime_sec: int = 1_700_000_000
    mtime_nsec: int = 12345
    inode: int = field(default_factory=lambda: next(_inodes))
    uid: int = 1357
    gid: int = 2468
    mode: int = 0o100644
    readable: bool = True


class FakeFileSystem:
    """In-memory FileSystem; directories exist implicitly through their files."""

    def __init__(self):
        self.files: Dict[str, FakeFile] = {}
        self.reads: Dict[str, int] = {}

    def write(self, path: str, content: str = "", **attrs) -> FakeFile:
        entry = FakeFile(content=content, **attrs)
        self.files[path] = entry
        return entry

    def touch(self, path: str, **attrs) -> None:
        entry = self.files[path]
        for k, v in attrs.items():
            setattr(entry, k, v)

    def remove(self, path: str) -> None:
        self.files.pop(path, None)

    def stat_identity(self, path: str) -> Optional[Fingerprint]:
        entry = self.files.get(path)
        if entry is None:
            return None
        return Fingerprint(
            mtime_sec=entry.mtime_sec,
            mtime_nsec=entry.mtime_nsec,
            size=len(entry.content.encode("utf-8")),
            inode=entry.inode,
            uid=entry.uid,
            gid=entry.gid,
            mode=entry.mode,
        )

    def read_lines(self, path: str) -> Optional[List[str]]:
        entry = self.files.get(path)
        if entry is None:
            return None
        if not entry.readable:
            raise PermissionError(13, "Permission denied", path)
        self.reads[path] = self.reads.get(path, 0) + 1
        return entry.content.splitlines()

    def exists(self, path: str) -> bool:
        if path in self.files:
            return True
        prefix = path.rstrip("/") + "/"
        return any(p.startswith(prefix) for p in self.files)


@pytest.fixture(autouse=True)
def aiignore_env(monkeypatch):
    for name in (
        "AIIGNORE_IGNORE_FILENAMES",
        "AIIGNORE_BOUNDARY_MARKER",
        "AIIGNORE_IGNORE_OUTSIDE_BOUNDARY",
        "AIIGNORE_QUIET",
        "AIIGNORE_DEBUG_LOG",
        "AIIGNORE_WARN_IGNORED",
        "AIIGNORE_WARN_NOT_IGNORED",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(cache_module, "_DEFAULT_CACHE", None)


@pytest.fixture
def fake_fs():
    return FakeFileSystem()


@pytest.fixture
def make_settings():
    def _make(**overrides) -> IgnoreSettings:
        return IgnoreSettings(**overrides)
    return _make
