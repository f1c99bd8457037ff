import os
from typing import List, NamedTuple, Optional, Protocol, runtime_checkable


class Fingerprint(NamedTuple):
    """Filesystem identity of an ignore file. Equality is all-or-nothing."""
    mtime_sec: int
    mtime_nsec: int
    size: int
    inode: int
    uid: int
    gid: int
    mode: int

    @classmethod
    def from_stat(cls, st: os.stat_result) -> "Fingerprint":
        mtime_ns = int(st.st_mtime_ns)
        return cls(
            mtime_sec=mtime_ns // 1_000_000_000,
            mtime_nsec=mtime_ns % 1_000_000_000,
            size=int(st.st_size),
            inode=int(st.st_ino),
            uid=int(st.st_uid),
            gid=int(st.st_gid),
            mode=int(st.st_mode),
        )


@runtime_checkable
class FileSystem(Protocol):
    """Filesystem capabilities consumed by the cache and the resolver."""

    def stat_identity(self, path: str) -> Optional[Fingerprint]: ...

    def read_lines(self, path: str) -> Optional[List[str]]:
        """None when the file is missing; raises OSError when it cannot be read."""
        ...

    def exists(self, path: str) -> bool: ...


class LocalFileSystem:
    """FileSystem backed by the real disk."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def stat_identity(self, path: str) -> Optional[Fingerprint]:
        try:
            st = os.stat(path)
        except OSError:
            return None
        return Fingerprint.from_stat(st)

    def read_lines(self, path: str) -> Optional[List[str]]:
        """
        Lines of ``path`` split on newlines only, or None when it is missing.
        Other access and decoding errors propagate to the caller.
        """
        try:
            with open(path, "r", encoding=self.encoding, newline=None) as f:
                content = f.read()
        except FileNotFoundError:
            return None
        lines = content.split("\n")
        if lines[-1] == "":
            lines.pop()
        return lines

    def exists(self, path: str) -> bool:
        return os.path.lexists(path)
