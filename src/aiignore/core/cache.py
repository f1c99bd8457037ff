import threading
from dataclasses import dataclass
from typing import Dict, Optional

from aiignore.core.rules import RuleSet, parse_lines
from aiignore.core.utils.fs import FileSystem, Fingerprint, LocalFileSystem
from aiignore.core.utils.logging import get_logger

logger = get_logger("aiignore.cache")


@dataclass(frozen=True)
class CacheEntry:
    rule_set: RuleSet
    fingerprint: Fingerprint


class IgnoreFileCache:
    """
    Parsed ignore files keyed by path.

    An entry is served only while the file's current fingerprint equals the
    stored one on every field; any difference (mtime, size, inode, owner,
    mode) drops the entry and reparses the whole file. Entries are never
    evicted otherwise.
    """

    def __init__(self, fs: Optional[FileSystem] = None, quiet: bool = False):
        self.fs = fs or LocalFileSystem()
        self.quiet = quiet
        self._lock = threading.RLock()
        self._entries: Dict[str, CacheEntry] = {}
        self._hits = 0
        self._misses = 0
        self._reloads = 0

    def load(self, path: str, quiet: Optional[bool] = None) -> Optional[RuleSet]:
        """
        Rule set for the ignore file at ``path``, or None when it is absent or
        unreadable. ``quiet`` overrides the cache-wide flag for this call.
        """
        if quiet is None:
            quiet = self.quiet
        with self._lock:
            current = self.fs.stat_identity(path)
            entry = self._entries.get(path)
            if entry is not None:
                if current is not None and entry.fingerprint == current:
                    self._hits += 1
                    return entry.rule_set
                del self._entries[path]
                self._reloads += 1
                logger.debug("ignore_file_stale", path=path)
            self._misses += 1

            if current is None:
                return None
            try:
                lines = self.fs.read_lines(path)
            except (OSError, UnicodeDecodeError) as e:
                if not quiet:
                    logger.warning("ignore_file_unreadable", path=path, error=str(e))
                return None
            if lines is None:
                return None
            rule_set = parse_lines(path, lines)
            for err in rule_set.errors:
                if not quiet:
                    logger.error(
                        "rule_parse_failed",
                        path=err.source_path,
                        line_number=err.line_number,
                        raw_text=err.raw_text,
                        error=err.cause.message,
                    )

            fresh = self.fs.stat_identity(path)
            if fresh is None:
                if not quiet:
                    logger.error("ignore_file_vanished", path=path)
                return None
            if fresh != current:
                # Changed while reading; serve this parse but let the next call reload.
                logger.debug("ignore_file_changed_during_read", path=path)
                return rule_set
            self._entries[path] = CacheEntry(rule_set=rule_set, fingerprint=fresh)
            return rule_set

    def invalidate(self, path: Optional[str] = None) -> None:
        with self._lock:
            if path is None:
                self._entries.clear()
            else:
                self._entries.pop(path, None)

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "entries": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "reloads": self._reloads,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, path: object) -> bool:
        with self._lock:
            return path in self._entries


_DEFAULT_CACHE: Optional[IgnoreFileCache] = None
_DEFAULT_LOCK = threading.Lock()


def default_cache() -> IgnoreFileCache:
    """Process-wide cache used by the module-level helpers."""
    global _DEFAULT_CACHE
    with _DEFAULT_LOCK:
        if _DEFAULT_CACHE is None:
            _DEFAULT_CACHE = IgnoreFileCache()
        return _DEFAULT_CACHE
