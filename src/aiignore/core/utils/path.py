import os
import posixpath
from pathlib import Path
from typing import List, Optional, Union


class PathUtils:
    @staticmethod
    def normalize(path: Union[str, Path]) -> str:
        """
        Absolute, '/'-separated form used for every path the resolver touches.
        - Unifies separators to '/'.
        - Collapses '.', '..' and duplicate separators.
        - Strips trailing slashes (filesystem root stays '/').
        Symlinks are left alone so the chain mirrors what the caller asked about.
        """
        p = str(path or "").strip()
        if not p:
            p = os.getcwd()
        res = os.path.abspath(os.path.expanduser(p)).replace("\\", "/")
        res = posixpath.normpath(res)
        if res.startswith("//") and not res.startswith("///"):
            # POSIX keeps a leading double slash; we never need it.
            res = res[1:]
        return res

    @staticmethod
    def basename(path: str) -> str:
        return posixpath.basename(path.rstrip("/")) if path != "/" else ""

    @staticmethod
    def dirname(path: str) -> str:
        if path == "/":
            return "/"
        return posixpath.dirname(path.rstrip("/")) or "/"

    @staticmethod
    def join(directory: str, name: str) -> str:
        if directory.endswith("/"):
            return directory + name
        return f"{directory}/{name}"

    @staticmethod
    def relative_path(base: str, target: str) -> Optional[str]:
        """
        Path of ``target`` relative to ``base``, or None when ``base`` is not an
        ancestor. Comparison is by whole segments: '/a/b' is not an ancestor
        of '/a/bc'. Equal paths yield '.'.
        """
        n_base = base.rstrip("/") or "/"
        n_target = target.rstrip("/") or "/"
        if n_base == "/":
            return "." if n_target == "/" else n_target[1:]
        if n_target == n_base:
            return "."
        if not n_target.startswith(n_base + "/"):
            return None
        return n_target[len(n_base) + 1:]

    @staticmethod
    def list_ancestors(path: str) -> List[str]:
        """Parent directories of ``path``, nearest first, ending at '/'."""
        out: List[str] = []
        curr = path.rstrip("/") or "/"
        while curr != "/":
            curr = PathUtils.dirname(curr)
            out.append(curr)
        return out

    @staticmethod
    def is_subpath(parent: str, child: str) -> bool:
        return PathUtils.relative_path(parent, child) is not None
