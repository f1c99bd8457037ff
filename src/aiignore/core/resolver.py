"""
Hierarchical ignore resolution.

For a target path the resolver finds the boundary root (nearest ancestor
holding the boundary marker, e.g. ``.git``), builds the chain
``target, parent, ..., root`` and walks it from the root inward. The ignore
file(s) of each level are tested against every chain entry below that
level, outermost first. The first non-negated match ends the resolution,
so once a directory is ignored nothing beneath it can be re-included by a
deeper ignore file.

Without a boundary root only the target's own directory is consulted,
unless ``IGNORE_OUTSIDE_BOUNDARY`` is set, in which case the target is
reported as ignored without looking at any rules.
"""

from pathlib import Path
from typing import List, Optional, Tuple, Union

from aiignore.core.cache import IgnoreFileCache, default_cache
from aiignore.core.constants import (
    REASON_INCONSISTENT,
    REASON_NO_MATCH,
    REASON_OUTSIDE_BOUNDARY,
    REASON_RULE,
)
from aiignore.core.errors import BoundaryInconsistencyError
from aiignore.core.models import Verdict
from aiignore.core.rules import Rule
from aiignore.core.settings import IgnoreSettings, settings
from aiignore.core.utils.fs import FileSystem
from aiignore.core.utils.logging import get_logger
from aiignore.core.utils.path import PathUtils

logger = get_logger("aiignore.resolver")

PathLike = Union[str, Path]


class IgnoreResolver:
    def __init__(
        self,
        settings_obj: Optional[IgnoreSettings] = None,
        cache: Optional[IgnoreFileCache] = None,
        fs: Optional[FileSystem] = None,
    ):
        self.settings = settings_obj or settings
        if cache is None:
            cache = IgnoreFileCache(fs=fs, quiet=self.settings.QUIET) if fs is not None else default_cache()
        self.cache = cache
        self.fs = fs or cache.fs

    def _debug(self, event: str, **kw) -> None:
        if self.settings.DEBUG_LOG:
            logger.debug(event, **kw)

    def find_boundary_root(self, path: str) -> Optional[str]:
        """Nearest ancestor of ``path`` that contains the boundary marker."""
        marker = self.settings.BOUNDARY_MARKER
        for parent in PathUtils.list_ancestors(path):
            if self.fs.exists(PathUtils.join(parent, marker)):
                return parent
        return None

    def build_chain(self, path: str, boundary_root: Optional[str]) -> List[str]:
        """
        ``[path, parent, ..., boundary_root]``, or ``[path, dirname(path)]``
        when there is no boundary root.
        """
        chain = [path]
        if boundary_root is None:
            chain.append(PathUtils.dirname(path))
            return chain

        if PathUtils.relative_path(boundary_root, path) is None:
            raise BoundaryInconsistencyError(
                f"Path '{path}' is not prefixed by the inferred boundary root '{boundary_root}'",
                path, boundary_root)
        for parent in PathUtils.list_ancestors(path):
            chain.append(parent)
            if parent == boundary_root:
                break
        if chain[-1] != boundary_root:
            raise BoundaryInconsistencyError(
                f"The last path '{chain[-1]}' is not the boundary root '{boundary_root}'",
                path, boundary_root)
        return chain

    def _scan_chain(self, chain: List[str]) -> Optional[Rule]:
        names = self.settings.ignore_filenames
        # chain[0] is the target; it never owns an ignore file of interest.
        for level in range(len(chain) - 1, 0, -1):
            for name in names:
                ignore_path = PathUtils.join(chain[level], name)
                rule_set = self.cache.load(ignore_path, quiet=self.settings.QUIET)
                if rule_set is None:
                    continue
                for j in range(level - 1, -1, -1):
                    candidate = chain[j]
                    is_directory = j != 0
                    self._debug("checking_path", path=candidate, ignore_file=ignore_path, is_directory=is_directory)
                    rule = rule_set.first_match(candidate, is_directory)
                    if rule is not None:
                        self._debug("path_matched", path=candidate, rule=str(rule))
                        return rule
        return None

    def _evaluate(self, target_path: PathLike) -> Tuple[Optional[Rule], Verdict]:
        path = PathUtils.normalize(target_path)
        boundary_root = self.find_boundary_root(path)
        self._debug("boundary_root_inferred", path=path, boundary_root=boundary_root)

        if boundary_root is None and self.settings.IGNORE_OUTSIDE_BOUNDARY:
            return None, Verdict(path=path, ignored=True, reason=REASON_OUTSIDE_BOUNDARY)

        try:
            chain = self.build_chain(path, boundary_root)
        except BoundaryInconsistencyError as e:
            if not self.settings.QUIET:
                logger.error("boundary_inconsistent", path=e.path, boundary_root=e.boundary_root, error=e.message)
            return None, Verdict(path=path, reason=REASON_INCONSISTENT, boundary_root=boundary_root)

        self._debug("chain_built", chain=chain)
        rule = self._scan_chain(chain)
        if rule is None:
            return None, Verdict(path=path, reason=REASON_NO_MATCH, boundary_root=boundary_root)
        return rule, Verdict(
            path=path, ignored=True, reason=REASON_RULE, boundary_root=boundary_root, rule=rule.to_report())

    def resolve(self, target_path: PathLike) -> Optional[Rule]:
        """
        The rule that ignores ``target_path``, or None when no rule does.

        None is not a full verdict: with ``IGNORE_OUTSIDE_BOUNDARY`` a path
        outside any boundary root is ignored without a rule, so callers that
        need the yes/no answer should use ``check()`` or ``is_ignored()``.
        """
        rule, _verdict = self._evaluate(target_path)
        return rule

    def check(self, target_path: PathLike) -> Verdict:
        _rule, verdict = self._evaluate(target_path)
        if verdict.ignored and self.settings.WARN_IGNORED:
            logger.warning(
                "path_ignored",
                path=verdict.path,
                reason=verdict.reason,
                rule=verdict.rule.describe() if verdict.rule else None,
            )
        elif not verdict.ignored and self.settings.WARN_NOT_IGNORED:
            logger.warning("path_not_ignored", path=verdict.path, reason=verdict.reason)
        return verdict

    def is_ignored(self, target_path: PathLike) -> bool:
        return self.check(target_path).ignored


def match_path(target_path: PathLike, settings_obj: Optional[IgnoreSettings] = None) -> Optional[Rule]:
    """Resolve against the process-wide cache."""
    return IgnoreResolver(settings_obj=settings_obj).resolve(target_path)


def should_ignore(target_path: PathLike, settings_obj: Optional[IgnoreSettings] = None) -> bool:
    return IgnoreResolver(settings_obj=settings_obj).is_ignored(target_path)
