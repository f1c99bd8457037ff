"""Decide whether a path is excluded by hierarchical .aiignore files."""

from aiignore.version import __version__
from aiignore.core import (
    IgnoreError,
    IgnoreFileCache,
    IgnoreResolver,
    IgnoreSettings,
    PatternCompileError,
    Rule,
    RuleParseError,
    RuleSet,
    Verdict,
    compile_pattern,
    make_rule,
    match_path,
    should_ignore,
)
from aiignore.core.utils.logging import configure_logging

__all__ = [
    "__version__",
    "IgnoreError",
    "IgnoreFileCache",
    "IgnoreResolver",
    "IgnoreSettings",
    "PatternCompileError",
    "Rule",
    "RuleParseError",
    "RuleSet",
    "Verdict",
    "compile_pattern",
    "configure_logging",
    "make_rule",
    "match_path",
    "should_ignore",
]
