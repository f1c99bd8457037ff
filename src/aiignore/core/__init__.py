from .cache import CacheEntry, IgnoreFileCache, default_cache
from .errors import BoundaryInconsistencyError, IgnoreError, PatternCompileError, RuleParseError
from .models import RuleReport, Verdict
from .resolver import IgnoreResolver, match_path, should_ignore
from .rules import Rule, RuleSet, make_rule, parse_lines
from .settings import IgnoreSettings, settings
from .wildmatch import CompiledPattern, compile_pattern, tokenize, try_compile

__all__ = [
    "CacheEntry",
    "IgnoreFileCache",
    "default_cache",
    "BoundaryInconsistencyError",
    "IgnoreError",
    "PatternCompileError",
    "RuleParseError",
    "RuleReport",
    "Verdict",
    "IgnoreResolver",
    "match_path",
    "should_ignore",
    "Rule",
    "RuleSet",
    "make_rule",
    "parse_lines",
    "IgnoreSettings",
    "settings",
    "CompiledPattern",
    "compile_pattern",
    "tokenize",
    "try_compile",
]
