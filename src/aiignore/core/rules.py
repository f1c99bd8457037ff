import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple

from aiignore.core.errors import PatternCompileError, RuleParseError
from aiignore.core.models import RuleReport
from aiignore.core.utils.path import PathUtils
from aiignore.core.wildmatch import CompiledPattern, compile_pattern

_TRAILING_WS = re.compile(r"\s+$")


@dataclass(frozen=True)
class Rule:
    source_path: str
    line_number: int
    raw_text: str
    matcher: CompiledPattern = field(compare=False)
    negated: bool = False
    directory_only: bool = False
    basename_only: bool = False
    anchored: bool = False

    @property
    def base_dir(self) -> str:
        return PathUtils.dirname(self.source_path)

    def candidate_for(self, path: str) -> Optional[str]:
        """String handed to the matcher for ``path``; None when out of scope."""
        if self.basename_only:
            return PathUtils.basename(path)
        return PathUtils.relative_path(self.base_dir, path)

    def matches(self, path: str, is_directory: bool) -> bool:
        if self.directory_only and not is_directory:
            return False
        candidate = self.candidate_for(path)
        if candidate is None:
            return False
        return self.matcher.matches(candidate)

    def to_report(self) -> RuleReport:
        return RuleReport(
            source_path=self.source_path,
            line_number=self.line_number,
            raw_text=self.raw_text,
            pattern=self.matcher.pattern,
            negated=self.negated,
            directory_only=self.directory_only,
            basename_only=self.basename_only,
            anchored=self.anchored,
        )

    def __str__(self) -> str:
        return (
            f"Rule@{self.source_path}:{self.line_number}: '{self.raw_text}'"
            + (" [negated]" if self.negated else "")
            + (" [only directory]" if self.directory_only else "")
            + (" [no directory]" if self.basename_only else "")
        )


@dataclass(frozen=True)
class RuleSet:
    """Rules of one ignore file in ascending line order."""
    source_path: str
    rules: Tuple[Rule, ...] = ()
    errors: Tuple[RuleParseError, ...] = ()

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def first_match(self, path: str, is_directory: bool) -> Optional[Rule]:
        """
        Earliest non-negated rule (file order) that matches ``path``.
        Any matching negated rule ends the scan with None, whether it comes
        before or after a positive match: the path is explicitly kept and
        later lines of this file cannot re-ignore it.
        """
        first: Optional[Rule] = None
        for rule in self.rules:
            if not rule.matches(path, is_directory):
                continue
            if rule.negated:
                return None
            if first is None or rule.line_number < first.line_number:
                first = rule
        return first


def _escaped(text: str, index: int) -> bool:
    """True when the character at ``index`` is preceded by an odd run of backslashes."""
    count = 0
    i = index - 1
    while i >= 0 and text[i] == "\\":
        count += 1
        i -= 1
    return count % 2 == 1


def _strip_trailing_whitespace(line: str) -> str:
    m = _TRAILING_WS.search(line)
    if not m:
        return line
    start = m.start()
    if start > 0 and _escaped(line, start):
        # "foo\   " keeps only the escaped character: "foo ".
        return line[:start - 1] + line[start]
    return line[:start]


def make_rule(source_path: str, line_number: int, raw_line: Optional[str]) -> Optional[Rule]:
    """
    Build a Rule from one ignore-file line.
    Returns None for blank lines and comments; raises RuleParseError when the
    glob portion does not compile.
    """
    if raw_line is None or not raw_line.strip():
        return None
    if raw_line.startswith("#"):
        return None

    pattern = _strip_trailing_whitespace(raw_line)

    directory_only = pattern.endswith("/") and not _escaped(pattern, len(pattern) - 1)
    body = pattern[:-1] if directory_only else pattern
    basename_only = "/" not in body

    negated = False
    if pattern.startswith("!"):
        negated = True
        pattern = pattern[1:]
    elif pattern.startswith("\\!") or pattern.startswith("\\#"):
        pattern = pattern[1:]

    anchored = pattern.startswith("/")
    if anchored:
        pattern = pattern[1:]
    if directory_only:
        pattern = pattern[:-1]

    try:
        matcher = compile_pattern(pattern)
    except PatternCompileError as e:
        raise RuleParseError(source_path, line_number, raw_line, e) from e

    return Rule(
        source_path=source_path,
        line_number=line_number,
        raw_text=raw_line,
        matcher=matcher,
        negated=negated,
        directory_only=directory_only,
        basename_only=basename_only and not anchored,
        anchored=anchored,
    )


def parse_lines(source_path: str, lines: Iterable[str]) -> RuleSet:
    rules: List[Rule] = []
    errors: List[RuleParseError] = []
    for lineno, line in enumerate(lines, start=1):
        try:
            rule = make_rule(source_path, lineno, line)
        except RuleParseError as e:
            errors.append(e)
            continue
        if rule is not None:
            rules.append(rule)
    return RuleSet(source_path=source_path, rules=tuple(rules), errors=tuple(errors))
