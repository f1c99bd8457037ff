"""
Gitignore glob compiler.

A pattern is compiled in two passes:

1. ``tokenize()`` turns the glob into a flat tuple of ``Token`` values with
   path separators kept as explicit tokens.
2. ``_build_chain()`` folds the tokens right-to-left into a linked chain of
   ``Node`` objects. Every node owns its continuation (``node.next``) and
   knows how far it may advance from a given offset; the chain always ends
   in an ``End`` node.

Matching walks the chain with an explicit stack instead of recursion, and
remembers (node, offset) pairs that were already explored, so ``*`` and
``**/`` only ever search over the residual tail of the pattern.

Supported operators: literal runs, ``*``, ``**`` / ``**/``, ``?``, bracket
sets (``[abc]``, ``[a-z]``, ``[^...]``, ``[!...]``, ``[:class:]`` members)
and ``\\`` escapes. Only whole-string matches are reported.
"""

from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from typing import FrozenSet, List, Optional, Sequence, Tuple

from aiignore.core.constants import POSIX_CLASSES
from aiignore.core.errors import PatternCompileError

SEP = "/"


class TokenKind(Enum):
    LITERAL = "literal"
    STAR = "star"
    GLOBSTAR = "globstar"
    GLOBSTAR_SLASH = "globstar_slash"
    ANY_CHAR = "any_char"
    BRACKET = "bracket"
    SEPARATOR = "separator"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str = ""
    negated: bool = False
    chars: FrozenSet[str] = field(default_factory=frozenset)
    ranges: Tuple[Tuple[str, str], ...] = ()
    classes: Tuple[str, ...] = ()

    def accepts(self, ch: str) -> bool:
        """Bracket membership for a single character. Never true for '/'."""
        if ch == SEP:
            return False
        hit = (
            ch in self.chars
            or any(lo <= ch <= hi for lo, hi in self.ranges)
            or any(ch in POSIX_CLASSES[name] for name in self.classes)
        )
        return hit != self.negated


_STAR = Token(TokenKind.STAR, "*")
_GLOBSTAR = Token(TokenKind.GLOBSTAR, "**")
_GLOBSTAR_SLASH = Token(TokenKind.GLOBSTAR_SLASH, "**/")
_ANY_CHAR = Token(TokenKind.ANY_CHAR, "?")
_SEPARATOR = Token(TokenKind.SEPARATOR, SEP)


# ============================================================================
# Tokenizer
# ============================================================================

def _push_literal(tokens: List[Token], text: str) -> None:
    if tokens and tokens[-1].kind is TokenKind.LITERAL:
        tokens[-1] = Token(TokenKind.LITERAL, tokens[-1].text + text)
    else:
        tokens.append(Token(TokenKind.LITERAL, text))


def _read_bracket(pattern: str, start: int) -> Tuple[Token, int]:
    n = len(pattern)
    j = start + 1
    negated = False
    # git wildmatch also negates on "!".
    if j < n and pattern[j] in "^!":
        negated = True
        j += 1

    chars = set()
    ranges: List[Tuple[str, str]] = []
    classes: List[str] = []
    members = 0
    while True:
        if j >= n:
            raise PatternCompileError(pattern, "unclosed bracket set", start)
        ch = pattern[j]
        if ch == "]":
            if members == 0:
                raise PatternCompileError(pattern, "empty bracket set", start)
            j += 1
            break
        if pattern.startswith("[:", j):
            end = pattern.find(":]", j + 2)
            if end != -1:
                name = pattern[j + 2:end]
                if name not in POSIX_CLASSES:
                    raise PatternCompileError(pattern, f"unknown character class '{name}'", j)
                classes.append(name)
                members += 1
                j = end + 2
                continue
        if ch == "\\":
            if j + 1 >= n:
                raise PatternCompileError(pattern, "dangling escape", j)
            ch = pattern[j + 1]
            j += 2
        else:
            j += 1

        if j + 1 < n and pattern[j] == "-" and pattern[j + 1] != "]":
            hi = pattern[j + 1]
            step = 2
            if hi == "\\":
                if j + 2 >= n:
                    raise PatternCompileError(pattern, "dangling escape", j + 1)
                hi = pattern[j + 2]
                step = 3
            ranges.append((ch, hi))
            j += step
        else:
            chars.add(ch)
        members += 1

    token = Token(
        TokenKind.BRACKET,
        pattern[start:j],
        negated=negated,
        chars=frozenset(chars),
        ranges=tuple(ranges),
        classes=tuple(classes),
    )
    return token, j


def _read_segment(pattern: str, start: int, tokens: List[Token]) -> int:
    """Consume one non-empty run of non-separator operators."""
    n = len(pattern)
    i = start
    while i < n and pattern[i] != SEP:
        ch = pattern[i]
        if ch == "*":
            # Adjacent stars inside a segment collapse into a single '*'.
            while i < n and pattern[i] == "*":
                i += 1
            tokens.append(_STAR)
        elif ch == "?":
            tokens.append(_ANY_CHAR)
            i += 1
        elif ch == "\\":
            if i + 1 >= n:
                raise PatternCompileError(pattern, "dangling escape", i)
            _push_literal(tokens, pattern[i + 1])
            i += 2
        elif ch == "[":
            token, i = _read_bracket(pattern, i)
            tokens.append(token)
        else:
            _push_literal(tokens, ch)
            i += 1
    if i == start:
        raise PatternCompileError(pattern, "empty path segment", start)
    return i


def tokenize(pattern: str) -> Tuple[Token, ...]:
    if not pattern:
        raise PatternCompileError(pattern, "empty pattern", 0)

    n = len(pattern)
    tokens: List[Token] = []
    i = 0
    if pattern[0] == SEP:
        tokens.append(_SEPARATOR)
        i = 1

    while True:
        if pattern.startswith("**", i) and (i + 2 == n or pattern[i + 2] == SEP):
            if i + 2 == n:
                tokens.append(_GLOBSTAR)
                break
            if i + 3 == n:
                tokens.append(_GLOBSTAR)
                tokens.append(_SEPARATOR)
                break
            tokens.append(_GLOBSTAR_SLASH)
            i += 3
            continue
        i = _read_segment(pattern, i, tokens)
        if i == n:
            break
        tokens.append(_SEPARATOR)
        i += 1
        if i == n:
            break
    return tuple(tokens)


# ============================================================================
# Combinator chain
# ============================================================================

class Node:
    __slots__ = ("next", "index")

    def __init__(self, next_node: Optional["Node"]):
        self.next = next_node
        self.index = 0 if next_node is None else next_node.index + 1

    def advance(self, s: str, pos: int) -> Sequence[int]:
        raise NotImplementedError


class End(Node):
    __slots__ = ()

    def __init__(self):
        super().__init__(None)

    def advance(self, s: str, pos: int) -> Sequence[int]:
        return ()


class Literal(Node):
    __slots__ = ("text",)

    def __init__(self, text: str, next_node: Node):
        super().__init__(next_node)
        self.text = text

    def advance(self, s: str, pos: int) -> Sequence[int]:
        if s.startswith(self.text, pos):
            return (pos + len(self.text),)
        return ()


class AnyChar(Node):
    __slots__ = ()

    def advance(self, s: str, pos: int) -> Sequence[int]:
        if pos < len(s) and s[pos] != SEP:
            return (pos + 1,)
        return ()


class CharSet(Node):
    __slots__ = ("token",)

    def __init__(self, token: Token, next_node: Node):
        super().__init__(next_node)
        self.token = token

    def advance(self, s: str, pos: int) -> Sequence[int]:
        if pos < len(s) and self.token.accepts(s[pos]):
            return (pos + 1,)
        return ()


class Star(Node):
    """Any run of non-separator characters, shortest first."""
    __slots__ = ()

    def advance(self, s: str, pos: int) -> Sequence[int]:
        stop = s.find(SEP, pos)
        if stop == -1:
            stop = len(s)
        return range(pos, stop + 1)


class SegmentSkip(Node):
    """``**/``: zero or more whole non-empty ``segment/`` units."""
    __slots__ = ()

    def advance(self, s: str, pos: int) -> Sequence[int]:
        out = [pos]
        cur = pos
        while True:
            stop = s.find(SEP, cur)
            if stop == -1 or stop == cur:
                break
            cur = stop + 1
            out.append(cur)
        return out


class Rest(Node):
    """Trailing ``**``: anything, separators included."""
    __slots__ = ()

    def advance(self, s: str, pos: int) -> Sequence[int]:
        return range(pos, len(s) + 1)


def _build_node(token: Token, next_node: Node) -> Node:
    kind = token.kind
    if kind is TokenKind.LITERAL or kind is TokenKind.SEPARATOR:
        if isinstance(next_node, Literal):
            return Literal(token.text + next_node.text, next_node.next)
        return Literal(token.text, next_node)
    if kind is TokenKind.STAR:
        return Star(next_node)
    if kind is TokenKind.GLOBSTAR:
        return Rest(next_node)
    if kind is TokenKind.GLOBSTAR_SLASH:
        return SegmentSkip(next_node)
    if kind is TokenKind.ANY_CHAR:
        return AnyChar(next_node)
    if kind is TokenKind.BRACKET:
        return CharSet(token, next_node)
    raise ValueError(f"unhandled token kind: {kind}")


def _build_chain(tokens: Sequence[Token]) -> Node:
    node: Node = End()
    for token in reversed(tokens):
        node = _build_node(token, node)
    return node


class CompiledPattern:
    """Immutable whole-string matcher for one glob."""

    __slots__ = ("pattern", "tokens", "_head")

    def __init__(self, pattern: str, tokens: Tuple[Token, ...]):
        self.pattern = pattern
        self.tokens = tokens
        self._head = _build_chain(tokens)

    def matches(self, candidate: str) -> bool:
        n = len(candidate)
        stack = [(self._head, 0)]
        seen = set()
        while stack:
            node, pos = stack.pop()
            key = (node.index, pos)
            if key in seen:
                continue
            seen.add(key)
            if node.next is None:
                if pos == n:
                    return True
                continue
            # Reverse so the shortest advance is explored first.
            for nxt in reversed(node.advance(candidate, pos)):
                stack.append((node.next, nxt))
        return False

    __call__ = matches

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CompiledPattern):
            return NotImplemented
        return self.pattern == other.pattern

    def __hash__(self) -> int:
        return hash(self.pattern)

    def __repr__(self) -> str:
        return f"CompiledPattern({self.pattern!r})"


@lru_cache(maxsize=2048)
def compile_pattern(pattern: str) -> CompiledPattern:
    """Compile ``pattern`` or raise PatternCompileError."""
    return CompiledPattern(pattern, tokenize(pattern))


def try_compile(pattern: str) -> Optional[CompiledPattern]:
    try:
        return compile_pattern(pattern)
    except PatternCompileError:
        return None
