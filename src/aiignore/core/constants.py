"""
Centralized constants for aiignore.

Defaults for ignore-file discovery and the POSIX character class table
used by the pattern compiler.
"""

import string

# ============================================================================
# Discovery Defaults
# ============================================================================

DEFAULT_IGNORE_FILENAME = ".aiignore"
"""Ignore file looked up in every directory of the chain."""

DEFAULT_BOUNDARY_MARKER = ".git"
"""Entry whose presence marks a repository root."""

ENV_PREFIX = "AIIGNORE_"
"""Prefix for every environment override read by IgnoreSettings."""


# ============================================================================
# Verdict Reasons
# ============================================================================

REASON_RULE = "rule"
REASON_NO_MATCH = "no_match"
REASON_OUTSIDE_BOUNDARY = "outside_boundary"
REASON_INCONSISTENT = "inconsistent"


# ============================================================================
# POSIX Character Classes (single-byte semantics)
# ============================================================================

_CNTRL = "".join(chr(c) for c in range(0, 32)) + chr(127)
_GRAPH = "".join(chr(c) for c in range(33, 127))

POSIX_CLASSES = {
    "alnum": frozenset(string.ascii_letters + string.digits),
    "alpha": frozenset(string.ascii_letters),
    "blank": frozenset(" \t"),
    "cntrl": frozenset(_CNTRL),
    "digit": frozenset(string.digits),
    "graph": frozenset(_GRAPH),
    "lower": frozenset(string.ascii_lowercase),
    "print": frozenset(" " + _GRAPH),
    "punct": frozenset(string.punctuation),
    "space": frozenset(" \t\n\r\f\v"),
    "upper": frozenset(string.ascii_uppercase),
    "xdigit": frozenset(string.hexdigits),
}
"""Membership tables for ``[:name:]`` bracket members."""
