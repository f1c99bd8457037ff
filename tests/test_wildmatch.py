import pytest

from aiignore.core.errors import PatternCompileError
from aiignore.core.wildmatch import TokenKind, compile_pattern, tokenize, try_compile


def assert_matches(pattern, path):
    assert compile_pattern(pattern).matches(path), f"{pattern!r} should match {path!r}"


def assert_not_matches(pattern, path):
    assert not compile_pattern(pattern).matches(path), f"{pattern!r} should NOT match {path!r}"


def test_literal_paths():
    assert_matches("a/b/c", "a/b/c")
    assert_not_matches("a/b/c", "a/b/d")
    assert_not_matches("a/b", "a/b/c")
    assert_not_matches("a/b/c", "a/b")


def test_escaped_characters_are_literal():
    assert_matches("\\*/\\?/\\./\\[", "*/?/./[")
    assert_not_matches("\\*", "abc")
    assert_matches("a\\ b", "a b")
    assert_matches("\\\\", "\\")


def test_star_stays_inside_one_segment():
    assert_matches("a/*/c", "a/anything/c")
    assert_matches("a/b*", "a/b_and_more")
    assert_matches("*c", "abc")
    assert_not_matches("a/*/c", "a/b/d/c")
    assert_not_matches("a*c", "a/c")


def test_star_matches_empty_segment():
    assert_matches("a/*/c", "a//c")


def test_multiple_stars():
    assert_matches("*/*", "a/b")
    assert_matches("a/*/*", "a/b/c")
    assert_not_matches("a/*/*", "a/b")
    assert_matches("*a*b*", "xxaybz")


def test_globstar_skips_whole_segments():
    assert_matches("a/**/c", "a/c")
    assert_matches("a/**/c", "a/b/c")
    assert_matches("a/**/c", "a/x/y/z/c")
    assert_matches("a/**/c", "a/bde/c")
    assert_not_matches("a/**/c", "a/b/cde")


def test_leading_globstar():
    assert_matches("**/somedir/secret.json", "somedir/secret.json")
    assert_matches("**/somedir/secret.json", "src/another/somedir/secret.json")
    assert_not_matches("**/somedir/secret.json", "src/secret.json")


def test_lone_globstar_matches_everything():
    for path in ("", "a", "a/b/c"):
        assert_matches("**", path)


def test_trailing_globstar_matches_contents():
    assert_matches("a/**", "a/b")
    assert_matches("a/**", "a/b/c.txt")
    assert_not_matches("a/**", "a")
    assert_not_matches("a/**", "b/c")


def test_globstar_inside_segment_acts_like_star():
    assert_matches("a/**b/c", "a/b/c")
    assert_matches("a**b", "axxb")
    assert_not_matches("a**b", "a/b")


def test_question_mark():
    assert_matches("a/?/c", "a/b/c")
    assert_matches("a/b?", "a/bc")
    assert_matches("??", "ab")
    assert_not_matches("?", "/")
    assert_not_matches("a/b?", "a/b")
    assert_not_matches("a/?/c", "a/xyz/c")


def test_bracket_sets():
    assert_matches("a/[abc]/c", "a/b/c")
    assert_not_matches("a/[abc]/c", "a/d/c")
    for ch in "abc":
        assert_matches("[a-c]", ch)
    assert_not_matches("[a-c]", "d")
    assert_matches("file[0-9].txt", "file1.txt")
    assert_not_matches("file[0-9].txt", "filea.txt")


def test_negated_bracket_sets():
    assert_matches("[^abc]", "d")
    assert_not_matches("[^abc]", "a")
    assert_matches("[^a-c]", "d")
    assert_not_matches("[^a-c]", "b")
    assert_matches("[!a-c]", "d")
    assert_not_matches("[!a-c]", "a")


def test_negated_bracket_never_matches_separator():
    assert_not_matches("a[^b]c", "a/c")
    assert_not_matches("[!x]", "/")


def test_bracket_with_multiple_ranges_and_literals():
    for ch in "ay_!":
        assert_matches("[a-cx-z_!]", ch)
    for ch in "dw":
        assert_not_matches("[a-cx-z_!]", ch)


def test_bracket_dash_edges_are_literal():
    assert_matches("[a-]", "-")
    assert_matches("[-a]", "-")
    assert_not_matches("[a-]", "b")


def test_bracket_escape():
    assert_matches("[\\]]", "]")
    assert_matches("[\\^x]", "^")


def test_posix_classes():
    assert_matches("[[:alnum:]]", "a")
    assert_matches("[[:alnum:]]", "5")
    assert_not_matches("[[:alnum:]]", "-")
    assert_matches("[[:alpha:]]", "Z")
    assert_not_matches("[[:alpha:]]", "9")
    assert_matches("[[:digit:]]", "7")
    assert_matches("[[:lower:]]", "x")
    assert_not_matches("[[:lower:]]", "X")
    assert_matches("[[:upper:]]", "Y")
    assert_matches("a[[:space:]]b", "a b")
    assert_matches("a[[:space:]]b", "a\tb")
    assert_matches("[[:blank:]]", "\t")
    assert_matches("[[:xdigit:]]", "f")
    assert_matches("[[:xdigit:]]", "A")
    assert_not_matches("[[:xdigit:]]", "g")
    assert_matches("[[:punct:]]", "!")
    assert_not_matches("[[:punct:]]", "a")
    assert_matches("[[:cntrl:]]", "\x07")
    assert_matches("[[:print:]]", " ")
    assert_not_matches("[[:graph:]]", " ")


def test_posix_class_combined_with_members():
    assert_matches("[[:digit:]_]", "_")
    assert_matches("[[:digit:]_]", "4")
    assert_not_matches("[^[:digit:]]", "4")
    assert_matches("[^[:digit:]]", "x")


def test_mixed_patterns():
    assert_matches("src/**/*.[ch]", "src/core/main.c")
    assert_matches("src/**/*.[ch]", "src/utils/network/http.h")
    assert_not_matches("src/**/*.[ch]", "src/README.md")


def test_trailing_and_leading_slash_are_literal_separators():
    assert_matches("a/", "a/")
    assert_matches("a/b/", "a/b/")
    assert_not_matches("a/b/", "a/b")
    assert_matches("/a/b/c", "/a/b/c")
    assert_not_matches("/a/b/c", "a/b/c")


@pytest.mark.parametrize("pattern", ["", "a[b", "[", "[]", "a\\", "a//b", "/", "[[:bogus:]]", "[a\\"])
def test_invalid_patterns_fail_to_compile(pattern):
    with pytest.raises(PatternCompileError):
        compile_pattern(pattern)
    assert try_compile(pattern) is None


def test_compile_error_carries_pattern_and_position():
    with pytest.raises(PatternCompileError) as exc:
        compile_pattern("ab[cd")
    assert exc.value.pattern == "ab[cd"
    assert exc.value.position == 2
    assert "unclosed bracket set" in str(exc.value)


def test_tokenize_keeps_segment_boundaries():
    kinds = [t.kind for t in tokenize("a/**/b*c/[xy]?")]
    assert kinds == [
        TokenKind.LITERAL,
        TokenKind.SEPARATOR,
        TokenKind.GLOBSTAR_SLASH,
        TokenKind.LITERAL,
        TokenKind.STAR,
        TokenKind.LITERAL,
        TokenKind.SEPARATOR,
        TokenKind.BRACKET,
        TokenKind.ANY_CHAR,
    ]


def test_tokenize_merges_literal_runs():
    tokens = tokenize("ab\\*c")
    assert len(tokens) == 1
    assert tokens[0].text == "ab*c"


def test_compilation_is_deterministic():
    first = compile_pattern("x/**/y*")
    second = compile_pattern("x/**/y*")
    assert first == second
    for path in ("x/y", "x/a/yb", "x/a/b", "y"):
        assert first.matches(path) == second.matches(path)


def test_pathological_stars_finish():
    pattern = compile_pattern("*a*a*a*a*a*a*a*a*b")
    assert not pattern.matches("a" * 200)
    assert pattern.matches("a" * 200 + "b")
