"""Tests for the include/exclude filter parser."""

from __future__ import annotations

import logging

import pytest

from stackfilter.filters import (
    FilterSyntaxError,
    IncludesExcludes,
    ParseErrorKind,
    ParseFailure,
    parse,
    unwrap,
)

# =============================================================================
# Parser tests - empty input
# =============================================================================


@pytest.mark.parametrize("text", [None, ""])
def test_parse_empty_input(text: str | None) -> None:
    """None and the empty string both mean no terms."""
    result = parse(text)
    assert result == IncludesExcludes()
    assert result.ok
    assert result.to_dict() == {"includes": [], "excludes": []}


def test_parse_only_spaces() -> None:
    """Spaces alone produce no terms."""
    result = parse("    ")
    assert result == IncludesExcludes()
    assert result.is_empty


# =============================================================================
# Parser tests - unquoted terms
# =============================================================================


def test_parse_unquoted_terms() -> None:
    """Space-separated words become include terms in order."""
    result = parse("a b c")
    assert result.to_dict() == {"includes": ["a", "b", "c"], "excludes": []}


def test_parse_consecutive_spaces_skipped() -> None:
    """Runs of spaces never produce empty terms."""
    result = parse("  a   b  ")
    assert result == IncludesExcludes(includes=("a", "b"))


def test_parse_only_space_separates() -> None:
    """Tabs and newlines are ordinary term characters."""
    result = parse("a\tb c\nd")
    assert result == IncludesExcludes(includes=("a\tb", "c\nd"))


def test_parse_preserves_case_and_content() -> None:
    """Term content is not normalized."""
    result = parse("Thread.RUN java.lang.Object#wait()")
    assert result == IncludesExcludes(includes=("Thread.RUN", "java.lang.Object#wait()"))


def test_parse_trailing_term_without_space() -> None:
    """End of input completes an unquoted term."""
    result = parse("foo bar")
    assert result == IncludesExcludes(includes=("foo", "bar"))


# =============================================================================
# Parser tests - quoted terms
# =============================================================================


def test_parse_double_quoted_phrase() -> None:
    """Quoted phrases keep internal spaces."""
    result = parse('"foo bar" baz')
    assert result.to_dict() == {"includes": ["foo bar", "baz"], "excludes": []}


def test_parse_single_quoted_phrase() -> None:
    """Single quotes work the same as double quotes."""
    result = parse("'foo bar' baz")
    assert result == IncludesExcludes(includes=("foo bar", "baz"))


def test_parse_single_quote_may_contain_double_quote() -> None:
    """A term opened with ' is only closed by '."""
    result = parse("'say \"hi\"' x")
    assert result == IncludesExcludes(includes=('say "hi"', "x"))


def test_parse_double_quote_may_contain_single_quote() -> None:
    """A term opened with \" is only closed by \"."""
    result = parse('"it\'s here"')
    assert result == IncludesExcludes(includes=("it's here",))


def test_parse_quoted_term_keeps_leading_and_trailing_spaces() -> None:
    """No trimming happens inside quotes."""
    result = parse('"  padded  "')
    assert result == IncludesExcludes(includes=("  padded  ",))


def test_parse_quoted_term_keeps_minus() -> None:
    """A minus inside quotes is literal."""
    result = parse('"-x" "a - b"')
    assert result == IncludesExcludes(includes=("-x", "a - b"))


def test_parse_empty_quoted_term() -> None:
    """An empty quoted term yields an empty-string term."""
    result = parse('"" x')
    assert result == IncludesExcludes(includes=("", "x"))


def test_parse_quoted_term_adjacent_to_next_term() -> None:
    """A closing quote completes the term even without a following space."""
    result = parse('"foo"bar')
    assert result == IncludesExcludes(includes=("foo", "bar"))


# =============================================================================
# Parser tests - exclusions
# =============================================================================


def test_parse_exclusion() -> None:
    """A leading minus marks an exclude term."""
    result = parse("foo -bar")
    assert result.to_dict() == {"includes": ["foo"], "excludes": ["bar"]}


def test_parse_excluded_quoted_phrase() -> None:
    """A minus directly before a quote excludes the quoted phrase."""
    result = parse('-"foo bar" baz')
    assert result.to_dict() == {"includes": ["baz"], "excludes": ["foo bar"]}


def test_parse_minus_inside_term_is_literal() -> None:
    """A minus inside an already-started term is an ordinary character."""
    assert parse("a-b") == IncludesExcludes(includes=("a-b",))
    assert parse("a- b") == IncludesExcludes(includes=("a-", "b"))
    assert parse("-a-b") == IncludesExcludes(excludes=("a-b",))


def test_parse_exclusion_applies_to_one_term_only() -> None:
    """The exclusion flag is reset after the term completes."""
    result = parse("-a b -'c d' e")
    assert result == IncludesExcludes(includes=("b", "e"), excludes=("a", "c d"))


def test_parse_order_preserved_per_list() -> None:
    """Interleaving includes and excludes keeps each list in source order."""
    result = parse("i1 -e1 i2 -e2 -e3 i3")
    assert result.includes == ("i1", "i2", "i3")
    assert result.excludes == ("e1", "e2", "e3")


def test_parse_repeated_minus() -> None:
    """Repeated leading minus signs still mark a single exclude term."""
    result = parse("--foo")
    assert result == IncludesExcludes(excludes=("foo",))


# =============================================================================
# Parser tests - errors
# =============================================================================


@pytest.mark.parametrize(
    ("text", "position"),
    [
        ('"unterminated', 13),
        ("'unterminated", 13),
        ('foo"bar', 3),
        ("foo'bar", 3),
        ('"a\' b', 5),
        ('-"open', 6),
        ('ok "closed" "open', 17),
    ],
)
def test_parse_mismatched_quote(text: str, position: int) -> None:
    """Unclosed quotes and quotes inside unquoted terms are errors."""
    result = parse(text)
    assert isinstance(result, ParseFailure)
    assert not result.ok
    assert result.kind is ParseErrorKind.MISMATCHED_QUOTE
    assert result.message == "Mismatched quote"
    assert result.position == position
    assert result.to_dict() == {"error": "Mismatched quote"}


@pytest.mark.parametrize(
    ("text", "position"),
    [
        ("-", 0),
        ("foo -", 4),
        ("foo - bar", 4),
        ("- foo", 0),
        ("foo --", 5),
    ],
)
def test_parse_invalid_minus(text: str, position: int) -> None:
    """A minus must be directly followed by the first character of a term."""
    result = parse(text)
    assert isinstance(result, ParseFailure)
    assert result.kind is ParseErrorKind.INVALID_MINUS
    assert result.to_dict() == {"error": "Invalid location for minus"}
    assert result.position == position


def test_parse_stops_at_first_error() -> None:
    """Only the first error is reported, with no partial result."""
    result = parse('a - "b')
    assert result == ParseFailure(ParseErrorKind.INVALID_MINUS, 2)


def test_parse_trailing_minus_inside_term_is_not_an_error() -> None:
    """Minus placement rules only apply between terms."""
    assert parse("foo-") == IncludesExcludes(includes=("foo-",))


def test_parse_is_deterministic() -> None:
    """Same input, same result; nothing carries over between calls."""
    assert parse('"x') == parse('"x')
    parse("-a b")
    assert parse("c") == IncludesExcludes(includes=("c",))


def test_parse_failure_logged_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    """Failures are logged at DEBUG only."""
    with caplog.at_level(logging.DEBUG, logger="stackfilter.filters"):
        parse("foo -")
    assert [r.levelno for r in caplog.records] == [logging.DEBUG]
    assert "INVALID_MINUS" in caplog.text


# =============================================================================
# unwrap()
# =============================================================================


def test_unwrap_success() -> None:
    result = parse("a -b")
    assert unwrap(result) is result


def test_unwrap_failure_raises() -> None:
    with pytest.raises(FilterSyntaxError, match="Mismatched quote") as exc_info:
        unwrap(parse('"x'))
    assert exc_info.value.kind is ParseErrorKind.MISMATCHED_QUOTE
    assert isinstance(exc_info.value, ValueError)


# =============================================================================
# Request encoding
# =============================================================================


def test_to_query_params_orders_includes_first() -> None:
    """Each term becomes a repeated include/exclude parameter."""
    result = unwrap(parse("a -x b -y"))
    assert result.to_query_params() == [
        ("include", "a"),
        ("include", "b"),
        ("exclude", "x"),
        ("exclude", "y"),
    ]


def test_to_query_params_empty() -> None:
    assert IncludesExcludes().to_query_params() == []


def test_to_string_minimal_quoting() -> None:
    """Bare where possible, quoted where needed."""
    terms = IncludesExcludes(
        includes=("plain", "two words", "-leading", "", "it's"),
        excludes=("x", 'say "hi"'),
    )
    assert terms.to_string() == "plain \"two words\" \"-leading\" \"\" \"it's\" -x -'say \"hi\"'"


@pytest.mark.parametrize(
    "text",
    [
        "a b c",
        '"foo bar" -baz',
        "'x \"y\"' -\"it's\"",
        'a-b -"-c" ""',
        "tab\there -'  spaced  '",
    ],
)
def test_to_string_reparses_to_equal_result(text: str) -> None:
    """Canonical text parses back to the same terms."""
    result = unwrap(parse(text))
    assert parse(result.to_string()) == result


def test_to_string_rejects_term_with_both_quotes() -> None:
    with pytest.raises(ValueError, match="both quotes"):
        IncludesExcludes(includes=("a'b\"c",)).to_string()


def test_str_is_canonical_text() -> None:
    assert str(unwrap(parse("  -x   y "))) == "y -x"
    assert str(parse("foo -")) == "Invalid location for minus"
