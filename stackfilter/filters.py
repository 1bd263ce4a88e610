"""
Include/exclude filter parser for profile (stack-frame) text filters.

Converts the free-text value of a profile filter box into two ordered lists of
terms: those a stack frame must match and those it must not match.

Example:
    from stackfilter.filters import parse

    result = parse('"java.lang.Thread run" -sleep park')
    if result.ok:
        result.includes  # ("java.lang.Thread run", "park")
        result.excludes  # ("sleep",)
    else:
        print(result.message)  # e.g. "Mismatched quote"

Syntax:
    - Terms are separated by spaces (only the space character).
    - '...' or "..." quotes a term so it can contain spaces or the other quote.
    - A leading '-' (directly before the term) turns it into an exclude term.

Parsing never raises; failures come back as a ParseFailure value. Use
unwrap() where an exception is more convenient.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Union

logger = logging.getLogger(__name__)

QUOTES = ("'", '"')
SEPARATOR = " "
EXCLUDE_MARKER = "-"


class ParseErrorKind(Enum):
    """The closed set of filter syntax errors (value is the user-facing message)."""

    MISMATCHED_QUOTE = "Mismatched quote"
    INVALID_MINUS = "Invalid location for minus"


@dataclass(frozen=True)
class IncludesExcludes:
    """A successfully parsed filter."""

    includes: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()

    ok = True

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to filter on (callers skip the request)."""
        return not self.includes and not self.excludes

    def to_dict(self) -> dict[str, list[str]]:
        return {"includes": list(self.includes), "excludes": list(self.excludes)}

    def to_query_params(self) -> list[tuple[str, str]]:
        """
        Request parameters for the profile endpoints.

        Each term becomes its own repeated ``include`` or ``exclude`` parameter,
        includes first, both in parse order.
        """
        params = [("include", term) for term in self.includes]
        params.extend(("exclude", term) for term in self.excludes)
        return params

    def to_string(self) -> str:
        """
        Render back to filter text that parses to an equal result.

        Raises:
            ValueError: If a term contains both quote characters.
        """
        parts = [_format_term(term) for term in self.includes]
        parts.extend(EXCLUDE_MARKER + _format_term(term) for term in self.excludes)
        return SEPARATOR.join(parts)

    def __str__(self) -> str:
        return self.to_string()


@dataclass(frozen=True)
class ParseFailure:
    """A filter that could not be parsed."""

    kind: ParseErrorKind
    position: int  # Offset in the input where the error was detected

    ok = False

    @property
    def message(self) -> str:
        return self.kind.value

    def to_dict(self) -> dict[str, str]:
        return {"error": self.message}

    def __str__(self) -> str:
        return self.message


ParseResult = Union[IncludesExcludes, ParseFailure]


class FilterSyntaxError(ValueError):
    """Raised by unwrap() for a filter that failed to parse."""

    def __init__(self, failure: ParseFailure):
        super().__init__(failure.message)
        self.failure = failure

    @property
    def kind(self) -> ParseErrorKind:
        return self.failure.kind


def _format_term(term: str) -> str:
    """Quote a term only when it would not survive being written bare."""
    needs_quotes = (
        not term
        or SEPARATOR in term
        or term.startswith(EXCLUDE_MARKER)
        or any(q in term for q in QUOTES)
    )
    if not needs_quotes:
        return term
    if '"' not in term:
        return f'"{term}"'
    if "'" not in term:
        return f"'{term}'"
    raise ValueError(f"Term cannot be written as filter text (contains both quotes): {term!r}")


# =============================================================================
# Scanner
# =============================================================================


class _State(Enum):
    """Scanner states."""

    IDLE = auto()  # Between terms
    IN_UNQUOTED_TERM = auto()  # Inside a bare term
    IN_QUOTED_TERM = auto()  # Inside '...' or "..."


class _Scanner:
    """Single-use, left-to-right scanner over one filter string."""

    def __init__(self, text: str):
        self.text = text
        self.state = _State.IDLE
        self.quote = ""  # Opening quote of the current quoted term
        self.exclude = False  # Pending/current term is an exclude term
        self.term: list[str] = []
        self.includes: list[str] = []
        self.excludes: list[str] = []

    def _start_term(self, state: _State, first: str = "") -> None:
        self.state = state
        self.term = [first] if first else []

    def _complete_term(self) -> None:
        target = self.excludes if self.exclude else self.includes
        target.append("".join(self.term))
        self.state = _State.IDLE
        self.quote = ""
        self.exclude = False
        self.term = []

    def _minus_is_valid(self, pos: int) -> bool:
        # A minus must be directly followed by the first character of a term
        nxt = pos + 1
        return nxt < len(self.text) and self.text[nxt] != SEPARATOR

    def scan(self) -> ParseResult:
        for pos, ch in enumerate(self.text):
            if self.state is _State.IN_QUOTED_TERM:
                if ch == self.quote:
                    self._complete_term()
                else:
                    self.term.append(ch)
            elif self.state is _State.IN_UNQUOTED_TERM:
                if ch == SEPARATOR:
                    self._complete_term()
                elif ch in QUOTES:
                    return _fail(ParseErrorKind.MISMATCHED_QUOTE, pos)
                else:
                    self.term.append(ch)
            elif ch == SEPARATOR:
                continue
            elif ch in QUOTES:
                self.quote = ch
                self._start_term(_State.IN_QUOTED_TERM)
            elif ch == EXCLUDE_MARKER:
                if not self._minus_is_valid(pos):
                    return _fail(ParseErrorKind.INVALID_MINUS, pos)
                self.exclude = True
            else:
                self._start_term(_State.IN_UNQUOTED_TERM, ch)

        if self.state is _State.IN_QUOTED_TERM:
            return _fail(ParseErrorKind.MISMATCHED_QUOTE, len(self.text))
        if self.state is _State.IN_UNQUOTED_TERM:
            self._complete_term()
        return IncludesExcludes(tuple(self.includes), tuple(self.excludes))


def _fail(kind: ParseErrorKind, pos: int) -> ParseFailure:
    logger.debug("Filter parse failed: %s at position %d", kind.name, pos)
    return ParseFailure(kind, pos)


def parse(text: str | None) -> ParseResult:
    """
    Parse filter text into include and exclude terms.

    Args:
        text: Raw filter text. None and "" both mean "no filter".

    Returns:
        IncludesExcludes on success, ParseFailure on a syntax error. Scanning
        stops at the first error and no partial result is returned.

    Examples:
        >>> parse("foo -bar").to_dict()
        {'includes': ['foo'], 'excludes': ['bar']}

        >>> parse('-"foo bar" baz').to_dict()
        {'includes': ['baz'], 'excludes': ['foo bar']}

        >>> parse("a-b").to_dict()
        {'includes': ['a-b'], 'excludes': []}

        >>> parse("foo -").to_dict()
        {'error': 'Invalid location for minus'}
    """
    if not text:
        return IncludesExcludes()
    return _Scanner(text).scan()


def unwrap(result: ParseResult) -> IncludesExcludes:
    """
    Return the parsed terms or raise.

    Raises:
        FilterSyntaxError: If ``result`` is a ParseFailure.
    """
    if isinstance(result, ParseFailure):
        raise FilterSyntaxError(result)
    return result
