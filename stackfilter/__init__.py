"""
Include/exclude filter parsing for profile and flame-graph text filters.

The parser is available from the package root:

    from stackfilter import parse

    result = parse("Thread.run -Object.wait")
"""

from __future__ import annotations

from .filters import (
    FilterSyntaxError,
    IncludesExcludes,
    ParseErrorKind,
    ParseFailure,
    ParseResult,
    parse,
    unwrap,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Parser
    "parse",
    "unwrap",
    # Results
    "IncludesExcludes",
    "ParseFailure",
    "ParseResult",
    "ParseErrorKind",
    # Errors
    "FilterSyntaxError",
]
