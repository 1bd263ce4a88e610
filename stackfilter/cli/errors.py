from __future__ import annotations

from typing import Any

from stackfilter.filters import FilterSyntaxError


class CLIError(Exception):
    """A user-facing command failure, rendered through the result envelope."""

    def __init__(
        self,
        message: str,
        *,
        exit_code: int = 1,
        error_type: str = "error",
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code
        self.error_type = error_type
        self.hint = hint
        self.details = details

    @classmethod
    def from_filter_syntax(cls, exc: FilterSyntaxError, *, text: str) -> CLIError:
        """A parse_error carrying the failure kind, offset and the rejected text."""
        return cls(
            exc.failure.message,
            exit_code=2,
            error_type="parse_error",
            details={"kind": exc.kind.name, "position": exc.failure.position, "text": text},
        )

    def __str__(self) -> str:  # pragma: no cover
        return self.message
