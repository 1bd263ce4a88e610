from __future__ import annotations

import os
import time
from dataclasses import dataclass, field
from typing import Any, Literal

from .click_compat import click
from .config import LoadedConfig, load_config
from .errors import CLIError
from .paths import CliPaths, get_paths
from .results import CommandMeta, CommandResult, ErrorInfo

OutputFormat = Literal["table", "json"]

_OUTPUT_FORMATS: tuple[OutputFormat, ...] = ("table", "json")


@dataclass
class CLIContext:
    output: OutputFormat | None  # None until resolved against env/config
    quiet: bool
    verbosity: int

    _paths: CliPaths = field(default_factory=get_paths)
    _loaded_config: LoadedConfig | None = None

    @property
    def paths(self) -> CliPaths:
        return self._paths

    def load_config(self) -> LoadedConfig:
        if self._loaded_config is None:
            self._loaded_config = load_config(self.paths.config_path)
        return self._loaded_config

    def resolve_output(self, *, read_config: bool = True) -> OutputFormat:
        """Flag > STACKFILTER_OUTPUT > config file > table."""
        if self.output is not None:
            return self.output

        env_output = os.getenv("STACKFILTER_OUTPUT", "").strip().lower()
        if env_output:
            if env_output not in _OUTPUT_FORMATS:
                raise CLIError(
                    f"Invalid STACKFILTER_OUTPUT: {env_output!r} (expected table or json).",
                    exit_code=2,
                    error_type="usage_error",
                )
            self.output = env_output  # type: ignore[assignment]
        else:
            configured = self.load_config().default.output if read_config else None
            self.output = configured or "table"
        return self.output  # type: ignore[return-value]

    def read_filter_text(self, text: str) -> str:
        """Return the filter argument, reading stdin for '-'."""
        if text != "-":
            return text
        raw = click.get_text_stream("stdin").read()
        if raw.endswith("\r\n"):
            return raw[:-2]
        if raw.endswith("\n"):
            return raw[:-1]
        return raw


def exit_code_for_exception(exc: Exception) -> int:
    if isinstance(exc, CLIError):
        return exc.exit_code
    return 1


def error_info_for_exception(exc: Exception) -> ErrorInfo:
    if isinstance(exc, CLIError):
        return ErrorInfo(
            type=exc.error_type, message=exc.message, hint=exc.hint, details=exc.details
        )
    return ErrorInfo(type="internal_error", message=str(exc) or exc.__class__.__name__)


def build_result(
    *,
    ok: bool,
    command: str,
    started_at: float,
    data: Any | None,
    warnings: list[str],
    error: ErrorInfo | None = None,
) -> CommandResult:
    duration_ms = int(max(0.0, (time.time() - started_at) * 1000))
    return CommandResult(
        ok=ok,
        command=command,
        data=data,
        warnings=warnings,
        meta=CommandMeta(duration_ms=duration_ms),
        error=error,
    )
