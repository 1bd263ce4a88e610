"""
User configuration for the CLI.

The config file is TOML with a single ``[default]`` table:

    [default]
    output = "json"

A missing file is the same as an empty one.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import CLIError


class ProfileConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    output: Literal["table", "json"] | None = None


class LoadedConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    default: ProfileConfig = Field(default_factory=ProfileConfig)


def load_config(path: Path) -> LoadedConfig:
    if not path.exists():
        return LoadedConfig()

    try:
        raw = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise CLIError(
            f"Unable to read config file {path}: {exc}",
            exit_code=2,
            error_type="config_error",
        ) from exc

    try:
        return LoadedConfig.model_validate(raw)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise CLIError(
            f"Invalid config file {path}: {problems}",
            exit_code=2,
            error_type="config_error",
            hint="Run `stackfilter config init --force` to start from a fresh template.",
        ) from exc


def config_init_template() -> str:
    return (
        "# stackfilter configuration\n"
        "\n"
        "[default]\n"
        '# Output format: "table" or "json"\n'
        '# output = "table"\n'
    )
