from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir, user_log_dir

APP_NAME = "stackfilter"


@dataclass(frozen=True, slots=True)
class CliPaths:
    config_dir: Path
    log_dir: Path

    @property
    def config_path(self) -> Path:
        return self.config_dir / "config.toml"

    @property
    def log_file(self) -> Path:
        return self.log_dir / "stackfilter.log"


def get_paths() -> CliPaths:
    """Resolve per-user directories; STACKFILTER_CONFIG_DIR overrides the config dir."""
    override = os.getenv("STACKFILTER_CONFIG_DIR", "").strip()
    config_dir = Path(override) if override else Path(user_config_dir(APP_NAME))
    return CliPaths(config_dir=config_dir, log_dir=Path(user_log_dir(APP_NAME)))
