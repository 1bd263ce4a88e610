from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_cli_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the CLI at an empty per-test config dir and clear output overrides."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("STACKFILTER_CONFIG_DIR", str(config_dir))
    monkeypatch.delenv("STACKFILTER_OUTPUT", raising=False)
    return config_dir
