"""Configuration loading from environment variables and filekeeper.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

_DEFAULT_REGISTRY_DIR = Path.home() / ".fms_data"
_CONFIG_FILENAME = "filekeeper.toml"


@dataclass
class FileKeeperConfig:
    """Top-level filekeeper configuration."""

    registry_dir: Path = _DEFAULT_REGISTRY_DIR
    log_level: str = "WARNING"
    log_file: Path | None = None


def load_config(config_path: Path | None = None) -> FileKeeperConfig:
    """Load configuration from environment variables and optional filekeeper.toml.

    Priority: environment variables > filekeeper.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        # Search current dir and ~/.filekeeper/
        for candidate in [
            Path.cwd() / _CONFIG_FILENAME,
            Path.home() / ".filekeeper" / _CONFIG_FILENAME,
        ]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    registry_dir = os.getenv("FILEKEEPER_REGISTRY_DIR", file_data.get("registry_dir"))
    log_file = os.getenv("FILEKEEPER_LOG_FILE", file_data.get("log_file"))

    return FileKeeperConfig(
        registry_dir=Path(registry_dir).expanduser() if registry_dir else _DEFAULT_REGISTRY_DIR,
        log_level=os.getenv("FILEKEEPER_LOG_LEVEL", file_data.get("log_level", "WARNING")),
        log_file=Path(log_file).expanduser() if log_file else None,
    )
