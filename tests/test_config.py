"""Tests for configuration loading."""

import pytest
from pathlib import Path

from filekeeper.config import load_config

_ENV_KEYS = ["FILEKEEPER_REGISTRY_DIR", "FILEKEEPER_LOG_LEVEL", "FILEKEEPER_LOG_FILE"]


class TestConfig:
    def test_defaults(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path / "home"))
        for key in _ENV_KEYS:
            monkeypatch.delenv(key, raising=False)

        config = load_config()
        assert config.registry_dir.name == ".fms_data"
        assert config.log_level == "WARNING"
        assert config.log_file is None

    def test_env_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("FILEKEEPER_REGISTRY_DIR", str(tmp_path / "reg"))
        monkeypatch.setenv("FILEKEEPER_LOG_LEVEL", "DEBUG")

        config = load_config()
        assert config.registry_dir == tmp_path / "reg"
        assert config.log_level == "DEBUG"

    def test_toml_file(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        for key in _ENV_KEYS:
            monkeypatch.delenv(key, raising=False)

        toml_path = tmp_path / "filekeeper.toml"
        toml_path.write_text(f"""
registry_dir = "{(tmp_path / 'from-toml').as_posix()}"
log_level = "INFO"
log_file = "{(tmp_path / 'fk.log').as_posix()}"
""")
        config = load_config(toml_path)
        assert config.registry_dir == tmp_path / "from-toml"
        assert config.log_level == "INFO"
        assert config.log_file == tmp_path / "fk.log"

    def test_toml_discovered_in_cwd(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        for key in _ENV_KEYS:
            monkeypatch.delenv(key, raising=False)
        (tmp_path / "filekeeper.toml").write_text('log_level = "ERROR"\n')

        config = load_config()
        assert config.log_level == "ERROR"

    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("FILEKEEPER_LOG_LEVEL", "DEBUG")

        toml_path = tmp_path / "filekeeper.toml"
        toml_path.write_text('log_level = "INFO"\n')
        config = load_config(toml_path)
        assert config.log_level == "DEBUG"  # env wins
