"""Tests for config file loading and environment overrides."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from sealpack.config import DEFAULT_REGISTRY_URL, load_config
from sealpack.exceptions import ConfigError


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path: Path) -> None:
        config = load_config(env={"SEALPACK_HOME": str(tmp_path)})
        assert config.registry_url == DEFAULT_REGISTRY_URL
        assert config.token is None
        assert config.packages_dir == tmp_path / "packages"

    def test_file_values(self, tmp_path: Path) -> None:
        (tmp_path / "config.json").write_text(json.dumps({
            "registry_url": "https://reg.example.com/api/",
            "token": "abc",
            "packages_dir": str(tmp_path / "vendor"),
        }))
        config = load_config(env={"SEALPACK_HOME": str(tmp_path)})
        assert config.registry_url == "https://reg.example.com/api"
        assert config.token == "abc"
        assert config.packages_dir == tmp_path / "vendor"

    def test_env_overrides_file(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"registry_url": "https://file.example", "token": "file"}))
        config = load_config(path, env={
            "SEALPACK_REGISTRY_URL": "https://env.example/",
            "SEALPACK_TOKEN": "env-token",
        })
        assert config.registry_url == "https://env.example"
        assert config.token == "env-token"

    def test_blank_env_values_ignored(self, tmp_path: Path) -> None:
        config = load_config(env={"SEALPACK_HOME": str(tmp_path), "SEALPACK_TOKEN": "  "})
        assert config.token is None

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text("{broken")
        with pytest.raises(ConfigError):
            load_config(path, env={})

    def test_not_an_object(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text("[]")
        with pytest.raises(ConfigError):
            load_config(path, env={})

    def test_wrong_value_type(self, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"token": 123}))
        with pytest.raises(ConfigError):
            load_config(path, env={})
