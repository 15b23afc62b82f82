"""Client configuration: registry URL, auth token, and packages directory.

Values are read from ``~/.sealpack/config.json`` when the file exists and
then overridden by environment variables, highest precedence last::

    SEALPACK_REGISTRY_URL   registry root URL
    SEALPACK_TOKEN          bearer token for publish/delete
    SEALPACK_HOME           base directory (config file and packages)

Only the CLI loads configuration. Library code receives explicit values.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from sealpack.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_URL: str = "http://localhost:3000/api"
CONFIG_FILENAME: str = "config.json"

ENV_REGISTRY_URL = "SEALPACK_REGISTRY_URL"
ENV_TOKEN = "SEALPACK_TOKEN"
ENV_HOME = "SEALPACK_HOME"


@dataclass(frozen=True)
class Config:
    """Resolved client configuration.

    Attributes:
        registry_url: Registry root URL, without a trailing ``/``.
        token: Bearer token, or None when not logged in.
        packages_dir: Where installed artifacts are stored.
    """

    registry_url: str = DEFAULT_REGISTRY_URL
    token: str | None = None
    packages_dir: Path = Path.home() / ".sealpack" / "packages"


def default_home(env: Mapping[str, str] | None = None) -> Path:
    env = os.environ if env is None else env
    home = env.get(ENV_HOME, "").strip()
    return Path(home).expanduser() if home else Path.home() / ".sealpack"


def _read_file(path: Path) -> dict[str, object]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return data


def _optional_str(data: Mapping[str, object], key: str, path: Path) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"Config key {key!r} in {path} must be a string")
    return value.strip() or None


def load_config(
    path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Config:
    """Load configuration from *path* (default: ``$SEALPACK_HOME/config.json``).

    A missing file is not an error; defaults apply.

    Raises:
        ConfigError: If the file exists but is not a valid JSON object.
    """
    env = os.environ if env is None else env
    home = default_home(env)
    path = Path(path) if path is not None else home / CONFIG_FILENAME

    registry_url = DEFAULT_REGISTRY_URL
    token: str | None = None
    packages_dir = home / "packages"

    if path.is_file():
        logger.debug("Loading config from %s", path)
        data = _read_file(path)
        registry_url = _optional_str(data, "registry_url", path) or registry_url
        token = _optional_str(data, "token", path)
        configured_dir = _optional_str(data, "packages_dir", path)
        if configured_dir:
            packages_dir = Path(configured_dir).expanduser()

    env_url = env.get(ENV_REGISTRY_URL, "").strip()
    if env_url:
        registry_url = env_url
    env_token = env.get(ENV_TOKEN, "").strip()
    if env_token:
        token = env_token

    return Config(
        registry_url=registry_url.rstrip("/"),
        token=token,
        packages_dir=packages_dir,
    )
