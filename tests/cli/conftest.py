"""Shared fixtures for CLI tests.

Commands receive an in-memory registry and a config pointing at a temporary
packages directory through ``CliContext``, so no test touches the network or
the user's home directory.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from sealpack.cli.context import CliContext
from sealpack.config import Config
from tests.helpers import FakeRegistry


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def packages_dir(tmp_path: Path) -> Path:
    return tmp_path / "store"


@pytest.fixture
def cli_state(postgres_registry: FakeRegistry, packages_dir: Path) -> CliContext:
    """CLI state wired to the postgres registry and a temporary store."""
    return CliContext(
        config=Config(registry_url="http://unused.test", token="t", packages_dir=packages_dir),
        registry=postgres_registry,
    )
