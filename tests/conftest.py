"""Shared fixtures for sealpack tests."""

import pathlib

import pytest

from sealpack.core.manifest import Manifest
from tests.helpers import FakeRegistry


@pytest.fixture
def registry() -> FakeRegistry:
    """An empty in-memory registry."""
    return FakeRegistry()


@pytest.fixture
def postgres_registry() -> FakeRegistry:
    """Registry with alice/postgres depending on alice/jsonutil ~2.1.0.

    alice/postgres: 1.0.0, 1.5.0 (both depend on alice/jsonutil ~2.1.0)
    alice/jsonutil: 2.1.0, 2.1.4, 2.2.0
    """
    reg = FakeRegistry()
    reg.publish("alice/postgres", "1.0.0", {"alice/jsonutil": "~2.1.0"})
    reg.publish("alice/postgres", "1.5.0", {"alice/jsonutil": "~2.1.0"})
    for version in ("2.1.0", "2.1.4", "2.2.0"):
        reg.publish("alice/jsonutil", version)
    return reg


@pytest.fixture
def postgres_manifest() -> Manifest:
    return Manifest.parse(
        "name: alice/my-project\n"
        "version: 1.0.0\n"
        "dependencies:\n"
        "  alice/postgres: ^1.0.0\n"
    )


@pytest.fixture
def project_dir(tmp_path: pathlib.Path) -> pathlib.Path:
    """A project directory holding a sealpack.yml for the postgres scenario."""
    (tmp_path / "sealpack.yml").write_text(
        "name: alice/my-project\n"
        "version: 1.0.0\n"
        "dependencies:\n"
        "  '@alice/postgres': ^1.0.0\n"
    )
    return tmp_path
