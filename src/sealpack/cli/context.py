"""Per-invocation CLI state: configuration and the registry client.

The click group stores a ``CliContext`` in ``ctx.obj``. Commands obtain the
registry through it, so tests can pass ``obj=CliContext(registry=fake)`` to
``CliRunner.invoke`` and never touch the network or the user's config.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import click

from sealpack.config import Config, load_config
from sealpack.registry import RegistryClient


@dataclass
class CliContext:
    config: Config | None = None
    registry: Any = None

    def get_config(self) -> Config:
        if self.config is None:
            self.config = load_config()
        return self.config

    def get_registry(self) -> Any:
        """Return the registry client, creating it from config on first use."""
        if self.registry is None:
            config = self.get_config()
            client = RegistryClient(config.registry_url, config.token)
            click.get_current_context().call_on_close(client.close)
            self.registry = client
        return self.registry

    def packages_dir(self, override: str | None) -> Path:
        return Path(override) if override else self.get_config().packages_dir


pass_cli_context = click.make_pass_decorator(CliContext, ensure=True)
