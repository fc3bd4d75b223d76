"""Configuration management for Sortify.

Settings live in ``~/.sortify/config.yaml``. `ConfigManager.load` layers that
file, ``SORTIFY__SECTION__KEY`` environment variables and CLI overrides on top
of the model defaults.
"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

import yaml

from .exceptions import ConfigError
from .models import SortifyConfig
from .resolver import ENV_PREFIX, flatten_for_env, resolve_with_precedence

DEFAULT_CONFIG_PATH = Path("~/.sortify/config.yaml")
_HEADER_LINES = (
    "# Sortify configuration file",
    "# Change values with `sortify config set KEY --value V` or `sortify config edit`.",
)


class ConfigManager:
    """Owns the on-disk YAML file and resolves the effective `SortifyConfig`."""

    def __init__(
        self,
        config_path: Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._path = Path(config_path or DEFAULT_CONFIG_PATH).expanduser()
        self._environ = os.environ if env is None else env

    @property
    def config_path(self) -> Path:
        return self._path

    def load(
        self,
        *,
        cli_overrides: Mapping[str, Any] | None = None,
        include_env: bool = True,
        ensure_file: bool = True,
    ) -> SortifyConfig:
        """Return validated settings.

        Args:
            cli_overrides: Dotted-key values from command line flags.
            include_env: Whether ``SORTIFY__*`` variables are applied.
            ensure_file: Create the file with defaults when it is missing. Read-only
                commands pass False so they never write to the home directory.

        Raises:
            ConfigError: If the file cannot be parsed or a value is invalid.
        """
        if ensure_file:
            self.ensure_exists()

        env_layer: dict[str, Any] = {}
        if include_env:
            env_layer = self._env_layer(self._environ)

        return resolve_with_precedence(
            defaults=SortifyConfig(),
            file_overrides=self._read_file(),
            env_overrides=env_layer or None,
            cli_overrides=cli_overrides,
        )

    def load_file_overrides(self) -> dict[str, Any]:
        """Return the raw mapping stored in the config file."""
        return self._read_file()

    def save(self, config: SortifyConfig | Mapping[str, Any]) -> None:
        """Write ``config`` as YAML below a comment header with a timestamp."""
        if isinstance(config, SortifyConfig):
            data = config.model_dump(mode="json")
        else:
            data = dict(config)
        written_at = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        header = "\n".join((*_HEADER_LINES, f"# Last updated: {written_at}"))
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            f"{header}\n{yaml.safe_dump(data, sort_keys=False)}", encoding="utf-8"
        )

    def ensure_exists(self) -> Path:
        """Write the default settings if the file is missing and return its path."""
        if not self._path.exists():
            self.save(SortifyConfig())
        return self._path

    def read_text(self) -> str:
        return self._path.read_text(encoding="utf-8") if self._path.exists() else ""

    def _read_file(self) -> dict[str, Any]:
        text = self.read_text()
        if not text:
            return {}
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Cannot parse {self._path}: {exc}") from exc
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"{self._path} must contain a YAML mapping.")
        return data

    @staticmethod
    def _env_layer(environ: Mapping[str, str]) -> dict[str, Any]:
        """Turn ``SORTIFY__DETECTION__WORKERS=4`` into ``{"detection.workers": 4}``."""
        layer: dict[str, Any] = {}
        for name, raw in environ.items():
            if not name.startswith(ENV_PREFIX):
                continue
            parts = [part.lower() for part in name[len(ENV_PREFIX) :].split("__") if part]
            if not parts:
                continue
            try:
                layer[".".join(parts)] = yaml.safe_load(raw)
            except yaml.YAMLError:
                layer[".".join(parts)] = raw
        return layer


__all__ = [
    "ConfigManager",
    "DEFAULT_CONFIG_PATH",
    "SortifyConfig",
    "resolve_with_precedence",
    "flatten_for_env",
    "ConfigError",
]
