"""Merge configuration sources into a validated `SortifyConfig`."""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from copy import deepcopy
from typing import Any, Dict, Mapping

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError
from .models import SortifyConfig

ENV_PREFIX = "SORTIFY__"


def resolve_with_precedence(
    *,
    defaults: SortifyConfig,
    file_overrides: Mapping[str, Any] | None = None,
    env_overrides: Mapping[str, Any] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> SortifyConfig:
    """Layer overrides on top of defaults; later sources win.

    Order is defaults, then the config file, then environment variables, then
    CLI overrides. Override keys may be nested mappings or dotted paths such
    as ``detection.workers``.

    Raises:
        ConfigError: If a source is malformed or the merged values fail validation.
    """
    merged = defaults.model_dump(mode="python")
    layers = (("file", file_overrides), ("environment", env_overrides), ("cli", cli_overrides))
    for source_name, source in layers:
        if source is not None:
            merged = _merge(merged, _expand_dotted(source, source_name))

    try:
        return SortifyConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration values: {exc}") from exc


def flatten_for_env(config: SortifyConfig) -> Dict[str, str]:
    """Render the config as `SORTIFY__SECTION__KEY` environment assignments."""
    flat: Dict[str, str] = {}
    for section, values in config.model_dump(mode="python").items():
        for key, value in values.items():
            env_key = f"{ENV_PREFIX}{section.upper()}__{key.upper()}"
            if isinstance(value, (dict, list)):
                flat[env_key] = yaml.safe_dump(value, default_flow_style=True).strip()
            elif isinstance(value, bool):
                flat[env_key] = "true" if value else "false"
            else:
                flat[env_key] = "null" if value is None else str(value)
    return flat


def _expand_dotted(source: Mapping[str, Any], source_name: str) -> dict[str, Any]:
    if not isinstance(source, MappingABC):
        raise ConfigError(f"{source_name.capitalize()} overrides must be a mapping.")

    expanded: dict[str, Any] = {}
    for key, value in source.items():
        if not isinstance(key, str):
            raise ConfigError(f"{source_name.capitalize()} override keys must be strings.")
        *parents, leaf = key.split(".")
        node = expanded
        for segment in parents:
            child = node.setdefault(segment, {})
            if not isinstance(child, dict):
                raise ConfigError(
                    f"{source_name.capitalize()} override for {key} conflicts with existing value."
                )
            node = child
        if isinstance(value, MappingABC):
            nested = _expand_dotted(value, source_name)
            current = node.get(leaf)
            node[leaf] = _merge(current if isinstance(current, dict) else {}, nested)
        else:
            node[leaf] = value
    return expanded


def _merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    result = deepcopy(dict(base))
    for key, value in overrides.items():
        current = result.get(key)
        if isinstance(value, MappingABC) and isinstance(current, MappingABC):
            result[key] = _merge(current, value)
        else:
            result[key] = deepcopy(value)
    return result


__all__ = ["ENV_PREFIX", "resolve_with_precedence", "flatten_for_env"]
