"""Unit tests for configuration management."""

from pathlib import Path

import pytest

from sortify.config import (
    ConfigError,
    ConfigManager,
    SortifyConfig,
    flatten_for_env,
    resolve_with_precedence,
)


def _fresh_manager(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> ConfigManager:
    monkeypatch.setenv("HOME", str(tmp_path))
    return ConfigManager()


def test_ensure_exists_creates_default_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)

    path = manager.ensure_exists()

    assert path == tmp_path / ".sortify" / "config.yaml"
    text = path.read_text(encoding="utf-8")
    assert "Sortify configuration file" in text
    assert "Last updated:" in text

    config = manager.load(include_env=False)
    assert isinstance(config, SortifyConfig)
    assert config.detection.prefix_bytes == 64
    assert config.processing.include_hidden is True
    assert config.processing.follow_symlinks is True


def test_resolve_with_precedence_respects_order(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)
    manager.ensure_exists()

    manager.save({"detection": {"workers": 2}, "organization": {"conflict_resolution": "timestamp"}})

    env = {"SORTIFY__DETECTION__WORKERS": "4", "SORTIFY__UPDATES__CHECK_ON_STARTUP": "false"}
    cli = {"detection.workers": 8}

    config = ConfigManager(env=env).load(cli_overrides=cli)

    assert config.organization.conflict_resolution == "timestamp"
    assert config.updates.check_on_startup is False
    # CLI overrides take precedence over environment
    assert config.detection.workers == 8


def test_env_layer_can_be_ignored(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    manager = ConfigManager(env={"SORTIFY__DETECTION__WORKERS": "4"})

    assert manager.load().detection.workers == 4
    assert manager.load(include_env=False).detection.workers == 1


def test_load_without_ensure_file_leaves_disk_untouched(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)

    config = manager.load(ensure_file=False, include_env=False)

    assert config == SortifyConfig()
    assert not manager.config_path.exists()


def test_invalid_yaml_raises_config_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)
    manager.ensure_exists()

    manager.config_path.write_text("- not-a-mapping", encoding="utf-8")

    with pytest.raises(ConfigError):
        manager.load()


def test_unknown_keys_are_rejected(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)
    manager.save({"detection": {"magic": True}})

    with pytest.raises(ConfigError):
        manager.load(include_env=False)


def test_flatten_for_env_renders_defaults() -> None:
    flat = flatten_for_env(SortifyConfig())

    assert flat["SORTIFY__DETECTION__PREFIX_BYTES"] == "64"
    assert flat["SORTIFY__PROCESSING__FOLLOW_SYMLINKS"] == "true"
    assert flat["SORTIFY__ORGANIZATION__CONFLICT_RESOLUTION"] == "append_number"


@pytest.mark.parametrize("prefix_bytes", [0, 65, "lots"])
def test_prefix_bytes_is_bounded(prefix_bytes: object) -> None:
    with pytest.raises(ConfigError):
        resolve_with_precedence(
            defaults=SortifyConfig(),
            file_overrides={"detection": {"prefix_bytes": prefix_bytes}},
        )
