"""Configuration models describing Sortify settings."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

MAX_PREFIX_BYTES = 64


class SortifyBaseModel(BaseModel):
    """Shared configuration for Sortify Pydantic models."""

    model_config = ConfigDict(extra="forbid")


class DetectionSettings(SortifyBaseModel):
    """Options governing content sniffing.

    Attributes:
        prefix_bytes: Number of leading bytes sampled from each file.
        extension_only: Disable signature detection and sort by extension alone.
        workers: Number of threads used to sniff files ahead of resolution.
    """

    prefix_bytes: int = Field(default=MAX_PREFIX_BYTES, ge=1, le=MAX_PREFIX_BYTES)
    extension_only: bool = False
    workers: int = Field(default=1, ge=1)


class ProcessingOptions(SortifyBaseModel):
    """Options controlling which directory entries are considered.

    Attributes:
        include_hidden: Whether dot-files are sorted (on by default, like any other file).
        follow_symlinks: Whether symbolic links to regular files are sorted.
    """

    include_hidden: bool = True
    follow_symlinks: bool = True


class OrganizationOptions(SortifyBaseModel):
    """Settings that govern how files are moved into category folders.

    Attributes:
        conflict_resolution: Suffix strategy used when a destination already exists.
    """

    conflict_resolution: Literal["append_number", "timestamp"] = "append_number"


class LoggingSettings(SortifyBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
    """

    level: str = "WARNING"


class CLIOptions(SortifyBaseModel):
    """CLI behavior defaults and presentation preferences.

    Attributes:
        quiet_default: Whether commands suppress non-error output by default.
        summary_default: Whether commands only print summary lines by default.
    """

    quiet_default: bool = False
    summary_default: bool = False


class UpdateSettings(SortifyBaseModel):
    """Release checking behavior.

    Attributes:
        check_on_startup: Whether `sortify sort` checks for a newer release first.
        prerelease_channel: Whether pre-releases count as available updates.
        timeout_seconds: HTTP timeout for the release lookup.
        repository: GitHub `owner/name` slug that publishes releases.
    """

    check_on_startup: bool = True
    prerelease_channel: bool = False
    timeout_seconds: float = Field(default=5.0, gt=0)
    repository: str = "OctoBanon-Main/sortify"


class SortifyConfig(SortifyBaseModel):
    """Top-level configuration struct for Sortify.

    Attributes:
        detection: Content sniffing settings.
        processing: Directory scanning settings.
        organization: Move and collision settings.
        logging: Logging configuration.
        cli: CLI presentation defaults.
        updates: Release check settings.
    """

    detection: DetectionSettings = Field(default_factory=DetectionSettings)
    processing: ProcessingOptions = Field(default_factory=ProcessingOptions)
    organization: OrganizationOptions = Field(default_factory=OrganizationOptions)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)
    updates: UpdateSettings = Field(default_factory=UpdateSettings)


__all__ = [
    "MAX_PREFIX_BYTES",
    "SortifyBaseModel",
    "DetectionSettings",
    "ProcessingOptions",
    "OrganizationOptions",
    "LoggingSettings",
    "CLIOptions",
    "UpdateSettings",
    "SortifyConfig",
]
