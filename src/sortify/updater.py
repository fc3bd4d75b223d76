"""Check GitHub for a newer Sortify release."""

from __future__ import annotations

import logging
import platform
from typing import Any, List, Optional

import requests
from packaging.version import InvalidVersion, Version
from pydantic import BaseModel, Field, ValidationError

LOGGER = logging.getLogger(__name__)

GITHUB_API = "https://api.github.com"
USER_AGENT = "sortify-updater"


class UpdateCheckError(Exception):
    """Raised when release information cannot be fetched or understood."""


class ReleaseAsset(BaseModel):
    """Downloadable file attached to a release."""

    name: str
    browser_download_url: str


class Release(BaseModel):
    """Subset of the GitHub release payload that Sortify reads."""

    tag_name: str
    prerelease: bool = False
    assets: List[ReleaseAsset] = Field(default_factory=list)


class UpdateInfo(BaseModel):
    """A newer release than the running one.

    Attributes:
        current: Installed version.
        latest: Newest published version.
        download_url: Asset URL for this platform, when one is published.
    """

    current: str
    latest: str
    download_url: Optional[str] = None


def target_suffix(system: Optional[str] = None, machine: Optional[str] = None) -> Optional[str]:
    """Return the asset name suffix published for this platform, if any."""
    system = (system or platform.system()).lower()
    machine = (machine or platform.machine()).lower()
    if machine not in {"x86_64", "amd64"}:
        return None
    if system == "windows":
        return "windows-x86_64.exe"
    if system == "linux":
        return "linux-x86_64"
    return None


def find_asset_url(release: Release, suffix: Optional[str]) -> Optional[str]:
    if suffix is None:
        return None
    for asset in release.assets:
        if asset.name.endswith(suffix):
            return asset.browser_download_url
    return None


def _parse_version(raw: str) -> Version:
    try:
        return Version(raw.strip().lstrip("v"))
    except InvalidVersion as exc:
        raise UpdateCheckError(f"Unrecognised version string: {raw!r}") from exc


def _get_json(http: requests.Session, url: str, timeout: float) -> Any:
    try:
        response = http.get(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
        response.raise_for_status()
        return response.json()
    except requests.RequestException as exc:
        raise UpdateCheckError(f"Failed to check updates: {exc}") from exc
    except ValueError as exc:
        raise UpdateCheckError(f"Release response is not JSON: {exc}") from exc


def fetch_release(
    repository: str,
    *,
    prerelease: bool = False,
    session: Optional[requests.Session] = None,
    timeout: float = 5.0,
) -> Release:
    """Fetch the newest release, including pre-releases when requested.

    Raises:
        UpdateCheckError: If the request fails or the payload is unusable.
    """
    endpoint = "releases" if prerelease else "releases/latest"
    url = f"{GITHUB_API}/repos/{repository}/{endpoint}"
    if session is None:
        with requests.Session() as owned:
            payload = _get_json(owned, url, timeout)
    else:
        payload = _get_json(session, url, timeout)

    if prerelease:
        if not isinstance(payload, list) or not payload:
            raise UpdateCheckError("No releases published yet.")
        payload = payload[0]

    try:
        return Release.model_validate(payload)
    except ValidationError as exc:
        raise UpdateCheckError(f"Unexpected release payload: {exc}") from exc


def check_for_updates(
    current_version: str,
    repository: str,
    *,
    prerelease: bool = False,
    session: Optional[requests.Session] = None,
    timeout: float = 5.0,
) -> Optional[UpdateInfo]:
    """Return update details when a newer release exists, otherwise None."""
    release = fetch_release(repository, prerelease=prerelease, session=session, timeout=timeout)
    current = _parse_version(current_version)
    latest = _parse_version(release.tag_name)
    LOGGER.debug("Current version %s, latest release %s", current, latest)
    if latest <= current:
        return None
    return UpdateInfo(
        current=str(current),
        latest=str(latest),
        download_url=find_asset_url(release, target_suffix()),
    )


__all__ = [
    "Release",
    "ReleaseAsset",
    "UpdateCheckError",
    "UpdateInfo",
    "check_for_updates",
    "fetch_release",
    "find_asset_url",
    "target_suffix",
]
