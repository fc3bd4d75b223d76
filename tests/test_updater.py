"""Tests for the release check."""

from typing import Any

import pytest
import requests

from sortify.updater import (
    Release,
    ReleaseAsset,
    UpdateCheckError,
    check_for_updates,
    fetch_release,
    find_asset_url,
    target_suffix,
)


class _FakeResponse:
    def __init__(self, payload: Any, status: int = 200) -> None:
        self._payload = payload
        self.status_code = status

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self) -> Any:
        return self._payload


class _FakeSession:
    def __init__(self, response: _FakeResponse) -> None:
        self.response = response
        self.urls: list[str] = []

    def get(self, url: str, **_: Any) -> _FakeResponse:
        self.urls.append(url)
        return self.response


class _ClosingSession(_FakeSession):
    instances: list["_ClosingSession"] = []

    def __init__(self) -> None:
        super().__init__(_FakeResponse(_release("v1.2.0")))
        self.closed = False
        _ClosingSession.instances.append(self)

    def __enter__(self) -> "_ClosingSession":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.closed = True


def _release(tag: str, prerelease: bool = False) -> dict[str, Any]:
    return {
        "tag_name": tag,
        "prerelease": prerelease,
        "assets": [
            {"name": "sortify-linux-x86_64", "browser_download_url": "https://example.invalid/linux"},
            {"name": "sortify-windows-x86_64.exe", "browser_download_url": "https://example.invalid/win"},
        ],
    }


def test_target_suffix() -> None:
    assert target_suffix("Linux", "x86_64") == "linux-x86_64"
    assert target_suffix("Windows", "AMD64") == "windows-x86_64.exe"
    assert target_suffix("Darwin", "arm64") is None


def test_find_asset_url() -> None:
    release = Release.model_validate(_release("v1.0.0"))

    assert find_asset_url(release, "linux-x86_64") == "https://example.invalid/linux"
    assert find_asset_url(release, None) is None
    assert find_asset_url(Release(tag_name="v1", assets=[ReleaseAsset(name="x", browser_download_url="u")]), "y") is None


def test_stable_channel_uses_latest_endpoint() -> None:
    session = _FakeSession(_FakeResponse(_release("v0.5.0")))

    release = fetch_release("owner/repo", session=session)

    assert session.urls == ["https://api.github.com/repos/owner/repo/releases/latest"]
    assert release.tag_name == "v0.5.0"


def test_prerelease_channel_takes_first_release() -> None:
    session = _FakeSession(_FakeResponse([_release("v0.6.0-beta.1", True), _release("v0.5.0")]))

    release = fetch_release("owner/repo", prerelease=True, session=session)

    assert session.urls == ["https://api.github.com/repos/owner/repo/releases"]
    assert release.prerelease


def test_empty_release_list_is_an_error() -> None:
    with pytest.raises(UpdateCheckError):
        fetch_release("owner/repo", prerelease=True, session=_FakeSession(_FakeResponse([])))


def test_http_error_is_wrapped() -> None:
    with pytest.raises(UpdateCheckError, match="Failed to check updates"):
        fetch_release("owner/repo", session=_FakeSession(_FakeResponse({}, status=500)))


def test_newer_release_is_reported(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("sortify.updater.target_suffix", lambda: "linux-x86_64")
    session = _FakeSession(_FakeResponse(_release("v1.2.0")))

    info = check_for_updates("1.1.9", "owner/repo", session=session)

    assert info is not None
    assert info.latest == "1.2.0"
    assert info.download_url == "https://example.invalid/linux"


def test_same_or_older_release_is_not_an_update() -> None:
    session = _FakeSession(_FakeResponse(_release("v0.4.0")))

    assert check_for_updates("0.4.0", "owner/repo", session=session) is None


def test_invalid_tag_is_an_error() -> None:
    session = _FakeSession(_FakeResponse(_release("nightly")))

    with pytest.raises(UpdateCheckError, match="Unrecognised version"):
        check_for_updates("0.4.0", "owner/repo", session=session)


def test_fetch_release_closes_its_own_session(monkeypatch: pytest.MonkeyPatch) -> None:
    _ClosingSession.instances.clear()
    monkeypatch.setattr("sortify.updater.requests.Session", _ClosingSession)

    release = fetch_release("OctoBanon-Main/sortify")

    assert release.tag_name == "v1.2.0"
    (session,) = _ClosingSession.instances
    assert session.closed
    assert session.urls == [
        "https://api.github.com/repos/OctoBanon-Main/sortify/releases/latest"
    ]


def test_fetch_release_leaves_injected_session_open() -> None:
    session = _ClosingSession()

    fetch_release("OctoBanon-Main/sortify", session=session)

    assert not session.closed
