"""Tests for file sniffing and directory scanning."""

from pathlib import Path

import pytest

from conftest import EXE_HEADER, PDF_HEADER, PNG_HEADER, write_file
from sortify.config import SortifyConfig
from sortify.detection import (
    DirectoryScanner,
    PrefixReadError,
    TypeDetector,
    declared_extension,
    detect_type,
    is_binary_prefix,
    read_prefix,
)


def test_detect_type_order_and_fallbacks() -> None:
    assert detect_type(b"") is None
    assert detect_type(b'{"name": "sortify"}') == "json"
    assert detect_type(PDF_HEADER) == "pdf"
    assert detect_type(EXE_HEADER) == "exe"
    assert detect_type(b"just some words") is None


def test_is_binary_prefix_covers_media_and_executables() -> None:
    assert is_binary_prefix(PNG_HEADER)
    assert is_binary_prefix(EXE_HEADER)
    assert is_binary_prefix(b"PK\x03\x04rest")
    assert not is_binary_prefix(b'{"a": 1}')
    assert not is_binary_prefix(b"hello\n")
    assert not is_binary_prefix(b"")


def test_declared_extension_is_lowercase_without_dot() -> None:
    assert declared_extension(Path("Photo.JPEG")) == "jpeg"
    assert declared_extension(Path("archive.tar.gz")) == "gz"
    assert declared_extension(Path("Makefile")) is None


def test_read_prefix_is_capped(tmp_path: Path) -> None:
    path = write_file(tmp_path, "big.bin", b"x" * 500)

    assert read_prefix(path) == b"x" * 64
    assert read_prefix(path, 8) == b"x" * 8


def test_read_prefix_missing_file_raises(tmp_path: Path) -> None:
    missing = tmp_path / "gone.txt"

    with pytest.raises(PrefixReadError) as excinfo:
        read_prefix(missing)

    assert excinfo.value.path == missing
    assert "gone.txt" in str(excinfo.value)


def test_sniff_is_repeatable(tmp_path: Path) -> None:
    path = write_file(tmp_path, "photo.png", EXE_HEADER)
    detector = TypeDetector()

    first = detector.sniff(path)
    second = detector.sniff(path)

    assert first == second
    assert first.detected == "exe"
    assert first.declared == "png"
    assert first.binary
    assert first.sampled_bytes == len(EXE_HEADER)


def test_detector_rejects_out_of_range_prefix() -> None:
    with pytest.raises(ValueError):
        TypeDetector(0)
    with pytest.raises(ValueError):
        TypeDetector(65)


def test_scanner_lists_files_only_in_name_order(tmp_path: Path) -> None:
    write_file(tmp_path, "b.txt", b"b")
    write_file(tmp_path, "a.txt", b"a")
    write_file(tmp_path, ".hidden", b"h")
    (tmp_path / "nested").mkdir()
    write_file(tmp_path / "nested", "inner.txt", b"i")

    scanner = DirectoryScanner(include_hidden=False, follow_symlinks=False)
    names = [path.name for path in scanner.scan(tmp_path)]

    assert names == ["a.txt", "b.txt"]


def test_scanner_include_hidden_and_exclude(tmp_path: Path) -> None:
    write_file(tmp_path, ".hidden", b"h")
    keep = write_file(tmp_path, "keep.txt", b"k")
    tool = write_file(tmp_path, "sortify", b"#!/bin/sh\n")

    scanner = DirectoryScanner(include_hidden=True, follow_symlinks=False, exclude=[tool])
    names = [path.name for path in scanner.scan(tmp_path)]

    assert names == [".hidden", keep.name]


def test_scanner_skips_symlinks_unless_followed(tmp_path: Path) -> None:
    target = write_file(tmp_path, "real.txt", b"r")
    link = tmp_path / "link.txt"
    try:
        link.symlink_to(target)
    except OSError:
        pytest.skip("symlinks unavailable")

    plain = DirectoryScanner(include_hidden=False, follow_symlinks=False)
    following = DirectoryScanner(include_hidden=False, follow_symlinks=True)

    assert [path.name for path in plain.scan(tmp_path)] == ["real.txt"]
    assert [path.name for path in following.scan(tmp_path)] == ["link.txt", "real.txt"]


def test_scanner_missing_directory_yields_nothing(tmp_path: Path) -> None:
    scanner = DirectoryScanner(include_hidden=False, follow_symlinks=False)
    assert list(scanner.scan(tmp_path / "missing")) == []


def test_default_processing_options_keep_dotfiles_and_links(tmp_path: Path) -> None:
    target = write_file(tmp_path, "real.pdf", PDF_HEADER)
    write_file(tmp_path, ".report.pdf", PDF_HEADER)
    link = tmp_path / "link.pdf"
    try:
        link.symlink_to(target)
    except OSError:
        pytest.skip("symlinks unavailable")

    options = SortifyConfig().processing
    scanner = DirectoryScanner(
        include_hidden=options.include_hidden, follow_symlinks=options.follow_symlinks
    )

    names = [path.name for path in scanner.scan(tmp_path)]

    assert names == [".report.pdf", "link.pdf", "real.pdf"]
