"""Tests for batch resolution."""

from pathlib import Path

import pytest

from conftest import EXE_HEADER, PDF_HEADER, ScriptedPrompter, write_file
from sortify.detection import PrefixReadError, TypeDetector
from sortify.resolution import BinaryPolicy, TypeResolver
from sortify.sorting import SortingPipeline


def _pipeline(prompter: ScriptedPrompter, *, workers: int = 1, **kwargs) -> SortingPipeline:
    return SortingPipeline(TypeResolver(TypeDetector(), prompter, **kwargs), workers=workers)


def test_skip_all_carries_across_files(tmp_path: Path) -> None:
    paths = [
        write_file(tmp_path, "a.exe", EXE_HEADER),
        write_file(tmp_path, "b.exe", EXE_HEADER),
        write_file(tmp_path, "c.txt", b"hello\n"),
    ]
    prompter = ScriptedPrompter([1])

    result = _pipeline(prompter).run(paths)

    assert len(prompter.calls) == 1
    assert result.policy is BinaryPolicy.SKIP_ALL
    assert result.skipped == paths[:2]
    assert [resolution.file_type for resolution in result.accepted] == ["txt"]


@pytest.mark.parametrize("workers", [1, 3])
def test_results_keep_input_order(tmp_path: Path, workers: int) -> None:
    paths = [write_file(tmp_path, f"note{index}.txt", b"text\n") for index in range(6)]
    paths.append(write_file(tmp_path, "report.pdf", PDF_HEADER))
    seen: list[int] = []

    result = _pipeline(ScriptedPrompter(), workers=workers, dry_run=True).run(
        paths, on_progress=lambda index, _path: seen.append(index)
    )

    assert [resolution.path for resolution in result.resolutions] == paths
    assert seen == list(range(len(paths)))
    assert result.dry_run


def test_dry_run_collects_mismatches_and_warnings(tmp_path: Path) -> None:
    paths = [write_file(tmp_path, "photo.png", EXE_HEADER)]

    result = _pipeline(ScriptedPrompter(), dry_run=True).run(paths)

    assert result.mismatches[0][0] == paths[0]
    assert len(result.warnings) == 2
    assert result.policy is BinaryPolicy.ASK_EACH_TIME


def test_read_failure_aborts_batch(tmp_path: Path) -> None:
    paths = [write_file(tmp_path, "a.txt", b"a"), tmp_path / "missing.txt"]

    with pytest.raises(PrefixReadError):
        _pipeline(ScriptedPrompter()).run(paths)


def test_extension_only_batch(tmp_path: Path) -> None:
    paths = [write_file(tmp_path, "clip.mp4", b"not really a video")]

    result = _pipeline(ScriptedPrompter(), workers=4, extension_only=True).run(paths)

    assert result.extension_only
    assert result.resolutions[0].file_type == "mp4"
