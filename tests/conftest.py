"""Shared fixtures for the Sortify test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pytest

from sortify.resolution import PromptError

PDF_HEADER = b"%PDF-1.7\n%\xe2\xe3\xcf\xd3\n"
PNG_HEADER = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"
EXE_HEADER = b"MZ\x90\x00\x03\x00\x00\x00\x04\x00\x00\x00\xff\xff"


class ScriptedPrompter:
    """Prompter that replays queued answers and records every question asked."""

    def __init__(self, answers: Sequence[int] = ()) -> None:
        self.answers = list(answers)
        self.calls: list[tuple[str, tuple[str, ...]]] = []

    def select(self, title: str, options: Sequence[str], details: Sequence[str] = ()) -> int:
        self.calls.append((title, tuple(options)))
        if not self.answers:
            raise PromptError("no scripted answer left")
        return self.answers.pop(0)


@pytest.fixture
def prompter() -> ScriptedPrompter:
    return ScriptedPrompter()


def write_file(directory: Path, name: str, content: bytes) -> Path:
    path = directory / name
    path.write_bytes(content)
    return path
