"""Reconcile detected content types with declared filename extensions."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from sortify.classification import MISMATCH_LABEL
from sortify.detection import SniffResult, TypeDetector, declared_extension

from .models import (
    UNKNOWN_TYPE,
    BinaryAction,
    BinaryPolicy,
    ConflictChoice,
    FileResolution,
    Mismatch,
)
from .policy import decide
from .prompts import Prompter, ask_conflict_resolution

LOGGER = logging.getLogger(__name__)


class TypeResolver:
    """Turn one file into a `FileResolution`, prompting through a `Prompter`.

    Args:
        detector: Detector used to sniff files that were not sniffed ahead of time.
        prompter: Interactive capability used for conflicts and binary files.
        extension_only: Sort purely by extension; no bytes are read.
        dry_run: Never prompt; record conflicts and binary files as warnings.
    """

    def __init__(
        self,
        detector: TypeDetector,
        prompter: Prompter,
        *,
        extension_only: bool = False,
        dry_run: bool = False,
    ) -> None:
        self.detector = detector
        self.prompter = prompter
        self.extension_only = extension_only
        self.dry_run = dry_run

    def resolve(
        self,
        path: Path,
        policy: BinaryPolicy,
        sniff: Optional[SniffResult] = None,
    ) -> tuple[FileResolution, BinaryPolicy]:
        """Resolve ``path`` under ``policy`` and return the resolution and next policy.

        Args:
            path: File to resolve.
            policy: Binary policy in effect for this file.
            sniff: Pre-computed sniff for ``path``; read on demand when omitted.

        Raises:
            PrefixReadError: If the file cannot be read.
            PromptError: If an interactive choice cannot be read.
        """
        if self.extension_only:
            declared = declared_extension(path)
            resolution = FileResolution(
                path=path, declared=declared, outcome="accept", file_type=declared or UNKNOWN_TYPE
            )
            return resolution, policy

        if sniff is None:
            sniff = self.detector.sniff(path)

        resolution = self._reconcile(sniff)
        if resolution.skipped or not sniff.binary:
            return resolution, policy

        resolution.binary = True
        if self.dry_run:
            resolution.warnings.append(f"Binary file detected: {path}")
            return self._skip_binary(resolution), policy

        action, next_policy = decide(policy, path, self.prompter)
        if action is BinaryAction.SKIP:
            resolution = self._skip_binary(resolution)
        return resolution, next_policy

    def _reconcile(self, sniff: SniffResult) -> FileResolution:
        path, detected, declared = sniff.path, sniff.detected, sniff.declared
        base = {"path": path, "declared": declared, "detected": detected}

        if detected is None:
            return FileResolution(**base, outcome="accept", file_type=declared or UNKNOWN_TYPE)
        if declared is None or declared == detected.lower():
            return FileResolution(**base, outcome="accept", file_type=detected)

        mismatch = Mismatch(detected=detected, declared=declared)
        warning = f"Signature/ext mismatch: {path} (sig: .{detected}, ext: .{declared})"
        if self.dry_run:
            return FileResolution(
                **base, outcome="mismatch", file_type=detected, mismatch=mismatch, warnings=[warning]
            )

        choice = ask_conflict_resolution(self.prompter, path, detected, declared)
        if choice is ConflictChoice.SKIP:
            return FileResolution(**base, outcome="skip", skip_reason="conflict")
        if choice is ConflictChoice.BY_SIGNATURE:
            return FileResolution(**base, outcome="accept", file_type=detected)
        if choice is ConflictChoice.BY_EXTENSION:
            return FileResolution(**base, outcome="accept", file_type=declared)
        return FileResolution(
            **base, outcome="mismatch", file_type=MISMATCH_LABEL, mismatch=mismatch, warnings=[warning]
        )

    def _skip_binary(self, resolution: FileResolution) -> FileResolution:
        LOGGER.debug("Skipping binary file %s", resolution.path)
        return resolution.model_copy(
            update={"outcome": "skip", "file_type": None, "skip_reason": "binary"}
        )


__all__ = ["TypeResolver"]
