"""High-level sorting pipeline orchestration."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterator, Optional, Sequence

from sortify.detection import SniffResult
from sortify.resolution import BinaryPolicy, TypeResolver

from .models import SortResult

LOGGER = logging.getLogger(__name__)

ProgressCallback = Callable[[int, Path], None]


class SortingPipeline:
    """Resolve a batch of files in order while threading the binary policy.

    Sniffing may be spread over ``workers`` threads because it touches no shared
    state. Prompts and policy transitions always happen on the calling thread,
    one file at a time, in input order.
    """

    def __init__(self, resolver: TypeResolver, *, workers: int = 1) -> None:
        self.resolver = resolver
        self.workers = max(1, int(workers))

    def run(
        self,
        paths: Sequence[Path],
        policy: BinaryPolicy = BinaryPolicy.ASK_EACH_TIME,
        on_progress: Optional[ProgressCallback] = None,
    ) -> SortResult:
        """Resolve every path and return the aggregated result.

        Args:
            paths: Files to resolve, in processing order.
            policy: Binary policy to start from.
            on_progress: Called with the index and path before each file.

        Raises:
            PrefixReadError: If any file cannot be read; the batch stops there.
            PromptError: If an interactive choice cannot be read.
        """
        result = SortResult(
            dry_run=self.resolver.dry_run, extension_only=self.resolver.extension_only
        )
        if self._parallel(paths):
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                sniffs = executor.map(self.resolver.detector.sniff, paths)
                policy = self._resolve_all(paths, sniffs, policy, result, on_progress)
        else:
            sniffs = (None for _ in paths)
            policy = self._resolve_all(paths, sniffs, policy, result, on_progress)

        result.policy = policy
        LOGGER.info(
            "Resolved %d file(s); %d skipped; policy=%s",
            len(result.resolutions),
            len(result.skipped),
            policy.value,
        )
        return result

    def _parallel(self, paths: Sequence[Path]) -> bool:
        return self.workers > 1 and len(paths) > 1 and not self.resolver.extension_only

    def _resolve_all(
        self,
        paths: Sequence[Path],
        sniffs: Iterator[Optional[SniffResult]],
        policy: BinaryPolicy,
        result: SortResult,
        on_progress: Optional[ProgressCallback],
    ) -> BinaryPolicy:
        for index, (path, sniff) in enumerate(zip(paths, sniffs)):
            if on_progress is not None:
                on_progress(index, path)
            resolution, policy = self.resolver.resolve(path, policy, sniff)
            result.resolutions.append(resolution)
        return policy


__all__ = ["ProgressCallback", "SortingPipeline"]
