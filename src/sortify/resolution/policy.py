"""Binary-file policy transitions.

The policy is a plain value owned by the batch driver. Each binary file is
passed through `decide`, and the returned policy replaces the old one before
the next file is handled.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .models import BinaryAction, BinaryPolicy
from .prompts import Prompter, ask_binary_policy

LOGGER = logging.getLogger(__name__)


def decide(
    policy: BinaryPolicy, path: Path, prompter: Prompter
) -> tuple[BinaryAction, BinaryPolicy]:
    """Return the action for a binary file and the policy for the next one.

    Only `BinaryPolicy.ASK_EACH_TIME` prompts; the other two states answer
    without user interaction and never change.

    Raises:
        PromptError: If the prompt cannot be answered.
    """
    if policy is BinaryPolicy.SKIP_ALL:
        LOGGER.info("Skipped binary file: %s", path)
        return BinaryAction.SKIP, BinaryPolicy.SKIP_ALL
    if policy is BinaryPolicy.NEVER_SKIP:
        return BinaryAction.PROCESS, BinaryPolicy.NEVER_SKIP
    return ask_binary_policy(prompter, path)


__all__ = ["decide"]
