"""Overwrite policy decisions."""

from __future__ import annotations

import logging
from typing import Literal

from edkit.files.errors import DestinationExists
from edkit.files.prompt import Prompter
from edkit.files.types import OverwritePolicy

logger = logging.getLogger(__name__)

OverwriteDecision = Literal["proceed", "ask", "refuse"]


def decide_overwrite(policy: OverwritePolicy, destination_exists: bool) -> OverwriteDecision:
    """Decide what to do about a destination, without any I/O."""
    if not destination_exists or policy == "force":
        return "proceed"
    if policy == "skip":
        return "refuse"
    return "ask"


def check_overwrite(
    policy: OverwritePolicy,
    destination: str,
    *,
    exists: bool,
    prompter: Prompter,
) -> None:
    """Raise DestinationExists unless writing to ``destination`` may go ahead."""
    decision = decide_overwrite(policy, exists)
    if decision == "ask":
        confirmed = prompter.confirm(f"File {destination} already exists; overwrite?")
        decision = "proceed" if confirmed else "refuse"
    logger.debug("Overwrite decision for %s (policy=%s): %s", destination, policy, decision)
    if decision == "refuse":
        raise DestinationExists(destination)
