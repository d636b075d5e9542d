# SPDX-License-Identifier: MIT

from typing import Optional

from bugbite.model.document import (
    MAX_INFESTATION,
    SWARM_INFESTATION,
    Document,
    InfestationWarning,
)


def clamp_infestation(infestation: int) -> int:
    return min(MAX_INFESTATION, max(0, infestation))


def is_overrun(infestation: int) -> bool:
    return infestation >= MAX_INFESTATION


def warning_for(infestation: int) -> Optional[InfestationWarning]:
    if is_overrun(infestation):
        return "overrun"
    if infestation >= SWARM_INFESTATION:
        return "swarm"
    return None


def swarm_size(infestation: int) -> int:
    """How many bugs the infestation screen shows for a given level."""
    if infestation <= 0:
        return 0
    if infestation <= 3:
        return 6
    if infestation <= 7:
        return 14
    return 24


def reward_multiplier(infestation: int) -> float:
    # Rewards shrink 5% per infestation point, never below half
    return max(0.5, 1 - 0.05 * clamp_infestation(infestation))


def refresh_infestation_flags(document: Document) -> None:
    """Recompute the stored overrun/warning flags from the infestation value."""
    document["infestation"] = clamp_infestation(document["infestation"])
    document["coins"] = max(0, document["coins"])
    document["overrun"] = is_overrun(document["infestation"])
    document["warning"] = warning_for(document["infestation"])
