"""
Game status transitions.
"""

from enum import Enum
from typing import Dict, Set

import structlog

logger = structlog.get_logger(__name__)


class GameStatus(str, Enum):
    """Game status enumeration."""
    PENDING = "pending"
    ACTIVE = "active"


# A game leaves ACTIVE only by being removed from the manager.
VALID_TRANSITIONS: Dict[GameStatus, Set[GameStatus]] = {
    GameStatus.PENDING: {GameStatus.ACTIVE},
    GameStatus.ACTIVE: set(),
}


def can_transition_to(current: GameStatus, new_status: GameStatus) -> bool:
    """Check if a game may move from ``current`` to ``new_status``."""
    if new_status in VALID_TRANSITIONS.get(current, set()):
        return True

    logger.debug(
        "Invalid status transition attempted",
        current_status=current.value,
        new_status=new_status.value,
    )
    return False


def accepts_picks(status: GameStatus) -> bool:
    """Picks are only recorded once the target has accepted."""
    return status == GameStatus.ACTIVE
