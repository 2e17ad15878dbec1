"""
Checks a caller runs before asking the manager for a new game.
"""

from typing import Optional

from ..config import Config, get_config


def validate_challenge(challenger_id: str, target_id: str, max_pick: int,
                       config: Optional[Config] = None,
                       target_is_bot: bool = False) -> Optional[str]:
    """Return a user-facing reason the challenge is invalid, or None."""
    config = config or get_config()

    if target_is_bot:
        return "You cannot challenge a bot."

    if challenger_id == target_id:
        return "You cannot challenge yourself."

    if max_pick < config.min_odds_max or max_pick > config.max_odds_max:
        return f"Max must be between {config.min_odds_max} and {config.max_odds_max}."

    return None
