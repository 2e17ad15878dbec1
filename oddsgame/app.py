"""
Wiring for embedding the odds game manager in a bot process.
"""

from typing import Optional

from .config import Config, get_config
from .game.manager import ExpireCallback, OddsGameManager
from .utils.logging import setup_logging


def create_manager(on_expire: ExpireCallback, config: Optional[Config] = None,
                   configure_logging: bool = True) -> OddsGameManager:
    """Build a manager using the configured game timeout.

    The bot passes the coroutine that posts the "challenge timed out"
    notice as ``on_expire``.
    """
    config = config or get_config()

    if configure_logging:
        logger = setup_logging(config)
        logger.info("Starting odds game manager", game_timeout_ms=config.game_timeout_ms,
                    log_level=config.log_level, to_file=config.log_to_file)

    return OddsGameManager(config.game_timeout_ms, on_expire)
