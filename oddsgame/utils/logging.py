"""
Logging configuration for the odds challenge bot.
"""

import sys
import logging
from typing import List, Optional

import structlog
from structlog.typing import FilteringBoundLogger, Processor

from ..config import Config, get_config

LOG_FILE_NAME = "oddsgame.log"


def _attach_file_handler(config: Config, level: int) -> None:
    config.logs_path.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(config.logs_path / LOG_FILE_NAME)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logging.getLogger().addHandler(handler)


def _build_processors(config: Config) -> List[Processor]:
    # File output is one JSON object per line; the console gets colours.
    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if config.log_to_file
        else structlog.dev.ConsoleRenderer()
    )
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
        renderer,
    ]


def setup_logging(config: Optional[Config] = None) -> FilteringBoundLogger:
    """Route structlog through stdlib logging at the configured level."""
    config = config or get_config()
    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    if config.log_to_file:
        _attach_file_handler(config, level)

    structlog.configure(
        processors=_build_processors(config),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger("oddsgame")
