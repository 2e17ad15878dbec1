"""
Odds game package.
"""

from .callback_data import CallbackAction, ParsedCallback, make_callback_data, parse_callback_data
from .manager import OddsGameManager
from .models import ExpireReason, GameError, GameErrorKind, OddsGame, PickOutcome, Result
from .rules import validate_challenge
from .state_machine import GameStatus

__all__ = [
    "OddsGameManager",
    "OddsGame",
    "GameStatus",
    "GameError",
    "GameErrorKind",
    "PickOutcome",
    "Result",
    "ExpireReason",
    "CallbackAction",
    "ParsedCallback",
    "make_callback_data",
    "parse_callback_data",
    "validate_challenge",
]
