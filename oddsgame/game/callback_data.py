"""
Callback data for odds game buttons.

Buttons carry ``odds:<action>:<game_id>`` so a press can be routed back to
the manager.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel

PREFIX = "odds"


class CallbackAction(str, Enum):
    """Button actions."""
    ACCEPT = "accept"
    DECLINE = "decline"
    ENTER = "enter"
    SUBMIT = "submit"


class ParsedCallback(BaseModel):
    action: CallbackAction
    game_id: str


def make_callback_data(action: CallbackAction, game_id: str) -> str:
    return f"{PREFIX}:{CallbackAction(action).value}:{game_id}"


def parse_callback_data(data: str) -> Optional[ParsedCallback]:
    """Parse button callback data, returning None if it isn't ours."""
    parts = data.split(":")
    if len(parts) < 3:
        return None

    prefix, action_raw, game_id = parts[:3]
    if prefix != PREFIX or not action_raw or not game_id:
        return None

    try:
        action = CallbackAction(action_raw)
    except ValueError:
        return None

    return ParsedCallback(action=action, game_id=game_id)
