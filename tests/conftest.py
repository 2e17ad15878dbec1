"""Shared pytest fixtures."""

from typing import List, Tuple

import pytest

from oddsgame.config import reset_config
from oddsgame.game import OddsGame, OddsGameManager


@pytest.fixture
def game_input():
    """Keyword arguments for create_game, with overrides."""
    def build(**overrides):
        values = {
            "guild_id": "guild-1",
            "channel_id": "channel-1",
            "challenger_id": "challenger-1",
            "target_id": "target-1",
            "max_pick": 10,
            "prompt": "do a thing",
        }
        values.update(overrides)
        return values

    return build


@pytest.fixture
def expired() -> List[Tuple[OddsGame, str]]:
    """Collects expiry notifications."""
    return []


@pytest.fixture
def make_manager(expired):
    """Build a manager that records expiries into ``expired``."""
    async def on_expire(game, reason):
        expired.append((game, reason))

    def factory(timeout_ms: int = 120_000) -> OddsGameManager:
        return OddsGameManager(timeout_ms, on_expire)

    return factory


@pytest.fixture(autouse=True)
def clean_config():
    reset_config()
    yield
    reset_config()
