"""
Odds game manager.

Owns every live game and the per-target locks that keep a user from being
challenged twice in the same channel at once. All public operations are
synchronous and run to completion on the event loop, so they are atomic with
respect to each other and to expiry timers.
"""

import asyncio
import uuid
from datetime import timedelta
from typing import Awaitable, Callable, Dict, Optional, Set, Tuple

import structlog

from .models import ExpireReason, GameErrorKind, OddsGame, PickOutcome, Result, utcnow
from .state_machine import GameStatus, accepts_picks, can_transition_to

logger = structlog.get_logger(__name__)

ExpireCallback = Callable[[OddsGame, ExpireReason], Awaitable[None]]
LockKey = Tuple[str, str, str]


class OddsGameManager:
    """Manages odds game lifecycle and expiry."""

    def __init__(self, timeout_ms: int, on_expire: ExpireCallback):
        if timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")

        self.timeout_ms = timeout_ms
        self._on_expire = on_expire

        self._games: Dict[str, OddsGame] = {}
        self._target_locks: Dict[LockKey, str] = {}
        self._expiry_handles: Dict[str, asyncio.TimerHandle] = {}
        self._lock_keys: Dict[str, LockKey] = {}
        self._notify_tasks: Set[asyncio.Task] = set()

    def create_game(self, guild_id: str, channel_id: str, challenger_id: str,
                    target_id: str, max_pick: int, prompt: str) -> Result[OddsGame]:
        """Create a pending game and start its expiry timer.

        Must be called from a running event loop.
        """
        lock_key = self._lock_key(guild_id, channel_id, target_id)
        if lock_key in self._target_locks:
            logger.warning("Target already has an active game",
                           guild_id=guild_id, channel_id=channel_id, target_id=target_id)
            return Result.failure(
                GameErrorKind.LOCK_CONFLICT,
                "That user already has an active odds challenge in this channel."
            )

        loop = asyncio.get_running_loop()
        created_at = utcnow()
        game_id = str(uuid.uuid4())
        game = OddsGame(
            id=game_id,
            guild_id=guild_id,
            channel_id=channel_id,
            challenger_id=challenger_id,
            target_id=target_id,
            max_pick=max_pick,
            prompt=prompt,
            created_at=created_at,
            expires_at=created_at + timedelta(milliseconds=self.timeout_ms),
        )

        self._expiry_handles[game_id] = loop.call_later(
            self.timeout_ms / 1000, self._expire_game, game_id
        )
        self._games[game_id] = game
        self._target_locks[lock_key] = game_id
        self._lock_keys[game_id] = lock_key

        logger.info("Game created", game_id=game_id, challenger_id=challenger_id,
                    target_id=target_id, max_pick=max_pick)
        return Result.success(game)

    def get_game(self, game_id: str) -> Optional[OddsGame]:
        return self._games.get(game_id)

    def set_challenge_message_id(self, game_id: str, message_id: str) -> bool:
        """Remember which message rendered the challenge."""
        game = self._games.get(game_id)
        if game is None:
            return False

        game.challenge_message_id = message_id
        return True

    def accept_game(self, game_id: str, user_id: str) -> Result[OddsGame]:
        """Target accepts a pending game. The expiry timer keeps running."""
        game = self._games.get(game_id)
        if game is None:
            return Result.failure(GameErrorKind.NOT_FOUND, "This challenge no longer exists.")
        if not can_transition_to(game.status, GameStatus.ACTIVE):
            return Result.failure(
                GameErrorKind.INVALID_STATE, "This challenge is no longer awaiting acceptance."
            )
        if user_id != game.target_id:
            return Result.failure(
                GameErrorKind.UNAUTHORIZED, "Only the challenged user can accept this game."
            )

        game.status = GameStatus.ACTIVE
        logger.info("Game accepted", game_id=game_id, target_id=user_id)
        return Result.success(game)

    def decline_game(self, game_id: str, user_id: str) -> Result[OddsGame]:
        """Target walks away from a pending or active game."""
        game = self._games.get(game_id)
        if game is None:
            return Result.failure(GameErrorKind.NOT_FOUND, "This challenge no longer exists.")
        if user_id != game.target_id:
            return Result.failure(
                GameErrorKind.UNAUTHORIZED, "Only the challenged user can decline this game."
            )

        self._remove_game(game_id)
        logger.info("Game declined", game_id=game_id, status=game.status.value)
        return Result.success(game)

    def submit_pick(self, game_id: str, user_id: str, pick: int) -> Result[PickOutcome]:
        """Record one player's pick; the game is removed once both are in."""
        game = self._games.get(game_id)
        if game is None:
            return Result.failure(GameErrorKind.NOT_FOUND, "This challenge no longer exists.")
        if not accepts_picks(game.status):
            return Result.failure(GameErrorKind.INVALID_STATE, "This challenge has not started yet.")
        if not isinstance(pick, int) or isinstance(pick, bool) or pick < 1 or pick > game.max_pick:
            return Result.failure(
                GameErrorKind.OUT_OF_RANGE, f"Your pick must be between 1 and {game.max_pick}."
            )
        if not game.is_player(user_id):
            return Result.failure(
                GameErrorKind.UNAUTHORIZED, "Only the two players can submit numbers."
            )

        if user_id == game.challenger_id:
            if game.challenger_pick is not None:
                return Result.failure(
                    GameErrorKind.DUPLICATE_SUBMISSION, "You already submitted your number."
                )
            game.challenger_pick = pick
        else:
            if game.target_pick is not None:
                return Result.failure(
                    GameErrorKind.DUPLICATE_SUBMISSION, "You already submitted your number."
                )
            game.target_pick = pick

        is_complete = game.challenger_pick is not None and game.target_pick is not None
        matched = is_complete and game.challenger_pick == game.target_pick

        if is_complete:
            self._remove_game(game_id)
            logger.info("Game completed", game_id=game_id, matched=matched)

        return Result.success(PickOutcome(game=game, is_complete=is_complete, matched=matched))

    def active_game_count(self) -> int:
        return len(self._games)

    def is_game_active(self, game_id: str) -> bool:
        return game_id in self._games

    async def shutdown(self):
        """Drop every game without notifying and wait for pending notifications."""
        for handle in self._expiry_handles.values():
            handle.cancel()

        dropped = len(self._games)
        self._expiry_handles.clear()
        self._lock_keys.clear()
        self._games.clear()
        self._target_locks.clear()

        if self._notify_tasks:
            await asyncio.gather(*self._notify_tasks, return_exceptions=True)

        logger.info("Game manager shut down", dropped_games=dropped)

    def _expire_game(self, game_id: str):
        """Timer callback: remove the game, then notify."""
        game = self._games.get(game_id)
        if game is None:
            return

        reason: ExpireReason = game.status.value
        self._remove_game(game_id)
        logger.info("Game expired", game_id=game_id, reason=reason)

        task = asyncio.get_running_loop().create_task(self._notify_expired(game, reason))
        self._notify_tasks.add(task)
        task.add_done_callback(self._notify_tasks.discard)

    async def _notify_expired(self, game: OddsGame, reason: ExpireReason):
        try:
            await self._on_expire(game, reason)
        except Exception as e:
            logger.error("Expiry notification failed", game_id=game.id,
                         reason=reason, error=str(e))

    def _remove_game(self, game_id: str):
        game = self._games.pop(game_id, None)
        if game is None:
            return

        handle = self._expiry_handles.pop(game_id, None)
        if handle is not None:
            handle.cancel()

        lock_key = self._lock_keys.pop(game_id, None)
        if lock_key is not None:
            self._target_locks.pop(lock_key, None)

    @staticmethod
    def _lock_key(guild_id: str, channel_id: str, target_id: str) -> LockKey:
        return guild_id, channel_id, target_id
