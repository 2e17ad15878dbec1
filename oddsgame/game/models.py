"""
Data models for odds games.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Generic, Literal, Optional, Tuple, TypeVar

from pydantic import BaseModel, Field

from .state_machine import GameStatus

T = TypeVar("T")

ExpireReason = Literal["pending", "active"]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OddsGame(BaseModel):
    """A single challenge, from creation until it resolves or expires."""

    id: str = Field(..., frozen=True, description="Opaque game identifier")
    guild_id: str = Field(..., frozen=True, description="Server the challenge was issued in")
    channel_id: str = Field(..., frozen=True, description="Channel the challenge was issued in")
    challenger_id: str = Field(..., frozen=True, description="User who issued the challenge")
    target_id: str = Field(..., frozen=True, description="User who was challenged")

    # Challenge details
    max_pick: int = Field(..., ge=2, frozen=True, description="Upper bound for picks (1..max_pick)")
    prompt: str = Field(..., frozen=True, description="What the loser must do")
    status: GameStatus = Field(default=GameStatus.PENDING, description="Game status")

    # Picks
    challenger_pick: Optional[int] = Field(None, description="Challenger's number")
    target_pick: Optional[int] = Field(None, description="Target's number")

    # Messages
    challenge_message_id: Optional[str] = Field(None, description="Rendered challenge message")

    # Timing
    created_at: datetime = Field(default_factory=utcnow, frozen=True)
    expires_at: datetime = Field(..., frozen=True, description="When the game expires")

    @property
    def scope(self) -> Tuple[str, str]:
        return self.guild_id, self.channel_id

    def is_player(self, user_id: str) -> bool:
        return user_id in (self.challenger_id, self.target_id)


class GameErrorKind(str, Enum):
    """Why an operation on a game was refused."""
    NOT_FOUND = "not_found"
    INVALID_STATE = "invalid_state"
    UNAUTHORIZED = "unauthorized"
    OUT_OF_RANGE = "out_of_range"
    DUPLICATE_SUBMISSION = "duplicate_submission"
    LOCK_CONFLICT = "lock_conflict"


class GameError(BaseModel):
    """A refused operation. ``message`` is meant to be shown to the user."""

    kind: GameErrorKind
    message: str


class PickOutcome(BaseModel):
    """Result of a successful pick submission."""

    game: OddsGame
    is_complete: bool
    matched: bool


class Result(BaseModel, Generic[T]):
    """Outcome of a manager operation: either a value or a GameError."""

    ok: bool
    value: Optional[T] = None
    error: Optional[GameError] = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, kind: GameErrorKind, message: str) -> "Result[T]":
        return cls(ok=False, error=GameError(kind=kind, message=message))
