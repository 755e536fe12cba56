"""Domain entities and their lifecycle transitions.

Entities are immutable values. A transition returns the next state and the
repository persists it; nothing mutates a loaded entity in place.

User lifecycle: ``active --destroy--> deleted`` (terminal). Coins and comments
have a single active state until they are physically removed.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

DEFAULT_ROLE = "USER"


class InvalidTransitionError(Exception):
    """Raised when a lifecycle transition is not allowed from the current state."""


@dataclass(frozen=True)
class User:
    email: str
    name: str
    password_hash: str
    id: Optional[int] = None
    deleted: bool = False
    deleted_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def active(self) -> bool:
        return not self.deleted

    def change(self, name: str, password_hash: str) -> "User":
        if self.deleted:
            raise InvalidTransitionError(f"User {self.id} is deleted")
        return replace(self, name=name, password_hash=password_hash)

    def destroy(self, at: datetime) -> "User":
        if self.deleted:
            raise InvalidTransitionError(f"User {self.id} is already deleted")
        return replace(self, deleted=True, deleted_at=at)


@dataclass(frozen=True)
class Role:
    user_id: int
    name: str = DEFAULT_ROLE
    id: Optional[int] = None


@dataclass(frozen=True)
class CoinData:
    """Descriptive fields accepted on coin create/update."""

    korean_name: str
    english_name: Optional[str] = None
    code: Optional[str] = None


@dataclass(frozen=True)
class Coin:
    korean_name: str
    english_name: Optional[str] = None
    code: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def create(cls, data: CoinData) -> "Coin":
        return cls(korean_name=data.korean_name, english_name=data.english_name, code=data.code)

    def change(self, data: CoinData) -> "Coin":
        return replace(self, korean_name=data.korean_name, english_name=data.english_name, code=data.code)


@dataclass(frozen=True)
class Comment:
    body: str
    user_id: int
    coin_id: int
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    user: Optional[User] = None
    coin: Optional[Coin] = None

    def change(self, body: str) -> "Comment":
        return replace(self, body=body)
