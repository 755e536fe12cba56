"""Request/response bodies. JSON uses camelCase names."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from coinboard.domain.entities import Coin, CoinData, Comment, User


class _Body(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserRegistration(_Body):
    email: str = Field(min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")
    name: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)


class UserModification(_Body):
    name: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)


class LoginRequest(_Body):
    email: str
    password: str


class TokenResponse(_Body):
    access_token: str
    token_type: str = "bearer"


class CoinPayload(_Body):
    korean_name: str = Field(min_length=1, max_length=255)
    english_name: Optional[str] = Field(default=None, max_length=255)
    code: Optional[str] = Field(default=None, max_length=64)

    def to_data(self) -> CoinData:
        return CoinData(korean_name=self.korean_name, english_name=self.english_name, code=self.code)


class CommentCreate(_Body):
    coin_id: int
    user_id: int
    comment: str = Field(min_length=1)


class CommentUpdate(_Body):
    comment: str = Field(min_length=1)


class UserOut(_Body):
    id: int
    email: str
    name: str
    deleted: bool
    deleted_at: Optional[datetime] = None

    @classmethod
    def of(cls, user: User) -> "UserOut":
        return cls(id=user.id, email=user.email, name=user.name, deleted=user.deleted, deleted_at=user.deleted_at)


class CoinOut(_Body):
    id: int
    korean_name: str
    english_name: Optional[str] = None
    code: Optional[str] = None

    @classmethod
    def of(cls, coin: Coin) -> "CoinOut":
        return cls(id=coin.id, korean_name=coin.korean_name, english_name=coin.english_name, code=coin.code)


class CommentOut(_Body):
    id: int
    comment: str
    user_id: int
    coin_id: int
    user: Optional[UserOut] = None
    coin: Optional[CoinOut] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def of(cls, comment: Comment) -> "CommentOut":
        return cls(
            id=comment.id,
            comment=comment.body,
            user_id=comment.user_id,
            coin_id=comment.coin_id,
            user=UserOut.of(comment.user) if comment.user else None,
            coin=CoinOut.of(comment.coin) if comment.coin else None,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )
