"""Data access backed by SQLAlchemy.

A repository is bound to one session; ``unit_of_work`` opens a transaction and
hands out a repository for it, so every lookup-check-write sequence of a
service runs atomically. Rows are mapped to domain entities on the way out
and persisted explicitly on the way in.
"""
from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from coinboard.core.errors import CoinNotFoundError, CommentNotFoundError, UserNotFoundError
from coinboard.db import models
from coinboard.db.session import transaction
from coinboard.domain.entities import Coin, Comment, Role, User


def _user(row: models.User) -> User:
    return User(
        id=row.id,
        email=row.email,
        name=row.name,
        password_hash=row.password_hash,
        deleted=bool(row.deleted),
        deleted_at=row.deleted_at,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _coin(row: models.Coin) -> Coin:
    return Coin(
        id=row.id,
        korean_name=row.korean_name,
        english_name=row.english_name,
        code=row.code,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _comment(row: models.Comment, *, resolve: bool = True) -> Comment:
    return Comment(
        id=row.id,
        body=row.body,
        user_id=row.user_id,
        coin_id=row.coin_id,
        created_at=row.created_at,
        updated_at=row.updated_at,
        user=_user(row.user) if resolve and row.user is not None else None,
        coin=_coin(row.coin) if resolve and row.coin is not None else None,
    )


class SQLRepository:
    """CRUD helpers wrapping one SQLAlchemy session."""

    def __init__(self, session: Session):
        self.session = session

    def _get(self, model, pk: int, for_update: bool):
        # A locking read always goes to the database, bypassing the identity map.
        return self.session.get(model, pk, with_for_update=True if for_update else None)

    def _execute_one(self, stmt, not_found: Exception) -> None:
        """Run a single-row UPDATE/DELETE; zero matched rows means the row is gone."""
        result = self.session.execute(stmt.execution_options(synchronize_session=False))
        if result.rowcount == 0:
            raise not_found

    # -------------------------- users --------------------------
    def get_user(self, user_id: int, *, for_update: bool = False) -> Optional[User]:
        row = self._get(models.User, user_id, for_update)
        return _user(row) if row else None

    def get_active_user_by_email(self, email: str) -> Optional[User]:
        stmt = select(models.User).where(models.User.email == email, models.User.deleted.is_(False))
        row = self.session.execute(stmt).scalars().first()
        return _user(row) if row else None

    def exists_active_email(self, email: str) -> bool:
        stmt = (
            select(models.User.id)
            .where(models.User.email == email, models.User.deleted.is_(False))
            .limit(1)
        )
        return self.session.execute(stmt).first() is not None

    def save_user(self, user: User) -> User:
        """Insert when ``user.id`` is None, otherwise write the given state."""
        now = datetime.now(timezone.utc)
        if user.id is None:
            row = models.User(
                email=user.email,
                name=user.name,
                password_hash=user.password_hash,
                deleted=user.deleted,
                deleted_at=user.deleted_at,
                created_at=now,
                updated_at=now,
            )
            self.session.add(row)
            self.session.flush()
            return _user(row)
        stmt = (
            update(models.User)
            .where(models.User.id == user.id, models.User.deleted.is_(False))
            .values(
                name=user.name,
                password_hash=user.password_hash,
                deleted=user.deleted,
                deleted_at=user.deleted_at,
                updated_at=now,
            )
        )
        self._execute_one(stmt, UserNotFoundError(user.id))
        return _user(self.session.get(models.User, user.id, populate_existing=True))

    # -------------------------- roles --------------------------
    def add_role(self, role: Role) -> Role:
        row = models.Role(user_id=role.user_id, name=role.name)
        self.session.add(row)
        self.session.flush()
        return Role(id=row.id, user_id=row.user_id, name=row.name)

    def list_roles(self, user_id: int) -> list[Role]:
        stmt = select(models.Role).where(models.Role.user_id == user_id).order_by(models.Role.id)
        return [Role(id=r.id, user_id=r.user_id, name=r.name) for r in self.session.execute(stmt).scalars()]

    # -------------------------- coins --------------------------
    def list_coins(self) -> list[Coin]:
        stmt = select(models.Coin).order_by(models.Coin.id)
        return [_coin(row) for row in self.session.execute(stmt).scalars()]

    def get_coin(self, coin_id: int, *, for_update: bool = False) -> Optional[Coin]:
        row = self._get(models.Coin, coin_id, for_update)
        return _coin(row) if row else None

    def save_coin(self, coin: Coin) -> Coin:
        now = datetime.now(timezone.utc)
        if coin.id is None:
            row = models.Coin(
                korean_name=coin.korean_name,
                english_name=coin.english_name,
                code=coin.code,
                created_at=now,
                updated_at=now,
            )
            self.session.add(row)
            self.session.flush()
            return _coin(row)
        stmt = (
            update(models.Coin)
            .where(models.Coin.id == coin.id)
            .values(korean_name=coin.korean_name, english_name=coin.english_name, code=coin.code, updated_at=now)
        )
        self._execute_one(stmt, CoinNotFoundError(coin.id))
        return _coin(self.session.get(models.Coin, coin.id, populate_existing=True))

    def delete_coin(self, coin_id: int) -> None:
        self._execute_one(delete(models.Coin).where(models.Coin.id == coin_id), CoinNotFoundError(coin_id))

    # -------------------------- comments --------------------------
    def get_comment(self, comment_id: int, *, for_update: bool = False) -> Optional[Comment]:
        row = self._get(models.Comment, comment_id, for_update)
        return _comment(row) if row else None

    def list_comments_by_coin(self, coin_id: int) -> list[Comment]:
        stmt = select(models.Comment).where(models.Comment.coin_id == coin_id).order_by(models.Comment.id)
        return [_comment(row) for row in self.session.execute(stmt).scalars()]

    def save_comment(self, comment: Comment) -> Comment:
        now = datetime.now(timezone.utc)
        if comment.id is None:
            row = models.Comment(
                body=comment.body,
                user_id=comment.user_id,
                coin_id=comment.coin_id,
                created_at=now,
                updated_at=now,
            )
            self.session.add(row)
            self.session.flush()
            return self.get_comment(row.id)
        stmt = (
            update(models.Comment)
            .where(models.Comment.id == comment.id)
            .values(body=comment.body, updated_at=now)
        )
        self._execute_one(stmt, CommentNotFoundError(comment.id))
        return _comment(self.session.get(models.Comment, comment.id, populate_existing=True))

    def delete_comment(self, comment_id: int) -> None:
        stmt = delete(models.Comment).where(models.Comment.id == comment_id)
        self._execute_one(stmt, CommentNotFoundError(comment_id))


@contextmanager
def unit_of_work() -> Iterator[SQLRepository]:
    """Open a transaction and yield a repository bound to it."""
    with transaction() as session:
        yield SQLRepository(session)
