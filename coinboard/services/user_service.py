"""
User account use cases: registration, modification and soft deletion.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, ContextManager

from sqlalchemy.exc import IntegrityError

from coinboard.core.errors import EmailDuplicationError, UserNotFoundError
from coinboard.core.security import hash_password
from coinboard.domain.entities import DEFAULT_ROLE, Role, User
from coinboard.repositories.sql_repository import SQLRepository, unit_of_work

logger = logging.getLogger(__name__)

UnitOfWork = Callable[[], ContextManager[SQLRepository]]


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class UserService:
    """Registers users and drives their active -> deleted lifecycle."""

    unit_of_work: UnitOfWork = unit_of_work
    hasher: Callable[[str], str] = hash_password
    clock: Callable[[], datetime] = _now

    def _active_user(self, repo: SQLRepository, user_id: int, *, for_update: bool = False) -> User:
        user = repo.get_user(user_id, for_update=for_update)
        if user is None or user.deleted:
            raise UserNotFoundError(user_id)
        return user

    def register(self, email: str, name: str, password: str) -> User:
        try:
            with self.unit_of_work() as repo:
                if repo.exists_active_email(email):
                    raise EmailDuplicationError(email)
                user = repo.save_user(User(email=email, name=name, password_hash=self.hasher(password)))
                repo.add_role(Role(user_id=user.id, name=DEFAULT_ROLE))
        except IntegrityError as exc:
            # A concurrent registration won the race on the active-email index.
            raise EmailDuplicationError(email) from exc
        logger.info("User registered", extra={"user_id": user.id})
        return user

    def get(self, user_id: int) -> User:
        with self.unit_of_work() as repo:
            return self._active_user(repo, user_id)

    def roles(self, user_id: int) -> list[Role]:
        with self.unit_of_work() as repo:
            self._active_user(repo, user_id)
            return repo.list_roles(user_id)

    def modify(self, user_id: int, name: str, password: str) -> User:
        """Replace name and password. Email never changes."""
        with self.unit_of_work() as repo:
            user = self._active_user(repo, user_id, for_update=True)
            return repo.save_user(user.change(name, self.hasher(password)))

    def soft_delete(self, user_id: int) -> User:
        """Mark the user deleted. Deleting an already deleted user is NotFound, not a no-op."""
        with self.unit_of_work() as repo:
            user = self._active_user(repo, user_id, for_update=True)
            deleted = repo.save_user(user.destroy(self.clock()))
        logger.info("User soft-deleted", extra={"user_id": user_id})
        return deleted
