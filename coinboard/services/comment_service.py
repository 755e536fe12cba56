"""
Comment use cases scoped to a coin and an author.

Lookups, the author check and the write of each mutation share one unit of
work, so a concurrent delete cannot leave an update half applied.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, ContextManager, Optional

from coinboard.core.errors import (
    CoinNotFoundError,
    CommentNotFoundError,
    UnauthenticatedError,
    UserNotFoundError,
    ValidationError,
)
from coinboard.domain.authorization import Access, ensure_allowed
from coinboard.domain.entities import Comment
from coinboard.repositories.sql_repository import SQLRepository, unit_of_work

logger = logging.getLogger(__name__)


def _require_identity(authenticated_user_id: Optional[int]) -> int:
    if authenticated_user_id is None:
        raise UnauthenticatedError()
    return authenticated_user_id


@dataclass
class CommentService:
    unit_of_work: Callable[[], ContextManager[SQLRepository]] = unit_of_work

    def _owned(self, repo: SQLRepository, comment_id: int, identity: int) -> Comment:
        comment = repo.get_comment(comment_id, for_update=True)
        if comment is None:
            raise CommentNotFoundError(comment_id)
        ensure_allowed(identity, comment.user_id, Access.MUTATE)
        return comment

    def list(self, coin_id: int) -> list[Comment]:
        """Comments of a coin; empty when the coin has none or does not exist."""
        with self.unit_of_work() as repo:
            return repo.list_comments_by_coin(coin_id)

    def create(
        self,
        coin_id: int,
        author_user_id: int,
        body: str,
        authenticated_user_id: Optional[int],
    ) -> Comment:
        identity = _require_identity(authenticated_user_id)
        if author_user_id != identity:
            raise ValidationError("Comment author must be the authenticated user", "userId")
        with self.unit_of_work() as repo:
            if repo.get_coin(coin_id, for_update=True) is None:
                raise CoinNotFoundError(coin_id)
            author = repo.get_user(identity)
            if author is None or author.deleted:
                raise UserNotFoundError(identity)
            comment = repo.save_comment(Comment(body=body, user_id=identity, coin_id=coin_id))
        logger.info("Comment created", extra={"comment_id": comment.id, "coin_id": coin_id, "user_id": identity})
        return comment

    def update(self, comment_id: int, body: str, authenticated_user_id: Optional[int]) -> Comment:
        identity = _require_identity(authenticated_user_id)
        with self.unit_of_work() as repo:
            comment = self._owned(repo, comment_id, identity)
            return repo.save_comment(comment.change(body))

    def delete(self, comment_id: int, authenticated_user_id: Optional[int]) -> Comment:
        identity = _require_identity(authenticated_user_id)
        with self.unit_of_work() as repo:
            comment = self._owned(repo, comment_id, identity)
            repo.delete_comment(comment_id)
        logger.info("Comment deleted", extra={"comment_id": comment_id, "user_id": identity})
        return comment
