"""Coin reference data use cases."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, ContextManager

from coinboard.core.errors import CoinNotFoundError
from coinboard.domain.entities import Coin, CoinData
from coinboard.repositories.sql_repository import SQLRepository, unit_of_work

logger = logging.getLogger(__name__)


@dataclass
class CoinService:
    unit_of_work: Callable[[], ContextManager[SQLRepository]] = unit_of_work

    def _existing(self, repo: SQLRepository, coin_id: int, *, for_update: bool = False) -> Coin:
        coin = repo.get_coin(coin_id, for_update=for_update)
        if coin is None:
            raise CoinNotFoundError(coin_id)
        return coin

    def list(self) -> list[Coin]:
        with self.unit_of_work() as repo:
            return repo.list_coins()

    def get(self, coin_id: int) -> Coin:
        with self.unit_of_work() as repo:
            return self._existing(repo, coin_id)

    def create(self, data: CoinData) -> Coin:
        with self.unit_of_work() as repo:
            coin = repo.save_coin(Coin.create(data))
        logger.info("Coin created", extra={"coin_id": coin.id})
        return coin

    def update(self, coin_id: int, data: CoinData) -> Coin:
        with self.unit_of_work() as repo:
            coin = self._existing(repo, coin_id, for_update=True)
            return repo.save_coin(coin.change(data))

    def delete(self, coin_id: int) -> Coin:
        """Remove the coin (and its comments) and return it as it was."""
        with self.unit_of_work() as repo:
            coin = self._existing(repo, coin_id, for_update=True)
            repo.delete_coin(coin_id)
        logger.info("Coin deleted", extra={"coin_id": coin_id})
        return coin
