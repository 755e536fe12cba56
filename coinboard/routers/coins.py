from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from coinboard.routers.deps import get_coin_service
from coinboard.schemas import CoinOut, CoinPayload
from coinboard.services.coin_service import CoinService

# Coin mutation is not ownership-gated; admin gating happens outside this API.
router = APIRouter(prefix="/coins", tags=["coins"])


@router.get("", response_model=list[CoinOut])
def list_coins(coins: CoinService = Depends(get_coin_service)):
    return [CoinOut.of(coin) for coin in coins.list()]


@router.post("", response_model=CoinOut, status_code=status.HTTP_201_CREATED)
def create_coin(payload: CoinPayload, coins: CoinService = Depends(get_coin_service)):
    return CoinOut.of(coins.create(payload.to_data()))


@router.api_route("/{coin_id}", methods=["PUT", "PATCH"], response_model=CoinOut)
def update_coin(coin_id: int, payload: CoinPayload, coins: CoinService = Depends(get_coin_service)):
    return CoinOut.of(coins.update(coin_id, payload.to_data()))


@router.delete("/{coin_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_coin(coin_id: int, coins: CoinService = Depends(get_coin_service)):
    coins.delete(coin_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
