from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from coinboard.domain.authorization import Access, ensure_allowed
from coinboard.routers.deps import current_user_id, get_user_service
from coinboard.schemas import UserModification, UserOut, UserRegistration
from coinboard.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(payload: UserRegistration, users: UserService = Depends(get_user_service)):
    user = users.register(payload.email, payload.name, payload.password)
    return UserOut.of(user)


@router.put("/{user_id}", response_model=UserOut)
def modify(
    user_id: int,
    payload: UserModification,
    identity: int = Depends(current_user_id),
    users: UserService = Depends(get_user_service),
):
    ensure_allowed(identity, user_id, Access.MUTATE)
    user = users.modify(user_id, payload.name, payload.password)
    return UserOut.of(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def destroy(
    user_id: int,
    identity: int = Depends(current_user_id),
    users: UserService = Depends(get_user_service),
):
    ensure_allowed(identity, user_id, Access.MUTATE)
    users.soft_delete(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
