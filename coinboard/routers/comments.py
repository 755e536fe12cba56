from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from coinboard.routers.deps import current_user_id, get_comment_service
from coinboard.schemas import CommentCreate, CommentOut, CommentUpdate
from coinboard.services.comment_service import CommentService

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("", response_model=list[CommentOut])
def list_comments(
    coin_id: int = Query(...),
    comments: CommentService = Depends(get_comment_service),
):
    return [CommentOut.of(comment) for comment in comments.list(coin_id)]


@router.post("", response_model=CommentOut, status_code=status.HTTP_201_CREATED)
def create_comment(
    payload: CommentCreate,
    identity: int = Depends(current_user_id),
    comments: CommentService = Depends(get_comment_service),
):
    comment = comments.create(payload.coin_id, payload.user_id, payload.comment, identity)
    return CommentOut.of(comment)


@router.api_route("/{comment_id}", methods=["PUT", "PATCH"], response_model=CommentOut)
def update_comment(
    comment_id: int,
    payload: CommentUpdate,
    identity: int = Depends(current_user_id),
    comments: CommentService = Depends(get_comment_service),
):
    return CommentOut.of(comments.update(comment_id, payload.comment, identity))


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    comment_id: int,
    identity: int = Depends(current_user_id),
    comments: CommentService = Depends(get_comment_service),
):
    comments.delete(comment_id, identity)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
