import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel
from sqlalchemy.orm import Session, selectinload

from geosnap.models.comment import Comment
from geosnap.models.photo import Photo
from geosnap.models.user import User
from geosnap.schemas import CommentOut
from geosnap.utils.config import settings
from geosnap.utils.security import get_db, get_current_user


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/comments", tags=["comments"])


class CommentIn(BaseModel):
    text: str = ""


def comment_out(comment: Comment) -> CommentOut:
    return CommentOut(
        id=comment.id,
        text=comment.text,
        created_at=comment.created_at,
        author_username=comment.user.username if comment.user else None,
        author_avatar=comment.user.avatar if comment.user else None,
        user_id=comment.user_id,
    )


def _clean_text(payload: CommentIn) -> str:
    text = (payload.text or "").strip()
    if not text:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Comment text is required")
    return text


def _own_comment_or_raise(db: Session, comment_id: int, user: User, action: str) -> Comment:
    comment = db.get(Comment, comment_id)
    if not comment:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")
    if comment.user_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"You can only {action} your own comments")
    return comment


@router.get("/photo/{photo_id}")
def list_comments(
    photo_id: int,
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    base = db.query(Comment).filter(Comment.photo_id == photo_id)
    total = base.count()
    comments = (
        base.options(selectinload(Comment.user))
        .order_by(Comment.created_at.desc(), Comment.id.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return {"comments": [comment_out(c) for c in comments], "total": total}


@router.post("/photo/{photo_id}", status_code=status.HTTP_201_CREATED)
def add_comment(
    photo_id: int,
    payload: CommentIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    text = _clean_text(payload)
    if not db.get(Photo, photo_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Photo not found")

    comment = Comment(photo_id=photo_id, user_id=current_user.id, text=text)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    logger.info("comment %s added to photo %s by user %s", comment.id, photo_id, current_user.id)
    return {"message": "Comment added", "comment": comment_out(comment)}


@router.put("/{comment_id}")
def update_comment(
    comment_id: int,
    payload: CommentIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    text = _clean_text(payload)
    comment = _own_comment_or_raise(db, comment_id, current_user, "edit")
    comment.text = text
    db.commit()
    db.refresh(comment)
    return {"message": "Comment updated", "comment": comment_out(comment)}


@router.delete("/{comment_id}")
def delete_comment(
    comment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    comment = _own_comment_or_raise(db, comment_id, current_user, "delete")
    db.delete(comment)
    db.commit()
    logger.info("comment %s deleted by user %s", comment_id, current_user.id)
    return {"message": "Comment deleted"}
