import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy import func
from sqlalchemy.orm import Session, Query as OrmQuery, selectinload

from geosnap.models.comment import Comment
from geosnap.models.photo import Photo, PhotoLike
from geosnap.models.user import User
from geosnap.schemas import PhotoOut
from geosnap.utils.config import settings
from geosnap.utils.geo import haversine_km
from geosnap.utils.security import get_db, get_current_user, get_optional_user


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/photos", tags=["photos"])


def filtered_photos(
    db: Session,
    lat: Optional[float] = None,
    lng: Optional[float] = None,
    radius: Optional[float] = None,
    user_id: Optional[int] = None,
) -> OrmQuery:
    """Newest-first photo query, optionally limited to a degree box and an owner."""
    q = db.query(Photo).options(selectinload(Photo.user), selectinload(Photo.likes))
    if lat is not None and lng is not None and radius is not None:
        q = q.filter(
            Photo.latitude >= lat - radius, Photo.latitude <= lat + radius,
            Photo.longitude >= lng - radius, Photo.longitude <= lng + radius,
        )
    if user_id is not None:
        q = q.filter(Photo.user_id == user_id)
    return q.order_by(Photo.created_at.desc(), Photo.id.desc())


def comment_counts(db: Session, photo_ids: List[int]) -> Dict[int, int]:
    if not photo_ids:
        return {}
    rows = (
        db.query(Comment.photo_id, func.count(Comment.id))
        .filter(Comment.photo_id.in_(photo_ids))
        .group_by(Comment.photo_id)
        .all()
    )
    return {pid: n for pid, n in rows}


def photo_out(
    photo: Photo,
    viewer: Optional[User] = None,
    comments_count: int = 0,
    near: Optional[tuple] = None,
) -> PhotoOut:
    distance = None
    if near is not None:
        distance = round(haversine_km(near[0], near[1], photo.latitude, photo.longitude), 3)
    return PhotoOut(
        id=photo.id,
        image=photo.image,
        latitude=photo.latitude,
        longitude=photo.longitude,
        address=photo.address,
        rating=photo.rating,
        caption=photo.caption,
        created_at=photo.created_at,
        author_username=photo.user.username if photo.user else None,
        author_avatar=photo.user.avatar if photo.user else None,
        likes_count=len(photo.likes),
        comments_count=comments_count,
        user_liked=photo.liked_by(viewer.id if viewer else None),
        distance_km=distance,
    )


def _get_photo_or_404(db: Session, photo_id: int) -> Photo:
    photo = db.get(Photo, photo_id)
    if not photo:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Photo not found")
    return photo


@router.get("")
def list_photos(
    lat: Optional[float] = None,
    lng: Optional[float] = None,
    radius: Optional[float] = Query(None, gt=0),
    user_id: Optional[int] = None,
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=200),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    viewer: Optional[User] = Depends(get_optional_user),
):
    photos = filtered_photos(db, lat, lng, radius, user_id).offset(offset).limit(limit).all()
    counts = comment_counts(db, [p.id for p in photos])
    near = (lat, lng) if lat is not None and lng is not None else None
    return {"photos": [photo_out(p, viewer, counts.get(p.id, 0), near) for p in photos]}


@router.get("/{photo_id}")
def get_photo(
    photo_id: int,
    db: Session = Depends(get_db),
    viewer: Optional[User] = Depends(get_optional_user),
):
    photo = _get_photo_or_404(db, photo_id)
    counts = comment_counts(db, [photo.id])
    return {"photo": photo_out(photo, viewer, counts.get(photo.id, 0))}


class PhotoCreate(BaseModel):
    image: str = Field(..., min_length=1)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    address: Optional[str] = None
    rating: int = Field(0, ge=0, le=5)
    caption: Optional[str] = None


@router.post("", status_code=status.HTTP_201_CREATED)
def create_photo(
    payload: PhotoCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    photo = Photo(
        user_id=current_user.id,
        image=payload.image,
        latitude=payload.latitude,
        longitude=payload.longitude,
        address=payload.address,
        rating=payload.rating,
        caption=payload.caption,
    )
    db.add(photo)
    db.commit()
    db.refresh(photo)
    logger.info("photo %s created by user %s at (%.5f, %.5f)",
                photo.id, current_user.id, photo.latitude, photo.longitude)
    return {"message": "Photo created successfully", "photo": photo_out(photo, current_user)}


class PhotoUpdate(BaseModel):
    address: Optional[str] = None
    rating: Optional[int] = Field(None, ge=0, le=5)
    caption: Optional[str] = None


@router.put("/{photo_id}")
def update_photo(
    photo_id: int,
    payload: PhotoUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    photo = _get_photo_or_404(db, photo_id)
    if photo.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="You can only edit your own photos")

    for name, value in payload.model_dump(exclude_unset=True).items():
        if name == "rating" and value is None:
            continue
        setattr(photo, name, value)
    db.commit()
    db.refresh(photo)
    counts = comment_counts(db, [photo.id])
    return {"message": "Photo updated",
            "photo": photo_out(photo, current_user, counts.get(photo.id, 0))}


@router.delete("/{photo_id}")
def delete_photo(
    photo_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    photo = _get_photo_or_404(db, photo_id)
    if photo.user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="You can only delete your own photos")

    # comments and likes go with the photo (relationship cascade)
    db.delete(photo)
    db.commit()
    logger.info("photo %s deleted by user %s", photo_id, current_user.id)
    return {"message": "Photo deleted successfully"}


@router.post("/{photo_id}/like")
def toggle_like(
    photo_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    photo = _get_photo_or_404(db, photo_id)
    existing = (
        db.query(PhotoLike)
        .filter(PhotoLike.photo_id == photo.id, PhotoLike.user_id == current_user.id)
        .first()
    )
    if existing:
        photo.likes.remove(existing)
        liked = False
    else:
        photo.likes.append(PhotoLike(user_id=current_user.id))
        liked = True
    db.commit()
    db.refresh(photo)
    logger.info("photo %s %s by user %s", photo.id, "liked" if liked else "unliked", current_user.id)
    return {"message": "Photo liked" if liked else "Photo unliked",
            "liked": liked, "likes_count": len(photo.likes)}
