from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Float, Text, DateTime, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import relationship

from geosnap.db import Base


class Photo(Base):
    __tablename__ = "photos"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    image = Column(Text, nullable=False)  # data URI or URL
    latitude = Column(Float, nullable=False, index=True)
    longitude = Column(Float, nullable=False, index=True)
    address = Column(String, nullable=True)
    rating = Column(Integer, nullable=False, default=0)  # 0 = unrated
    caption = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="photos")
    likes = relationship(
        "PhotoLike", back_populates="photo", cascade="all, delete-orphan")
    comments = relationship(
        "Comment", back_populates="photo", cascade="all, delete-orphan")

    def liked_by(self, user_id: int | None) -> bool:
        if user_id is None:
            return False
        return any(like.user_id == user_id for like in self.likes)


class PhotoLike(Base):
    __tablename__ = "photo_likes"
    __table_args__ = (UniqueConstraint("photo_id", "user_id"),)

    id = Column(Integer, primary_key=True)
    photo_id = Column(Integer, ForeignKey(
        "photos.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    photo = relationship("Photo", back_populates="likes")
