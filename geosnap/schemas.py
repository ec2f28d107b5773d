from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr


class UserOut(BaseModel):
    id: int
    username: str
    email: EmailStr
    avatar: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    message: str
    user: UserOut
    token: str


class PhotoOut(BaseModel):
    id: int
    image: str
    latitude: float
    longitude: float
    address: Optional[str] = None
    rating: int
    caption: Optional[str] = None
    created_at: datetime
    author_username: Optional[str] = None
    author_avatar: Optional[str] = None
    likes_count: int = 0
    comments_count: int = 0
    user_liked: bool = False
    distance_km: Optional[float] = None


class CommentOut(BaseModel):
    id: int
    text: str
    created_at: datetime
    author_username: Optional[str] = None
    author_avatar: Optional[str] = None
    user_id: int
