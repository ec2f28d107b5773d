import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, EmailStr, Field
from sqlalchemy import or_
from sqlalchemy.orm import Session

from geosnap.models.user import User
from geosnap.schemas import AuthResponse, UserOut
from geosnap.utils.security import hash_password, verify_password, create_access_token, get_db, get_current_user


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])

MIN_PASSWORD_LENGTH = 6


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    if len(payload.password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    existing = db.query(User).filter(
        or_(User.email == payload.email, User.username == payload.username)).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User with this email or username already exists")

    user = User(username=payload.username, email=payload.email,
                password_hash=hash_password(payload.password))
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("registered user id=%s username=%s", user.id, user.username)
    return {"message": "User registered successfully", "user": user,
            "token": create_access_token(user.id)}


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == payload.email).first()
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password")
    return {"message": "Login successful", "user": user,
            "token": create_access_token(user.id)}


@router.get("/me")
def me(current_user: User = Depends(get_current_user)):
    return {"user": UserOut.model_validate(current_user)}


class ProfileUpdate(BaseModel):
    username: Optional[str] = Field(None, min_length=1, max_length=50)
    avatar: Optional[str] = None


@router.put("/me")
def update_me(
    payload: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if payload.username:
        taken = db.query(User).filter(User.username == payload.username).first()
        if taken and taken.id != current_user.id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Username already taken")
        current_user.username = payload.username
    if payload.avatar:
        current_user.avatar = payload.avatar
    db.commit()
    db.refresh(current_user)
    return {"message": "Profile updated", "user": UserOut.model_validate(current_user)}
