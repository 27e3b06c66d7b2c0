from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cardflow import store_users
from cardflow.auth import get_current_user, issue_token
from cardflow.database import get_db
from cardflow.models import User
from cardflow.schemas import (
    AuthResponse,
    MessageResponse,
    PasswordChange,
    SettingsUpdate,
    UserCreate,
    UserLogin,
    UserResponse,
)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(body: UserCreate, db: AsyncSession = Depends(get_db)):
    user = await store_users.create_user(db, body)
    return {"token": issue_token(user.id), "user": user}


@router.post("/login", response_model=AuthResponse)
async def login(body: UserLogin, db: AsyncSession = Depends(get_db)):
    user = await store_users.authenticate(db, body.email, body.password)
    return {"token": issue_token(user.id), "user": user}


@router.get("/profile", response_model=UserResponse)
async def profile(user: User = Depends(get_current_user)):
    return {"user": user}


@router.put("/settings", response_model=UserResponse)
async def update_settings(
    body: SettingsUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    user = await store_users.update_settings(db, user, body.theme)
    return {"user": user}


@router.put("/password", response_model=MessageResponse)
async def change_password(
    body: PasswordChange,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await store_users.change_password(db, user, body.current_password, body.new_password)
    return {"message": "Password updated"}
