from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from eclinic.database import get_db
from eclinic.schemas.auth import (
    LoginRequest, LoginResponse, UserPublic, RecoveryQuestionResponse,
    ResetPasswordRequest, MessageResponse,
)
from eclinic.services.auth_service import auth_service

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    user, token = await auth_service.login(body.username, body.password, db)
    return LoginResponse(user=UserPublic.model_validate(user), access_token=token)


@router.get("/forgot-password", response_model=RecoveryQuestionResponse)
async def forgot_password(username: str = Query(""), db: AsyncSession = Depends(get_db)):
    """Unauthenticated. Reveals whether the username exists."""
    question = await auth_service.get_recovery_question(username, db)
    return RecoveryQuestionResponse(question=question)


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(body: ResetPasswordRequest, db: AsyncSession = Depends(get_db)):
    await auth_service.reset_password(body.username, body.answer, body.new_password, db)
    return MessageResponse(message="Password reset successfully")
