from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from eclinic.database import get_db
from eclinic.auth import get_current_principal, UserPrincipal
from eclinic.schemas.auth import UserPublic, MessageResponse
from eclinic.schemas.user import ProfileUpdate, UsernameAvailability
from eclinic.services.profile_service import profile_service

router = APIRouter()


@router.get("/user", response_model=UserPublic)
async def get_profile(
    db: AsyncSession = Depends(get_db),
    principal: Optional[UserPrincipal] = Depends(get_current_principal),
):
    return await profile_service.get_current_profile(principal, db)


@router.put("/user", response_model=MessageResponse)
async def update_profile(
    body: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    principal: Optional[UserPrincipal] = Depends(get_current_principal),
):
    await profile_service.update_profile(
        principal,
        db,
        username=body.username,
        name=body.name,
        password=body.password,
        recovery_question=body.recovery_question,
        recovery_answer=body.recovery_answer,
    )
    return MessageResponse(message="Profile updated successfully")


@router.get("/check-username", response_model=UsernameAvailability)
async def check_username(
    username: str = Query(...),
    exclude_id: str = Query("", alias="excludeId"),
    db: AsyncSession = Depends(get_db),
):
    available = await profile_service.check_username_available(
        username, int(exclude_id) if exclude_id.isdigit() else 0, db
    )
    return UsernameAvailability(available=available)
