from pydantic import BaseModel, Field
from typing import Optional


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


class UserPublic(BaseModel):
    """A user record without its secrets."""
    id: int
    username: str
    name: str
    role: str
    recovery_question: Optional[str] = None

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    success: bool = True
    user: UserPublic
    access_token: str
    token_type: str = "bearer"


class RecoveryQuestionResponse(BaseModel):
    success: bool = True
    question: Optional[str] = None


class ResetPasswordRequest(BaseModel):
    username: str
    answer: Optional[str] = None
    new_password: str = Field(..., alias="newPassword")

    class Config:
        populate_by_name = True


class MessageResponse(BaseModel):
    success: bool = True
    message: str
