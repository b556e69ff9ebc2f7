from pydantic import BaseModel, Field
from typing import Optional


class ProfileUpdate(BaseModel):
    """
    Body of PUT /api/user. username and name are always written; the optional
    fields are written only when a non-empty value is supplied.
    """
    username: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=200)
    password: Optional[str] = None
    recovery_question: Optional[str] = Field(default=None, alias="recoveryQuestion")
    recovery_answer: Optional[str] = Field(default=None, alias="recoveryAnswer")

    class Config:
        populate_by_name = True


class UsernameAvailability(BaseModel):
    available: bool
