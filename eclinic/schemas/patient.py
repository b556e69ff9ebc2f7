from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Literal, Optional


class PatientBase(BaseModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    age: int = Field(..., ge=0, le=150)
    sex: Literal["Male", "Female"] = "Male"
    address: str = "Poblacion"
    purok: str = ""
    contact: str = ""


class PatientCreate(PatientBase):
    last_visit: Optional[date] = None


class PatientUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0, le=150)
    sex: Optional[Literal["Male", "Female"]] = None
    address: Optional[str] = None
    purok: Optional[str] = None
    contact: Optional[str] = None
    last_visit: Optional[date] = None


class PatientResponse(PatientBase):
    patient_id: str
    last_visit: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PatientListResponse(BaseModel):
    patients: list[PatientResponse]
    total: int
