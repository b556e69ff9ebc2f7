from pydantic import BaseModel, Field, field_validator
from datetime import date
from typing import Optional, Union


class ConsultationCreate(BaseModel):
    patient_id: str = Field(..., min_length=1)
    chief_complaint: str = Field(..., min_length=1)
    diagnosis: str = Field(..., min_length=1)
    treatment: str = ""
    prescribed_meds: Union[list[str], str] = []
    follow_up: Optional[date] = None

    @field_validator("prescribed_meds")
    @classmethod
    def split_meds(cls, value):
        """Accept the form's comma-separated string as well as a list."""
        if isinstance(value, str):
            value = value.split(",")
        return [m.strip() for m in value if m and m.strip()]


class ConsultationResponse(BaseModel):
    consultation_id: str
    patient_id: str
    patient_name: Optional[str] = None
    date: date
    chief_complaint: str
    diagnosis: str
    treatment: str = ""
    prescribed_meds: list[str] = []
    follow_up: Optional[date] = None

    class Config:
        from_attributes = True


class ConsultationListResponse(BaseModel):
    consultations: list[ConsultationResponse]
    total: int
