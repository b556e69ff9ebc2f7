from pydantic import BaseModel, Field
from datetime import date
from typing import Optional


class MedicineBase(BaseModel):
    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    stock: int = Field(..., ge=0)
    unit: str = "Tablets"
    expiry_date: date


class MedicineCreate(MedicineBase):
    pass


class MedicineUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    stock: Optional[int] = Field(default=None, ge=0)
    unit: Optional[str] = None
    expiry_date: Optional[date] = None


class MedicineResponse(MedicineBase):
    medicine_id: str
    low_stock: bool = False

    class Config:
        from_attributes = True


class MedicineListResponse(BaseModel):
    medicines: list[MedicineResponse]
    total: int
