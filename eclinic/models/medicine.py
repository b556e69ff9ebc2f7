from sqlalchemy import Column, Integer, String, Date, DateTime
from sqlalchemy.sql import func
from eclinic.database import Base


class Medicine(Base):
    __tablename__ = "medicines"

    id = Column(Integer, primary_key=True, index=True)
    medicine_id = Column(String(36), unique=True, index=True, nullable=False)
    name = Column(String(200), nullable=False, index=True)
    category = Column(String(100), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    unit = Column(String(50), nullable=False)
    expiry_date = Column(Date, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
