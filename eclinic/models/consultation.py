from sqlalchemy import Column, Integer, String, Date, Text, DateTime, JSON
from sqlalchemy.sql import func
from eclinic.database import Base


class Consultation(Base):
    __tablename__ = "consultations"

    id = Column(Integer, primary_key=True, index=True)
    consultation_id = Column(String(36), unique=True, index=True, nullable=False)
    # Informal reference to Patient.patient_id; not a foreign key
    patient_id = Column(String(36), index=True, nullable=False)
    date = Column(Date, nullable=False, index=True)
    chief_complaint = Column(Text, nullable=False)
    diagnosis = Column(String(200), nullable=False)
    treatment = Column(Text, default="")
    prescribed_meds = Column(JSON, default=list)
    follow_up = Column(Date)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
