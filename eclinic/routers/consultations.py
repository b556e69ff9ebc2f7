import uuid
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from eclinic.database import get_db
from eclinic.models.consultation import Consultation
from eclinic.models.patient import Patient
from eclinic.schemas.consultation import ConsultationCreate, ConsultationResponse, ConsultationListResponse

router = APIRouter()


def _to_response(consultation: Consultation, patient) -> ConsultationResponse:
    response = ConsultationResponse.model_validate(consultation)
    response.patient_name = patient.full_name if patient else None
    return response


@router.get("", response_model=ConsultationListResponse)
async def list_consultations(
    patient_id: str = Query("", description="Only consultations for this patient"),
    db: AsyncSession = Depends(get_db),
):
    # Display join on the informal patient_id reference
    query = select(Consultation, Patient).outerjoin(Patient, Patient.patient_id == Consultation.patient_id)
    if patient_id:
        query = query.where(Consultation.patient_id == patient_id)

    count_query = select(func.count(Consultation.id))
    if patient_id:
        count_query = count_query.where(Consultation.patient_id == patient_id)
    total = await db.scalar(count_query) or 0
    result = await db.execute(query.order_by(Consultation.date.desc(), Consultation.id.desc()))
    return ConsultationListResponse(
        consultations=[_to_response(c, p) for c, p in result.all()],
        total=total,
    )


@router.get("/{consultation_id}", response_model=ConsultationResponse)
async def get_consultation(consultation_id: str, db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(Consultation, Patient)
        .outerjoin(Patient, Patient.patient_id == Consultation.patient_id)
        .where(Consultation.consultation_id == consultation_id)
    )
    row = result.first()
    if not row:
        raise HTTPException(status_code=404, detail=f"Consultation {consultation_id} not found")
    return _to_response(*row)


@router.post("", response_model=ConsultationResponse, status_code=201)
async def create_consultation(data: ConsultationCreate, db: AsyncSession = Depends(get_db)):
    consultation = Consultation(
        consultation_id=str(uuid.uuid4()),
        date=date.today(),
        **data.model_dump(),
    )
    db.add(consultation)
    await db.flush()

    patient = await db.scalar(select(Patient).where(Patient.patient_id == consultation.patient_id))
    return _to_response(consultation, patient)
