import csv
import io
import uuid
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, or_
from eclinic.database import get_db
from eclinic.models.patient import Patient
from eclinic.schemas.patient import PatientCreate, PatientUpdate, PatientResponse, PatientListResponse

router = APIRouter()

CSV_HEADERS = ["ID", "First Name", "Last Name", "Age", "Sex", "Purok", "Contact", "Last Visit"]


def _search_filter(query, search: str):
    if not search:
        return query
    pattern = f"%{search}%"
    return query.where(
        or_(
            Patient.first_name.ilike(pattern),
            Patient.last_name.ilike(pattern),
            Patient.patient_id.ilike(pattern),
            Patient.purok.ilike(pattern),
        )
    )


async def _get_or_404(patient_id: str, db: AsyncSession) -> Patient:
    result = await db.execute(select(Patient).where(Patient.patient_id == patient_id))
    patient = result.scalar_one_or_none()
    if not patient:
        raise HTTPException(status_code=404, detail=f"Patient {patient_id} not found")
    return patient


@router.get("", response_model=PatientListResponse)
async def list_patients(
    search: str = Query("", description="Search by name, ID, or purok"),
    db: AsyncSession = Depends(get_db),
):
    query = _search_filter(select(Patient), search)
    total = await db.scalar(select(func.count()).select_from(query.subquery())) or 0
    result = await db.execute(query.order_by(Patient.id))
    patients = result.scalars().all()
    return PatientListResponse(
        patients=[PatientResponse.model_validate(p) for p in patients],
        total=total,
    )


@router.get("/export")
async def export_patients(db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(Patient).order_by(Patient.id))
    patients = result.scalars().all()

    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for p in patients:
        writer.writerow([
            p.patient_id,
            p.first_name,
            p.last_name,
            p.age,
            p.sex,
            p.purok or "",
            p.contact or "",
            p.last_visit.isoformat() if p.last_visit else "",
        ])

    filename = f"patients_export_{date.today().isoformat()}.csv"
    output.seek(0)
    return StreamingResponse(
        iter([output.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@router.get("/{patient_id}", response_model=PatientResponse)
async def get_patient(patient_id: str, db: AsyncSession = Depends(get_db)):
    return PatientResponse.model_validate(await _get_or_404(patient_id, db))


@router.post("", response_model=PatientResponse, status_code=201)
async def create_patient(data: PatientCreate, db: AsyncSession = Depends(get_db)):
    values = data.model_dump()
    values["last_visit"] = values["last_visit"] or date.today()
    patient = Patient(patient_id=str(uuid.uuid4()), **values)
    db.add(patient)
    await db.flush()
    await db.refresh(patient)
    return PatientResponse.model_validate(patient)


@router.put("/{patient_id}", response_model=PatientResponse)
async def update_patient(patient_id: str, data: PatientUpdate, db: AsyncSession = Depends(get_db)):
    patient = await _get_or_404(patient_id, db)

    update_data = data.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        setattr(patient, key, value)

    await db.flush()
    await db.refresh(patient)
    return PatientResponse.model_validate(patient)


@router.delete("/{patient_id}")
async def delete_patient(patient_id: str, db: AsyncSession = Depends(get_db)):
    patient = await _get_or_404(patient_id, db)
    await db.delete(patient)
    await db.flush()
    return {"deleted": True, "patient_id": patient_id}
