import uuid
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, or_
from eclinic.config import get_settings
from eclinic.database import get_db
from eclinic.models.medicine import Medicine
from eclinic.schemas.medicine import MedicineCreate, MedicineUpdate, MedicineResponse, MedicineListResponse

router = APIRouter()

settings = get_settings()


def _to_response(medicine: Medicine) -> MedicineResponse:
    response = MedicineResponse.model_validate(medicine)
    response.low_stock = medicine.stock < settings.low_stock_threshold
    return response


async def _get_or_404(medicine_id: str, db: AsyncSession) -> Medicine:
    result = await db.execute(select(Medicine).where(Medicine.medicine_id == medicine_id))
    medicine = result.scalar_one_or_none()
    if not medicine:
        raise HTTPException(status_code=404, detail=f"Medicine {medicine_id} not found")
    return medicine


@router.get("", response_model=MedicineListResponse)
async def list_medicines(
    search: str = Query("", description="Search by name or category"),
    db: AsyncSession = Depends(get_db),
):
    query = select(Medicine)
    if search:
        query = query.where(
            or_(
                Medicine.name.ilike(f"%{search}%"),
                Medicine.category.ilike(f"%{search}%"),
            )
        )
    total = await db.scalar(select(func.count()).select_from(query.subquery())) or 0
    result = await db.execute(query.order_by(Medicine.id))
    return MedicineListResponse(
        medicines=[_to_response(m) for m in result.scalars().all()],
        total=total,
    )


@router.get("/{medicine_id}", response_model=MedicineResponse)
async def get_medicine(medicine_id: str, db: AsyncSession = Depends(get_db)):
    return _to_response(await _get_or_404(medicine_id, db))


@router.post("", response_model=MedicineResponse, status_code=201)
async def create_medicine(data: MedicineCreate, db: AsyncSession = Depends(get_db)):
    medicine = Medicine(medicine_id=str(uuid.uuid4()), **data.model_dump())
    db.add(medicine)
    await db.flush()
    await db.refresh(medicine)
    return _to_response(medicine)


@router.put("/{medicine_id}", response_model=MedicineResponse)
async def update_medicine(medicine_id: str, data: MedicineUpdate, db: AsyncSession = Depends(get_db)):
    medicine = await _get_or_404(medicine_id, db)
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(medicine, key, value)
    await db.flush()
    await db.refresh(medicine)
    return _to_response(medicine)


@router.delete("/{medicine_id}")
async def delete_medicine(medicine_id: str, db: AsyncSession = Depends(get_db)):
    medicine = await _get_or_404(medicine_id, db)
    await db.delete(medicine)
    await db.flush()
    return {"deleted": True, "medicine_id": medicine_id}
