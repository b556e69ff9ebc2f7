from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from eclinic.database import get_db
from eclinic.schemas.dashboard import DashboardStats, InsightsResponse
from eclinic.services.analytics_service import analytics_service

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(db: AsyncSession = Depends(get_db)):
    return await analytics_service.get_dashboard_stats(db)


@router.post("/insights", response_model=InsightsResponse)
async def generate_insights():
    return await analytics_service.generate_insights()
