from fastapi import APIRouter
from eclinic.schemas.dashboard import AnalyticsCharts
from eclinic.services.analytics_service import analytics_service

router = APIRouter()


@router.get("/charts", response_model=AnalyticsCharts)
async def get_charts():
    return analytics_service.get_charts()
