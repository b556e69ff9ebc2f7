from pydantic import BaseModel
from typing import Optional
from datetime import date


class RecentConsultation(BaseModel):
    consultation_id: str
    patient_id: str
    patient_name: Optional[str] = None
    diagnosis: str
    date: date


class DashboardStats(BaseModel):
    total_patients: int
    consultations_today: int
    low_stock_medicines: int
    active_puroks: int
    recent_consultations: list[RecentConsultation]


class NamedCount(BaseModel):
    name: str
    value: int


class MonthlyVisits(BaseModel):
    month: str
    visits: int


class AnalyticsCharts(BaseModel):
    purok_distribution: list[NamedCount]
    top_illnesses: list[NamedCount]
    monthly_visits: list[MonthlyVisits]


class InsightsResponse(BaseModel):
    insights: str
    available: bool
