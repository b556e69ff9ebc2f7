import logging
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from eclinic.config import get_settings
from eclinic.geo import PUROK_LOCATIONS
from eclinic.models.patient import Patient
from eclinic.models.consultation import Consultation
from eclinic.models.medicine import Medicine
from eclinic.services.llm_service import llm_service

logger = logging.getLogger(__name__)

settings = get_settings()

# Canned chart series shown on the analytics page.
PUROK_DISTRIBUTION = [
    {"name": "Purok 1", "value": 45},
    {"name": "Purok 2", "value": 32},
    {"name": "Purok 3", "value": 58},
    {"name": "Purok 4", "value": 24},
    {"name": "Purok 5", "value": 41},
]

TOP_ILLNESSES = [
    {"name": "Common Cold", "value": 40},
    {"name": "Hypertension", "value": 25},
    {"name": "Dermatitis", "value": 15},
    {"name": "UTI", "value": 10},
    {"name": "Others", "value": 10},
]

MONTHLY_VISITS = [
    {"month": "Sep", "visits": 120},
    {"month": "Oct", "visits": 150},
    {"month": "Nov", "visits": 180},
    {"month": "Dec", "visits": 140},
    {"month": "Jan", "visits": 210},
    {"month": "Feb", "visits": 195},
]

INSIGHTS_FALLBACK = "Error connecting to AI service. Please check your API key."
INSIGHTS_EMPTY = "Unable to generate insights at this time."

class AnalyticsService:
    def get_charts(self) -> dict:
        return {
            "purok_distribution": PUROK_DISTRIBUTION,
            "top_illnesses": TOP_ILLNESSES,
            "monthly_visits": MONTHLY_VISITS,
        }

    async def get_dashboard_stats(self, db: AsyncSession) -> dict:
        total_patients = await db.scalar(select(func.count(Patient.id))) or 0
        consultations_today = await db.scalar(
            select(func.count(Consultation.id)).where(Consultation.date == date.today())
        ) or 0
        low_stock = await db.scalar(
            select(func.count(Medicine.id)).where(Medicine.stock < settings.low_stock_threshold)
        ) or 0

        recent_result = await db.execute(
            select(Consultation, Patient)
            .outerjoin(Patient, Patient.patient_id == Consultation.patient_id)
            .order_by(Consultation.date.desc(), Consultation.id.desc())
            .limit(5)
        )

        return {
            "total_patients": total_patients,
            "consultations_today": consultations_today,
            "low_stock_medicines": low_stock,
            "active_puroks": len(PUROK_LOCATIONS),
            "recent_consultations": [
                {
                    "consultation_id": c.consultation_id,
                    "patient_id": c.patient_id,
                    "patient_name": p.full_name if p else None,
                    "diagnosis": c.diagnosis,
                    "date": c.date,
                }
                for c, p in recent_result.all()
            ],
        }

    def build_insights_prompt(self) -> str:
        total = sum(p["value"] for p in PUROK_DISTRIBUTION)
        top = sorted(TOP_ILLNESSES, key=lambda x: x["value"], reverse=True)[:2]
        busiest = max(PUROK_DISTRIBUTION, key=lambda x: x["value"])
        recent = ", ".join(m["month"] for m in MONTHLY_VISITS[-2:])
        cases = sum(i["value"] for i in TOP_ILLNESSES)
        illnesses = ", ".join(f"{i['name']} ({i['value'] * 100 // cases}%)" for i in top)
        return (
            "Analyze this health data for Barangay Poblacion, Jamindan, Capiz and provide "
            "3-4 actionable insights for the Barangay Health Workers.\n"
            "Data:\n"
            f"- Total Patients: {total}\n"
            f"- Top Illness: {illnesses}\n"
            f"- Purok with highest cases: {busiest['name']}\n"
            f"- Monthly Trend: Increasing visits in {recent}.\n"
        )

    async def generate_insights(self) -> dict:
        try:
            text = await llm_service.generate(self.build_insights_prompt())
        except Exception as e:
            logger.error("AI insights generation failed: %s", e)
            return {"insights": INSIGHTS_FALLBACK, "available": False}
        return {"insights": text or INSIGHTS_EMPTY, "available": bool(text)}


analytics_service = AnalyticsService()
