"""Startup seeding: the default account and the demo clinic records. Idempotent."""

import logging
from datetime import date
from sqlalchemy import select, func
from eclinic.database import async_session
from eclinic.auth import hash_password, hash_recovery_answer
from eclinic.models.user import User
from eclinic.models.patient import Patient
from eclinic.models.consultation import Consultation
from eclinic.models.medicine import Medicine

logger = logging.getLogger(__name__)

DEFAULT_USER = {
    "username": "admin",
    "password": "password123",
    "name": "BHW Maria",
    "role": "Barangay Health Worker",
    "recovery_question": "What is your favorite color?",
    "recovery_answer": "emerald",
}

DEMO_PATIENTS = [
    {"patient_id": "1", "first_name": "Juan", "last_name": "Dela Cruz", "age": 45, "sex": "Male",
     "address": "Poblacion", "purok": "Purok 1", "contact": "09123456789", "last_visit": date(2024, 2, 15)},
    {"patient_id": "2", "first_name": "Maria", "last_name": "Santos", "age": 28, "sex": "Female",
     "address": "Poblacion", "purok": "Purok 3", "contact": "09987654321", "last_visit": date(2024, 2, 10)},
    {"patient_id": "3", "first_name": "Pedro", "last_name": "Penduko", "age": 12, "sex": "Male",
     "address": "Poblacion", "purok": "Purok 2", "contact": "09112223334", "last_visit": date(2024, 2, 18)},
    {"patient_id": "4", "first_name": "Elena", "last_name": "Reyes", "age": 65, "sex": "Female",
     "address": "Poblacion", "purok": "Purok 5", "contact": "09445556667", "last_visit": date(2024, 2, 5)},
]

DEMO_CONSULTATIONS = [
    {"consultation_id": "c1", "patient_id": "1", "date": date(2024, 2, 15), "chief_complaint": "Cough and Fever",
     "diagnosis": "Common Cold", "treatment": "Rest and Hydration", "prescribed_meds": ["Paracetamol"],
     "follow_up": date(2024, 2, 22)},
    {"consultation_id": "c2", "patient_id": "2", "date": date(2024, 2, 10), "chief_complaint": "Stomach Ache",
     "diagnosis": "Hyperacidity", "treatment": "Avoid spicy food", "prescribed_meds": ["Antacid"],
     "follow_up": date(2024, 2, 17)},
    {"consultation_id": "c3", "patient_id": "3", "date": date(2024, 2, 18), "chief_complaint": "Skin Rash",
     "diagnosis": "Contact Dermatitis", "treatment": "Apply topical cream", "prescribed_meds": ["Hydrocortisone"],
     "follow_up": date(2024, 2, 25)},
]

DEMO_MEDICINES = [
    {"medicine_id": "m1", "name": "Paracetamol", "category": "Analgesic", "stock": 500, "unit": "Tablets",
     "expiry_date": date(2025, 12, 31)},
    {"medicine_id": "m2", "name": "Amoxicillin", "category": "Antibiotic", "stock": 200, "unit": "Capsules",
     "expiry_date": date(2024, 10, 15)},
    {"medicine_id": "m3", "name": "Cetirizine", "category": "Antihistamine", "stock": 150, "unit": "Tablets",
     "expiry_date": date(2025, 6, 20)},
    {"medicine_id": "m4", "name": "Losartan", "category": "Antihypertensive", "stock": 300, "unit": "Tablets",
     "expiry_date": date(2026, 1, 10)},
]


async def seed_default_user():
    """Create the single default account when the user table is empty."""
    async with async_session() as session:
        count = await session.scalar(select(func.count(User.id)))
        if count:
            return
        session.add(User(
            username=DEFAULT_USER["username"],
            password_hash=hash_password(DEFAULT_USER["password"]),
            name=DEFAULT_USER["name"],
            role=DEFAULT_USER["role"],
            recovery_question=DEFAULT_USER["recovery_question"],
            recovery_answer_hash=hash_recovery_answer(DEFAULT_USER["recovery_answer"]),
        ))
        await session.commit()
        logger.info("Seeded default user '%s'", DEFAULT_USER["username"])


async def seed_demo_records():
    """Load the demo patients, consultations and medicines into empty tables."""
    async with async_session() as session:
        for model, rows in ((Patient, DEMO_PATIENTS), (Consultation, DEMO_CONSULTATIONS), (Medicine, DEMO_MEDICINES)):
            existing = await session.scalar(select(func.count(model.id)))
            if existing:
                continue
            session.add_all(model(**row) for row in rows)
            logger.info("Seeded %d %s rows", len(rows), model.__tablename__)
        await session.commit()
