"""
Generate synthetic patients spread across the puroks of Barangay Poblacion.
Run with: python -m scripts.generate_patients
Run with: python -m scripts.generate_patients --count 50 --seed 7
"""

import argparse
import asyncio
import random
import uuid
from datetime import date, timedelta
from eclinic.database import engine, async_session, init_db
from eclinic.geo import PUROK_LOCATIONS
from eclinic.models.patient import Patient

FIRST_NAMES_F = [
    "Maria", "Ana", "Rosa", "Elena", "Josefina", "Luz", "Carmen", "Teresita",
    "Cristina", "Liza", "Marites", "Rowena", "Jocelyn", "Analyn", "Rhea", "Angelica",
]

FIRST_NAMES_M = [
    "Juan", "Jose", "Pedro", "Antonio", "Ramon", "Eduardo", "Rodrigo", "Manuel",
    "Ricardo", "Danilo", "Rogelio", "Arnel", "Jomar", "Mark", "Jerome", "Paolo",
]

LAST_NAMES = [
    "Dela Cruz", "Santos", "Reyes", "Garcia", "Mendoza", "Bautista", "Villanueva", "Ramos",
    "Aquino", "Castillo", "Fernandez", "Navarro", "Penduko", "Torres", "Rivera", "Flores",
]


def generate_contact() -> str:
    return "09" + "".join(str(random.randint(0, 9)) for _ in range(9))


def generate_patient() -> Patient:
    sex = random.choice(["Male", "Female"])
    first_names = FIRST_NAMES_M if sex == "Male" else FIRST_NAMES_F
    return Patient(
        patient_id=str(uuid.uuid4()),
        first_name=random.choice(first_names),
        last_name=random.choice(LAST_NAMES),
        age=random.randint(0, 90),
        sex=sex,
        address="Poblacion",
        purok=random.choice(PUROK_LOCATIONS).name,
        contact=generate_contact(),
        last_visit=date.today() - timedelta(days=random.randint(1, 180)),
    )


async def generate(count: int):
    await init_db()
    async with async_session() as db:
        db.add_all(generate_patient() for _ in range(count))
        await db.commit()
    print(f"Created {count} patients.")
    await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate synthetic patients")
    parser.add_argument("--count", type=int, default=200, help="Number of patients to create")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible output")
    args = parser.parse_args()

    if args.seed is not None:
        random.seed(args.seed)
    asyncio.run(generate(args.count))
