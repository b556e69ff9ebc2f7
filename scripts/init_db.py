"""
Initialize the database: create all tables and seed the default account.
Run with: python -m scripts.init_db
Run with: python -m scripts.init_db --with-demo  (also load the demo clinic records)
"""

import argparse
import asyncio
from eclinic.database import engine, init_db
from eclinic.seed import seed_default_user, seed_demo_records


async def init(with_demo: bool):
    print("Creating database tables...")
    await init_db()
    await seed_default_user()
    if with_demo:
        await seed_demo_records()
    print("Database ready.")
    await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the clinic tables and seed the default account")
    parser.add_argument("--with-demo", action="store_true", help="Also seed the demo patients, consultations and medicines")
    args = parser.parse_args()

    asyncio.run(init(with_demo=args.with_demo))
