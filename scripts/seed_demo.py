"""Seed the admin database with demo data and print an admin token.

Creates the tables when they are missing, inserts the demo users, products and
orders, then prints a bearer token for the demo admin so the API (or
scripts/dashboard_snapshot.py) can be called right away.

Usage:
    python scripts/seed_demo.py

The script reads DATABASE_URL from the environment.
"""
import asyncio
import sys
from pathlib import Path

# project root on sys.path so the package imports without installation
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sqlalchemy.exc import IntegrityError

from admin_panel.auth import token_for_user
from admin_panel.database import DATABASE_URL, Base, async_session_maker, engine
from admin_panel.seed import DEMO_PASSWORD, seed_demo


async def main() -> int:
    print("Seeding", DATABASE_URL)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_maker() as session:
        try:
            seeded = await seed_demo(session)
        except IntegrityError:
            print("Demo data is already present (duplicate emails); nothing inserted")
            return 1

    admin = seeded["users"]["admin@example.com"]
    print(f"Seeded {len(seeded['users'])} users, {len(seeded['products'])} products, {len(seeded['orders'])} orders")
    print(f"Demo password for every user: {DEMO_PASSWORD}")
    print("Admin token:")
    print(token_for_user(admin))
    await engine.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
