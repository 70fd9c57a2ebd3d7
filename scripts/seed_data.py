"""Seed the database with demo users, config types, configs and technicians."""

import asyncio

from repairdesk.db.engine import async_session_factory, init_db
from repairdesk.db import crud

CONFIG_TYPES = ["facility", "it"]

CONFIGS = [
    ("Plumbing", "facility", [("Somchai Boonmee", "0811111111")]),
    ("Air conditioning", "facility", [("Niran Chaiyo", "0822222222")]),
    ("Laptop / PC", "it", [("Pim Srisuk", "0833333333")]),
]

USERS = [
    ("owner@example.com", "Olivia", "Owner"),
    ("approver@example.com", "Adam", "Approver"),
]


async def seed():
    await init_db()

    async with async_session_factory() as db:
        rows, total = await crud.list_configs(db, size=1)
        if total:
            print("Configs already exist, skipping seed.")
            return

        for name in CONFIG_TYPES:
            await crud.create_config_type(db, name)

        for name, type_name, technicians in CONFIGS:
            config = await crud.create_config(db, name, type_name)
            for tech_name, number in technicians:
                await crud.create_technician(db, tech_name, number, config.id)
            print(f"Created config: {config.name} [{type_name}] (id: {config.id})")

        for email, first, last in USERS:
            user = await crud.create_user(db, email, first, last)
            print(f"Created user: {user.full_name} (id: {user.id})")

    print("\nSeed complete. Start the server with: uvicorn repairdesk.main:app --reload")


if __name__ == "__main__":
    asyncio.run(seed())
