# scripts/seed_demo.py

import asyncio
import argparse

from sqlalchemy.future import select

from vdv_inventory.core.constants import MachineStatus
from vdv_inventory.crud import machine as machine_crud
from vdv_inventory.crud import store as store_crud
from vdv_inventory.db import async_session, create_db_and_tables
from vdv_inventory.models import Machine, Store
from vdv_inventory.schemas import MachineCreate, StoreCreate

# 🎯 VENUES TO SEED
STORES_TO_SEED = [
    {"store_id": "S1", "name": "Main St", "address": "100 Main St"},
    {"store_id": "S2", "name": "Riverside", "address": "12 River Rd"},
]

# 🎰 MACHINES TO SEED (store_id refers to the venue code above)
MACHINES_TO_SEED = [
    {"machine_id": "pi-1-hub", "display_name": "Pi 1", "game_type": "edge", "hub_id": "pi-1", "store_id": "S1",
     "status": MachineStatus.deployed},
    {"machine_id": "M1", "manufacturer": "IGT", "model": "S2000", "hub_id": "pi-1", "store_id": "S1",
     "status": MachineStatus.deployed},
    {"machine_id": "M2", "manufacturer": "IGT", "model": "S2000", "hub_id": "pi-1", "store_id": "S1",
     "status": MachineStatus.repair},
    {"machine_id": "M3", "manufacturer": "Aristocrat", "model": "MK6", "store_id": "S2",
     "status": MachineStatus.deployed},
    {"machine_id": "M4", "manufacturer": "Bally", "model": "Alpha", "status": MachineStatus.storage},
]


async def seed():
    await create_db_and_tables()
    async with async_session() as session:
        for data in STORES_TO_SEED:
            result = await session.execute(select(Store).where(Store.store_id == data["store_id"]))
            if result.scalar_one_or_none():
                print(f"⚠️  Store '{data['store_id']}' already exists. Skipping.")
                continue
            store = await store_crud.create_store(session, StoreCreate(**data))
            print(f"🏢 Created store: {store.name}")

        for data in MACHINES_TO_SEED:
            result = await session.execute(select(Machine).where(Machine.machine_id == data["machine_id"]))
            if result.scalar_one_or_none():
                print(f"⚠️  Machine '{data['machine_id']}' already exists. Skipping.")
                continue
            machine = await machine_crud.create_machine(session, MachineCreate(**data))
            print(f"✅ Created: {machine.machine_id} @ {machine.current_location}")

    print("✅ Done seeding.\n")


async def wipe():
    async with async_session() as session:
        for machine in (await session.execute(select(Machine))).scalars().all():
            await machine_crud.delete_machine(session, machine.id)
        for store in (await session.execute(select(Store))).scalars().all():
            await store_crud.delete_store(session, store.id)
    print("🗑️  Removed all machines and stores.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed or wipe demo inventory data")
    parser.add_argument("--wipe", action="store_true", help="delete all machines and stores instead")
    args = parser.parse_args()
    asyncio.run(wipe() if args.wipe else seed())
