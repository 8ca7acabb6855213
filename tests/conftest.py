"""Shared pytest fixtures for the inventory ledger tests."""

from __future__ import annotations

import os

# Keep the module-level engine off PostgreSQL during tests.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from glamping_inventory.db.database import Base  # noqa: E402
from glamping_inventory.db import inventory  # noqa: E402,F401
from glamping_inventory.db.inventory.store import LedgerStore  # noqa: E402
from glamping_inventory.db.users import User  # noqa: E402
from glamping_inventory.schemas.inventory import UserSummary  # noqa: E402
from glamping_inventory.services.inventory_service import InventoryService  # noqa: E402

from tests.fakes import InMemoryLedgerStore  # noqa: E402


USERS = {
    7: UserSummary(id=7, first_name="Valeria", last_name="Quispe", email="valeria@glamping.test"),
    8: UserSummary(id=8, first_name="Tomas", last_name="Rojas", email="tomas@glamping.test"),
}


@pytest.fixture
def store() -> InMemoryLedgerStore:
    return InMemoryLedgerStore(users=USERS)


@pytest.fixture
def service(store) -> InventoryService:
    return InventoryService(store)


@pytest.fixture
async def sqlite_engine():
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def sqlite_session_maker(sqlite_engine):
    return async_sessionmaker(sqlite_engine, expire_on_commit=False)


@pytest.fixture
async def sql_store(sqlite_session_maker) -> LedgerStore:
    async with sqlite_session_maker() as session:
        session.add_all([User(**user.model_dump()) for user in USERS.values()])
        await session.commit()
    return LedgerStore(sqlite_session_maker)


@pytest.fixture
def sql_service(sql_store) -> InventoryService:
    return InventoryService(sql_store)
