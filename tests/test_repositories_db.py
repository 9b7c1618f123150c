"""
Repository tests against a real database (RUN_DB_TESTS=1).

Each test works inside a transaction that is rolled back, so the schema
must exist (alembic upgrade head) but no data is left behind.
"""

import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine

from app.core.config import settings
from app.repositories.carpet_order_repository import CarpetOrderRepository
from app.repositories.portal_user_repository import PortalUserRepository
from app.schemas.user import PortalUserCreate
from app.services.order_service import OrderService
from tests.conftest import ADMIN


async def _rollback_session():
    engine = create_async_engine(settings.DATABASE_URL)
    conn = await engine.connect()
    trans = await conn.begin()
    session = AsyncSession(bind=conn, expire_on_commit=False)
    return engine, conn, trans, session


async def _close(engine, conn, trans, session):
    await session.close()
    await trans.rollback()
    await conn.close()
    await engine.dispose()


@pytest.mark.db
@pytest.mark.asyncio
async def test_order_repository_roundtrip():
    engine, conn, trans, db = await _rollback_session()
    try:
        repo = CarpetOrderRepository(db)
        code = f"T{uuid.uuid4().hex[:6]}".upper()
        number = f"{code}-0001"

        await repo.create({
            "order_number": number,
            "buyer_code": code,
            "design": "Test Weave",
            "status": "ONLOOM",
            "order_issued": "2024-01-01",
            "delivery_date": "2024-03-01",
        })

        found = await repo.get_by_order_number(number)
        assert found.design == "Test Weave"

        listed = await repo.list(buyer_code=code.lower())
        assert [o.order_number for o in listed] == [number]

        assert code in await repo.list_buyer_codes()

        updated = await repo.update(number, {"status": "OFFLOOM"})
        assert updated.status == "OFFLOOM"

        assert await repo.delete(number) is True
        assert await repo.delete(number) is False
    finally:
        await _close(engine, conn, trans, db)


@pytest.mark.db
@pytest.mark.asyncio
async def test_order_service_reads_legacy_rows():
    engine, conn, trans, db = await _rollback_session()
    try:
        code = f"T{uuid.uuid4().hex[:6]}".upper()
        number = f"{code}-0002"
        await CarpetOrderRepository(db).create({
            "order_number": number,
            "buyer_code": code,
            "status": "  on loom ",
            "order_issued": "2024-01-01",
            "delivery_date": "2024-03-01",
        })

        view = await OrderService(db).get_order(ADMIN, number)
        assert view.status_recognized
        assert view.timeline[0].date == "2024-01-01"
    finally:
        await _close(engine, conn, trans, db)


@pytest.mark.db
@pytest.mark.asyncio
async def test_portal_user_repository_is_case_insensitive():
    engine, conn, trans, db = await _rollback_session()
    try:
        repo = PortalUserRepository(db)
        name = f"user_{uuid.uuid4().hex[:8]}"

        created = await repo.create(PortalUserCreate(username=name, password="secret", client_code="WS"))
        assert created.hashed_password != "secret"
        assert created.is_active

        assert (await repo.get_by_username(name.upper())).id == created.id
        assert (await repo.get_by_id(created.id)).username == name
    finally:
        await _close(engine, conn, trans, db)
