"""
Pytest configuration and shared fixtures.
"""

import os
import uuid
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

import pytest

from app.core.security import hash_password
from app.models.carpet_order import CarpetOrder
from app.models.portal_user import PortalUser
from app.schemas.user import CurrentUser, PortalUserCreate
from app.services.auth_service import AuthService
from app.services.order_service import OrderService
from app.utils.stages import PRODUCTION_VOCABULARY


TODAY = date(2024, 5, 10)

ADMIN = CurrentUser(username="admin", role="admin", client_code="TC", client_name="System Administrator")
WS_CLIENT = CurrentUser(username="ws_client", role="client", client_code="WS", client_name="Washington Studios")
RM_CLIENT = CurrentUser(username="demo", role="client", client_code="RM", client_name="Royal Mountain")


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests, no external deps")
    config.addinivalue_line("markers", "db: requires database")
    config.addinivalue_line("markers", "server: requires running HTTP server")


def pytest_collection_modifyitems(config, items):
    run_db = os.environ.get("RUN_DB_TESTS") == "1"
    run_server = os.environ.get("RUN_SERVER_TESTS") == "1"

    skip_db = pytest.mark.skip(reason="db tests skipped by default; set RUN_DB_TESTS=1 to enable")
    skip_server = pytest.mark.skip(reason="server tests skipped by default; set RUN_SERVER_TESTS=1 to enable")

    for item in items:
        if "db" in item.keywords and not run_db:
            item.add_marker(skip_db)
        if "server" in item.keywords and not run_server:
            item.add_marker(skip_server)


def make_order(order_number: str, buyer_code: Optional[str], status: Optional[str], **extra: Any) -> CarpetOrder:
    return CarpetOrder(order_number=order_number, buyer_code=buyer_code, status=status, **extra)


def sample_orders() -> List[CarpetOrder]:
    return [
        make_order("WS-2024-001", "WS", "DYEING", design="Himalayan Bloom", size="8' x 10'",
                   order_issued="2024-03-01", delivery_date="2024-06-15"),
        make_order("WS-2024-002", "WS", "Rendering", design="Mountain Stream", size="6' x 9'",
                   order_issued="2024-03-20", delivery_date="2024-07-20",
                   delay_reason="Waiting for special silk yarn import"),
        make_order("RM-2024-001", "RM", "DELIVERY_TIME", design="Tibetan Clouds", size="8' x 10'",
                   order_issued="2024-01-05", delivery_date="2024-04-15"),
        make_order("RM-2024-002", "rm", "first revised delivery date", design="Mountain Peaks",
                   order_issued="2024-01-20", delivery_date="2024-05-25"),
        make_order("RM-2024-003", "RM", "sent to moon", design="Valley Sunset"),
    ]


class FakeOrderRepository:
    """In-memory stand-in for CarpetOrderRepository."""

    def __init__(self, records: Iterable[CarpetOrder] = ()):
        self.records: Dict[str, CarpetOrder] = {r.order_number: r for r in records}

    async def get_by_order_number(self, order_number: str) -> Optional[CarpetOrder]:
        return self.records.get(order_number)

    async def list(self, buyer_code=None, search=None, limit=50, offset=0) -> List[CarpetOrder]:
        rows = sorted(self.records.values(), key=lambda r: r.order_number, reverse=True)
        if buyer_code is not None:
            rows = [r for r in rows if (r.buyer_code or "").lower() == buyer_code.strip().lower()]
        if search:
            needle = search.strip().lower()
            rows = [
                r for r in rows
                if any(needle in (value or "").lower() for value in (r.order_number, r.design, r.buyer_code))
            ]
        rows = rows[offset:]
        return rows[:limit] if limit is not None else rows

    async def list_buyer_codes(self) -> List[str]:
        return sorted({r.buyer_code for r in self.records.values() if r.buyer_code})

    async def create(self, values: Dict[str, Any]) -> CarpetOrder:
        record = CarpetOrder(**values)
        self.records[record.order_number] = record
        return record

    async def update(self, order_number: str, values: Dict[str, Any]) -> Optional[CarpetOrder]:
        record = self.records.get(order_number)
        if record is None:
            return None
        for field, value in values.items():
            setattr(record, field, value)
        return record

    async def delete(self, order_number: str) -> bool:
        return self.records.pop(order_number, None) is not None


class FakeUserRepository:
    """In-memory stand-in for PortalUserRepository."""

    def __init__(self, users: Iterable[PortalUser] = ()):
        self.users: Dict[str, PortalUser] = {u.username.lower(): u for u in users}

    async def get_by_username(self, username: str) -> Optional[PortalUser]:
        if not username or not username.strip():
            return None
        return self.users.get(username.strip().lower())

    async def create(self, data: PortalUserCreate) -> PortalUser:
        now = datetime.now(timezone.utc)
        user = PortalUser(
            id=uuid.uuid4(),
            username=data.username,
            hashed_password=hash_password(data.password),
            role=data.role,
            client_code=data.client_code,
            client_name=data.client_name,
            is_active=True,
            created_at=now,
            updated_at=now,
        )
        self.users[user.username] = user
        return user

    async def list(self, skip: int = 0, limit: int = 50) -> List[PortalUser]:
        return sorted(self.users.values(), key=lambda u: u.username)[skip:skip + limit]


def make_user(username: str, password: str, role: str = "client", client_code: Optional[str] = None,
              is_active: bool = True) -> PortalUser:
    now = datetime.now(timezone.utc)
    return PortalUser(
        id=uuid.uuid4(),
        username=username,
        hashed_password=hash_password(password),
        role=role,
        client_code=client_code,
        client_name=None,
        is_active=is_active,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def order_repository() -> FakeOrderRepository:
    return FakeOrderRepository(sample_orders())


@pytest.fixture
def order_service(order_repository) -> OrderService:
    return OrderService(
        None,
        vocabulary=PRODUCTION_VOCABULARY,
        clock=lambda: TODAY,
        repository=order_repository,
    )


@pytest.fixture
def user_repository() -> FakeUserRepository:
    return FakeUserRepository([
        make_user("admin", "admin123", role="admin"),
        make_user("ws_client", "ws_client_pass", client_code="WS"),
        make_user("retired", "retired_pass", client_code="HR", is_active=False),
    ])


@pytest.fixture
def auth_service(user_repository, order_repository) -> AuthService:
    return AuthService(None, users=user_repository, orders=order_repository)
