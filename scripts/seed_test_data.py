"""
Seed script to create the admin login, demo client logins and sample orders.

Usage:
    python scripts/seed_test_data.py
"""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path so we can import app modules
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.db.session import get_async_session_context
from app.repositories.carpet_order_repository import CarpetOrderRepository
from app.repositories.portal_user_repository import PortalUserRepository
from app.schemas.user import PortalUserCreate


USERS = [
    PortalUserCreate(username="admin", password="admin123", role="admin", client_name="System Administrator"),
    PortalUserCreate(username="ws_client", password="ws_client_pass", client_code="WS", client_name="Washington Studios"),
    PortalUserCreate(username="ld_client", password="ld_client_pass", client_code="LD", client_name="London Designs"),
    PortalUserCreate(username="hr_client", password="hr_client_pass", client_code="HR", client_name="Himalayan Rugs"),
    PortalUserCreate(username="demo", password="demo_pass", client_code="RM", client_name="Royal Mountain"),
]

ORDERS = [
    {"order_number": "WS-2024-001", "buyer_code": "WS", "design": "Himalayan Bloom", "size": "8' x 10'",
     "status": "DYEING", "order_issued": "2024-03-01", "delivery_date": "2024-06-15"},
    {"order_number": "WS-2024-002", "buyer_code": "WS", "design": "Mountain Stream", "size": "6' x 9'",
     "status": "RENDERING", "order_issued": "2024-03-20", "delivery_date": "2024-07-20",
     "delay_reason": "Waiting for special silk yarn import"},
    {"order_number": "LD-2024-001", "buyer_code": "LD", "design": "Royal Palace", "size": "12' x 15'",
     "status": "FINISHING", "order_issued": "2024-01-15", "delivery_date": "2024-05-30"},
    {"order_number": "LD-2024-002", "buyer_code": "LD", "design": "Urban Grid", "size": "9' x 12'",
     "status": "WAITING_FOR_LOOM", "order_issued": "2024-02-10", "delivery_date": "2024-06-30"},
    {"order_number": "HR-2024-001", "buyer_code": "HR", "design": "Classic Mandala", "size": "10' x 10'",
     "status": "ONLOOM_PROGRESS", "order_issued": "2024-02-01", "delivery_date": "2024-06-10",
     "delay_reason": "Pattern adjustment required"},
    {"order_number": "RM-2024-001", "buyer_code": "RM", "design": "Tibetan Clouds", "size": "8' x 10'",
     "status": "DELIVERY_TIME", "order_issued": "2024-01-05", "delivery_date": "2024-04-15"},
    {"order_number": "RM-2024-002", "buyer_code": "RM", "design": "Mountain Peaks", "size": "6' x 9'",
     "status": "FIRST_REVISED_DELIVERY_DATE", "order_issued": "2024-01-20", "delivery_date": "2024-05-25"},
    {"order_number": "RM-2024-003", "buyer_code": "RM", "design": "Valley Sunset", "size": "9' x 12'",
     "status": "order issued", "order_issued": "2024-04-02", "delivery_date": "2024-07-05",
     "delay_reason": "Special color blend development"},
]


async def seed_test_data():
    """Create logins and sample orders that do not exist yet."""

    async with get_async_session_context() as db:
        users = PortalUserRepository(db)
        for data in USERS:
            existing = await users.get_by_username(data.username)
            if existing:
                print(f"[OK] Found existing user: {existing.username}")
                continue
            user = await users.create(data)
            print(f"[OK] Created user: {user.username} ({user.role})")

        orders = CarpetOrderRepository(db)
        for values in ORDERS:
            if await orders.get_by_order_number(values["order_number"]):
                print(f"[OK] Found existing order: {values['order_number']}")
                continue
            await orders.create(values)
            print(f"[OK] Created order: {values['order_number']}")

    print("\nSeed complete. Admin login: admin / admin123")


if __name__ == "__main__":
    asyncio.run(seed_test_data())
