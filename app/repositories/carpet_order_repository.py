"""
CarpetOrder repository - database operations for CarpetOrder.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.carpet_order import CarpetOrder

LIKE_ESCAPE = "\\"


def contains_pattern(text: str) -> str:
    """LIKE pattern matching `text` literally anywhere in a value."""
    text = text.strip()
    for char in (LIKE_ESCAPE, "%", "_"):
        text = text.replace(char, LIKE_ESCAPE + char)
    return f"%{text}%"


class CarpetOrderRepository:
    """Repository for CarpetOrder database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_order_number(self, order_number: str) -> Optional[CarpetOrder]:
        """Get an order by its order number (Carpetno)."""
        result = await self.db.execute(
            select(CarpetOrder).where(CarpetOrder.order_number == order_number)
        )
        return result.scalar_one_or_none()

    async def list(
        self,
        buyer_code: Optional[str] = None,
        search: Optional[str] = None,
        limit: Optional[int] = 50,
        offset: int = 0,
    ) -> List[CarpetOrder]:
        """
        List orders, newest order number first.

        buyer_code matches case-insensitively; search looks in the order
        number, design and buyer code.
        """
        query = select(CarpetOrder)

        if buyer_code is not None:
            query = query.where(func.lower(CarpetOrder.buyer_code) == buyer_code.strip().lower())
        if search:
            pattern = contains_pattern(search)
            query = query.where(
                or_(
                    CarpetOrder.order_number.ilike(pattern, escape=LIKE_ESCAPE),
                    CarpetOrder.design.ilike(pattern, escape=LIKE_ESCAPE),
                    CarpetOrder.buyer_code.ilike(pattern, escape=LIKE_ESCAPE),
                )
            )

        query = query.order_by(CarpetOrder.order_number.desc()).offset(offset)
        if limit is not None:
            query = query.limit(limit)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_buyer_codes(self) -> List[str]:
        """Distinct non-empty buyer codes."""
        result = await self.db.execute(
            select(CarpetOrder.buyer_code)
            .where(CarpetOrder.buyer_code.is_not(None), CarpetOrder.buyer_code != "")
            .distinct()
        )
        return [code for code in result.scalars().all() if code]

    async def create(self, values: Dict[str, Any]) -> CarpetOrder:
        """Insert a new order row."""
        order = CarpetOrder(**values)
        self.db.add(order)
        await self.db.flush()
        await self.db.refresh(order)
        return order

    async def update(self, order_number: str, values: Dict[str, Any]) -> Optional[CarpetOrder]:
        """Apply column values to an existing order."""
        order = await self.get_by_order_number(order_number)
        if not order:
            return None

        for field, value in values.items():
            setattr(order, field, value)

        await self.db.flush()
        await self.db.refresh(order)
        return order

    async def delete(self, order_number: str) -> bool:
        """Delete an order; False if it did not exist."""
        order = await self.get_by_order_number(order_number)
        if not order:
            return False
        await self.db.delete(order)
        await self.db.flush()
        return True
