"""
Order business logic service.
"""

import logging
from collections import Counter
from datetime import date, timedelta
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.permissions import can_view_order
from app.errors import order_exists, order_not_found, unknown_stage
from app.models.carpet_order import CarpetOrder
from app.repositories.carpet_order_repository import CarpetOrderRepository
from app.schemas.order import CarpetOrderCreate, CarpetOrderUpdate, OrderRead, OrderSummary
from app.schemas.user import CurrentUser
from app.services.order_view import build_order_view
from app.utils.stages import OrderStage, StageVocabulary, get_vocabulary, resolve_status
from app.utils.time import utc_today

logger = logging.getLogger(__name__)

# Request fields -> CarpetOrder attributes
_FIELD_MAP = {
    "client_code": "buyer_code",
    "design": "design",
    "size": "size",
    "status": "status",
    "order_issued": "order_issued",
    "delivery_date": "delivery_date",
    "delay_reason": "delay_reason",
}


class OrderService:
    """Service for carpet order business logic."""

    def __init__(
        self,
        db: Optional[AsyncSession],
        vocabulary: Optional[StageVocabulary] = None,
        clock: Callable[[], date] = utc_today,
        delivery_window: Optional[timedelta] = None,
        repository: Optional[CarpetOrderRepository] = None,
    ):
        self.repository = repository if repository is not None else CarpetOrderRepository(db)
        self.vocabulary = vocabulary or get_vocabulary(settings.STAGE_VOCABULARY)
        self.clock = clock
        self.delivery_window = delivery_window or timedelta(days=settings.DEFAULT_DELIVERY_WINDOW_DAYS)

    def _view(self, record: CarpetOrder, today: date) -> OrderRead:
        return build_order_view(record, self.vocabulary, today, self.delivery_window)

    @staticmethod
    def _scope(user: CurrentUser, client_code: Optional[str]) -> Optional[str]:
        """Buyer code the caller may list; clients are pinned to their own."""
        if user.is_admin:
            return client_code
        return user.client_code

    async def _visible_orders(
        self,
        user: CurrentUser,
        client_code: Optional[str] = None,
        search: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[OrderRead]:
        buyer_code = self._scope(user, client_code)
        if not user.is_admin and not buyer_code:
            return []

        records = await self.repository.list(
            buyer_code=buyer_code,
            search=search,
            limit=limit,
            offset=offset,
        )
        today = self.clock()
        return [self._view(record, today) for record in records]

    async def list_orders(
        self,
        user: CurrentUser,
        client_code: Optional[str] = None,
        search: Optional[str] = None,
        stage: Optional[OrderStage] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[OrderRead]:
        """
        List orders visible to `user`.

        STATUS is free text, so the stage filter runs on resolved views and
        pagination follows it.
        """
        if stage is None:
            return await self._visible_orders(user, client_code, search, limit=limit, offset=offset)

        views = await self._visible_orders(user, client_code, search)
        matching = [view for view in views if view.status == stage]
        return matching[offset:offset + limit]

    async def get_order(self, user: CurrentUser, order_number: str) -> OrderRead:
        """Get one order; other clients' orders look the same as missing ones."""
        record = await self.repository.get_by_order_number(order_number)
        if not record or not can_view_order(user.role, user.client_code, record.buyer_code):
            raise order_not_found(order_number)
        return self._view(record, self.clock())

    async def summarize(self, user: CurrentUser, client_code: Optional[str] = None) -> OrderSummary:
        """Total, delayed and per-stage counts over the visible orders."""
        views = await self._visible_orders(user, client_code)
        counts = Counter(view.status for view in views)
        return OrderSummary(
            total=len(views),
            delayed=sum(1 for view in views if view.has_delay),
            by_stage={stage: counts.get(stage, 0) for stage in self.vocabulary.stages},
        )

    def _canonical_status(self, raw_status: Optional[str]) -> str:
        resolution = resolve_status(raw_status, self.vocabulary)
        if not resolution.recognized:
            raise unknown_stage(raw_status, self.vocabulary.name)
        return resolution.stage.value

    def _column_values(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        for field, value in fields.items():
            if field == "status":
                value = self._canonical_status(value)
            elif isinstance(value, date):
                value = value.isoformat()
            elif isinstance(value, str) and field != "status":
                value = value.strip() or None
            values[_FIELD_MAP[field]] = value
        return values

    async def create_order(self, data: CarpetOrderCreate) -> OrderRead:
        """
        Insert an order.

        Missing dates default to today and today + the delivery window.
        """
        if await self.repository.get_by_order_number(data.order_number):
            raise order_exists(data.order_number)

        today = self.clock()
        fields = data.model_dump(exclude={"order_number"})
        if fields["order_issued"] is None:
            fields["order_issued"] = today
        if fields["delivery_date"] is None:
            fields["delivery_date"] = fields["order_issued"] + self.delivery_window

        values = self._column_values(fields)
        values["order_number"] = data.order_number
        record = await self.repository.create(values)
        logger.info("Created order %s for client %s", record.order_number, record.buyer_code)
        return self._view(record, today)

    async def update_order(self, order_number: str, data: CarpetOrderUpdate) -> OrderRead:
        """Apply the fields present in `data`."""
        values = self._column_values(data.model_dump(exclude_unset=True))
        record = await self.repository.update(order_number, values)
        if not record:
            raise order_not_found(order_number)
        logger.info("Updated order %s (%s)", order_number, ", ".join(sorted(values)) or "no fields")
        return self._view(record, self.clock())

    async def delete_order(self, order_number: str) -> None:
        if not await self.repository.delete(order_number):
            raise order_not_found(order_number)
        logger.info("Deleted order %s", order_number)
