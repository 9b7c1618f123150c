"""
Carpet order Pydantic schemas.
"""

from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from app.utils.stages import OrderStage


class CarpetOrderCreate(BaseModel):
    """Schema for inserting an order record (admin)."""

    order_number: str = Field(min_length=1, max_length=100)
    client_code: str = Field(min_length=1, max_length=50)
    design: Optional[str] = None
    size: Optional[str] = None
    status: str = OrderStage.ORDER_APPROVAL.value
    order_issued: Optional[date] = None
    delivery_date: Optional[date] = None
    delay_reason: Optional[str] = None

    @field_validator("order_number", "client_code")
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class CarpetOrderUpdate(BaseModel):
    """Schema for updating an order record. All fields optional."""

    client_code: Optional[str] = None
    design: Optional[str] = None
    size: Optional[str] = None
    status: Optional[str] = None
    order_issued: Optional[date] = None
    delivery_date: Optional[date] = None
    delay_reason: Optional[str] = None

    @field_validator("client_code", "status")
    @classmethod
    def _present(cls, value: Optional[str]) -> str:
        # Omit the field to keep it; these columns cannot be cleared
        if value is None or not value.strip():
            raise ValueError("must not be null or blank")
        return value.strip()


class TimelineEntryRead(BaseModel):
    stage: OrderStage
    label: str
    date: Optional[str] = None
    completed: bool


class OrderRead(BaseModel):
    """An order as shown to clients, with its reconstructed timeline."""

    id: str
    order_number: str
    client_code: Optional[str] = None
    carpet_name: Optional[str] = None
    dimensions: Optional[str] = None
    status: OrderStage
    status_label: str
    raw_status: Optional[str] = None
    status_recognized: bool
    has_delay: bool
    delay_reason: Optional[str] = None
    order_issued_date: Optional[str] = None
    estimated_completion: Optional[str] = None
    timeline: List[TimelineEntryRead]


class OrderSummary(BaseModel):
    """Counts over the orders visible to the caller."""

    total: int
    delayed: int
    by_stage: Dict[OrderStage, int]


class StageRead(BaseModel):
    """One stage of the active vocabulary."""

    code: OrderStage
    label: str
    rank: int
    description: str
    color: str
    terminal: bool


class StageVocabularyRead(BaseModel):
    name: str
    stages: List[StageRead]
