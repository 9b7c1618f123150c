"""
CarpetOrder model.

Maps the order table the portal shares with the production office. Column
names keep their original spelling (mixed case and spaces); dates are stored
as ISO date strings exactly as entered.
"""

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class CarpetOrder(Base):
    """
    CarpetOrder table - one row per carpet production order.
    """

    __tablename__ = "CarpetOrder"

    # Order number, also used as the order identifier
    order_number: Mapped[str] = mapped_column(
        "Carpetno",
        String(100),
        primary_key=True,
    )

    # Client (buyer) code, e.g. "WS"
    buyer_code: Mapped[Optional[str]] = mapped_column(
        "Buyercode",
        String(50),
        nullable=True,
        index=True,
    )

    design: Mapped[Optional[str]] = mapped_column(
        "Design",
        String(255),
        nullable=True,
    )

    size: Mapped[Optional[str]] = mapped_column(
        "Size",
        String(100),
        nullable=True,
    )

    # Free text; read through the stage vocabulary
    status: Mapped[Optional[str]] = mapped_column(
        "STATUS",
        String(100),
        nullable=True,
    )

    order_issued: Mapped[Optional[str]] = mapped_column(
        "Order issued",
        String(32),
        nullable=True,
    )

    delivery_date: Mapped[Optional[str]] = mapped_column(
        "Delivery Date",
        String(32),
        nullable=True,
    )

    delay_reason: Mapped[Optional[str]] = mapped_column(
        "Delay reason",
        Text,
        nullable=True,
    )
