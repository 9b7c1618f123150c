"""
Turns stored CarpetOrder rows into the order view clients see.
"""

import logging
from datetime import date, timedelta
from typing import Optional

from app.models.carpet_order import CarpetOrder
from app.schemas.order import OrderRead, StageRead, StageVocabularyRead, TimelineEntryRead
from app.utils.stages import STAGE_INFO, StageVocabulary, resolve_status
from app.utils.timeline import DEFAULT_DELIVERY_WINDOW, build_timeline

logger = logging.getLogger(__name__)


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value


def build_order_view(
    record: CarpetOrder,
    vocabulary: StageVocabulary,
    today: date,
    delivery_window: timedelta = DEFAULT_DELIVERY_WINDOW,
) -> OrderRead:
    """
    Resolve the record's STATUS and rebuild its timeline.

    An unreadable STATUS is shown at the vocabulary's first stage with
    status_recognized=False and logged as a data-quality warning.
    """
    resolution = resolve_status(record.status, vocabulary)
    if not resolution.recognized:
        logger.warning(
            "Order %s has unrecognized status %r; showing %s",
            record.order_number,
            record.status,
            resolution.stage.value,
        )

    issued = _blank_to_none(record.order_issued)
    delivery = _blank_to_none(record.delivery_date)
    delay_reason = _blank_to_none(record.delay_reason)

    timeline = build_timeline(
        resolution.stage,
        issued,
        delivery,
        now=today,
        vocabulary=vocabulary,
        delivery_window=delivery_window,
    )

    return OrderRead(
        id=record.order_number,
        order_number=record.order_number,
        client_code=record.buyer_code,
        carpet_name=record.design,
        dimensions=record.size,
        status=resolution.stage,
        status_label=STAGE_INFO[resolution.stage].label,
        raw_status=record.status,
        status_recognized=resolution.recognized,
        has_delay=bool(delay_reason) or vocabulary.is_revised(resolution.stage),
        delay_reason=delay_reason,
        order_issued_date=issued,
        estimated_completion=delivery,
        timeline=[
            TimelineEntryRead(
                stage=entry.stage,
                label=STAGE_INFO[entry.stage].label,
                date=entry.date,
                completed=entry.completed,
            )
            for entry in timeline
        ],
    )


def describe_vocabulary(vocabulary: StageVocabulary) -> StageVocabularyRead:
    """The vocabulary's stages in rank order, with display metadata."""
    return StageVocabularyRead(
        name=vocabulary.name,
        stages=[
            StageRead(
                code=stage,
                label=STAGE_INFO[stage].label,
                rank=vocabulary.rank(stage),
                description=STAGE_INFO[stage].description,
                color=STAGE_INFO[stage].color,
                terminal=vocabulary.is_revised(stage),
            )
            for stage in vocabulary.stages
        ],
    )
