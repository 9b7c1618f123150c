"""
Order timeline reconstruction.

Only the order-issued date and the delivery date are stored per order, so
per-stage dates are derived: anchors are echoed as given and the remaining
completed stages are spread linearly between them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Optional, Union

from app.utils.stages import OrderStage, PRODUCTION_VOCABULARY, StageVocabulary
from app.utils.time import utc_now

DateInput = Union[str, date, None]

DEFAULT_DELIVERY_WINDOW = timedelta(days=30)


@dataclass(frozen=True)
class TimelineEntry:
    stage: OrderStage
    date: Optional[str]
    completed: bool


def parse_date(value: DateInput) -> Optional[date]:
    """
    Read a stored date value.

    Accepts date/datetime objects and ISO strings (date or datetime form).
    Returns None for empty or unparseable input.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def _verbatim(value: DateInput) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value if value.strip() else None


def build_timeline(
    current_stage: OrderStage,
    order_issued_date: DateInput = None,
    delivery_date: DateInput = None,
    *,
    now: Optional[Union[date, datetime]] = None,
    vocabulary: StageVocabulary = PRODUCTION_VOCABULARY,
    delivery_window: timedelta = DEFAULT_DELIVERY_WINDOW,
) -> List[TimelineEntry]:
    """
    Build one entry per canonical stage of `vocabulary`, in rank order.

    Date priority per stage:
    1. first stage with an issued date -> the issued date as given
    2. delivery anchor with a delivery date -> the delivery date as given
    3. completed stage -> interpolated between the issued date (or `now`)
       and the delivery date (or issued + `delivery_window`)
    4. otherwise no date

    Revised delivery variants are not timeline entries; as a current stage
    they outrank every entry, so the whole timeline is completed.
    """
    current_rank = vocabulary.rank(current_stage)

    if now is None:
        now = utc_now()
    today = now.date() if isinstance(now, datetime) else now

    issued_text = _verbatim(order_issued_date)
    delivery_text = _verbatim(delivery_date)

    start = parse_date(order_issued_date) or today
    end = parse_date(delivery_date) or (start + delivery_window)
    span = end - start

    sequence = vocabulary.sequence
    last_index = len(sequence) - 1

    entries: List[TimelineEntry] = []
    for index, stage in enumerate(sequence):
        completed = vocabulary.rank(stage) <= current_rank

        if index == 0 and issued_text is not None:
            entry_date = issued_text
        elif stage in vocabulary.delivery_anchors and delivery_text is not None:
            entry_date = delivery_text
        elif completed:
            position = index / last_index if last_index else 0.0
            entry_date = (start + span * position).isoformat()
        else:
            entry_date = None

        entries.append(TimelineEntry(stage=stage, date=entry_date, completed=completed))

    return entries
