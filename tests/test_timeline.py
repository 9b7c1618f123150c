"""Timeline reconstruction tests."""

from datetime import date, datetime, timedelta, timezone

import pytest

from app.utils.stages import LEGACY_VOCABULARY, PRODUCTION_VOCABULARY, OrderStage
from app.utils.timeline import build_timeline, parse_date

pytestmark = pytest.mark.unit

NOW = date(2024, 5, 10)


def _by_stage(entries):
    return {entry.stage: entry for entry in entries}


@pytest.mark.parametrize("current", PRODUCTION_VOCABULARY.stages)
def test_one_entry_per_canonical_stage_with_completed_prefix(current):
    entries = build_timeline(current, "2024-01-01", "2024-03-01", now=NOW)

    assert [e.stage for e in entries] == list(PRODUCTION_VOCABULARY.sequence)

    completed = [e.completed for e in entries]
    done = min(PRODUCTION_VOCABULARY.rank(current) + 1, len(entries))
    assert completed == [True] * done + [False] * (len(entries) - done)


def test_dyeing_between_anchors():
    entries = build_timeline(OrderStage.DYEING, "2024-01-01", "2024-03-01", now=NOW)
    stages = _by_stage(entries)

    first = entries[0]
    assert first.stage == OrderStage.ORDER_APPROVAL
    assert first.date == "2024-01-01"
    assert first.completed

    dyeing = stages[OrderStage.DYEING]
    assert dyeing.completed
    assert "2024-01-01" < dyeing.date < "2024-03-01"
    # 60 days * 2/9 -> 13 whole days
    assert dyeing.date == "2024-01-14"

    onloom = stages[OrderStage.ONLOOM]
    assert not onloom.completed
    assert onloom.date is None


def test_order_approval_without_dates_uses_now():
    entries = build_timeline(OrderStage.ORDER_APPROVAL, now=NOW)

    assert entries[0].completed
    assert entries[0].date == "2024-05-10"
    for entry in entries[1:]:
        assert not entry.completed
        assert entry.date is None


def test_now_accepts_datetime():
    moment = datetime(2024, 5, 10, 23, 30, tzinfo=timezone.utc)
    entries = build_timeline(OrderStage.ORDER_APPROVAL, now=moment)
    assert entries[0].date == "2024-05-10"


def test_issued_date_is_echoed_verbatim():
    entries = build_timeline(OrderStage.DYEING, "2024-01-01T08:15:00", None, now=NOW)
    assert entries[0].date == "2024-01-01T08:15:00"


def test_delivery_anchors_use_delivery_date():
    entries = build_timeline(OrderStage.DELIVERY_TIME, "2024-01-01", "2024-03-01", now=NOW)
    stages = _by_stage(entries)

    assert stages[OrderStage.FINISHING].date == "2024-03-01"
    assert stages[OrderStage.DELIVERY_TIME].date == "2024-03-01"
    assert all(entry.completed for entry in entries)


def test_delivery_anchor_keeps_date_before_completion():
    entries = build_timeline(OrderStage.DYEING, "2024-01-01", "2024-03-01", now=NOW)
    finishing = _by_stage(entries)[OrderStage.FINISHING]

    assert not finishing.completed
    assert finishing.date == "2024-03-01"


def test_interpolated_dates_do_not_decrease():
    entries = build_timeline(OrderStage.OFFLOOM, "2024-01-01", "2024-04-30", now=NOW)
    dates = [entry.date for entry in entries if entry.completed]

    assert dates == sorted(dates)
    assert len(dates) == PRODUCTION_VOCABULARY.rank(OrderStage.OFFLOOM) + 1


def test_missing_anchors_fall_back_to_now_plus_window():
    entries = build_timeline(OrderStage.DELIVERY_TIME, now=NOW)
    stages = _by_stage(entries)

    assert stages[OrderStage.ORDER_APPROVAL].date == "2024-05-10"
    assert stages[OrderStage.DELIVERY_TIME].date == "2024-06-09"
    # 30 days * 8/9 -> 26 whole days
    assert stages[OrderStage.FINISHING].date == "2024-06-05"


def test_delivery_window_is_configurable():
    entries = build_timeline(
        OrderStage.DELIVERY_TIME,
        "2024-01-01",
        now=NOW,
        delivery_window=timedelta(days=90),
    )
    assert entries[-1].date == "2024-03-31"


def test_unparseable_anchor_is_echoed_but_not_used_for_interpolation():
    entries = build_timeline(OrderStage.RENDERING, "someday", "2024-06-08", now=NOW)

    assert entries[0].date == "someday"
    # span runs from NOW (2024-05-10) to 2024-06-08: 29 days * 1/9 -> 3 days
    assert entries[1].date == "2024-05-13"


def test_blank_anchor_strings_count_as_missing():
    entries = build_timeline(OrderStage.ORDER_APPROVAL, "  ", "", now=NOW)
    assert entries[0].date == "2024-05-10"


def test_revised_variant_completes_whole_timeline():
    entries = build_timeline(
        OrderStage.SECOND_REVISED_DELIVERY_DATE, "2024-01-01", "2024-03-01", now=NOW
    )

    assert len(entries) == len(PRODUCTION_VOCABULARY.sequence)
    assert all(entry.completed for entry in entries)
    assert all(entry.date for entry in entries)
    assert OrderStage.SECOND_REVISED_DELIVERY_DATE not in {entry.stage for entry in entries}


def test_date_objects_are_accepted():
    entries = build_timeline(
        OrderStage.DELIVERY_TIME, date(2024, 1, 1), date(2024, 3, 1), now=NOW
    )
    assert entries[0].date == "2024-01-01"
    assert entries[-1].date == "2024-03-01"


def test_legacy_vocabulary_timeline():
    entries = build_timeline(
        OrderStage.CARPET_RECEIVED,
        "2024-01-01",
        "2024-02-20",
        now=NOW,
        vocabulary=LEGACY_VOCABULARY,
    )
    stages = _by_stage(entries)

    assert [e.stage for e in entries] == list(LEGACY_VOCABULARY.sequence)
    assert stages[OrderStage.YARN_ISSUED].date == "2024-01-01"
    # 50 days * 3/5 -> 30 days
    assert stages[OrderStage.CARPET_RECEIVED].date == "2024-01-31"
    assert stages[OrderStage.EXPORTED].date == "2024-02-20"
    assert not stages[OrderStage.EXPORTED].completed


def test_foreign_current_stage_is_rejected():
    with pytest.raises(ValueError):
        build_timeline(OrderStage.EXPORTED, now=NOW)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2024-02-29", date(2024, 2, 29)),
        ("2024-02-29T10:00:00Z", date(2024, 2, 29)),
        (datetime(2024, 2, 29, 10, 0), date(2024, 2, 29)),
        (date(2024, 2, 29), date(2024, 2, 29)),
        ("", None),
        (None, None),
        ("29/02/2024", None),
    ],
)
def test_parse_date(value, expected):
    assert parse_date(value) == expected
