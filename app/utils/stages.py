"""
Production stage vocabularies and status normalization.

A vocabulary bundles the canonical stage sequence, the terminal
"revised delivery date" variants, the alias table used to read free-text
STATUS values, and the stages whose date comes from the delivery date.
Vocabularies are plain values; callers pass the one they want.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Dict, Mapping, Optional, Tuple


class OrderStage(str, Enum):
    """Every stage code known to any vocabulary."""

    ORDER_APPROVAL = "ORDER_APPROVAL"
    YARN_ISSUED = "YARN_ISSUED"
    RENDERING = "RENDERING"
    DYEING = "DYEING"
    DYEING_READY = "DYEING_READY"
    WAITING_FOR_LOOM = "WAITING_FOR_LOOM"
    ONLOOM = "ONLOOM"
    ONLOOM_PROGRESS = "ONLOOM_PROGRESS"
    OFFLOOM = "OFFLOOM"
    ISSUED_TO_SUPPLIER = "ISSUED_TO_SUPPLIER"
    CARPET_RECEIVED = "CARPET_RECEIVED"
    FINISHING = "FINISHING"
    DELIVERY_TIME = "DELIVERY_TIME"
    EXPORTED = "EXPORTED"
    FIRST_REVISED_DELIVERY_DATE = "FIRST_REVISED_DELIVERY_DATE"
    SECOND_REVISED_DELIVERY_DATE = "SECOND_REVISED_DELIVERY_DATE"


@dataclass(frozen=True)
class StageInfo:
    """Display metadata for a stage."""

    label: str
    description: str
    color: str


STAGE_INFO: Dict[OrderStage, StageInfo] = {
    OrderStage.ORDER_APPROVAL: StageInfo(
        "Order Approval", "The order has been received and is awaiting approval.", "blue"
    ),
    OrderStage.YARN_ISSUED: StageInfo(
        "Yarn Issued", "Raw materials have been selected and issued for production.", "emerald"
    ),
    OrderStage.RENDERING: StageInfo(
        "Rendering", "The design is being rendered and prepared for production.", "purple"
    ),
    OrderStage.DYEING: StageInfo(
        "Dyeing", "Yarn is being dyed according to the color specifications.", "sky"
    ),
    OrderStage.DYEING_READY: StageInfo(
        "Dyeing Ready", "Dyed yarn is ready and waiting to be issued for weaving.", "indigo"
    ),
    OrderStage.WAITING_FOR_LOOM: StageInfo(
        "Waiting for Loom", "The order is queued for the next available loom.", "amber"
    ),
    OrderStage.ONLOOM: StageInfo(
        "On Loom", "Weaving has started on the loom.", "green"
    ),
    OrderStage.ONLOOM_PROGRESS: StageInfo(
        "On Loom Progress", "Weaving is in progress on the loom.", "teal"
    ),
    OrderStage.OFFLOOM: StageInfo(
        "Off Loom", "The carpet has been taken off the loom.", "red"
    ),
    OrderStage.ISSUED_TO_SUPPLIER: StageInfo(
        "Issued to Supplier", "Materials have been sent to the weaving facility.", "yellow"
    ),
    OrderStage.CARPET_RECEIVED: StageInfo(
        "Carpet Received", "The woven carpet has been received from the supplier.", "green"
    ),
    OrderStage.FINISHING: StageInfo(
        "Finishing", "The carpet is undergoing final finishing touches.", "yellow"
    ),
    OrderStage.DELIVERY_TIME: StageInfo(
        "Ready for Delivery", "The carpet is complete and scheduled for delivery.", "pink"
    ),
    OrderStage.EXPORTED: StageInfo(
        "Exported", "The carpet has been shipped and is on its way to you.", "red"
    ),
    OrderStage.FIRST_REVISED_DELIVERY_DATE: StageInfo(
        "First Revised Date", "The delivery date has been revised once.", "cyan"
    ),
    OrderStage.SECOND_REVISED_DELIVERY_DATE: StageInfo(
        "Second Revised Date", "The delivery date has been revised a second time.", "cyan"
    ),
}


_WHITESPACE_RE = re.compile(r"\s+")


def normalize_status_key(raw: Optional[str]) -> str:
    """Trim, upper-case and join whitespace runs with underscores."""
    if not raw:
        return ""
    return _WHITESPACE_RE.sub("_", raw.strip().upper())


@dataclass(frozen=True)
class StageVocabulary:
    """
    An ordered production vocabulary.

    Attributes:
        name: Identifier used by the STAGE_VOCABULARY setting
        sequence: Canonical timeline stages, lowest rank first
        revised_variants: Terminal annotations on delivery, ranked above the sequence
        delivery_anchors: Stages dated with the delivery date when one is known
        aliases: Extra normalized spellings mapped to stages
    """

    name: str
    sequence: Tuple[OrderStage, ...]
    revised_variants: Tuple[OrderStage, ...] = ()
    delivery_anchors: Tuple[OrderStage, ...] = ()
    aliases: Mapping[str, OrderStage] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.sequence:
            raise ValueError("stage vocabulary needs at least one stage")
        stages = self.stages
        if len(set(stages)) != len(stages):
            raise ValueError(f"duplicate stage in vocabulary {self.name!r}")
        for anchor in self.delivery_anchors:
            if anchor not in self.sequence:
                raise ValueError(f"delivery anchor {anchor.value} is not in the sequence")

    @property
    def stages(self) -> Tuple[OrderStage, ...]:
        """All stages in rank order, revised variants last."""
        return self.sequence + self.revised_variants

    @property
    def default_stage(self) -> OrderStage:
        return self.sequence[0]

    def rank(self, stage: OrderStage) -> int:
        """Integer rank of a stage; raises ValueError for foreign stages."""
        try:
            return self.stages.index(stage)
        except ValueError:
            raise ValueError(f"{stage!r} is not part of vocabulary {self.name!r}") from None

    def is_revised(self, stage: OrderStage) -> bool:
        return stage in self.revised_variants

    @cached_property
    def lookup_table(self) -> Dict[str, OrderStage]:
        """Normalized key -> stage, covering codes, labels and aliases. Built once."""
        table: Dict[str, OrderStage] = {}
        for stage in self.stages:
            table[stage.value] = stage
            table[normalize_status_key(STAGE_INFO[stage].label)] = stage
        for alias, stage in self.aliases.items():
            table[normalize_status_key(alias)] = stage
        return table


PRODUCTION_VOCABULARY = StageVocabulary(
    name="production",
    sequence=(
        OrderStage.ORDER_APPROVAL,
        OrderStage.RENDERING,
        OrderStage.DYEING,
        OrderStage.DYEING_READY,
        OrderStage.WAITING_FOR_LOOM,
        OrderStage.ONLOOM,
        OrderStage.ONLOOM_PROGRESS,
        OrderStage.OFFLOOM,
        OrderStage.FINISHING,
        OrderStage.DELIVERY_TIME,
    ),
    revised_variants=(
        OrderStage.FIRST_REVISED_DELIVERY_DATE,
        OrderStage.SECOND_REVISED_DELIVERY_DATE,
    ),
    delivery_anchors=(OrderStage.FINISHING, OrderStage.DELIVERY_TIME),
    aliases={
        "ORDER ISSUED": OrderStage.ORDER_APPROVAL,
        "APPROVAL": OrderStage.ORDER_APPROVAL,
        "YARN ISSUED": OrderStage.RENDERING,
        "WAITING LOOM": OrderStage.WAITING_FOR_LOOM,
        "ON LOOM": OrderStage.ONLOOM,
        "ON LOOM PROGRESS": OrderStage.ONLOOM_PROGRESS,
        "OFF LOOM": OrderStage.OFFLOOM,
        "DELIVERY": OrderStage.DELIVERY_TIME,
        "FIRST REVISED DATE": OrderStage.FIRST_REVISED_DELIVERY_DATE,
        "SECOND REVISED DATE": OrderStage.SECOND_REVISED_DELIVERY_DATE,
    },
)

LEGACY_VOCABULARY = StageVocabulary(
    name="legacy",
    sequence=(
        OrderStage.YARN_ISSUED,
        OrderStage.DYEING,
        OrderStage.ISSUED_TO_SUPPLIER,
        OrderStage.CARPET_RECEIVED,
        OrderStage.FINISHING,
        OrderStage.EXPORTED,
    ),
    delivery_anchors=(OrderStage.FINISHING, OrderStage.EXPORTED),
    aliases={
        "ORDER ISSUED": OrderStage.YARN_ISSUED,
        "DELIVERY": OrderStage.EXPORTED,
        "SHIPPED": OrderStage.EXPORTED,
    },
)

VOCABULARIES: Dict[str, StageVocabulary] = {
    PRODUCTION_VOCABULARY.name: PRODUCTION_VOCABULARY,
    LEGACY_VOCABULARY.name: LEGACY_VOCABULARY,
}


def get_vocabulary(name: str) -> StageVocabulary:
    """Look up a shipped vocabulary by name (case-insensitive)."""
    try:
        return VOCABULARIES[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown stage vocabulary {name!r}; expected one of: {', '.join(sorted(VOCABULARIES))}"
        ) from None


@dataclass(frozen=True)
class StageResolution:
    """
    Outcome of reading a raw STATUS value.

    `recognized` is False when the value matched nothing and `stage`
    is the vocabulary's default.
    """

    stage: OrderStage
    raw: Optional[str]
    recognized: bool

    @property
    def defaulted(self) -> bool:
        return not self.recognized


def resolve_status(
    raw: Optional[str],
    vocabulary: StageVocabulary = PRODUCTION_VOCABULARY,
) -> StageResolution:
    """
    Map a free-text status onto a stage of `vocabulary`.

    Unknown, empty and None values resolve to the lowest-rank stage with
    `recognized=False`; this never raises.
    """
    key = normalize_status_key(raw)
    stage = vocabulary.lookup_table.get(key) if key else None
    if stage is None:
        return StageResolution(stage=vocabulary.default_stage, raw=raw, recognized=False)
    return StageResolution(stage=stage, raw=raw, recognized=True)


def normalize_status(
    raw: Optional[str],
    vocabulary: StageVocabulary = PRODUCTION_VOCABULARY,
) -> OrderStage:
    """Return only the resolved stage for `raw`."""
    return resolve_status(raw, vocabulary).stage
