from __future__ import annotations

import time
from decimal import Decimal
from typing import Iterable, List, Optional, Union

from .models import ProductRecord, TaggedEvent
from .rules import EVENT_KIND, SUMMARY_MAX_CHARS


def format_number(value: Union[int, float]) -> str:
    """Plain decimal text: 10 -> "10", 2.5 -> "2.5", 1e-07 -> "0.0000001"."""
    if isinstance(value, int):
        return str(value)
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def encode(record: ProductRecord, created_at: Optional[int] = None) -> TaggedEvent:
    if created_at is None:
        created_at = int(time.time())

    tags: List[List[str]] = [
        ["d", record.id],
        ["title", record.title],
        ["price", format_number(record.price), record.currency],
        ["type", "simple", "physical"],
        ["visibility", "on-sale"],
        ["stock", format_number(record.quantity)],
        ["summary", record.description[:SUMMARY_MAX_CHARS]],
    ]

    for idx, url in enumerate(record.images):
        tags.append(["image", url, "", str(idx)])

    if record.category:
        tags.append(["t", record.category])

    # zero or unparsable weights carry no information
    if record.weight and record.weight_unit:
        tags.append(["weight", format_number(record.weight), record.weight_unit])

    if record.dimensions and record.dimension_unit:
        tags.append(["dim", record.dimensions, record.dimension_unit])

    return TaggedEvent(
        kind=EVENT_KIND,
        created_at=created_at,
        content=record.description,
        tags=tags,
    )


def encode_many(records: Iterable[ProductRecord], created_at: Optional[int] = None) -> List[TaggedEvent]:
    """Encode a batch; every event shares one timestamp."""
    if created_at is None:
        created_at = int(time.time())
    return [encode(r, created_at=created_at) for r in records]
