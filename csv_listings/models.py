from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .rules import DEFAULT_CURRENCY, EVENT_KIND


class Platform(str, Enum):
    woocommerce = "woocommerce"
    ebay = "ebay"
    shopify = "shopify"
    amazon = "amazon"


class ProductRecord(BaseModel):
    """One product row, independent of the platform that exported it."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: str = Field(min_length=1)
    title: str
    description: str = ""
    price: float = Field(default=0.0, ge=0)
    currency: str = DEFAULT_CURRENCY
    quantity: int = Field(default=0, ge=0)
    images: List[str] = Field(default_factory=list)
    category: Optional[str] = None
    weight: Optional[float] = Field(default=None, ge=0)
    weight_unit: Optional[str] = None
    dimensions: Optional[str] = Field(default=None, examples=["10x20x5"])
    dimension_unit: Optional[str] = None


class TaggedEvent(BaseModel):
    kind: int = EVENT_KIND
    created_at: int
    content: str
    tags: List[List[str]] = Field(default_factory=list)


class ReportItem(BaseModel):
    row: Optional[int] = None
    column: Optional[str] = None
    issue: str
    value: Optional[str] = None
    action: str


class BatchReport(BaseModel):
    rows: int = 0
    records: int = 0
    dropped: int = 0
    warnings: List[ReportItem] = Field(default_factory=list)


class BatchResult(BaseModel):
    platform: Platform
    records: List[ProductRecord] = Field(default_factory=list)
    report: BatchReport = Field(default_factory=BatchReport)


class ParseResponse(BatchResult):
    pass


class EncodeRequest(BaseModel):
    records: List[ProductRecord]
    created_at: Optional[int] = Field(default=None, ge=0, examples=[None])


class EncodeResponse(BaseModel):
    events: List[TaggedEvent]


class ConvertResponse(BaseModel):
    platform: Platform
    events: List[TaggedEvent]
    report: BatchReport


class HealthResponse(BaseModel):
    ok: bool = True
