"""
Platform normalizers: one raw CSV row in, one ProductRecord (or None) out.

Numeric cells are decoded tolerantly: the leading numeric prefix is used
("19.99 USD" -> 19.99) and anything unparsable becomes 0. Malformed numbers
are data loss for that field, never a failure of the row or the batch.
"""

from __future__ import annotations

import math
import re
from typing import Callable, Dict, Iterable, Mapping, Optional, Sequence, Tuple

from . import rules
from .models import Platform, ProductRecord

Row = Mapping[str, Optional[str]]

_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def resolve(row: Row, aliases: Sequence[str], fallback: str = "", strip: bool = True) -> str:
    """Return the first non-blank value among `aliases`, else `fallback`.

    With `strip=False` the matched cell is returned as exported (descriptions).
    """
    _, value = resolve_column(row, aliases, strip=strip)
    return value if value else fallback


def resolve_column(row: Row, aliases: Sequence[str], strip: bool = True) -> Tuple[Optional[str], str]:
    for name in aliases:
        value = row.get(name)
        if value is None or not value.strip():
            continue
        return name, value.strip() if strip else value
    return None, ""


def _non_negative(value: float) -> float:
    if math.isnan(value) or math.isinf(value) or value < 0:
        return 0.0
    return value


def parse_price(text: str) -> float:
    m = _FLOAT_PREFIX.match(text or "")
    if not m:
        return 0.0
    try:
        return _non_negative(float(m.group(1)))
    except (ValueError, OverflowError):
        return 0.0


def parse_quantity(text: str) -> int:
    m = _INT_PREFIX.match(text or "")
    if not m:
        return 0
    return max(int(m.group(1)), 0)


def parse_weight(text: str) -> Optional[float]:
    # blank means "not exported", which is different from a weight of 0
    if not (text or "").strip():
        return None
    return parse_price(text)


def split_images(text: str, separators: Iterable[str] = (",",)) -> list[str]:
    if not text:
        return []
    pattern = "|".join(re.escape(s) for s in separators)
    return [part.strip() for part in re.split(pattern, text) if part.strip()]


def join_dimensions(length: str, width: str, height: str) -> Optional[str]:
    if not (length or width or height):
        return None
    joined = "x".join(part or "0" for part in (length, width, height))
    if joined == "0x0x0":
        return None
    return joined


def _is_valid(product_id: str, title: str) -> bool:
    return bool(product_id) and bool(title)


def normalize_woocommerce(row: Row) -> Optional[ProductRecord]:
    t = rules.WOOCOMMERCE
    product_id = resolve(row, t["id"])
    title = resolve(row, t["title"])
    if not _is_valid(product_id, title):
        return None

    weight_col, weight_text = resolve_column(row, t["weight"])
    weight = parse_weight(weight_text)

    dimensions = resolve(row, t["dimensions"]) or None
    dimension_cols = []
    if dimensions is None:
        parts = []
        for key in ("length", "width", "height"):
            col, value = resolve_column(row, t[key])
            parts.append(value)
            if col:
                dimension_cols.append(col)
        dimensions = join_dimensions(*parts)
    dimension_unit = None
    if dimensions is not None:
        dimension_unit = next(
            (rules.WOOCOMMERCE_DIMENSION_UNITS[c] for c in dimension_cols if c in rules.WOOCOMMERCE_DIMENSION_UNITS),
            rules.DEFAULT_DIMENSION_UNIT,
        )

    return ProductRecord(
        id=product_id,
        title=title,
        description=resolve(row, t["description"], strip=False),
        price=parse_price(resolve(row, t["price"])),
        currency=rules.DEFAULT_CURRENCY,
        quantity=parse_quantity(resolve(row, t["quantity"])),
        images=split_images(resolve(row, t["images"]), rules.WOOCOMMERCE_IMAGE_SEPARATORS),
        category=resolve(row, t["category"]) or None,
        weight=weight,
        weight_unit=(
            rules.WOOCOMMERCE_WEIGHT_UNITS.get(weight_col, rules.DEFAULT_WEIGHT_UNIT)
            if weight is not None else None
        ),
        dimensions=dimensions,
        dimension_unit=dimension_unit,
    )


def ebay_picture_urls(row: Row) -> list[str]:
    """Collect "Picture URL 1".."Picture URL 12" in index order, skipping blanks."""
    urls = []
    for i in range(1, rules.EBAY_PICTURE_COLUMNS + 1):
        value = (row.get(f"{rules.EBAY_PICTURE_PREFIX} {i}") or "").strip()
        if value:
            urls.append(value)
    if urls:
        return urls
    return split_images(resolve(row, rules.EBAY["images"]), rules.EBAY_IMAGE_SEPARATORS)


def normalize_ebay(row: Row) -> Optional[ProductRecord]:
    t = rules.EBAY
    product_id = resolve(row, t["id"])
    title = resolve(row, t["title"])
    if not _is_valid(product_id, title):
        return None

    weight = parse_weight(resolve(row, t["weight"]))
    dimensions = join_dimensions(
        resolve(row, t["length"]),
        resolve(row, t["width"]),
        resolve(row, t["height"]),
    )
    dimension_unit = None
    if dimensions is not None:
        dimension_unit = resolve(row, t["dimension_unit"])
        if not dimension_unit:
            english = resolve(row, t["measurement_system"]) == rules.EBAY_ENGLISH_SYSTEM
            dimension_unit = rules.ENGLISH_DIMENSION_UNIT if english else rules.DEFAULT_DIMENSION_UNIT

    return ProductRecord(
        id=product_id,
        title=title,
        description=resolve(row, t["description"], strip=False),
        price=parse_price(resolve(row, t["price"])),
        currency=resolve(row, t["currency"], rules.DEFAULT_CURRENCY),
        quantity=parse_quantity(resolve(row, t["quantity"])),
        images=ebay_picture_urls(row),
        category=resolve(row, t["category"]) or None,
        weight=weight,
        weight_unit=resolve(row, t["weight_unit"], rules.DEFAULT_WEIGHT_UNIT) if weight is not None else None,
        dimensions=dimensions,
        dimension_unit=dimension_unit,
    )


def normalize_shopify(row: Row) -> Optional[ProductRecord]:
    t = rules.SHOPIFY
    product_id = resolve(row, t["id"])
    title = resolve(row, t["title"])
    if not _is_valid(product_id, title):
        return None

    grams = parse_weight(resolve(row, t["weight_grams"]))
    weight = grams / rules.GRAMS_PER_KG if grams is not None else None

    # Shopify product exports carry no dimensions; leave them absent
    return ProductRecord(
        id=product_id,
        title=title,
        description=resolve(row, t["description"], strip=False),
        price=parse_price(resolve(row, t["price"])),
        currency=rules.DEFAULT_CURRENCY,
        quantity=parse_quantity(resolve(row, t["quantity"])),
        images=split_images(resolve(row, t["images"]), rules.SHOPIFY_IMAGE_SEPARATORS),
        category=resolve(row, t["category"]) or None,
        weight=weight,
        weight_unit=rules.DEFAULT_WEIGHT_UNIT if weight is not None else None,
    )


def normalize_amazon(row: Row) -> Optional[ProductRecord]:
    t = rules.AMAZON
    product_id = resolve(row, t["id"])
    title = resolve(row, t["title"])
    if not _is_valid(product_id, title):
        return None

    weight = parse_weight(resolve(row, t["weight"]))
    dimensions = resolve(row, t["dimensions"]) or None
    return ProductRecord(
        id=product_id,
        title=title,
        description=resolve(row, t["description"], strip=False),
        price=parse_price(resolve(row, t["price"])),
        currency=rules.DEFAULT_CURRENCY,
        quantity=parse_quantity(resolve(row, t["quantity"])),
        images=split_images(resolve(row, t["images"]), rules.AMAZON_IMAGE_SEPARATORS),
        category=resolve(row, t["category"]) or None,
        weight=weight,
        weight_unit=rules.DEFAULT_WEIGHT_UNIT if weight is not None else None,
        dimensions=dimensions,
        dimension_unit=rules.DEFAULT_DIMENSION_UNIT if dimensions is not None else None,
    )


NORMALIZERS: Dict[Platform, Callable[[Row], Optional[ProductRecord]]] = {
    Platform.woocommerce: normalize_woocommerce,
    Platform.ebay: normalize_ebay,
    Platform.shopify: normalize_shopify,
    Platform.amazon: normalize_amazon,
}


def get_normalizer(platform: Platform | str) -> Callable[[Row], Optional[ProductRecord]]:
    return NORMALIZERS[Platform(platform)]
