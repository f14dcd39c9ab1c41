"""
CSV decoding: bytes or text in, header + rows out.

Responsibilities:
- encoding detection (UTF-8 first, charset-normalizer best guess otherwise)
- BOM stripping and newline normalization
- strict tokenization (malformed quoting is a decode failure)
- row width enforcement (short rows padded, long rows truncated, both reported)
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Union

from charset_normalizer import from_bytes

from .models import ReportItem
from .rules import CSV_DELIMITER, CSV_FIELD_SIZE_LIMIT, SOURCE_ENCODING

logger = logging.getLogger(__name__)


class DecodeError(Exception):
    """The source could not be read as tabular text."""


@dataclass
class DecodedTable:
    header: List[str]
    rows: List[Dict[str, str]]
    encoding: str
    warnings: List[ReportItem] = field(default_factory=list)


def decode_text(raw: bytes) -> tuple[str, str]:
    """
    Decode raw bytes to text.

    Rules:
    - UTF-8 (with or without BOM) is tried first.
    - Otherwise use charset-normalizer's best guess.
    - If nothing decodes, raise DecodeError; no replacement characters.
    """
    try:
        return raw.decode(SOURCE_ENCODING), "utf-8"
    except UnicodeDecodeError:
        pass

    match = from_bytes(raw).best()
    if match is None:
        raise DecodeError("could not detect a text encoding")

    detected = match.encoding
    try:
        text = raw.decode(detected)
    except (UnicodeDecodeError, LookupError) as exc:
        raise DecodeError(f"could not decode as {detected}: {exc}") from exc

    logger.info("decoded CSV using detected encoding %s", detected)
    return text, detected


def decode_csv(content: Union[bytes, str]) -> DecodedTable:
    if isinstance(content, bytes):
        text, encoding = decode_text(content)
    else:
        text, encoding = content, "utf-8"
    # a BOM can survive when text was read without utf-8-sig
    if text.startswith("\ufeff"):
        text = text[1:]

    # --- Newline normalization: CRLF/CR -> LF ---
    text = text.replace("\r\n", "\n").replace("\r", "\n")

    csv.field_size_limit(CSV_FIELD_SIZE_LIMIT)
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=CSV_DELIMITER, strict=True)
    try:
        table = list(reader)
    except csv.Error as exc:
        raise DecodeError(f"line {reader.line_num}: {exc}") from exc

    # skip leading blank lines before the header
    while table and not any(cell.strip() for cell in table[0]):
        table.pop(0)
    if not table:
        raise DecodeError("file has no header row")

    header = table[0]
    width_expected = len(header)
    warnings: List[ReportItem] = []
    rows: List[Dict[str, str]] = []

    for i, row in enumerate(table[1:], start=2):
        if not any(cell.strip() for cell in row):
            continue

        if len(row) < width_expected:
            orig_len = len(row)
            row = row + [""] * (width_expected - orig_len)
            warnings.append(ReportItem(
                row=i,
                issue="row_too_short",
                value=str(orig_len),
                action=f"padded_to_{width_expected}",
            ))
        elif len(row) > width_expected:
            warnings.append(ReportItem(
                row=i,
                issue="row_too_long",
                value=str(len(row)),
                action=f"truncated_to_{width_expected}",
            ))
            row = row[:width_expected]

        # duplicate header names: first occurrence wins
        record: Dict[str, str] = {}
        for name, cell in zip(header, row):
            record.setdefault(name, cell)
        rows.append(record)

    return DecodedTable(header=header, rows=rows, encoding=encoding, warnings=warnings)
