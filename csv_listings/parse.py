from __future__ import annotations

import logging
from typing import Union

from .decode import DecodeError, decode_csv
from .models import BatchReport, BatchResult, Platform
from .normalize import get_normalizer

logger = logging.getLogger(__name__)


class ParseError(Exception):
    """A batch could not be parsed. `stage` is "decode" or "normalize"."""

    def __init__(self, stage: str, message: str):
        super().__init__(f"{stage}: {message}")
        self.stage = stage
        self.message = message


def parse_batch(content: Union[bytes, str], platform: Union[Platform, str]) -> BatchResult:
    """
    Decode a platform CSV export and normalize every data row, in file order.

    Rows without a usable id and title are dropped and counted, never fatal.
    Raises ParseError when the file cannot be tokenized or a normalizer fails
    unexpectedly; no partial result is returned in that case.
    """
    platform = Platform(platform)
    normalizer = get_normalizer(platform)

    try:
        table = decode_csv(content)
    except DecodeError as exc:
        logger.warning("CSV decode failed for %s export: %s", platform.value, exc)
        raise ParseError("decode", str(exc)) from exc

    records = []
    dropped = 0
    for index, row in enumerate(table.rows, start=1):
        try:
            record = normalizer(row)
        except Exception as exc:
            logger.exception("normalizer for %s failed on data row %d", platform.value, index)
            raise ParseError("normalize", f"data row {index}: {exc}") from exc

        if record is None:
            dropped += 1
            logger.debug("dropped %s data row %d: missing id or title", platform.value, index)
            continue
        records.append(record)

    logger.info(
        "parsed %s export: %d rows, %d records, %d dropped, %d warnings",
        platform.value, len(table.rows), len(records), dropped, len(table.warnings),
    )
    return BatchResult(
        platform=platform,
        records=records,
        report=BatchReport(
            rows=len(table.rows),
            records=len(records),
            dropped=dropped,
            warnings=table.warnings,
        ),
    )
