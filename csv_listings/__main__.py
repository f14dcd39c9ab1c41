"""Convert a marketplace product CSV export to JSON listing events (or records)."""

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import settings
from .encode import encode_many
from .models import Platform
from .parse import ParseError, parse_batch

logger = logging.getLogger("csv_listings")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="csv_listings",
        description="Convert a product CSV export into kind-30402 listing events.",
    )
    parser.add_argument("input", help="Path to the platform CSV export")
    parser.add_argument(
        "--platform",
        choices=[p.value for p in Platform],
        default=settings.default_platform.value,
        help="Platform that produced the export",
    )
    parser.add_argument("--output", default="", help="Write JSON here instead of stdout")
    parser.add_argument("--records-only", action="store_true", help="Emit normalized records, not events")
    parser.add_argument("--created-at", type=int, default=None, help="Fixed event timestamp (epoch seconds)")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    input_path = Path(args.input)
    if not input_path.is_file():
        raise SystemExit(f"Input file not found: {input_path}")

    try:
        result = parse_batch(input_path.read_bytes(), args.platform)
    except ParseError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.records_only:
        payload = [r.model_dump(by_alias=True) for r in result.records]
    else:
        payload = [e.model_dump() for e in encode_many(result.records, created_at=args.created_at)]

    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if args.output:
        Path(args.output).write_text(text + "\n", encoding="utf-8")
        logger.info("wrote %d items to %s", len(payload), args.output)
    else:
        print(text)

    if result.report.dropped:
        logger.warning("dropped %d rows without an id or title", result.report.dropped)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
