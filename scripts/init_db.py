# scripts/init_db.py
"""
Create the suppliers/invoices schema.

    python -m scripts.init_db [--url URL] [--keep-data]
"""

import argparse
import logging
from typing import Sequence

from sqlalchemy import inspect

from app.config import configure_logging, settings
from app.db.engine import get_engine
from app.db.schema import metadata

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create the ledger database schema.")
    parser.add_argument("--url", default=settings.DATABASE_URL, help="Database URL (default: LEDGER_DATABASE_URL)")
    parser.add_argument(
        "--keep-data",
        action="store_true",
        help="Only create missing tables instead of dropping suppliers and invoices",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)
    engine = get_engine(args.url)

    if not args.keep_data:
        logger.warning("Dropping every supplier and invoice in %s", args.url)
        metadata.drop_all(engine)
    metadata.create_all(engine)

    tables = sorted(inspect(engine).get_table_names())
    engine.dispose()
    print(f"DB schema ready: {', '.join(tables)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
