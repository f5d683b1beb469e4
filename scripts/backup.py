# scripts/backup.py
"""
Export the ledger database to a JSON backup, or restore one.

    python -m scripts.backup export [path]
    python -m scripts.backup import path
"""

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Sequence

from app.config import configure_logging
from app.db.engine import get_engine
from app.gateway.sql import SqlGateway
from app.services.backup import backup_filename, export_database, import_database

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Backup and restore suppliers and invoices.")
    sub = parser.add_subparsers(dest="command", required=True)

    export_cmd = sub.add_parser("export", help="Write every supplier and invoice to a JSON file")
    export_cmd.add_argument("path", type=Path, nargs="?", help="Destination (default: backup_dati_<today>.json)")

    import_cmd = sub.add_parser("import", help="Replace the whole database with a JSON backup")
    import_cmd.add_argument("path", type=Path, help="Backup file to restore")
    return parser


async def run_export(gateway, path: Path) -> int:
    document = await export_database(gateway)
    path.write_text(json.dumps(document.model_dump(mode="json"), indent=2), encoding="utf-8")

    print(f"Export written:  {path}")
    print(f"Suppliers:       {len(document.suppliers)}")
    print(f"Invoices:        {len(document.invoices)}")
    return 0


async def run_import(gateway, path: Path) -> int:
    result = await import_database(gateway, path.read_text(encoding="utf-8"))
    if not result.success:
        logger.error("Import failed: %s", result.error)
        return 1

    print("Import complete.")
    print(f"Suppliers:       {result.suppliers}")
    print(f"Invoices:        {result.invoices}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)
    gateway = SqlGateway(get_engine())

    if args.command == "export":
        return asyncio.run(run_export(gateway, args.path or Path(backup_filename())))
    return asyncio.run(run_import(gateway, args.path))


if __name__ == "__main__":
    raise SystemExit(main())
