# app/services/backup.py
"""
Full-dataset export and import.

Import replaces everything: validate, wipe, then insert suppliers and
invoices with their original ids so supplier references survive. The
wipe is not rolled back if an insert fails afterwards.
"""

import json
import logging
from collections.abc import Mapping
from datetime import date
from typing import List, Tuple, Union

from pydantic import ValidationError

from app.config import settings
from app.exceptions import GatewayError, ValidationFailure
from app.gateway.base import PersistenceGateway, utcnow
from app.models.invoices import ExportDocument, ImportResult, Invoice
from app.models.suppliers import Supplier

logger = logging.getLogger(__name__)


async def export_database(gateway: PersistenceGateway) -> ExportDocument:
    # Read errors propagate: an empty backup must never pass for a real one
    supplier_list = await gateway.fetch_all_suppliers()
    invoice_list = await gateway.fetch_all_invoices()

    return ExportDocument(
        suppliers=supplier_list,
        invoices=invoice_list,
        timestamp=utcnow(),
        version=settings.EXPORT_VERSION,
    )


def backup_filename(day: date = None) -> str:
    day = day or date.today()
    return f"backup_dati_{day.isoformat()}.json"


def _duplicates(ids: List[str]) -> List[str]:
    seen, dupes = set(), []
    for i in ids:
        if i in seen and i not in dupes:
            dupes.append(i)
        seen.add(i)
    return dupes


def validate_document(document) -> Tuple[List[Supplier], List[Invoice]]:
    """
    Parse a candidate backup into entity models without touching storage.

    Raises ValidationFailure when the document cannot be restored as-is.
    """
    if isinstance(document, (str, bytes)):
        try:
            document = json.loads(document)
        except json.JSONDecodeError as e:
            raise ValidationFailure(f"Invalid JSON: {e}") from e

    if not isinstance(document, Mapping):
        raise ValidationFailure("Invalid data format")

    raw_suppliers = document.get("suppliers")
    raw_invoices = document.get("invoices")
    if not isinstance(raw_suppliers, list) or not isinstance(raw_invoices, list):
        raise ValidationFailure("Invalid data format: suppliers and invoices must be lists")

    try:
        supplier_list = [Supplier.model_validate(s) for s in raw_suppliers]
        invoice_list = [Invoice.model_validate(i) for i in raw_invoices]
    except ValidationError as e:
        raise ValidationFailure(f"Invalid record: {e}") from e

    for label, ids in (
        ("supplier", [s.id for s in supplier_list]),
        ("invoice", [i.id for i in invoice_list]),
    ):
        dupes = _duplicates(ids)
        if dupes:
            raise ValidationFailure(f"Duplicate {label} ids: {', '.join(dupes)}")

    known = {s.id for s in supplier_list}
    dangling = [i.id for i in invoice_list if i.supplier_id not in known]
    if dangling:
        raise ValidationFailure(
            f"Invoices reference suppliers missing from the document: {', '.join(dangling)}"
        )

    return supplier_list, invoice_list


async def import_database(
    gateway: PersistenceGateway,
    document: Union[str, bytes, Mapping],
) -> ImportResult:
    try:
        supplier_list, invoice_list = validate_document(document)
    except ValidationFailure as e:
        logger.error("Import rejected: %s", e)
        return ImportResult(success=False, error=str(e))

    try:
        logger.warning("Import: wiping existing suppliers and invoices")
        await gateway.delete_all_suppliers()

        await gateway.bulk_insert_suppliers(supplier_list)
        logger.info("Import: %s suppliers restored", len(supplier_list))

        await gateway.bulk_insert_invoices(invoice_list)
        logger.info("Import: %s invoices restored", len(invoice_list))
    except GatewayError as e:
        logger.error("Import failed after wipe: %s", e)
        return ImportResult(success=False, error=str(e))

    return ImportResult(
        success=True,
        suppliers=len(supplier_list),
        invoices=len(invoice_list),
    )
