# app/gateway/base.py
"""
Storage contract consumed by the ledger core.

Writes are whole-record overwrites: two editors saving the same record
means the last write wins, with no conflict detection.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional, Protocol, Union

from app.exceptions import ValidationFailure
from app.models.invoices import Invoice, InvoiceIn
from app.models.suppliers import Supplier, SupplierIn


class PersistenceGateway(Protocol):
    async def fetch_all_suppliers(self) -> List[Supplier]:
        """All suppliers ordered by name."""

    async def fetch_all_invoices(self) -> List[Invoice]:
        """All invoices, in no particular order."""

    async def upsert_supplier(self, supplier: Union[SupplierIn, Supplier]) -> Supplier:
        ...

    async def upsert_invoice(self, invoice: Union[InvoiceIn, Invoice]) -> Invoice:
        ...

    async def delete_supplier(self, supplier_id: str) -> None:
        """Remove the supplier and every invoice referencing it."""

    async def delete_invoice(self, invoice_id: str) -> None:
        ...

    async def delete_all_suppliers(self) -> None:
        """Full wipe: every supplier and every invoice."""

    async def bulk_insert_suppliers(self, suppliers: List[Supplier]) -> None:
        """Insert keeping the given ids."""

    async def bulk_insert_invoices(self, invoices: List[Invoice]) -> None:
        """Insert keeping the given ids and supplier references."""


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def prepare_supplier(supplier: Union[SupplierIn, Supplier]) -> Supplier:
    data = supplier.model_dump()
    if not data.get("id"):
        data["id"] = new_id()
    return Supplier(**data)


def prepare_invoice(
    invoice: Union[InvoiceIn, Invoice],
    existing: Optional[Invoice],
    supplier_exists: bool,
) -> Invoice:
    """
    Build the record to store for an upsert.

    ``creation_date`` is assigned on first save and kept on every later
    overwrite; ``supplier_id`` cannot change once the invoice exists.
    """
    if existing is not None:
        if invoice.supplier_id != existing.supplier_id:
            raise ValidationFailure(
                f"Invoice {existing.id} belongs to supplier {existing.supplier_id}"
            )
        return Invoice(
            id=existing.id,
            supplier_id=existing.supplier_id,
            creation_date=existing.creation_date,
            rows=invoice.rows,
        )

    if not supplier_exists:
        raise ValidationFailure(f"Supplier {invoice.supplier_id} not found")

    return Invoice(
        id=invoice.id or new_id(),
        supplier_id=invoice.supplier_id,
        creation_date=invoice.creation_date or utcnow(),
        rows=invoice.rows,
    )
