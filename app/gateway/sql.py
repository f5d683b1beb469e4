# app/gateway/sql.py

import logging
from functools import wraps
from typing import List, Optional, Union

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import select
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from app.db.schema import invoices, suppliers
from app.exceptions import GatewayError
from app.gateway.base import prepare_invoice, prepare_supplier
from app.models.invoices import Invoice, InvoiceIn
from app.models.suppliers import Supplier, SupplierIn

logger = logging.getLogger(__name__)


def _threaded(fn):
    """Run a blocking gateway method in the threadpool, mapping DB errors."""

    @wraps(fn)
    async def wrapper(self, *args, **kwargs):
        try:
            return await run_in_threadpool(fn, self, *args, **kwargs)
        except SQLAlchemyError as e:
            logger.error("%s failed: %r", fn.__name__, e)
            raise GatewayError(f"{fn.__name__} failed: {e}") from e

    return wrapper


def _supplier_values(s: Supplier) -> dict:
    return {
        "id": s.id,
        "name": s.name,
        "iban": s.iban,
        "email": s.email,
        "phone": s.phone,
        "notes": s.notes,
        "is_merchandise": s.is_merchandise,
    }


def _invoice_values(inv: Invoice) -> dict:
    return {
        "id": inv.id,
        "supplier_id": inv.supplier_id,
        "creation_date": inv.creation_date.isoformat(),
        "rows": [row.model_dump(mode="json") for row in inv.rows],
    }


def _row_to_invoice(row) -> Invoice:
    return Invoice(
        id=row["id"],
        supplier_id=row["supplier_id"],
        creation_date=row["creation_date"],
        rows=row["rows"] or [],
    )


class SqlGateway:
    """Gateway over the ``suppliers`` / ``invoices`` tables."""

    def __init__(self, engine: Engine):
        self.engine = engine

    # ---- Reads ----

    @_threaded
    def fetch_all_suppliers(self) -> List[Supplier]:
        with self.engine.connect() as conn:
            rows = conn.execute(select(suppliers).order_by(suppliers.c.name)).mappings().all()
        return [Supplier.model_validate(dict(row)) for row in rows]

    @_threaded
    def fetch_all_invoices(self) -> List[Invoice]:
        with self.engine.connect() as conn:
            rows = conn.execute(select(invoices)).mappings().all()
        return [_row_to_invoice(row) for row in rows]

    # ---- Writes ----

    @_threaded
    def upsert_supplier(self, supplier: Union[SupplierIn, Supplier]) -> Supplier:
        record = prepare_supplier(supplier)
        values = _supplier_values(record)

        with self.engine.begin() as conn:
            exists = conn.execute(
                select(suppliers.c.id).where(suppliers.c.id == record.id)
            ).first()
            if exists:
                conn.execute(
                    suppliers.update().where(suppliers.c.id == record.id).values(**values)
                )
            else:
                conn.execute(suppliers.insert().values(**values))

        return record

    @_threaded
    def upsert_invoice(self, invoice: Union[InvoiceIn, Invoice]) -> Invoice:
        with self.engine.begin() as conn:
            existing = self._get_invoice(conn, invoice.id) if invoice.id else None
            supplier_exists = conn.execute(
                select(suppliers.c.id).where(suppliers.c.id == invoice.supplier_id)
            ).first() is not None

            record = prepare_invoice(invoice, existing, supplier_exists)
            values = _invoice_values(record)

            if existing is not None:
                conn.execute(
                    invoices.update().where(invoices.c.id == record.id).values(**values)
                )
            else:
                conn.execute(invoices.insert().values(**values))

        return record

    @_threaded
    def delete_supplier(self, supplier_id: str) -> None:
        with self.engine.begin() as conn:
            # Cascade explicitly; not every backend enforces ON DELETE CASCADE
            conn.execute(invoices.delete().where(invoices.c.supplier_id == supplier_id))
            conn.execute(suppliers.delete().where(suppliers.c.id == supplier_id))

    @_threaded
    def delete_invoice(self, invoice_id: str) -> None:
        with self.engine.begin() as conn:
            conn.execute(invoices.delete().where(invoices.c.id == invoice_id))

    @_threaded
    def delete_all_suppliers(self) -> None:
        with self.engine.begin() as conn:
            conn.execute(invoices.delete())
            conn.execute(suppliers.delete())

    @_threaded
    def bulk_insert_suppliers(self, records: List[Supplier]) -> None:
        if not records:
            return
        with self.engine.begin() as conn:
            conn.execute(suppliers.insert(), [_supplier_values(s) for s in records])

    @_threaded
    def bulk_insert_invoices(self, records: List[Invoice]) -> None:
        if not records:
            return
        with self.engine.begin() as conn:
            conn.execute(invoices.insert(), [_invoice_values(inv) for inv in records])

    # ---- Helpers ----

    @staticmethod
    def _get_invoice(conn: Connection, invoice_id: str) -> Optional[Invoice]:
        row = conn.execute(
            select(invoices).where(invoices.c.id == invoice_id)
        ).mappings().first()
        if row is None:
            return None
        return _row_to_invoice(row)
