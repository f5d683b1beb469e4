# app/gateway/memory.py

from typing import Dict, List, Union

from app.gateway.base import prepare_invoice, prepare_supplier
from app.models.invoices import Invoice, InvoiceIn
from app.models.suppliers import Supplier, SupplierIn


class InMemoryGateway:
    """Dict-backed gateway; state lives as long as the instance."""

    def __init__(self):
        self.suppliers: Dict[str, Supplier] = {}
        self.invoices: Dict[str, Invoice] = {}

    async def fetch_all_suppliers(self) -> List[Supplier]:
        return sorted(
            (s.model_copy(deep=True) for s in self.suppliers.values()),
            key=lambda s: s.name,
        )

    async def fetch_all_invoices(self) -> List[Invoice]:
        return [inv.model_copy(deep=True) for inv in self.invoices.values()]

    async def upsert_supplier(self, supplier: Union[SupplierIn, Supplier]) -> Supplier:
        record = prepare_supplier(supplier)
        self.suppliers[record.id] = record
        return record.model_copy(deep=True)

    async def upsert_invoice(self, invoice: Union[InvoiceIn, Invoice]) -> Invoice:
        existing = self.invoices.get(invoice.id) if invoice.id else None
        record = prepare_invoice(
            invoice,
            existing,
            supplier_exists=invoice.supplier_id in self.suppliers,
        )
        self.invoices[record.id] = record
        return record.model_copy(deep=True)

    async def delete_supplier(self, supplier_id: str) -> None:
        self.suppliers.pop(supplier_id, None)
        self.invoices = {
            k: inv for k, inv in self.invoices.items() if inv.supplier_id != supplier_id
        }

    async def delete_invoice(self, invoice_id: str) -> None:
        self.invoices.pop(invoice_id, None)

    async def delete_all_suppliers(self) -> None:
        self.invoices.clear()
        self.suppliers.clear()

    async def bulk_insert_suppliers(self, suppliers: List[Supplier]) -> None:
        for s in suppliers:
            self.suppliers[s.id] = s.model_copy(deep=True)

    async def bulk_insert_invoices(self, invoices: List[Invoice]) -> None:
        for inv in invoices:
            self.invoices[inv.id] = inv.model_copy(deep=True)
