# app/services/ledger_service.py

import asyncio
import logging
from typing import List, Optional, Tuple, Union

from app.exceptions import GatewayError, NotFound
from app.gateway.base import PersistenceGateway
from app.ledger.aggregation import dashboard_totals, total_balance, total_initial_amount
from app.ledger.enrichment import EnrichmentResult, enrich
from app.ledger.filters import (
    InvoiceFilters,
    available_years,
    dashboard_view,
    history_view,
    search_suppliers,
    supplier_open_invoices,
)
from app.models.invoices import Invoice, InvoiceIn
from app.models.suppliers import Supplier, SupplierIn
from app.models.views import DashboardOut, HistoryOut, SupplierDetail

logger = logging.getLogger(__name__)


class LedgerService:
    """
    Read models for the dashboards and pass-through writes.

    A failed read degrades to an empty list so the screens show "no data";
    a failed write raises to the caller.
    """

    def __init__(self, gateway: PersistenceGateway):
        self.gateway = gateway

    # ---- Loading ----

    async def _safe_read(self, what: str, call) -> list:
        try:
            return await call()
        except GatewayError as e:
            logger.error("Failed to load %s: %s", what, e)
            return []

    async def load(self) -> Tuple[List[Supplier], List[Invoice]]:
        return await asyncio.gather(
            self._safe_read("suppliers", self.gateway.fetch_all_suppliers),
            self._safe_read("invoices", self.gateway.fetch_all_invoices),
        )

    async def enriched(self) -> EnrichmentResult:
        supplier_list, invoice_list = await self.load()
        return enrich(supplier_list, invoice_list)

    # ---- Read models ----

    async def dashboard(self, filters: Optional[InvoiceFilters] = None) -> DashboardOut:
        filters = filters or InvoiceFilters()
        result = await self.enriched()
        merchandise, payable = dashboard_view(result.invoices, filters)
        totals = dashboard_totals(merchandise, payable, filters.only_merchandise)

        return DashboardOut(
            merchandise=merchandise,
            payable=payable,
            merchandise_total=totals.merchandise,
            payable_total=totals.payable,
            grand_total=totals.grand_total,
        )

    async def history(self, filters: Optional[InvoiceFilters] = None) -> HistoryOut:
        result = await self.enriched()
        settled = history_view(result.invoices, filters)
        return HistoryOut(invoices=settled, total_settled=total_initial_amount(settled))

    async def years(self) -> List[int]:
        result = await self.enriched()
        return available_years(result.invoices)

    async def suppliers(self, search: Optional[str] = None) -> List[Supplier]:
        supplier_list = await self._safe_read("suppliers", self.gateway.fetch_all_suppliers)
        return search_suppliers(supplier_list, search)

    async def supplier_detail(self, supplier_id: str) -> SupplierDetail:
        supplier_list, invoice_list = await self.load()
        supplier = next((s for s in supplier_list if s.id == supplier_id), None)
        if supplier is None:
            raise NotFound("Supplier not found")

        open_invoices = supplier_open_invoices(
            enrich([supplier], invoice_list).invoices, supplier_id
        )
        return SupplierDetail(
            supplier=supplier,
            open_invoices=open_invoices,
            total_balance=total_balance(open_invoices),
        )

    async def invoices(self) -> List[Invoice]:
        return await self._safe_read("invoices", self.gateway.fetch_all_invoices)

    # ---- Writes ----

    async def save_supplier(self, supplier: Union[SupplierIn, Supplier]) -> Supplier:
        return await self.gateway.upsert_supplier(supplier)

    async def save_invoice(self, invoice: Union[InvoiceIn, Invoice]) -> Invoice:
        return await self.gateway.upsert_invoice(invoice)

    async def delete_supplier(self, supplier_id: str) -> None:
        await self.gateway.delete_supplier(supplier_id)

    async def delete_invoice(self, invoice_id: str) -> None:
        await self.gateway.delete_invoice(invoice_id)

    async def delete_all_suppliers(self) -> None:
        logger.warning("Deleting every supplier and invoice")
        await self.gateway.delete_all_suppliers()
