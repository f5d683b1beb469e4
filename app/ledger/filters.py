# app/ledger/filters.py

from datetime import date
from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel, Field

from app.ledger.enrichment import (
    in_merchandise_bucket,
    in_payable_bucket,
    is_open,
    is_settled,
)
from app.models.invoices import InvoiceWithSupplier
from app.models.suppliers import Supplier


class InvoiceFilters(BaseModel):
    """Dashboard filter bar. Every field is optional; set ones are ANDed."""
    search: Optional[str] = None
    month: Optional[int] = Field(default=None, ge=1, le=12)
    year: Optional[int] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    only_merchandise: bool = False


def first_row_date(inv) -> Optional[date]:
    """Date of the header row, or None for an invoice without rows."""
    if not inv.rows:
        return None
    return inv.rows[0].date


def _matches(inv: InvoiceWithSupplier, filters: InvoiceFilters) -> bool:
    if filters.search and filters.search.lower() not in inv.supplier.name.lower():
        return False

    if filters.only_merchandise and not inv.supplier.is_merchandise:
        return False

    if (
        filters.month is not None
        or filters.year is not None
        or filters.date_from is not None
        or filters.date_to is not None
    ):
        d = first_row_date(inv)
        if d is None:
            return False
        if filters.month is not None and d.month != filters.month:
            return False
        if filters.year is not None and d.year != filters.year:
            return False
        if filters.date_from is not None and d < filters.date_from:
            return False
        if filters.date_to is not None and d > filters.date_to:
            return False

    return True


def apply_filters(
    invoices: Iterable[InvoiceWithSupplier],
    filters: Optional[InvoiceFilters] = None,
) -> List[InvoiceWithSupplier]:
    if filters is None:
        return list(invoices)
    return [inv for inv in invoices if _matches(inv, filters)]


def _date_key(inv) -> date:
    # Invoices without a header date sort first
    return first_row_date(inv) or date.min


def sort_by_date(invoices: Iterable[InvoiceWithSupplier], descending: bool = False):
    # sorted() is stable, so equal dates keep their source order
    return sorted(invoices, key=_date_key, reverse=descending)


def dashboard_view(
    enriched: Iterable[InvoiceWithSupplier],
    filters: Optional[InvoiceFilters] = None,
) -> Tuple[List[InvoiceWithSupplier], List[InvoiceWithSupplier]]:
    """
    Open invoices split into (merchandise, payable) buckets, each filtered
    independently and ordered oldest first.
    """
    active = [inv for inv in enriched if is_open(inv)]

    merchandise = [inv for inv in active if in_merchandise_bucket(inv)]
    payable = [inv for inv in active if in_payable_bucket(inv)]

    return (
        sort_by_date(apply_filters(merchandise, filters)),
        sort_by_date(apply_filters(payable, filters)),
    )


def history_view(
    enriched: Iterable[InvoiceWithSupplier],
    filters: Optional[InvoiceFilters] = None,
) -> List[InvoiceWithSupplier]:
    """Settled invoices, most recent first."""
    settled = [inv for inv in enriched if is_settled(inv)]
    return sort_by_date(apply_filters(settled, filters), descending=True)


def supplier_open_invoices(
    enriched: Iterable[InvoiceWithSupplier],
    supplier_id: str,
) -> List[InvoiceWithSupplier]:
    return sort_by_date(
        inv for inv in enriched if inv.supplier_id == supplier_id and is_open(inv)
    )


def available_years(enriched: Iterable[InvoiceWithSupplier]) -> List[int]:
    years = {d.year for d in (first_row_date(inv) for inv in enriched) if d is not None}
    return sorted(years, reverse=True)


def search_suppliers(suppliers: Iterable[Supplier], search: Optional[str] = None) -> List[Supplier]:
    needle = (search or "").lower()
    found = [s for s in suppliers if needle in s.name.lower()]
    return sorted(found, key=lambda s: s.name.casefold())
