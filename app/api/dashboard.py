# app/api/dashboard.py

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_service
from app.ledger.filters import InvoiceFilters
from app.models.views import DashboardOut, HistoryOut
from app.services.ledger_service import LedgerService

router = APIRouter(tags=["dashboard"])


def invoice_filters(
    search: Optional[str] = Query(default=None, description="Supplier name contains (case-insensitive)"),
    month: Optional[int] = Query(default=None, ge=1, le=12),
    year: Optional[int] = Query(default=None),
    date_from: Optional[date] = Query(default=None, description="ISO date (YYYY-MM-DD), inclusive"),
    date_to: Optional[date] = Query(default=None, description="ISO date (YYYY-MM-DD), inclusive"),
    only_merchandise: bool = Query(default=False),
) -> InvoiceFilters:
    return InvoiceFilters(
        search=search,
        month=month,
        year=year,
        date_from=date_from,
        date_to=date_to,
        only_merchandise=only_merchandise,
    )


@router.get("/dashboard", response_model=DashboardOut)
async def dashboard(
    filters: InvoiceFilters = Depends(invoice_filters),
    service: LedgerService = Depends(get_service),
) -> DashboardOut:
    """
    Open invoices split into merchandise and payable-services buckets,
    oldest first, with per-bucket totals.
    """
    return await service.dashboard(filters)


@router.get("/dashboard/years", response_model=List[int])
async def dashboard_years(service: LedgerService = Depends(get_service)) -> List[int]:
    return await service.years()


@router.get("/history", response_model=HistoryOut)
async def history(
    filters: InvoiceFilters = Depends(invoice_filters),
    service: LedgerService = Depends(get_service),
) -> HistoryOut:
    """
    Settled invoices, most recent first, with the total originally invoiced.
    """
    return await service.history(filters)
