# app/api/invoices.py

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_service
from app.exceptions import ValidationFailure
from app.models.invoices import Invoice, InvoiceIn
from app.services.ledger_service import LedgerService

router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.get("/", response_model=List[Invoice])
async def list_invoices(service: LedgerService = Depends(get_service)) -> List[Invoice]:
    return await service.invoices()


async def _save(service: LedgerService, payload: InvoiceIn) -> Invoice:
    try:
        return await service.save_invoice(payload)
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/", response_model=Invoice, status_code=201)
async def create_invoice(
    payload: InvoiceIn,
    service: LedgerService = Depends(get_service),
) -> Invoice:
    """
    Save a new registration; id and creation_date are assigned here.
    """
    return await _save(service, payload.model_copy(update={"id": None, "creation_date": None}))


@router.put("/{invoice_id}", response_model=Invoice)
async def update_invoice(
    invoice_id: str,
    payload: InvoiceIn,
    service: LedgerService = Depends(get_service),
) -> Invoice:
    """
    Replace the invoice's rows. creation_date and supplier_id never change.
    """
    return await _save(service, payload.model_copy(update={"id": invoice_id}))


@router.delete("/{invoice_id}", status_code=204)
async def delete_invoice(
    invoice_id: str,
    service: LedgerService = Depends(get_service),
) -> None:
    await service.delete_invoice(invoice_id)
