# app/api/suppliers.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.deps import get_service
from app.exceptions import NotFound
from app.models.suppliers import Supplier, SupplierIn
from app.models.views import SupplierDetail
from app.services.ledger_service import LedgerService

router = APIRouter(prefix="/suppliers", tags=["suppliers"])


@router.get("/", response_model=List[Supplier])
async def list_suppliers(
    search: Optional[str] = Query(
        default=None,
        description="Case-insensitive substring of the supplier name",
    ),
    service: LedgerService = Depends(get_service),
) -> List[Supplier]:
    """
    Return suppliers ordered by name.
    """
    return await service.suppliers(search)


@router.post("/", response_model=Supplier, status_code=201)
async def create_supplier(
    payload: SupplierIn,
    service: LedgerService = Depends(get_service),
) -> Supplier:
    # A new supplier always gets a fresh id
    return await service.save_supplier(payload.model_copy(update={"id": None}))


@router.get("/{supplier_id}", response_model=SupplierDetail)
async def get_supplier(
    supplier_id: str,
    service: LedgerService = Depends(get_service),
) -> SupplierDetail:
    """
    Supplier record with its open invoices (oldest first) and their total balance.
    """
    try:
        return await service.supplier_detail(supplier_id)
    except NotFound:
        raise HTTPException(status_code=404, detail="Supplier not found")


@router.put("/{supplier_id}", response_model=Supplier)
async def update_supplier(
    supplier_id: str,
    payload: SupplierIn,
    service: LedgerService = Depends(get_service),
) -> Supplier:
    """
    Overwrite the whole supplier record (last write wins).
    """
    return await service.save_supplier(payload.model_copy(update={"id": supplier_id}))


@router.delete("/{supplier_id}", status_code=204)
async def delete_supplier(
    supplier_id: str,
    service: LedgerService = Depends(get_service),
) -> None:
    """
    Delete the supplier together with all of its invoices.
    """
    await service.delete_supplier(supplier_id)


@router.delete("/", status_code=204)
async def delete_all_suppliers(service: LedgerService = Depends(get_service)) -> None:
    await service.delete_all_suppliers()
