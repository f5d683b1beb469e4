# app/api/backup.py

from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import JSONResponse

from app.api.deps import get_gateway
from app.gateway.base import PersistenceGateway
from app.models.invoices import ImportResult
from app.services.backup import backup_filename, export_database, import_database

router = APIRouter(prefix="/backup", tags=["backup"])


@router.get("/export")
async def export_backup(gateway: PersistenceGateway = Depends(get_gateway)) -> JSONResponse:
    document = await export_database(gateway)
    return JSONResponse(
        content=document.model_dump(mode="json"),
        headers={"Content-Disposition": f'attachment; filename="{backup_filename()}"'},
    )


@router.post("/import", response_model=ImportResult)
async def import_backup(
    document: Dict[str, Any] = Body(...),
    gateway: PersistenceGateway = Depends(get_gateway),
) -> ImportResult:
    """
    Replace the whole dataset with the uploaded backup document.
    """
    result = await import_database(gateway, document)
    if not result.success:
        raise HTTPException(status_code=400, detail=result.error)
    return result
