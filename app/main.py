from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.backup import router as backup_router
from app.api.dashboard import router as dashboard_router
from app.api.invoices import router as invoices_router
from app.api.suppliers import router as suppliers_router
from app.config import configure_logging
from app.exceptions import GatewayError

configure_logging()

app = FastAPI(
    title="Supplier Ledger API",
    version="0.1.0",
)

@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError):
    return JSONResponse(status_code=502, content={"detail": "Storage unavailable"})

app.include_router(suppliers_router)
app.include_router(invoices_router)
app.include_router(dashboard_router)
app.include_router(backup_router)
