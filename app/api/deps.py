# app/api/deps.py

from functools import lru_cache

from fastapi import Depends

from app.db.engine import get_engine
from app.gateway.base import PersistenceGateway
from app.gateway.sql import SqlGateway
from app.services.ledger_service import LedgerService


@lru_cache
def get_gateway() -> PersistenceGateway:
    return SqlGateway(get_engine())


def get_service(gateway: PersistenceGateway = Depends(get_gateway)) -> LedgerService:
    return LedgerService(gateway)
