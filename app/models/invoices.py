# app/models/invoices.py

import uuid
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from app.ledger.balance import to_amount
from app.models.suppliers import Supplier


class InvoiceRow(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    # Optional: a cleared date picker stores ""
    date: Optional[date]
    description: str = ""
    protocol: str = ""
    credit: float = 0.0  # amount charged
    debit: float = 0.0   # amount paid / offset

    @field_validator("credit", "debit", mode="before")
    @classmethod
    def coerce_amount(cls, value) -> float:
        return to_amount(value)

    @field_validator("credit", "debit")
    @classmethod
    def not_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("amounts must not be negative")
        return value

    @field_validator("date", mode="before")
    @classmethod
    def blank_date_as_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("description", "protocol", mode="before")
    @classmethod
    def none_as_empty(cls, value):
        return "" if value is None else value


def new_row() -> InvoiceRow:
    """Blank ledger line dated today, the first row of a new registration."""
    return InvoiceRow(date=date.today())


class InvoiceIn(BaseModel):
    id: Optional[str] = None
    supplier_id: str
    creation_date: Optional[datetime] = None
    rows: List[InvoiceRow] = Field(min_length=1)


class Invoice(BaseModel):
    id: str
    supplier_id: str
    creation_date: datetime
    rows: List[InvoiceRow]

    class Config:
        from_attributes = True


class InvoiceWithSupplier(Invoice):
    supplier: Supplier
    balance: float
    initial_amount: float = Field(alias="initialAmount")

    class Config:
        from_attributes = True
        populate_by_name = True


class ExportDocument(BaseModel):
    suppliers: List[Supplier]
    invoices: List[Invoice]
    timestamp: datetime
    version: str


class ImportResult(BaseModel):
    success: bool
    suppliers: int = 0
    invoices: int = 0
    error: Optional[str] = None
