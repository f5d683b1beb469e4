# app/models/views.py
"""Read models handed to the presentation layer."""

from typing import List

from pydantic import BaseModel

from app.models.invoices import InvoiceWithSupplier
from app.models.suppliers import Supplier


class SupplierDetail(BaseModel):
    supplier: Supplier
    open_invoices: List[InvoiceWithSupplier]
    total_balance: float


class DashboardOut(BaseModel):
    merchandise: List[InvoiceWithSupplier]
    payable: List[InvoiceWithSupplier]
    merchandise_total: float
    payable_total: float
    grand_total: float


class HistoryOut(BaseModel):
    invoices: List[InvoiceWithSupplier]
    total_settled: float
