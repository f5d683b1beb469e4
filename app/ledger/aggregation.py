# app/ledger/aggregation.py

from dataclasses import dataclass
from typing import Iterable

from app.models.invoices import InvoiceWithSupplier


def total_balance(bucket: Iterable[InvoiceWithSupplier]) -> float:
    return sum((inv.balance for inv in bucket), 0.0)


def total_initial_amount(bucket: Iterable[InvoiceWithSupplier]) -> float:
    """Sum of originally invoiced amounts ("total settled" in history)."""
    return sum((inv.initial_amount for inv in bucket), 0.0)


@dataclass
class DashboardTotals:
    merchandise: float
    payable: float
    grand_total: float


def dashboard_totals(merchandise, payable, only_merchandise: bool = False) -> DashboardTotals:
    merch_sum = total_balance(merchandise)
    pay_sum = total_balance(payable)
    return DashboardTotals(
        merchandise=merch_sum,
        payable=pay_sum,
        grand_total=merch_sum + (0.0 if only_merchandise else pay_sum),
    )
