# app/ledger/balance.py
"""
Running balance of a registration, computed from its ledger rows.

Both functions accept an ``Invoice`` model or a raw mapping (such as an
invoice read back from an export document) and never raise on bad data.
"""

import math
from collections.abc import Mapping


def to_amount(value) -> float:
    """Coerce a monetary value to float; anything non-numeric counts as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(amount) or math.isinf(amount):
        return 0.0
    return amount


def _field(obj, name):
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _rows(invoice) -> list:
    rows = _field(invoice, "rows")
    if not isinstance(rows, (list, tuple)):
        return []
    return list(rows)


def balance(invoice) -> float:
    """
    Sum of (credit - debit) over all rows.

    Positive means the supplier is still owed money; zero or below means
    the registration is offset or overpaid.
    """
    total = 0.0
    for row in _rows(invoice):
        total += to_amount(_field(row, "credit")) - to_amount(_field(row, "debit"))
    return total


def initial_amount(invoice) -> float:
    """Credit of the header (first) row: the originally invoiced amount."""
    rows = _rows(invoice)
    if not rows:
        return 0.0
    return to_amount(_field(rows[0], "credit"))
