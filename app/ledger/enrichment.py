# app/ledger/enrichment.py

import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from app.ledger.balance import balance, initial_amount
from app.models.invoices import Invoice, InvoiceWithSupplier
from app.models.suppliers import Supplier

logger = logging.getLogger(__name__)


@dataclass
class EnrichmentResult:
    invoices: List[InvoiceWithSupplier] = field(default_factory=list)
    # ids of invoices whose supplier could not be resolved
    orphaned: List[str] = field(default_factory=list)


def enrich(suppliers: Iterable[Supplier], invoices: Iterable[Invoice]) -> EnrichmentResult:
    """
    Join every invoice to its supplier and attach balance / initial amount.

    Invoices referencing an unknown supplier are left out of the result and
    reported in ``orphaned``.
    """
    by_id = {s.id: s for s in suppliers}
    result = EnrichmentResult()

    for inv in invoices:
        supplier = by_id.get(inv.supplier_id)
        if supplier is None:
            result.orphaned.append(inv.id)
            continue

        result.invoices.append(
            InvoiceWithSupplier(
                id=inv.id,
                supplier_id=inv.supplier_id,
                creation_date=inv.creation_date,
                rows=inv.rows,
                supplier=supplier,
                balance=balance(inv),
                initial_amount=initial_amount(inv),
            )
        )

    if result.orphaned:
        logger.warning(
            "Dropped %s invoice(s) referencing unknown suppliers: %s",
            len(result.orphaned),
            ", ".join(result.orphaned),
        )

    return result


# ---- Classification ----

def is_open(inv: InvoiceWithSupplier) -> bool:
    return inv.balance != 0


def is_settled(inv: InvoiceWithSupplier) -> bool:
    # Exact comparison: no tolerance for floating-point residue
    return inv.balance == 0


def in_merchandise_bucket(inv: InvoiceWithSupplier) -> bool:
    """Open and booked on a merchandise account, whatever the balance sign."""
    return is_open(inv) and inv.supplier.is_merchandise


def in_payable_bucket(inv: InvoiceWithSupplier) -> bool:
    """Open services invoice still to be paid (overpayments excluded)."""
    return is_open(inv) and not inv.supplier.is_merchandise and inv.balance > 0
