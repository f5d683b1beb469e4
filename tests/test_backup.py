"""
Tests for full-database export and import.
"""

import json
from datetime import date

import pytest

from app.exceptions import GatewayError, ValidationFailure
from app.gateway.memory import InMemoryGateway
from app.services.backup import backup_filename, export_database, import_database, validate_document
from app.models.invoices import InvoiceIn, InvoiceRow
from app.models.suppliers import SupplierIn

pytestmark = pytest.mark.anyio


async def seed(gateway):
    acme = await gateway.upsert_supplier(SupplierIn(name='Acme', iban='IT00', is_merchandise=False))
    merci = await gateway.upsert_supplier(SupplierIn(name='Merci', email='m@merci.it', is_merchandise=True))
    for supplier, amounts in ((acme, [(100, 0)]), (acme, [(50, 0), (0, 50)]), (merci, [(30, 10)])):
        await gateway.upsert_invoice(InvoiceIn(
            supplier_id=supplier.id,
            rows=[InvoiceRow(date='2024-02-01', credit=c, debit=d) for c, d in amounts],
        ))


def by_id(records):
    return sorted(records, key=lambda r: r.id)


async def test_export_contains_everything(gateway):
    await seed(gateway)
    document = await export_database(gateway)

    assert len(document.suppliers) == 2
    assert len(document.invoices) == 3
    assert document.version == '1.0'
    assert document.timestamp is not None


async def test_round_trip_reproduces_dataset(gateway):
    await seed(gateway)
    before_suppliers = await gateway.fetch_all_suppliers()
    before_invoices = await gateway.fetch_all_invoices()

    payload = json.dumps((await export_database(gateway)).model_dump(mode='json'))
    result = await import_database(gateway, payload)

    assert result.success, result.error
    assert (result.suppliers, result.invoices) == (2, 3)
    assert by_id(await gateway.fetch_all_suppliers()) == by_id(before_suppliers)
    assert by_id(await gateway.fetch_all_invoices()) == by_id(before_invoices)


async def test_import_preserves_supplier_references(gateway):
    await seed(gateway)
    document = {
        'suppliers': [{'id': 'A', 'name': 'Alfa', 'iban': '', 'email': '', 'phone': '', 'notes': '', 'is_merchandise': False}],
        'invoices': [{
            'id': 'X',
            'supplier_id': 'A',
            'creation_date': '2024-01-01T10:00:00+00:00',
            'rows': [{'id': 'r1', 'date': '2024-01-01', 'description': 'Fattura 1', 'protocol': '7', 'credit': 100, 'debit': 0}],
        }],
        'timestamp': '2024-05-01T00:00:00Z',
        'version': '1.0',
    }

    result = await import_database(gateway, document)

    assert result.success
    [supplier] = await gateway.fetch_all_suppliers()
    [invoice] = await gateway.fetch_all_invoices()
    assert supplier.id == 'A'
    assert invoice.id == 'X'
    assert invoice.supplier_id == 'A'


@pytest.mark.parametrize('document', [
    '{not json',
    '[]',
    {'suppliers': []},
    {'invoices': []},
    {'suppliers': {}, 'invoices': []},
    {'suppliers': [], 'invoices': 'nope'},
    {'suppliers': [{'id': 'A', 'name': ''}], 'invoices': []},
    {'suppliers': [{'id': 'A', 'name': 'x'}, {'id': 'A', 'name': 'y'}], 'invoices': []},
    {'suppliers': [], 'invoices': [{'id': 'X', 'supplier_id': 'A', 'creation_date': '2024-01-01T00:00:00', 'rows': []}]},
])
async def test_invalid_document_leaves_data_untouched(gateway, document):
    await seed(gateway)
    before_suppliers = await gateway.fetch_all_suppliers()
    before_invoices = await gateway.fetch_all_invoices()

    result = await import_database(gateway, document)

    assert result.success is False
    assert result.error
    assert await gateway.fetch_all_suppliers() == before_suppliers
    assert by_id(await gateway.fetch_all_invoices()) == by_id(before_invoices)


async def test_import_accepts_rows_with_blank_dates(gateway):
    document = {
        'suppliers': [{'id': 'A', 'name': 'Alfa'}],
        'invoices': [{
            'id': 'X',
            'supplier_id': 'A',
            'creation_date': '2024-01-01T10:00:00+00:00',
            'rows': [
                {'id': 'r1', 'date': '2024-01-01', 'credit': 100, 'debit': 0},
                {'id': 'r2', 'date': '', 'credit': 0, 'debit': 100},
                {'id': 'r3', 'date': None, 'credit': 5, 'debit': 0},
            ],
        }],
    }

    result = await import_database(gateway, document)

    assert result.success, result.error
    [invoice] = await gateway.fetch_all_invoices()
    assert [r.date for r in invoice.rows] == [date(2024, 1, 1), None, None]
    assert [r.id for r in invoice.rows] == ['r1', 'r2', 'r3']


async def test_import_keeps_supplier_fields_verbatim(gateway):
    document = {
        'suppliers': [{'id': 'A', 'name': '  Alfa Srl ', 'email': 'Ufficio@Alfa.IT '}],
        'invoices': [],
    }

    assert (await import_database(gateway, document)).success

    [supplier] = await gateway.fetch_all_suppliers()
    assert supplier.name == '  Alfa Srl '
    assert supplier.email == 'Ufficio@Alfa.IT '


def test_version_is_informational():
    suppliers, invoices = validate_document({'suppliers': [], 'invoices': [], 'version': '99'})
    assert suppliers == [] and invoices == []


def test_validate_rejects_dangling_reference():
    with pytest.raises(ValidationFailure):
        validate_document({
            'suppliers': [{'id': 'A', 'name': 'Alfa'}],
            'invoices': [{'id': 'X', 'supplier_id': 'B', 'creation_date': '2024-01-01T00:00:00', 'rows': []}],
        })


class FailingInsertGateway(InMemoryGateway):

    async def bulk_insert_invoices(self, invoices):
        if invoices:
            raise GatewayError('disk full')
        await super().bulk_insert_invoices(invoices)


async def test_failure_after_wipe_is_reported_without_rollback():
    gateway = FailingInsertGateway()
    await seed(gateway)

    result = await import_database(gateway, {
        'suppliers': [{'id': 'A', 'name': 'Alfa'}],
        'invoices': [],
    })
    assert result.success is True

    result = await import_database(gateway, {
        'suppliers': [{'id': 'B', 'name': 'Beta'}],
        'invoices': [{'id': 'X', 'supplier_id': 'B', 'creation_date': '2024-01-01T00:00:00', 'rows': []}],
    })
    assert result.success is False
    assert 'disk full' in result.error
    # Wiped and suppliers restored, invoices lost
    assert [s.id for s in await gateway.fetch_all_suppliers()] == ['B']
    assert await gateway.fetch_all_invoices() == []


def test_backup_filename():
    assert backup_filename(date(2024, 6, 30)) == 'backup_dati_2024-06-30.json'
