import pytest
from datetime import date, datetime, timezone

from fastapi.testclient import TestClient

from app import app as fastapi_app
from app.api.deps import get_gateway
from app.db.engine import get_engine
from app.db.schema import metadata
from app.gateway.memory import InMemoryGateway
from app.gateway.sql import SqlGateway
from app.ledger.enrichment import enrich
from app.models.invoices import Invoice, InvoiceRow
from app.models.suppliers import Supplier


@pytest.fixture
def anyio_backend():
    return 'asyncio'


@pytest.fixture
def memory_gateway():
    return InMemoryGateway()


@pytest.fixture
def sql_engine():
    """Fresh in-memory SQLite database with the schema created."""
    engine = get_engine('sqlite://')
    metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def sql_gateway(sql_engine):
    return SqlGateway(sql_engine)


@pytest.fixture(params=['memory', 'sql'])
def gateway(request):
    """Every gateway backend, for contract tests."""
    if request.param == 'memory':
        return InMemoryGateway()
    return request.getfixturevalue('sql_gateway')


@pytest.fixture
def client(memory_gateway):
    """API client backed by an in-memory gateway."""
    fastapi_app.dependency_overrides[get_gateway] = lambda: memory_gateway
    with TestClient(fastapi_app) as c:
        yield c
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def make_supplier():
    def _make(id='S1', name='Acme Servizi', is_merchandise=False, **fields):
        return Supplier(id=id, name=name, is_merchandise=is_merchandise, **fields)
    return _make


@pytest.fixture
def make_invoice():
    def _make(id='I1', supplier_id='S1', rows=((100, 0, '2024-03-10'),)):
        """rows: (credit, debit, date) tuples, header row first."""
        return Invoice(
            id=id,
            supplier_id=supplier_id,
            creation_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
            rows=[
                InvoiceRow(id=f'{id}-r{n}', date=date.fromisoformat(d) if d else None, credit=c, debit=db)
                for n, (c, db, d) in enumerate(rows)
            ],
        )
    return _make


@pytest.fixture
def enriched():
    """Enrich invoices against suppliers and return the joined list."""
    def _enriched(suppliers, invoices):
        return enrich(suppliers, invoices).invoices
    return _enriched
