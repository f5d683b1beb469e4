"""
Tests for the balance engine.
"""

from datetime import date

import pytest

from app.ledger.balance import balance, initial_amount, to_amount
from app.models.invoices import new_row


class TestBalance:

    def test_sum_of_credit_minus_debit(self, make_invoice):
        inv = make_invoice(rows=[(100, 0, '2024-01-05'), (0, 30, '2024-02-01'), (10, 5, '2024-02-10')])
        assert balance(inv) == sum(r.credit - r.debit for r in inv.rows)
        assert balance(inv) == 75

    def test_empty_rows_is_zero(self, make_invoice):
        inv = make_invoice(rows=[])
        assert balance(inv) == 0

    def test_settles_when_fully_paid(self, make_invoice):
        inv = make_invoice(rows=[(100, 0, '2024-01-05')])
        assert balance(inv) == 100

        inv.rows.append(inv.rows[0].model_copy(update={'id': 'pay', 'credit': 0, 'debit': 100}))
        assert balance(inv) == 0
        assert initial_amount(inv) == 100

    def test_overpayment_is_negative(self, make_invoice):
        inv = make_invoice(rows=[(50, 0, '2024-01-05'), (0, 80, '2024-01-20')])
        assert balance(inv) == -30

    @pytest.mark.parametrize('rows', [None, 'garbage', 42, {'credit': 1}])
    def test_malformed_row_list_is_zero(self, rows):
        assert balance({'rows': rows}) == 0
        assert initial_amount({'rows': rows}) == 0

    def test_raw_mapping_with_bad_amounts(self):
        raw = {'rows': [
            {'credit': '120.5', 'debit': None},
            {'credit': 'n/a', 'debit': '20.5'},
            {'debit': 10},
        ]}
        assert balance(raw) == 90
        assert initial_amount(raw) == 120.5


class TestInitialAmount:

    def test_first_row_credit(self, make_invoice):
        inv = make_invoice(rows=[(250, 0, '2024-01-05'), (40, 100, '2024-02-01')])
        assert initial_amount(inv) == inv.rows[0].credit == 250

    def test_no_rows(self, make_invoice):
        assert initial_amount(make_invoice(rows=[])) == 0


class TestToAmount:

    @pytest.mark.parametrize('value, expected', [
        (12, 12.0),
        ('3.5', 3.5),
        (None, 0.0),
        ('', 0.0),
        ('abc', 0.0),
        (float('nan'), 0.0),
        (float('inf'), 0.0),
        (True, 0.0),
        ([1], 0.0),
    ])
    def test_coercion(self, value, expected):
        assert to_amount(value) == expected


def test_new_row_is_blank_and_dated_today():
    r = new_row()
    assert r.date == date.today()
    assert (r.credit, r.debit, r.description, r.protocol) == (0, 0, '', '')
    assert r.id
    assert balance({'rows': [r]}) == 0
