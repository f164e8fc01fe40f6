from __future__ import annotations

import datetime

import pytest

from core.exceptions import ValidationError
from ledger.models import Expense
from ledger.services.expenses import list_expenses, record_expense

from tests.helpers import D

pytestmark = pytest.mark.django_db


def test_record_expense_defaults_to_today():
    expense = record_expense("Electricity", "1200.50", category="Utilities")

    assert expense.amount == D("1200.50")
    assert isinstance(expense.date, datetime.date)


@pytest.mark.parametrize(
    "description, amount, field",
    [
        ("", "10", "description"),
        ("Rent", None, "amount"),
        ("Rent", "0", "amount"),
        ("Rent", "-5", "amount"),
    ],
)
def test_record_expense_validation(description, amount, field):
    with pytest.raises(ValidationError) as excinfo:
        record_expense(description, amount)

    assert field in excinfo.value.fields
    assert Expense.objects.count() == 0


def test_list_expenses_filters():
    record_expense("Rent", "500", category="Premises", date="2026-09-01")
    record_expense("Tea", "20", category="Pantry", date="2026-10-02")
    record_expense("Lease", "500", category="premises", date="2026-10-03")

    assert [e.description for e in list_expenses()] == ["Lease", "Tea", "Rent"]
    assert [e.description for e in list_expenses({"from": "2026-10-01"})] == ["Lease", "Tea"]
    assert [e.description for e in list_expenses({"category": "Premises"})] == ["Lease", "Rent"]


def test_list_expenses_rejects_bad_dates():
    with pytest.raises(ValidationError):
        list_expenses({"to": "not-a-date"})
