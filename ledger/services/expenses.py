import logging

from django.db import DatabaseError
from django.utils import timezone

from core.api import filtered
from core.exceptions import PersistenceFailure, QueryFailed
from core.services.validation import clean_or_raise
from ledger.filters import ExpenseFilter
from ledger.forms import ExpenseForm
from ledger.models import Expense

logger = logging.getLogger(__name__)


def expense_as_dict(e: Expense) -> dict:
    return {
        "id": e.id,
        "description": e.description,
        "amount": e.amount,
        "category": e.category,
        "date": e.date,
    }


def record_expense(description, amount, category="", date=None) -> Expense:
    data = clean_or_raise(
        ExpenseForm({"description": description, "amount": amount, "category": category, "date": date}),
        "Invalid expense",
    )
    try:
        expense = Expense.objects.create(
            description=data["description"],
            amount=data["amount"],
            category=data["category"],
            date=data["date"] or timezone.localdate(),
        )
    except DatabaseError as exc:
        logger.exception("Expense insert failed")
        raise PersistenceFailure("Failed to record expense") from exc
    logger.info("Recorded expense %s (%s)", expense.pk, expense.amount)
    return expense


def list_expenses(params=None):
    """Expenses matching ``ExpenseFilter`` parameters (``from``/``to``/``category``), newest first."""
    qs = filtered(ExpenseFilter, params or {}, Expense.objects.all())
    try:
        return list(qs)
    except DatabaseError as exc:
        logger.exception("Expense list failed")
        raise QueryFailed("Failed to fetch expenses") from exc
