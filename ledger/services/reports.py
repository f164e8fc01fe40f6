"""Financial totals over a date window.

Read-only: nothing here takes locks or writes. Totals use inclusive date
bounds and are quantized to 2 places.
"""

import calendar
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from django.db import DatabaseError
from django.db.models import DecimalField, ExpressionWrapper, F, Sum
from django.db.models.functions import TruncMonth
from django.utils import timezone

from core.exceptions import QueryFailed, ValidationError
from documents.models import PurchaseRecord, SaleRecord
from ledger.models import Expense

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

PURCHASE_COST = ExpressionWrapper(
    F("quantity") * F("rate"),
    output_field=DecimalField(max_digits=24, decimal_places=4),
)


def month_bounds(day: date) -> tuple[date, date]:
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def as_date(value):
    # TruncMonth may hand back a datetime depending on the backend
    if isinstance(value, datetime):
        return value.date()
    return value


def _money(value) -> Decimal:
    return (value or ZERO).quantize(CENT)


@dataclass(frozen=True)
class Summary:
    total_sales: Decimal
    total_purchases: Decimal
    total_expenses: Decimal

    @property
    def net_profit(self) -> Decimal:
        return self.total_sales - (self.total_purchases + self.total_expenses)

    def as_dict(self) -> dict:
        return {
            "total_sales": self.total_sales,
            "total_purchases": self.total_purchases,
            "total_expenses": self.total_expenses,
            "net_profit": self.net_profit,
        }


@dataclass(frozen=True)
class Report:
    from_date: date
    to_date: date
    summary: Summary
    # only filled when the caller asked for detail
    sales: Optional[list] = field(default=None)
    purchases: Optional[list] = field(default=None)
    expenses: Optional[list] = field(default=None)


def summarize(from_date=None, to_date=None, include_detail=False) -> Report:
    """Sum sales, purchases and expenses between ``from_date`` and ``to_date``.

    - sales: sum of ``grand_total``
    - purchases: sum of ``quantity * rate``
    - expenses: sum of ``amount``
    - net profit: sales - (purchases + expenses)

    The window is used only when both bounds are given; otherwise the whole
    current month is reported.
    """
    if not (from_date and to_date):
        from_date, to_date = month_bounds(timezone.localdate())
    if from_date > to_date:
        raise ValidationError("from_date must not be after to_date", {"from_date": ["Must not be after to_date."]})

    window = {"date__gte": from_date, "date__lte": to_date}
    sales = SaleRecord.objects.filter(**window)
    purchases = PurchaseRecord.objects.filter(**window)
    expenses = Expense.objects.filter(**window)

    try:
        summary = Summary(
            total_sales=_money(sales.aggregate(total=Sum("grand_total"))["total"]),
            total_purchases=_money(purchases.aggregate(total=Sum(PURCHASE_COST))["total"]),
            total_expenses=_money(expenses.aggregate(total=Sum("amount"))["total"]),
        )
        detail = {}
        if include_detail:
            detail = {
                "sales": list(sales.order_by("date", "id")),
                "purchases": list(purchases.order_by("date", "id")),
                "expenses": list(expenses.order_by("date", "id")),
            }
    except DatabaseError as exc:
        logger.exception("Report query failed for %s..%s", from_date, to_date)
        raise QueryFailed("Failed to fetch reports") from exc

    return Report(from_date=from_date, to_date=to_date, summary=summary, **detail)


def monthly_breakdown(year: int) -> list[dict]:
    """Per-month sales, purchases, expenses and result for a calendar year."""
    start, end = date(year, 1, 1), date(year, 12, 31)
    months = [date(year, m, 1) for m in range(1, 13)]

    def by_month(qs, total):
        rows = (
            qs.filter(date__gte=start, date__lte=end)
            .annotate(m=TruncMonth("date"))
            .values("m")
            .annotate(total=total)
        )
        return {as_date(row["m"]): _money(row["total"]) for row in rows}

    try:
        sales = by_month(SaleRecord.objects.all(), Sum("grand_total"))
        purchases = by_month(PurchaseRecord.objects.all(), Sum(PURCHASE_COST))
        expenses = by_month(Expense.objects.all(), Sum("amount"))
    except DatabaseError as exc:
        logger.exception("Monthly report query failed for %s", year)
        raise QueryFailed("Failed to fetch monthly report") from exc

    series = []
    for month in months:
        s, p, e = sales.get(month, ZERO), purchases.get(month, ZERO), expenses.get(month, ZERO)
        series.append({
            "month": month.strftime("%Y-%m"),
            "sales": s,
            "purchases": p,
            "expenses": e,
            "net_profit": s - (p + e),
        })
    return series
