from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.http import require_GET, require_http_methods

from core.api import date_window_params, ledger_errors, parse_json_body
from core.services.validation import clean_or_raise
from documents.api_views import purchase_as_dict, sale_as_dict
from ledger.forms import MonthlyReportForm, ReportForm
from ledger.services.expenses import expense_as_dict, list_expenses, record_expense
from ledger.services.reports import monthly_breakdown, summarize


@login_required
@require_http_methods(["GET", "POST"])
@ledger_errors("Failed to record expense", "Failed to fetch expenses")
def api_expenses(request):
    if request.method == "GET":
        return JsonResponse({"expenses": [expense_as_dict(e) for e in list_expenses(request.GET)]})

    body = parse_json_body(request)
    expense = record_expense(
        description=body.get("description"),
        amount=body.get("amount"),
        category=body.get("category"),
        date=body.get("date"),
    )
    return JsonResponse({"id": expense.id}, status=201)


@login_required
@require_GET
@ledger_errors("Failed to fetch reports", "Failed to fetch reports")
def api_reports(request):
    params = clean_or_raise(ReportForm(date_window_params(request.GET)), "Invalid report window")
    report = summarize(params["from_date"], params["to_date"], include_detail=params["detail"])

    data = {
        "from": report.from_date,
        "to": report.to_date,
        "summary": report.summary.as_dict(),
    }
    if params["detail"]:
        data["sales"] = [sale_as_dict(s) for s in report.sales]
        data["purchases"] = [purchase_as_dict(p) for p in report.purchases]
        data["expenses"] = [expense_as_dict(e) for e in report.expenses]
    return JsonResponse(data)


@login_required
@require_GET
@ledger_errors("Failed to fetch monthly report", "Failed to fetch monthly report")
def api_monthly_report(request):
    params = clean_or_raise(MonthlyReportForm(request.GET), "Invalid year")
    year = params["year"] or timezone.localdate().year
    return JsonResponse({"year": year, "months": monthly_breakdown(year)})
