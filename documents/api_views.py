import logging

from django.contrib.auth.decorators import login_required
from django.db import DatabaseError
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from core.api import filtered, ledger_errors, parse_json_body
from core.exceptions import QueryFailed
from documents.filters import PurchaseFilter, SaleFilter
from documents.models import PurchaseRecord, SaleRecord
from documents.services.purchases import record_purchase
from documents.services.sales import CUSTOMER_FIELDS, record_sale

logger = logging.getLogger(__name__)


def purchase_as_dict(p: PurchaseRecord) -> dict:
    return {
        "id": p.id,
        "item_id": p.item_id,
        "quantity": p.quantity,
        "rate": p.rate,
        "amount": p.amount,
        "date": p.date,
        "vendor_name": p.vendor_name,
        "invoice_number": p.invoice_number,
        "cgst": p.cgst,
        "sgst": p.sgst,
        "igst": p.igst,
    }


def sale_as_dict(s: SaleRecord) -> dict:
    return {
        "id": s.id,
        "invoice_number": s.invoice_number,
        **{name: getattr(s, name) for name in CUSTOMER_FIELDS},
        "items": s.items,
        "taxable_total": s.taxable_total,
        "cgst": s.cgst,
        "sgst": s.sgst,
        "igst": s.igst,
        "grand_total": s.grand_total,
        "date": s.date,
    }


@login_required
@require_http_methods(["GET", "POST"])
@ledger_errors("Failed to record purchase", "Failed to fetch purchases")
def api_purchases(request):
    if request.method == "GET":
        qs = filtered(PurchaseFilter, request.GET, PurchaseRecord.objects.all())
        try:
            data = [purchase_as_dict(p) for p in qs]
        except DatabaseError as exc:
            logger.exception("Purchase list failed")
            raise QueryFailed("Failed to fetch purchases") from exc
        return JsonResponse({"purchases": data})

    body = parse_json_body(request)
    purchase = record_purchase(
        item_id=body.get("item_id"),
        quantity=body.get("quantity"),
        rate=body.get("rate"),
        date=body.get("date"),
        vendor_name=body.get("vendor_name"),
        vendor_invoice_number=body.get("invoice_number"),
        cgst=body.get("cgst"),
        sgst=body.get("sgst"),
        igst=body.get("igst"),
    )
    return JsonResponse({"id": purchase.id}, status=201)


@login_required
@require_http_methods(["GET", "POST"])
@ledger_errors("Failed to create invoice", "Failed to fetch sales")
def api_sales(request):
    if request.method == "GET":
        qs = filtered(SaleFilter, request.GET, SaleRecord.objects.all())
        try:
            data = [sale_as_dict(s) for s in qs]
        except DatabaseError as exc:
            logger.exception("Sales list failed")
            raise QueryFailed("Failed to fetch sales") from exc
        return JsonResponse({"sales": data})

    body = parse_json_body(request)
    result = record_sale(
        customer={name: body.get(name) for name in CUSTOMER_FIELDS},
        line_items=body.get("items"),
        taxes=body.get("taxes") or {},
        date=body.get("date"),
    )
    return JsonResponse(
        {"invoice_number": result.invoice_number, "grand_total": result.grand_total},
        status=201,
    )
