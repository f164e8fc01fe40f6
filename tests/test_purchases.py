"""Recording purchases: validation, stock increase, and record lifetime."""

from __future__ import annotations

from datetime import date

import pytest
from django.utils import timezone

from core.exceptions import ItemNotFound, TransactionFailed, ValidationError
from documents.models import PurchaseRecord
from documents.services import purchases
from documents.services.purchases import record_purchase
from inventory.services.items import delete_item

from tests.helpers import D, reload

pytestmark = pytest.mark.django_db


def test_purchase_increases_stock(widget):
    """100 on hand + 50 purchased = 150."""

    purchase = record_purchase(item_id=widget.pk, quantity=50, rate="9.00")

    assert reload(widget).quantity == D("150.00")
    assert purchase.quantity == D("50")
    assert purchase.amount == D("450.00")


def test_purchase_stores_vendor_details_and_taxes(widget):
    purchase = record_purchase(
        item_id=widget.pk,
        quantity="2",
        rate="100",
        date="2026-09-30",
        vendor_name="Acme Traders",
        vendor_invoice_number="AT/778",
        cgst="9.00",
        sgst="9.00",
    )

    stored = PurchaseRecord.objects.get(pk=purchase.pk)
    assert stored.date == date(2026, 9, 30)
    assert stored.vendor_name == "Acme Traders"
    assert stored.invoice_number == "AT/778"
    assert (stored.cgst, stored.sgst, stored.igst) == (D("9.00"), D("9.00"), D("0.00"))


def test_purchase_defaults_date_to_today(widget):
    purchase = record_purchase(item_id=widget.pk, quantity="1", rate="1")

    assert purchase.date == timezone.localdate()


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"item_id": None}, "item_id"),
        ({"quantity": None}, "quantity"),
        ({"rate": None}, "rate"),
        ({"quantity": "0"}, "quantity"),
        ({"quantity": "-4"}, "quantity"),
        ({"rate": "0"}, "rate"),
        ({"cgst": "-1"}, "cgst"),
    ],
)
def test_purchase_validation(widget, overrides, field):
    kwargs = {"item_id": widget.pk, "quantity": "5", "rate": "2", **overrides}

    with pytest.raises(ValidationError) as excinfo:
        record_purchase(**kwargs)

    assert field in excinfo.value.fields
    assert PurchaseRecord.objects.count() == 0
    assert reload(widget).quantity == D("100.00")


def test_missing_fields_are_named_in_message(widget):
    with pytest.raises(ValidationError, match="Missing required fields: item_id, quantity"):
        record_purchase(item_id=None, quantity=None, rate="1")


def test_purchase_for_unknown_item(db):
    with pytest.raises(ItemNotFound):
        record_purchase(item_id=12345, quantity="1", rate="1")

    assert PurchaseRecord.objects.count() == 0


def test_unexpected_failure_is_reported_as_transaction_failure(widget, monkeypatch):
    def explode(*args, **kwargs):
        raise RuntimeError("disk full")

    monkeypatch.setattr(purchases.PurchaseRecord.objects, "using", explode)

    with pytest.raises(TransactionFailed):
        record_purchase(item_id=widget.pk, quantity="1", rate="1")

    assert reload(widget).quantity == D("100.00")


def test_purchase_records_are_immutable(widget):
    purchase = record_purchase(item_id=widget.pk, quantity="1", rate="1")
    purchase.quantity = D("1000")

    with pytest.raises(ValueError):
        purchase.save()

    assert PurchaseRecord.objects.get(pk=purchase.pk).quantity == D("1.00")


def test_deleting_item_detaches_purchases(widget):
    purchase = record_purchase(item_id=widget.pk, quantity="3", rate="4")

    delete_item(widget.pk)

    stored = PurchaseRecord.objects.get(pk=purchase.pk)
    assert stored.item_id is None
    assert stored.quantity == D("3.00")
