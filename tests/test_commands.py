from __future__ import annotations

from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from documents.services.purchases import record_purchase
from documents.services.sales import record_sale
from inventory.models import InventoryItem

pytestmark = pytest.mark.django_db


def test_verify_stock_passes_for_ledger_writes(widget):
    record_purchase(item_id=widget.pk, quantity=50, rate="9.00")
    record_sale({}, [{"item_id": widget.pk, "quantity": 30, "rate": "10.00"}])
    out = StringIO()

    call_command("verify_stock", stdout=out)

    assert "1 items match the ledger" in out.getvalue()


def test_verify_stock_reports_mismatch(make_item):
    widget = make_item()
    other = make_item("Gadget")
    InventoryItem.objects.filter(pk=widget.pk).update(quantity=1)
    err = StringIO()

    with pytest.raises(CommandError, match="1 of 2 items"):
        call_command("verify_stock", stderr=err)

    assert f"Item {widget.pk} Widget: stored 1.00, expected 100.00" in err.getvalue()
    call_command("verify_stock", "--item", str(other.pk), stdout=StringIO())
