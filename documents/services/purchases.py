import logging

from django.utils import timezone

from core.exceptions import LedgerError, TransactionFailed
from core.services.validation import clean_or_raise
from documents.forms.purchase_forms import PurchaseForm
from documents.models import PurchaseRecord
from inventory.services.stock import StockMutationEngine

logger = logging.getLogger(__name__)


def record_purchase(
    item_id,
    quantity,
    rate,
    date=None,
    vendor_name="",
    vendor_invoice_number="",
    cgst=None,
    sgst=None,
    igst=None,
    *,
    engine=None,
):
    """Record incoming stock and raise the item's quantity by ``quantity``.

    The purchase row and the quantity change commit together. ``amount``
    (quantity x rate) is derived on display and not stored.
    """
    data = clean_or_raise(
        PurchaseForm(
            {
                "item_id": item_id,
                "quantity": quantity,
                "rate": rate,
                "date": date,
                "vendor_name": vendor_name,
                "invoice_number": vendor_invoice_number,
                "cgst": cgst,
                "sgst": sgst,
                "igst": igst,
            }
        ),
        "Invalid purchase",
    )
    engine = engine or StockMutationEngine()

    def write_purchase(item):
        return PurchaseRecord.objects.using(engine.using).create(
            item=item,
            quantity=data["quantity"],
            rate=data["rate"],
            date=data["date"] or timezone.localdate(),
            vendor_name=data["vendor_name"],
            invoice_number=data["invoice_number"],
            cgst=data["cgst"],
            sgst=data["sgst"],
            igst=data["igst"],
        )

    try:
        return engine.apply(data["item_id"], data["quantity"], write_purchase)
    except LedgerError:
        raise
    except Exception as exc:
        logger.exception("Purchase transaction failed for item %s", data["item_id"])
        raise TransactionFailed("Failed to record purchase") from exc
