import logging
from dataclasses import dataclass
from decimal import Decimal

from django.db import transaction
from django.utils import timezone

from core.exceptions import ItemNotFound, LedgerError, TransactionFailed, ValidationError
from core.services.numbering import InvoiceNumberGenerator
from core.services.validation import clean_or_raise
from documents.forms.sales_forms import SaleForm, SaleLineForm
from documents.models import SaleRecord
from inventory.models import InventoryItem
from inventory.services.stock import StockMutationEngine

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

CUSTOMER_FIELDS = ("customer_name", "customer_address", "customer_gstin", "place_of_supply", "vehicle_no")


@dataclass(frozen=True)
class SaleResult:
    invoice_number: str
    grand_total: Decimal
    sale: SaleRecord


def _clean_lines(line_items):
    if not isinstance(line_items, (list, tuple)) or not line_items:
        raise ValidationError("Items are required", {"items": ["At least one line item is required."]})

    lines = []
    for index, raw in enumerate(line_items):
        if not isinstance(raw, dict):
            raise ValidationError("Invalid line item", {f"items[{index}]": ["Must be an object."]})
        form = SaleLineForm(raw)
        if not form.is_valid():
            errors = {f"items[{index}].{name}": [str(e) for e in msgs] for name, msgs in form.errors.items()}
            raise ValidationError(f"Invalid line item {index + 1}", errors)
        line = form.cleaned_data
        line["quantity"] = line["quantity"].quantize(CENT)
        line["rate"] = line["rate"].quantize(CENT)
        lines.append(line)
    return lines


def record_sale(customer=None, line_items=None, taxes=None, date=None, *, engine=None, numbering=None):
    """Issue a tax invoice and take the sold quantities out of stock.

    Steps, all inside one transaction:
    1) Lock every inventory row a line sells from
    2) Allocate the next invoice number
    3) Insert the sale with its line items and totals
    4) Deduct each line's quantity from its item

    Lines without ``item_id`` or with quantity 0 are billed but move no stock.
    If any referenced item is missing the whole sale is rolled back.
    Taxes are taken as given (absolute amounts), not recomputed from rates.
    """
    customer = customer or {}
    taxes = taxes or {}
    if not isinstance(customer, dict):
        raise ValidationError("Invalid customer", {"customer": ["Must be an object."]})
    if not isinstance(taxes, dict):
        raise ValidationError("Invalid taxes", {"taxes": ["Must be an object."]})
    header = clean_or_raise(
        SaleForm(
            {
                **{name: customer.get(name) for name in CUSTOMER_FIELDS},
                "cgst": taxes.get("cgst"),
                "sgst": taxes.get("sgst"),
                "igst": taxes.get("igst"),
                "date": date,
            }
        ),
        "Invalid sale",
    )
    lines = _clean_lines(line_items)

    taxable_total = Decimal("0.00")
    for line in lines:
        line["amount"] = (line["rate"] * line["quantity"]).quantize(CENT)
        taxable_total += line["amount"]
    grand_total = taxable_total + header["cgst"] + header["sgst"] + header["igst"]
    sale_date = header["date"] or timezone.localdate()

    engine = engine or StockMutationEngine()
    numbering = numbering or InvoiceNumberGenerator(using=engine.using)

    deltas = [(line["item_id"], -line["quantity"]) for line in lines if line["item_id"] and line["quantity"] > 0]

    def write_sale(items):
        items = dict(items)
        unlocked = {line["item_id"] for line in lines if line["item_id"]} - set(items)
        if unlocked:
            found = InventoryItem.objects.using(engine.using).in_bulk(unlocked)
            for item_id in sorted(unlocked):
                if item_id not in found:
                    raise ItemNotFound(item_id)
            items.update(found)

        document = []
        for line in lines:
            item = items.get(line["item_id"])
            document.append({
                "item_id": line["item_id"],
                "description": line["description"] or (item.item_name if item else ""),
                "hsn_sac": line["hsn_sac"] or (item.hsn_sac if item else ""),
                "quantity": str(line["quantity"]),
                "rate": str(line["rate"]),
                "amount": str(line["amount"]),
            })

        return SaleRecord.objects.using(engine.using).create(
            invoice_number=numbering.next(),
            **{name: header[name] for name in CUSTOMER_FIELDS},
            items=document,
            taxable_total=taxable_total,
            cgst=header["cgst"],
            sgst=header["sgst"],
            igst=header["igst"],
            grand_total=grand_total,
            date=sale_date,
        )

    try:
        if deltas:
            sale = engine.apply_batch(deltas, write_sale)
        else:
            with transaction.atomic(using=engine.using):
                sale = write_sale({})
    except LedgerError:
        raise
    except Exception as exc:
        logger.exception("Sale transaction failed")
        raise TransactionFailed("Failed to create invoice") from exc

    logger.info("Created invoice %s (grand total %s)", sale.invoice_number, sale.grand_total)
    return SaleResult(invoice_number=sale.invoice_number, grand_total=sale.grand_total, sale=sale)
