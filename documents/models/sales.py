from decimal import Decimal

from django.core.serializers.json import DjangoJSONEncoder
from django.db import models

from documents.models.base import ImmutableRecordMixin


class SaleRecord(ImmutableRecordMixin, models.Model):
    """Tax invoice issued to a customer.

    Line items are stored as one JSON document in ``items``:
        [{"item_id": 3, "description": "...", "hsn_sac": "...",
          "quantity": "2.00", "rate": "10.00", "amount": "20.00"}, ...]
    They have no lifecycle of their own, so they are not a separate table.
    """

    invoice_number = models.CharField(max_length=50, unique=True)

    customer_name = models.CharField(max_length=255, blank=True, default="")
    customer_address = models.CharField(max_length=255, blank=True, default="")
    customer_gstin = models.CharField("Customer GSTIN", max_length=50, blank=True, default="")
    place_of_supply = models.CharField(max_length=255, blank=True, default="")
    vehicle_no = models.CharField(max_length=50, blank=True, default="")

    items = models.JSONField(default=list, encoder=DjangoJSONEncoder)

    taxable_total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    cgst = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    sgst = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    igst = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    grand_total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    date = models.DateField()

    class Meta:
        db_table = "sales"
        ordering = ("-date", "-id")
        indexes = [models.Index(fields=["date"])]

    def __str__(self):
        return f"Sale {self.invoice_number}"

    @property
    def tax_total(self) -> Decimal:
        return self.cgst + self.sgst + self.igst
