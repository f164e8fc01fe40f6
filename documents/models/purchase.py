from decimal import Decimal

from django.db import models

from documents.models.base import ImmutableRecordMixin


class PurchaseRecord(ImmutableRecordMixin, models.Model):
    """Incoming stock from a vendor.

    The record keeps pointing at its item until the item is deleted; after that
    ``item`` is NULL and the row stays as history.
    """

    item = models.ForeignKey(
        "inventory.InventoryItem",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="purchases",
    )

    quantity = models.DecimalField(max_digits=12, decimal_places=2)
    rate = models.DecimalField(max_digits=12, decimal_places=2)
    date = models.DateField()

    vendor_name = models.CharField(max_length=255, blank=True, default="")
    # vendor supplied, free text
    invoice_number = models.CharField(max_length=255, blank=True, default="")

    cgst = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    sgst = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    igst = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    class Meta:
        db_table = "purchases"
        ordering = ("-date", "-id")
        indexes = [models.Index(fields=["date"])]

    def __str__(self):
        return f"Purchase {self.pk}"

    @property
    def amount(self) -> Decimal:
        """Cost of the purchase before tax (display only, not stored)."""
        return (self.quantity * self.rate).quantize(Decimal("0.01"))
