from decimal import Decimal

from django.db import models
from simple_history.models import HistoricalRecords


class Category(models.TextChoices):
    FMCG = "FMCG", "FMCG"
    GARMENTS = "Garments", "Garments"
    GROCERY = "Grocery", "Grocery"
    ELECTRONICS = "Electronics", "Electronics"
    OTHER = "Other", "Other"


class InventoryItem(models.Model):
    """A stock item and its on-hand quantity.

    ``quantity`` is owned by ``inventory.services.stock.StockMutationEngine``:
    every change to it is paired with a purchase or sale record in the same
    transaction. ``opening_quantity`` is the stock the item was created with and
    never changes, so the current quantity can always be re-derived from the
    ledger (see ``StockMutationEngine.expected_quantity``).
    """

    item_name = models.CharField(max_length=255)
    category = models.CharField(max_length=100, choices=Category.choices)
    hsn_sac = models.CharField("HSN/SAC", max_length=50, blank=True, default="")

    quantity = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    opening_quantity = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"), editable=False)
    rate = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    specs = models.JSONField(default=dict, blank=True)

    history = HistoricalRecords()

    class Meta:
        db_table = "inventory"
        ordering = ["item_name", "id"]

    def __str__(self):
        return f"{self.item_name} ({self.category})"

    @property
    def typed_specs(self):
        """Category attributes as their typed value (``inventory.specs``)."""
        from inventory.specs import parse_specs
        return parse_specs(self.category, self.specs)
