from decimal import Decimal

from django import forms

from inventory.models import Category


class InventoryItemForm(forms.Form):
    """Validates a new stock item. ``specs`` is checked separately per category."""

    item_name = forms.CharField(max_length=255)
    category = forms.ChoiceField(choices=Category.choices)
    hsn_sac = forms.CharField(max_length=50, required=False)
    quantity = forms.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0"))
    rate = forms.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0"))
