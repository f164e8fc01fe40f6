from decimal import Decimal

from django import forms

from documents.forms.purchase_forms import MONEY, TaxFieldsMixin


class SaleForm(TaxFieldsMixin):
    """Invoice header: customer details, taxes and an optional date."""

    customer_name = forms.CharField(max_length=255, required=False)
    customer_address = forms.CharField(max_length=255, required=False)
    customer_gstin = forms.CharField(max_length=50, required=False)
    place_of_supply = forms.CharField(max_length=255, required=False)
    vehicle_no = forms.CharField(max_length=50, required=False)
    date = forms.DateField(required=False)


class SaleLineForm(forms.Form):
    """One invoice line.

    ``item_id`` is optional so service lines (delivery, labour) can be billed
    without touching stock. Description and HSN/SAC are copied from the item
    when left blank.
    """

    item_id = forms.IntegerField(required=False, min_value=1)
    description = forms.CharField(max_length=255, required=False)
    hsn_sac = forms.CharField(max_length=50, required=False)
    quantity = forms.DecimalField(min_value=Decimal("0"), **MONEY)
    rate = forms.DecimalField(min_value=Decimal("0"), **MONEY)
